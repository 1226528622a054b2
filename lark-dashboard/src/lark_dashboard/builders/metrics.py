"""Metrics (KPI) block builder."""

from typing import Optional

from ..types import AggregationType, BlockType, ConditionalFormat, FilterOperator
from ._base import _BlockMixin


class MetricsBlockBuilder(_BlockMixin):
    """Single aggregated number, optionally with trend, target and color rules.

    Example:
        MetricsBlockBuilder.sum("Revenue").data_source("app", "tbl").prefix("$").decimals(2)
    """

    BLOCK_TYPE = BlockType.METRICS

    def __init__(self):
        super().__init__()
        self._formats = []

    def data_source(self, app_token: str, table_id: str, view_id: Optional[str] = None):
        return self._data_source(app_token, table_id, view_id)

    def field(self, field_name: str):
        return self._set(field_name=field_name)

    def aggregation(self, aggregation: AggregationType):
        return self._set(aggregation=aggregation)

    def title(self, title: str):
        return self._set(title=title)

    def prefix(self, prefix: str):
        return self._set(prefix=prefix)

    def suffix(self, suffix: str):
        return self._set(suffix=suffix)

    def decimals(self, decimals: int):
        return self._set(decimals=decimals)

    def add_conditional_format(self, operator: FilterOperator, value: float, color: str,
                               icon: Optional[str] = None, **options):
        """Color the number when `value <operator> threshold` holds.

        options: background_color, text_style.
        """
        self._formats.append(ConditionalFormat(operator, value, color, icon, **options))
        return self

    def conditional_format(self, fmt: ConditionalFormat):
        self._formats.append(fmt)
        return self

    def show_trend(self, show: bool = True, trend_field_name: Optional[str] = None):
        self._set(show_trend=show)
        if trend_field_name is not None:
            self._set(trend_field_name=trend_field_name)
        return self

    def comparison(self, enabled: bool = True, period: Optional[str] = None):
        """period: day | week | month | year."""
        return self._set(comparison_enabled=enabled, comparison_period=period)

    def sparkline(self, enabled: bool = True):
        return self._set(sparkline_enabled=enabled)

    def target(self, value: float, label: Optional[str] = None):
        return self._set(target=value, target_label=label)

    def _collect(self) -> dict:
        fields = dict(self._fields)
        if self._formats:
            fields["conditional_formats"] = tuple(self._formats)
        return fields

    # ── Recipes ────────────────────────────────────────────────

    @classmethod
    def of(cls, aggregation: AggregationType, field_name: str) -> "MetricsBlockBuilder":
        return cls().field(field_name).aggregation(aggregation)

    @classmethod
    def count(cls, field_name: str):
        return cls.of(AggregationType.COUNT, field_name)

    @classmethod
    def sum(cls, field_name: str):
        return cls.of(AggregationType.SUM, field_name)

    @classmethod
    def average(cls, field_name: str):
        return cls.of(AggregationType.AVG, field_name)

    @classmethod
    def max(cls, field_name: str):
        return cls.of(AggregationType.MAX, field_name)

    @classmethod
    def min(cls, field_name: str):
        return cls.of(AggregationType.MIN, field_name)

    @classmethod
    def median(cls, field_name: str):
        return cls.of(AggregationType.MEDIAN, field_name)

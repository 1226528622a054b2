"""Chart block builder.

Usage:
    block = (ChartBlockBuilder.bar()
             .data_source("app1", "tbl1")
             .x_axis("Category")
             .y_axis("Revenue", AggregationType.SUM)
             .title("Sales")
             .build())
"""

from typing import Optional

from ..types import (
    AggregationType, BlockType, ChartAnimation, ChartAxis, ChartTooltip, ChartType,
    FilterCondition, FilterConjunction, FilterGroup,
)
from ._base import _BlockMixin, _as_tuple


class ChartBlockBuilder(_BlockMixin):
    BLOCK_TYPE = BlockType.CHART

    def __init__(self):
        super().__init__()
        self._y_axes = []
        self._conditions = []
        self._conjunction = FilterConjunction.AND

    def chart_type(self, chart_type: ChartType):
        return self._set(chart_type=chart_type)

    type = chart_type

    def data_source(self, app_token: str, table_id: str, view_id: Optional[str] = None):
        return self._data_source(app_token, table_id, view_id)

    # ── Axes ───────────────────────────────────────────────────

    def x_axis(self, field_name: str, aggregation: Optional[AggregationType] = None,
               label: Optional[str] = None, **options):
        """options: format, show_grid, axis_position, scale, min, max."""
        return self._set(x_axis=ChartAxis(field_name, aggregation, label, **options))

    def y_axis(self, field_name: str, aggregation: Optional[AggregationType] = None,
               label: Optional[str] = None, **options):
        """Append a Y-axis. Call repeatedly for multi-series charts."""
        self._y_axes.append(ChartAxis(field_name, aggregation, label, **options))
        return self

    def y_axes(self, axes):
        """Replace every Y-axis added so far."""
        self._y_axes = list(axes)
        return self

    def series(self, field_name: str, aggregation: Optional[AggregationType] = None,
               label: Optional[str] = None):
        return self._set(series=ChartAxis(field_name, aggregation, label))

    def group_by(self, field_name: str):
        return self._set(group_by=field_name)

    # ── Filters ────────────────────────────────────────────────

    def add_filter(self, field_name: str, operator, value=None, **options):
        """options: second_value, values, case_sensitive."""
        self._conditions.append(FilterCondition(field_name, operator, value, **options))
        return self

    def filter_conjunction(self, conjunction: FilterConjunction):
        self._conjunction = conjunction
        return self

    def filters(self, conjunction: FilterConjunction, conditions):
        """Replace the filter group wholesale."""
        self._conjunction = conjunction
        self._conditions = list(conditions)
        return self

    # ── Presentation ───────────────────────────────────────────

    def title(self, title: str):
        return self._set(title=title)

    def legend(self, show: bool = True):
        return self._set(show_legend=show)

    show_legend = legend

    def data_labels(self, show: bool = True):
        return self._set(show_data_labels=show)

    show_data_labels = data_labels

    def colors(self, colors):
        return self._set(colors=_as_tuple(colors))

    def animation(self, enabled: bool = True, duration: Optional[int] = None,
                  easing: Optional[str] = None, delay: Optional[int] = None):
        return self._set(animation=ChartAnimation(enabled, duration, easing, delay))

    def tooltip(self, enabled: bool = True, format: Optional[str] = None,
                shared: Optional[bool] = None, position: Optional[str] = None):
        return self._set(tooltip=ChartTooltip(enabled, format, shared, position))

    def responsive(self, enabled: bool = True):
        return self._set(responsive=enabled)

    def theme(self, theme: str):
        return self._set(theme=theme)

    def export_enabled(self, enabled: bool = True):
        return self._set(export_enabled=enabled)

    def zoom_enabled(self, enabled: bool = True):
        return self._set(zoom_enabled=enabled)

    def pan_enabled(self, enabled: bool = True):
        return self._set(pan_enabled=enabled)

    def crosshair(self, enabled: bool = True):
        return self._set(crosshair=enabled)

    def _collect(self) -> dict:
        fields = dict(self._fields)
        if self._y_axes:
            fields["y_axis"] = tuple(self._y_axes)
        if self._conditions:
            fields["filters"] = FilterGroup(self._conjunction, tuple(self._conditions))
        return fields

    # ── Recipes ────────────────────────────────────────────────

    @classmethod
    def of(cls, chart_type: ChartType) -> "ChartBlockBuilder":
        return cls().chart_type(chart_type)

    @classmethod
    def bar(cls):
        return cls.of(ChartType.BAR)

    @classmethod
    def line(cls):
        return cls.of(ChartType.LINE)

    @classmethod
    def pie(cls):
        return cls.of(ChartType.PIE)

    @classmethod
    def scatter(cls):
        return cls.of(ChartType.SCATTER)

    @classmethod
    def area(cls):
        return cls.of(ChartType.AREA)

    @classmethod
    def column(cls):
        return cls.of(ChartType.COLUMN)

    @classmethod
    def funnel(cls):
        return cls.of(ChartType.FUNNEL)

    @classmethod
    def radar(cls):
        return cls.of(ChartType.RADAR)

    @classmethod
    def table(cls):
        return cls.of(ChartType.TABLE)

    @classmethod
    def heatmap(cls):
        return cls.of(ChartType.HEATMAP)

    @classmethod
    def treemap(cls):
        return cls.of(ChartType.TREEMAP)

    @classmethod
    def waterfall(cls):
        return cls.of(ChartType.WATERFALL)

    @classmethod
    def gauge(cls):
        return cls.of(ChartType.GAUGE)

    @classmethod
    def bubble(cls):
        return cls.of(ChartType.BUBBLE)

    @classmethod
    def sankey(cls):
        return cls.of(ChartType.SANKEY)

    @classmethod
    def boxplot(cls):
        return cls.of(ChartType.BOXPLOT)

    @classmethod
    def candlestick(cls):
        return cls.of(ChartType.CANDLESTICK)

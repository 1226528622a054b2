"""Validation rules for block configs, dashboards and client settings.

Block validators raise ValidationError on the first violation they meet.
They accept partially-filled configs, so every field may be None.
"""

from dataclasses import dataclass, field
from typing import List

from .colors import is_hex_color
from .types import (
    AggregationType, BlockType, ChartType, ViewType, REGIONS, TEXT_ALIGNMENTS,
    BLOCK_CONFIG_TYPES, Dashboard, DashboardBlock,
)


class ValidationError(ValueError):
    """A config broke one of the block, dashboard or client rules."""


@dataclass
class ValidationResult:
    """Non-raising validation outcome (used for permissions)."""

    valid: bool
    errors: List[str] = field(default_factory=list)

    def raise_for_errors(self):
        if not self.valid:
            raise ValidationError("; ".join(self.errors))


def _is_member(enum_cls, value) -> bool:
    if value is None:
        return False
    try:
        enum_cls(value)
    except (ValueError, TypeError):
        return False
    return True


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_data_source(data_source, kind: str):
    if data_source is None:
        raise ValidationError(f"Data source is required for {kind} blocks")
    if not data_source.app_token or not data_source.table_id:
        raise ValidationError("Data source must include app_token and table_id")


def _check_color(color, message=None):
    if not is_hex_color(color):
        raise ValidationError(message or f"Invalid color format: {color}. Use hex format (#RRGGBB)")


def _check_background(color):
    if color is not None:
        _check_color(color, f"Invalid background color format: {color}")


def _check_text_style(style):
    if style is None:
        return
    if style.color is not None:
        _check_color(style.color)
    _check_background(style.background_color)


# ── Client ─────────────────────────────────────────────────────────────

def validate_client_config(config):
    """Check a ClientConfig before any request goes out."""
    if not config.api_key or not config.api_key.strip():
        raise ValidationError("API key is required")
    if not _is_number(config.timeout) or config.timeout < 0:
        raise ValidationError("Timeout must be a positive number")
    if not isinstance(config.max_retries, int) or config.max_retries < 0:
        raise ValidationError("Max retries must be a non-negative number")
    if not _is_number(config.retry_delay) or config.retry_delay < 0:
        raise ValidationError("Retry delay must be a positive number")
    if config.region is not None and config.region not in REGIONS:
        raise ValidationError("Region must be one of: " + ", ".join(REGIONS))


# ── Block configs ──────────────────────────────────────────────────────

def validate_chart_config(config):
    if not _is_member(ChartType, config.chart_type):
        raise ValidationError("Invalid chart type")
    _check_data_source(config.data_source, "chart")

    # Pie charts slice a single series, every other kind plots X against Y
    if ChartType(config.chart_type) != ChartType.PIE:
        if config.x_axis is None:
            raise ValidationError("X-axis is required for this chart type")
        if not config.y_axis:
            raise ValidationError("At least one Y-axis is required for this chart type")

    for axis in config.y_axis or ():
        if axis.aggregation is not None and not _is_member(AggregationType, axis.aggregation):
            raise ValidationError(f"Invalid aggregation type: {axis.aggregation}")

    for color in config.colors or ():
        _check_color(color)


def validate_view_config(config):
    if not _is_member(ViewType, config.view_type):
        raise ValidationError("Invalid view type")
    _check_data_source(config.data_source, "view")
    if config.height is not None and config.height < 100:
        raise ValidationError("View height must be at least 100 pixels")


def validate_metrics_config(config):
    _check_data_source(config.data_source, "metrics")
    if not config.field_name:
        raise ValidationError("Field name is required for metrics blocks")
    if not _is_member(AggregationType, config.aggregation):
        raise ValidationError("Valid aggregation type is required for metrics blocks")
    if config.decimals is not None and not 0 <= config.decimals <= 10:
        raise ValidationError("Decimals must be between 0 and 10")
    for fmt in config.conditional_formats or ():
        _check_color(fmt.color)
        _check_background(fmt.background_color)
        _check_text_style(fmt.text_style)


def validate_layout_config(config):
    if not config.columns:
        raise ValidationError("Layout must have at least one column")
    for column in config.columns:
        if not _is_number(column.width) or not 1 <= column.width <= 12:
            raise ValidationError("Column width must be between 1 and 12")
    if sum(c.width for c in config.columns) > 12:
        raise ValidationError("Total column width cannot exceed 12")
    if config.gap is not None and (not _is_number(config.gap) or config.gap < 0):
        raise ValidationError("Gap must be a non-negative number")
    if config.padding is not None and (not _is_number(config.padding) or config.padding < 0):
        raise ValidationError("Padding must be a non-negative number")


def validate_text_config(config):
    if not config.elements:
        raise ValidationError("Text block must have at least one element")
    for element in config.elements:
        if not element.content:
            raise ValidationError("Text element must have content")
        _check_text_style(element.style)
    _check_background(config.background_color)
    if config.alignment is not None and config.alignment not in TEXT_ALIGNMENTS:
        raise ValidationError("Alignment must be one of: " + ", ".join(TEXT_ALIGNMENTS))


def validate_list_config(config):
    if config.data_source is None:
        raise ValidationError("Data source is required")
    _check_data_source(config.data_source, "list")
    if config.layout_style is None:
        raise ValidationError("Layout style is required")
    if config.item_template is None or not config.item_template.title_field:
        raise ValidationError("Title field is required in template")


def validate_tab_page_config(config):
    if config.layout is None:
        raise ValidationError("Layout type is required")
    if not config.tabs:
        raise ValidationError("At least one tab is required")


_VALIDATORS = {
    BlockType.CHART: validate_chart_config,
    BlockType.VIEW: validate_view_config,
    BlockType.METRICS: validate_metrics_config,
    BlockType.LAYOUT: validate_layout_config,
    BlockType.TEXT: validate_text_config,
    BlockType.LIST: validate_list_config,
    BlockType.TAB_PAGE: validate_tab_page_config,
}


def validate_block_config(block_type, config):
    """Dispatch on block type. Reserved types (filter, calendar, timeline) are rejected."""
    try:
        validator = _VALIDATORS[BlockType(block_type)]
    except (ValueError, KeyError):
        raise ValidationError(f"Unknown block type: {block_type}") from None
    validator(config)


def validate_block(block: DashboardBlock):
    """Check a whole block: type, config presence, config variant, then its rules."""
    if not isinstance(block, DashboardBlock):
        raise ValidationError("Invalid block configuration")
    if not _is_member(BlockType, block.block_type):
        raise ValidationError("Invalid or missing block type")
    if block.config is None:
        raise ValidationError("Block configuration is required")
    expected = BLOCK_CONFIG_TYPES.get(BlockType(block.block_type))
    if expected is not None and not isinstance(block.config, expected):
        raise ValidationError(
            f"Block type {BlockType(block.block_type).name} expects {expected.__name__}, "
            f"got {type(block.config).__name__}"
        )
    validate_block_config(block.block_type, block.config)


# ── Dashboards and identifiers ─────────────────────────────────────────

def validate_dashboard(dashboard: Dashboard):
    if not isinstance(dashboard, Dashboard):
        raise ValidationError("Invalid dashboard configuration")
    if not dashboard.name:
        raise ValidationError("Dashboard name is required")
    if not dashboard.app_token:
        raise ValidationError("App token is required")


def validate_field_name(field_name: str):
    if not field_name or not field_name.strip():
        raise ValidationError("Field name cannot be empty")


def validate_app_token(app_token: str):
    if not app_token or not app_token.strip():
        raise ValidationError("App token cannot be empty")


def validate_table_id(table_id: str):
    if not table_id or not table_id.strip():
        raise ValidationError("Table ID cannot be empty")

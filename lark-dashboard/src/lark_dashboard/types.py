"""Configuration type model: block kinds, enums and shared value types.

Every block kind has its own frozen dataclass (ChartConfig, ViewConfig, ...),
keyed by BlockType in BLOCK_CONFIG_TYPES. Fields default to None so a builder
can hand a partially-filled config to the validators; collections are tuples
so a built block can be shared freely.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any, Optional, Tuple, Union


# ── Enumerations ───────────────────────────────────────────────────────

class BlockType(IntEnum):
    CHART = 1
    VIEW = 2
    METRICS = 3
    LAYOUT = 4
    TEXT = 5
    LIST = 6
    TAB_PAGE = 7
    # Reserved by the remote API, no builders
    FILTER = 8
    CALENDAR = 9
    TIMELINE = 10


class ChartType(IntEnum):
    BAR = 1
    LINE = 2
    PIE = 3
    SCATTER = 4
    AREA = 5
    COLUMN = 6
    FUNNEL = 7
    RADAR = 8
    TABLE = 9
    HEATMAP = 10
    TREEMAP = 11
    WATERFALL = 12
    GAUGE = 13
    BUBBLE = 14
    SANKEY = 15
    BOXPLOT = 16
    CANDLESTICK = 17


class ViewType(IntEnum):
    GRID = 1
    KANBAN = 2
    GALLERY = 3
    GANTT = 4
    FORM = 5
    CALENDAR = 6
    TIMELINE = 7


class AggregationType(str, Enum):
    COUNT = "Count"
    COUNT_ALL = "CountAll"
    SUM = "Sum"
    AVG = "Average"
    MAX = "Max"
    MIN = "Min"
    EMPTY = "Empty"
    FILLED = "Filled"
    UNIQUE = "Unique"
    PERCENT_EMPTY = "PercentEmpty"
    PERCENT_FILLED = "PercentFilled"
    MEDIAN = "Median"
    STDDEV = "StdDev"
    VARIANCE = "Variance"
    RANGE = "Range"
    FIRST = "First"
    LAST = "Last"


class FilterOperator(str, Enum):
    IS = "is"
    IS_NOT = "isNot"
    CONTAINS = "contains"
    DOES_NOT_CONTAIN = "doesNotContain"
    IS_EMPTY = "isEmpty"
    IS_NOT_EMPTY = "isNotEmpty"
    IS_GREATER = "isGreater"
    IS_GREATER_EQUAL = "isGreaterEqual"
    IS_LESS = "isLess"
    IS_LESS_EQUAL = "isLessEqual"
    STARTS_WITH = "startsWith"
    ENDS_WITH = "endsWith"
    IS_BETWEEN = "isBetween"
    IS_ANY_OF = "isAnyOf"
    IS_NONE_OF = "isNoneOf"
    MATCHES_REGEX = "matchesRegex"
    IS_WITHIN_DAYS = "isWithinDays"
    IS_BEFORE_DATE = "isBeforeDate"
    IS_AFTER_DATE = "isAfterDate"


class FilterConjunction(str, Enum):
    AND = "and"
    OR = "or"


class ListLayoutStyle(str, Enum):
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"
    GRID = "grid"
    COMPACT = "compact"
    DETAILED = "detailed"


class TabPageLayout(str, Enum):
    HORIZONTAL_TABS = "horizontal_tabs"
    VERTICAL_TABS = "vertical_tabs"
    PILLS = "pills"
    SIDEBAR = "sidebar"
    DROPDOWN = "dropdown"


class PermissionLevel(str, Enum):
    OWNER = "owner"
    ADMIN = "admin"
    EDIT = "edit"
    VIEW = "view"
    COMMENT = "comment"
    NONE = "none"


class PermissionScope(str, Enum):
    DASHBOARD = "dashboard"
    BLOCK = "block"
    DATA_SOURCE = "data_source"


class SharingMode(str, Enum):
    PRIVATE = "private"
    PUBLIC = "public"
    LINK = "link"
    TEAM = "team"
    SPECIFIC_USERS = "specific_users"


REGIONS = ("sg", "cn", "us")
TEXT_ALIGNMENTS = ("left", "center", "right")


# ── Shared value types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class DataSource:
    """Remote table (and optional view) feeding a block."""

    app_token: str
    table_id: str
    view_id: Optional[str] = None
    refresh_interval: Optional[int] = None  # seconds
    cache_enabled: Optional[bool] = None


@dataclass(frozen=True)
class ChartAxis:
    field_name: str
    aggregation: Optional[AggregationType] = None
    label: Optional[str] = None
    format: Optional[str] = None
    show_grid: Optional[bool] = None
    axis_position: Optional[str] = None  # left | right | top | bottom
    scale: Optional[str] = None  # linear | log | time
    min: Optional[float] = None
    max: Optional[float] = None


@dataclass(frozen=True)
class FilterCondition:
    field_name: str
    operator: FilterOperator
    value: Any = None
    second_value: Any = None  # upper bound for IS_BETWEEN
    values: Optional[Tuple[Any, ...]] = None  # IS_ANY_OF / IS_NONE_OF
    case_sensitive: Optional[bool] = None


@dataclass(frozen=True)
class FilterGroup:
    """Conditions joined by a single conjunction. No nested groups."""

    conjunction: FilterConjunction = FilterConjunction.AND
    conditions: Tuple[FilterCondition, ...] = ()


@dataclass(frozen=True)
class ChartAnimation:
    enabled: bool = True
    duration: Optional[int] = None
    easing: Optional[str] = None  # linear | easeIn | easeOut | easeInOut
    delay: Optional[int] = None


@dataclass(frozen=True)
class ChartTooltip:
    enabled: bool = True
    format: Optional[str] = None
    shared: Optional[bool] = None
    position: Optional[str] = None  # auto | fixed


@dataclass(frozen=True)
class TextStyle:
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    underline: Optional[bool] = None
    strikethrough: Optional[bool] = None
    code: Optional[bool] = None
    color: Optional[str] = None
    background_color: Optional[str] = None
    font_size: Optional[int] = None
    font_family: Optional[str] = None
    line_height: Optional[float] = None
    letter_spacing: Optional[float] = None


@dataclass(frozen=True)
class ConditionalFormat:
    operator: FilterOperator
    value: float
    color: str
    icon: Optional[str] = None
    background_color: Optional[str] = None
    text_style: Optional[TextStyle] = None


@dataclass(frozen=True)
class Position:
    x: int
    y: int


@dataclass(frozen=True)
class Size:
    width: int
    height: int


# ── Block configs (one variant per BlockType) ──────────────────────────

@dataclass(frozen=True)
class ChartConfig:
    """Chart block. The chart type never changes the shape, only the rules."""

    chart_type: Optional[ChartType] = None
    data_source: Optional[DataSource] = None
    x_axis: Optional[ChartAxis] = None
    y_axis: Optional[Tuple[ChartAxis, ...]] = None
    series: Optional[ChartAxis] = None
    group_by: Optional[str] = None
    filters: Optional[FilterGroup] = None
    title: Optional[str] = None
    show_legend: Optional[bool] = None
    show_data_labels: Optional[bool] = None
    colors: Optional[Tuple[str, ...]] = None
    animation: Optional[ChartAnimation] = None
    tooltip: Optional[ChartTooltip] = None
    responsive: Optional[bool] = None
    theme: Optional[str] = None  # light | dark | auto
    export_enabled: Optional[bool] = None
    zoom_enabled: Optional[bool] = None
    pan_enabled: Optional[bool] = None
    crosshair: Optional[bool] = None


@dataclass(frozen=True)
class ViewConfig:
    view_type: Optional[ViewType] = None
    data_source: Optional[DataSource] = None
    title: Optional[str] = None
    show_toolbar: Optional[bool] = None
    height: Optional[int] = None
    page_size: Optional[int] = None
    enable_search: Optional[bool] = None
    enable_filters: Optional[bool] = None
    enable_sort: Optional[bool] = None


@dataclass(frozen=True)
class MetricsConfig:
    data_source: Optional[DataSource] = None
    field_name: Optional[str] = None
    aggregation: Optional[AggregationType] = None
    title: Optional[str] = None
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    decimals: Optional[int] = None
    conditional_formats: Optional[Tuple[ConditionalFormat, ...]] = None
    show_trend: Optional[bool] = None
    trend_field_name: Optional[str] = None
    comparison_enabled: Optional[bool] = None
    comparison_period: Optional[str] = None  # day | week | month | year
    sparkline_enabled: Optional[bool] = None
    target: Optional[float] = None
    target_label: Optional[str] = None


@dataclass(frozen=True)
class LayoutColumn:
    width: int  # 1-12 grid units
    block_ids: Tuple[str, ...] = ()
    min_width: Optional[int] = None  # px
    max_width: Optional[int] = None  # px
    collapsible: Optional[bool] = None
    collapsed: Optional[bool] = None


@dataclass(frozen=True)
class LayoutBreakpoints:
    mobile: Optional[int] = None
    tablet: Optional[int] = None
    desktop: Optional[int] = None


@dataclass(frozen=True)
class LayoutConfig:
    columns: Tuple[LayoutColumn, ...] = ()
    gap: Optional[int] = None
    padding: Optional[int] = None
    responsive: Optional[bool] = None
    breakpoints: Optional[LayoutBreakpoints] = None
    background_color: Optional[str] = None
    border_radius: Optional[int] = None


@dataclass(frozen=True)
class TextElement:
    content: str
    style: Optional[TextStyle] = None
    link: Optional[str] = None


@dataclass(frozen=True)
class TextConfig:
    elements: Tuple[TextElement, ...] = ()
    alignment: Optional[str] = None
    background_color: Optional[str] = None
    padding: Optional[int] = None


@dataclass(frozen=True)
class ListActionButton:
    label: str
    action: str  # link | edit | delete | custom
    url: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None


@dataclass(frozen=True)
class ListItemTemplate:
    title_field: Optional[str] = None
    subtitle_field: Optional[str] = None
    description_field: Optional[str] = None
    image_field: Optional[str] = None
    icon_field: Optional[str] = None
    badge_field: Optional[str] = None
    meta_fields: Optional[Tuple[str, ...]] = None
    action_buttons: Optional[Tuple[ListActionButton, ...]] = None


@dataclass(frozen=True)
class ListSorting:
    field: str
    direction: str  # asc | desc
    priority: Optional[int] = None  # None: call order decides


@dataclass(frozen=True)
class ListPagination:
    enabled: bool
    page_size: int = 20


@dataclass(frozen=True)
class ListConfig:
    data_source: Optional[DataSource] = None
    layout_style: Optional[ListLayoutStyle] = None
    item_template: Optional[ListItemTemplate] = None
    title: Optional[str] = None
    sorting: Optional[Tuple[ListSorting, ...]] = None
    filters: Optional[FilterGroup] = None
    pagination: Optional[ListPagination] = None
    group_by: Optional[str] = None
    show_search: Optional[bool] = None
    show_filters: Optional[bool] = None
    clickable: Optional[bool] = None
    on_click_action: Optional[str] = None  # detail | edit | custom


@dataclass(frozen=True)
class TabPageItem:
    id: str
    label: str
    block_ids: Tuple[str, ...] = ()
    icon: Optional[str] = None
    badge: Optional[Union[str, int]] = None
    disabled: Optional[bool] = None


@dataclass(frozen=True)
class TabPageConfig:
    layout: Optional[TabPageLayout] = None
    tabs: Tuple[TabPageItem, ...] = ()
    default_tab: Optional[str] = None
    title: Optional[str] = None
    show_tab_count: Optional[bool] = None
    animate_transition: Optional[bool] = None
    allow_reorder: Optional[bool] = None
    allow_close: Optional[bool] = None
    max_tabs: Optional[int] = None


BlockConfig = Union[
    ChartConfig, ViewConfig, MetricsConfig, LayoutConfig,
    TextConfig, ListConfig, TabPageConfig,
]

BLOCK_CONFIG_TYPES = {
    BlockType.CHART: ChartConfig,
    BlockType.VIEW: ViewConfig,
    BlockType.METRICS: MetricsConfig,
    BlockType.LAYOUT: LayoutConfig,
    BlockType.TEXT: TextConfig,
    BlockType.LIST: ListConfig,
    BlockType.TAB_PAGE: TabPageConfig,
}


# ── Permissions ────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PermissionEntity:
    type: str  # user | team | department
    id: str
    level: PermissionLevel


@dataclass(frozen=True)
class DashboardPermission:
    sharing_mode: Optional[SharingMode] = None
    scope: PermissionScope = PermissionScope.DASHBOARD
    entities: Tuple[PermissionEntity, ...] = ()
    allow_comments: Optional[bool] = None
    allow_export: Optional[bool] = None
    allow_share: Optional[bool] = None
    public_link_enabled: Optional[bool] = None
    public_link_password: Optional[str] = None
    expires_at: Optional[datetime] = None


@dataclass(frozen=True)
class BlockPermission:
    block_id: Optional[str] = None
    entities: Tuple[PermissionEntity, ...] = ()
    inherit_from_dashboard: Optional[bool] = None


# ── Blocks and dashboards ──────────────────────────────────────────────

@dataclass(frozen=True)
class DashboardBlock:
    """The unit submitted to the remote API. block_id is assigned remotely."""

    block_type: BlockType
    config: BlockConfig
    block_id: Optional[str] = None
    position: Optional[Position] = None
    size: Optional[Size] = None
    z_index: Optional[int] = None
    visible: Optional[bool] = None
    locked: Optional[bool] = None
    permission: Optional[BlockPermission] = None


@dataclass(frozen=True)
class DashboardTheme:
    name: str
    color_primary: Optional[str] = None
    color_secondary: Optional[str] = None
    color_background: Optional[str] = None
    color_text: Optional[str] = None
    color_border: Optional[str] = None
    font_family: Optional[str] = None
    border_radius: Optional[int] = None


@dataclass(frozen=True)
class DashboardSettings:
    auto_refresh: Optional[bool] = None
    refresh_interval: Optional[int] = None
    theme: Optional[DashboardTheme] = None
    fullscreen_enabled: Optional[bool] = None
    export_enabled: Optional[bool] = None
    print_enabled: Optional[bool] = None
    timezone: Optional[str] = None
    locale: Optional[str] = None


@dataclass(frozen=True)
class Dashboard:
    name: str
    app_token: str
    blocks: Tuple[DashboardBlock, ...] = ()
    description: Optional[str] = None
    tags: Tuple[str, ...] = ()
    permission: Optional[DashboardPermission] = None
    settings: Optional[DashboardSettings] = None
    version: Optional[str] = None


@dataclass(frozen=True)
class BatchOperationResult:
    success: bool
    block_id: Optional[str] = None
    error: Optional[str] = None

"""Block tools: chart, metrics, view, text, list and layout blocks, plus chat requests.

Each tool maps its arguments onto a builder through a plain helper
(chart_builder_from_args, ...), builds, then submits with add_block.
"""

import json
from typing import Optional

from mcp.server.fastmcp import FastMCP

from ..builders import (
    ChartBlockBuilder, LayoutBlockBuilder, ListBlockBuilder, MetricsBlockBuilder,
    TextBlockBuilder, ViewBlockBuilder,
)
from ..client import APIError, get_client
from ..intent import (
    ConversationContext, DashboardRef, IntentType, builder_for_intent, parse_intent,
)
from ..types import AggregationType, ChartType, ListLayoutStyle, ViewType
from ..utils import parse_enum, safe_json
from ..validation import ValidationError

LAYOUT_RECIPES = {
    "two_column": LayoutBlockBuilder.two_column,
    "three_column": LayoutBlockBuilder.three_column,
    "sidebar": LayoutBlockBuilder.sidebar,
    "main_aside": LayoutBlockBuilder.main_aside,
    "full_width": LayoutBlockBuilder.full_width,
}

INTENT_KINDS = {
    IntentType.ADD_CHART: "Chart",
    IntentType.ADD_METRICS: "Metrics",
    IntentType.ADD_VIEW: "View",
    IntentType.ADD_TEXT: "Text",
}


# ── Argument -> builder helpers ────────────────────────────────────────

def _list_arg(value, name: str) -> list:
    """A list tool argument, given as a list or as a JSON array string."""
    try:
        parsed = safe_json(value)
    except ValueError:
        raise ValidationError(f"{name} must be a JSON array, got: {value}") from None
    if parsed is None:
        return []
    if not isinstance(parsed, list):
        raise ValidationError(f"{name} must be a JSON array, got: {value}")
    return parsed


def chart_builder_from_args(app_token, table_id, chart_type, x_axis_field=None,
                            y_axis_fields=None, view_id=None, title=None,
                            show_legend=None, colors=None) -> ChartBlockBuilder:
    """y_axis_fields: list of {"field_name", "aggregation"?, "label"?} or plain names."""
    builder = (ChartBlockBuilder()
               .chart_type(parse_enum(ChartType, chart_type, "chart type"))
               .data_source(app_token, table_id, view_id))
    if x_axis_field:
        builder.x_axis(x_axis_field)
    for axis in _list_arg(y_axis_fields, "y_axis_fields"):
        if isinstance(axis, str):
            builder.y_axis(axis)
            continue
        if not isinstance(axis, dict) or not axis.get("field_name"):
            raise ValidationError(f"Each Y-axis needs a field_name, got: {axis}")
        aggregation = axis.get("aggregation")
        builder.y_axis(
            axis["field_name"],
            parse_enum(AggregationType, aggregation, "aggregation") if aggregation else None,
            axis.get("label"),
        )
    if title:
        builder.title(title)
    if show_legend is not None:
        builder.legend(show_legend)
    if colors:
        builder.colors(_list_arg(colors, "colors"))
    return builder


def metrics_builder_from_args(app_token, table_id, field_name, aggregation, view_id=None,
                              title=None, prefix=None, suffix=None,
                              decimals=None) -> MetricsBlockBuilder:
    builder = (MetricsBlockBuilder()
               .data_source(app_token, table_id, view_id)
               .field(field_name)
               .aggregation(parse_enum(AggregationType, aggregation, "aggregation")))
    if title:
        builder.title(title)
    if prefix:
        builder.prefix(prefix)
    if suffix:
        builder.suffix(suffix)
    if decimals is not None:
        builder.decimals(decimals)
    return builder


def view_builder_from_args(app_token, table_id, view_type, view_id=None, title=None,
                           show_toolbar=None, height=None) -> ViewBlockBuilder:
    builder = (ViewBlockBuilder()
               .view_type(parse_enum(ViewType, view_type, "view type"))
               .data_source(app_token, table_id, view_id))
    if title:
        builder.title(title)
    if show_toolbar is not None:
        builder.toolbar(show_toolbar)
    if height is not None:
        builder.height(height)
    return builder


def text_builder_from_args(content, is_heading=False, alignment=None) -> TextBlockBuilder:
    if is_heading:
        builder = TextBlockBuilder.heading(content)
    else:
        builder = TextBlockBuilder.paragraph(content)
    if alignment:
        builder.alignment(alignment)
    return builder


def list_builder_from_args(app_token, table_id, title_field, layout_style="vertical",
                           view_id=None, title=None, subtitle_field=None,
                           description_field=None, sort_field=None, sort_direction="asc",
                           page_size=None) -> ListBlockBuilder:
    builder = (ListBlockBuilder()
               .layout_style(parse_enum(ListLayoutStyle, layout_style, "layout style"))
               .data_source(app_token, table_id, view_id)
               .title_field(title_field))
    if title:
        builder.title(title)
    if subtitle_field:
        builder.subtitle_field(subtitle_field)
    if description_field:
        builder.description_field(description_field)
    if sort_field:
        builder.add_sorting(sort_field, sort_direction)
    if page_size:
        builder.pagination(True, page_size)
    return builder


def layout_builder_from_args(recipe=None, widths=None, gap=None,
                             padding=None) -> LayoutBlockBuilder:
    """Either a named recipe or an explicit list of column widths."""
    widths = _list_arg(widths, "widths")
    if widths:
        builder = LayoutBlockBuilder.of_widths(*widths)
    elif recipe:
        if recipe not in LAYOUT_RECIPES:
            raise ValidationError(
                f"Unknown layout recipe: {recipe}. Use one of: {', '.join(LAYOUT_RECIPES)}")
        builder = LAYOUT_RECIPES[recipe]()
    else:
        raise ValidationError("Either recipe or widths is required")
    if gap is not None:
        builder.gap(gap)
    if padding is not None:
        builder.padding(padding)
    return builder


def message_builder_from_args(app_token, dashboard_id, message):
    """Parse a chat message against the given dashboard. Returns (builder, kind)."""
    context = ConversationContext(current_dashboard=DashboardRef(app_token, dashboard_id))
    intent = parse_intent(message, context)
    return builder_for_intent(intent), INTENT_KINDS.get(intent.type, "Block")


def _submit(app_token: str, dashboard_id: str, make_builder, kind: str) -> str:
    try:
        block = make_builder().build()
        block_id = get_client().add_block(app_token, dashboard_id, block)
    except (APIError, ValidationError) as e:
        return json.dumps({"success": False, "error": str(e)})
    return json.dumps({
        "success": True,
        "block_id": block_id,
        "message": f"{kind} block created successfully",
    })


def register_tools(mcp: FastMCP):
    """Register block tools on the MCP server."""

    @mcp.tool()
    def create_chart_block(
        app_token: str,
        dashboard_id: str,
        chart_type: str,
        table_id: str,
        x_axis_field: Optional[str] = None,
        y_axis_fields: Optional[list] = None,
        view_id: Optional[str] = None,
        title: Optional[str] = None,
        show_legend: Optional[bool] = None,
        colors: Optional[list] = None,
    ) -> str:
        """Create a chart block and add it to a dashboard.

        Args:
            app_token: Base app token
            dashboard_id: Dashboard ID (from create_dashboard)
            chart_type: bar, line, pie, scatter, area, column, funnel, radar, table,
                        heatmap, treemap, waterfall, gauge, bubble, sankey, boxplot, candlestick
            table_id: Source table ID
            x_axis_field: X-axis field (required except for pie)
            y_axis_fields: JSON array of Y-axes.
                Example: '[{"field_name":"Revenue","aggregation":"sum"}]'
            view_id: Optional source view
            title: Chart title
            show_legend: Show the legend
            colors: JSON array of #RRGGBB colors

        Returns:
            JSON with success and block_id (or error).
        """
        return _submit(app_token, dashboard_id, lambda: chart_builder_from_args(
            app_token, table_id, chart_type, x_axis_field, y_axis_fields,
            view_id, title, show_legend, colors), "Chart")

    @mcp.tool()
    def create_metrics_block(
        app_token: str,
        dashboard_id: str,
        table_id: str,
        field_name: str,
        aggregation: str,
        view_id: Optional[str] = None,
        title: Optional[str] = None,
        prefix: Optional[str] = None,
        suffix: Optional[str] = None,
        decimals: Optional[int] = None,
    ) -> str:
        """Create a metrics (KPI) block showing one aggregated value.

        Args:
            aggregation: count, sum, average, max, min, median, ... (case-insensitive)
            prefix / suffix: Text around the number, e.g. "$" or "%"
            decimals: 0-10

        Example:
            create_metrics_block("app", "dash", "tbl", "Revenue", "sum", prefix="$", decimals=2)
        """
        return _submit(app_token, dashboard_id, lambda: metrics_builder_from_args(
            app_token, table_id, field_name, aggregation, view_id,
            title, prefix, suffix, decimals), "Metrics")

    @mcp.tool()
    def create_view_block(
        app_token: str,
        dashboard_id: str,
        view_type: str,
        table_id: str,
        view_id: Optional[str] = None,
        title: Optional[str] = None,
        show_toolbar: Optional[bool] = None,
        height: Optional[int] = None,
    ) -> str:
        """Embed a table view (grid, kanban, gallery, gantt, form, calendar, timeline).

        height is in pixels, minimum 100.
        """
        return _submit(app_token, dashboard_id, lambda: view_builder_from_args(
            app_token, table_id, view_type, view_id, title, show_toolbar, height), "View")

    @mcp.tool()
    def create_text_block(
        app_token: str,
        dashboard_id: str,
        content: str,
        is_heading: bool = False,
        alignment: Optional[str] = None,
    ) -> str:
        """Add a heading or paragraph. alignment: left, center or right."""
        return _submit(app_token, dashboard_id, lambda: text_builder_from_args(
            content, is_heading, alignment), "Text")

    @mcp.tool()
    def create_list_block(
        app_token: str,
        dashboard_id: str,
        table_id: str,
        title_field: str,
        layout_style: str = "vertical",
        view_id: Optional[str] = None,
        title: Optional[str] = None,
        subtitle_field: Optional[str] = None,
        description_field: Optional[str] = None,
        sort_field: Optional[str] = None,
        sort_direction: str = "asc",
        page_size: Optional[int] = None,
    ) -> str:
        """Create a list block rendering one card per record.

        Args:
            title_field: Field shown as each item's title
            layout_style: vertical, horizontal, grid, compact or detailed
            sort_field / sort_direction: Optional single sort rule (asc | desc)
            page_size: Enables pagination with this page size
        """
        return _submit(app_token, dashboard_id, lambda: list_builder_from_args(
            app_token, table_id, title_field, layout_style, view_id, title,
            subtitle_field, description_field, sort_field, sort_direction, page_size), "List")

    @mcp.tool()
    def create_layout_block(
        app_token: str,
        dashboard_id: str,
        recipe: Optional[str] = None,
        widths: Optional[list] = None,
        gap: Optional[int] = None,
        padding: Optional[int] = None,
    ) -> str:
        """Create a column layout on a 12-unit grid.

        Args:
            recipe: two_column, three_column, sidebar, main_aside or full_width
            widths: JSON array of column widths instead of a recipe, e.g. '[4, 8]'
                    (each 1-12, total at most 12)
        """
        return _submit(app_token, dashboard_id, lambda: layout_builder_from_args(
            recipe, widths, gap, padding), "Layout")

    @mcp.tool()
    def create_block_from_message(app_token: str, dashboard_id: str, message: str) -> str:
        """Create a block from a plain-language request.

        Understands chart, metrics, view and text requests, e.g.
        "add a bar chart table_id: tbl1 x_axis: Month y_axis: Revenue" or
        'add a heading "Q3 Results"'. Missing details come back as the error.
        """
        try:
            builder, kind = message_builder_from_args(app_token, dashboard_id, message)
        except ValidationError as e:
            return json.dumps({"success": False, "error": str(e)})
        return _submit(app_token, dashboard_id, lambda: builder, kind)

"""Block -> Bitable dashboard API payload.

Pure mapping, no validation and no I/O. Unset (None) fields are left out,
enum members become their wire values, colors are passed through as given.
"""

from .types import BlockType, DashboardBlock
from .utils import compact, enum_value


def _map_or_none(items, fn):
    return [fn(i) for i in items] if items is not None else None


# ── Shared pieces ──────────────────────────────────────────────────────

def convert_data_source(ds) -> dict:
    if ds is None:
        return None
    return compact({
        "app_token": ds.app_token,
        "table_id": ds.table_id,
        "view_id": ds.view_id,
        "refresh_interval": ds.refresh_interval,
        "cache_enabled": ds.cache_enabled,
    })


def convert_axis(axis) -> dict:
    if axis is None:
        return None
    return compact({
        "field_name": axis.field_name,
        "aggregation": enum_value(axis.aggregation),
        "label": axis.label,
        "format": axis.format,
        "show_grid": axis.show_grid,
        "axis_position": axis.axis_position,
        "scale": axis.scale,
        "min": axis.min,
        "max": axis.max,
    })


def convert_filters(group) -> dict:
    if group is None:
        return None
    return {
        "conjunction": enum_value(group.conjunction),
        "conditions": [compact({
            "field_name": c.field_name,
            "operator": enum_value(c.operator),
            "value": c.value,
            "second_value": c.second_value,
            "values": list(c.values) if c.values is not None else None,
            "case_sensitive": c.case_sensitive,
        }) for c in group.conditions],
    }


def convert_text_style(style) -> dict:
    if style is None:
        return None
    return compact({
        "bold": style.bold,
        "italic": style.italic,
        "underline": style.underline,
        "strikethrough": style.strikethrough,
        "code": style.code,
        "color": style.color,
        "background_color": style.background_color,
        "font_size": style.font_size,
        "font_family": style.font_family,
        "line_height": style.line_height,
        "letter_spacing": style.letter_spacing,
    })


# ── Block configs ──────────────────────────────────────────────────────

def convert_chart_config(config) -> dict:
    animation = config.animation
    tooltip = config.tooltip
    return compact({
        "chart_type": enum_value(config.chart_type),
        "data_source": convert_data_source(config.data_source),
        "x_axis": convert_axis(config.x_axis),
        "y_axis": _map_or_none(config.y_axis, convert_axis),
        "series": convert_axis(config.series),
        "group_by": config.group_by,
        "filters": convert_filters(config.filters),
        "title": config.title,
        "show_legend": config.show_legend,
        "show_data_labels": config.show_data_labels,
        "colors": list(config.colors) if config.colors is not None else None,
        "animation": compact({
            "enabled": animation.enabled,
            "duration": animation.duration,
            "easing": animation.easing,
            "delay": animation.delay,
        }) if animation else None,
        "tooltip": compact({
            "enabled": tooltip.enabled,
            "format": tooltip.format,
            "shared": tooltip.shared,
            "position": tooltip.position,
        }) if tooltip else None,
        "responsive": config.responsive,
        "theme": config.theme,
        "export_enabled": config.export_enabled,
        "zoom_enabled": config.zoom_enabled,
        "pan_enabled": config.pan_enabled,
        "crosshair": config.crosshair,
    })


def convert_view_config(config) -> dict:
    return compact({
        "view_type": enum_value(config.view_type),
        "data_source": convert_data_source(config.data_source),
        "title": config.title,
        "show_toolbar": config.show_toolbar,
        "height": config.height,
        "page_size": config.page_size,
        "enable_search": config.enable_search,
        "enable_filters": config.enable_filters,
        "enable_sort": config.enable_sort,
    })


def convert_metrics_config(config) -> dict:
    return compact({
        "data_source": convert_data_source(config.data_source),
        "field_name": config.field_name,
        "aggregation": enum_value(config.aggregation),
        "title": config.title,
        "prefix": config.prefix,
        "suffix": config.suffix,
        "decimals": config.decimals,
        "conditional_formats": _map_or_none(config.conditional_formats, lambda f: compact({
            "operator": enum_value(f.operator),
            "value": f.value,
            "color": f.color,
            "icon": f.icon,
            "background_color": f.background_color,
            "text_style": convert_text_style(f.text_style),
        })),
        "show_trend": config.show_trend,
        "trend_field_name": config.trend_field_name,
        "comparison_enabled": config.comparison_enabled,
        "comparison_period": config.comparison_period,
        "sparkline_enabled": config.sparkline_enabled,
        "target": config.target,
        "target_label": config.target_label,
    })


def convert_layout_config(config) -> dict:
    bp = config.breakpoints
    return compact({
        "columns": [compact({
            "width": col.width,
            "block_ids": list(col.block_ids),
            "min_width": col.min_width,
            "max_width": col.max_width,
            "collapsible": col.collapsible,
            "collapsed": col.collapsed,
        }) for col in config.columns],
        "gap": config.gap,
        "padding": config.padding,
        "responsive": config.responsive,
        "breakpoints": compact({
            "mobile": bp.mobile, "tablet": bp.tablet, "desktop": bp.desktop,
        }) if bp else None,
        "background_color": config.background_color,
        "border_radius": config.border_radius,
    })


def convert_text_config(config) -> dict:
    return compact({
        "elements": [compact({
            "content": el.content,
            "style": convert_text_style(el.style),
            "link": el.link,
        }) for el in config.elements],
        "alignment": config.alignment,
        "background_color": config.background_color,
        "padding": config.padding,
    })


def convert_list_config(config) -> dict:
    tpl = config.item_template
    template = None
    if tpl is not None:
        template = compact({
            "title_field": tpl.title_field,
            "subtitle_field": tpl.subtitle_field,
            "description_field": tpl.description_field,
            "image_field": tpl.image_field,
            "icon_field": tpl.icon_field,
            "badge_field": tpl.badge_field,
            "meta_fields": list(tpl.meta_fields) if tpl.meta_fields is not None else None,
            "action_buttons": _map_or_none(tpl.action_buttons, lambda b: compact({
                "label": b.label, "action": b.action, "url": b.url,
                "icon": b.icon, "color": b.color,
            })),
        })
    pagination = config.pagination
    return compact({
        "data_source": convert_data_source(config.data_source),
        "layout_style": enum_value(config.layout_style),
        "item_template": template,
        "title": config.title,
        "sorting": _map_or_none(config.sorting, lambda s: compact({
            "field": s.field, "direction": s.direction, "priority": s.priority,
        })),
        "filters": convert_filters(config.filters),
        "pagination": {
            "enabled": pagination.enabled, "page_size": pagination.page_size,
        } if pagination else None,
        "group_by": config.group_by,
        "show_search": config.show_search,
        "show_filters": config.show_filters,
        "clickable": config.clickable,
        "on_click_action": config.on_click_action,
    })


def convert_tab_page_config(config) -> dict:
    return compact({
        "layout": enum_value(config.layout),
        "tabs": [compact({
            "id": tab.id,
            "label": tab.label,
            "block_ids": list(tab.block_ids),
            "icon": tab.icon,
            "badge": tab.badge,
            "disabled": tab.disabled,
        }) for tab in config.tabs],
        "default_tab": config.default_tab,
        "title": config.title,
        "show_tab_count": config.show_tab_count,
        "animate_transition": config.animate_transition,
        "allow_reorder": config.allow_reorder,
        "allow_close": config.allow_close,
        "max_tabs": config.max_tabs,
    })


CONVERTERS = {
    BlockType.CHART: convert_chart_config,
    BlockType.VIEW: convert_view_config,
    BlockType.METRICS: convert_metrics_config,
    BlockType.LAYOUT: convert_layout_config,
    BlockType.TEXT: convert_text_config,
    BlockType.LIST: convert_list_config,
    BlockType.TAB_PAGE: convert_tab_page_config,
}


# ── Permissions ────────────────────────────────────────────────────────

def _convert_entities(entities) -> list:
    return [{"type": e.type, "id": e.id, "level": enum_value(e.level)} for e in entities]


def convert_block_permission(permission) -> dict:
    if permission is None:
        return None
    return compact({
        "block_id": permission.block_id,
        "entities": _convert_entities(permission.entities),
        "inherit_from_dashboard": permission.inherit_from_dashboard,
    })


def convert_dashboard_permission(permission) -> dict:
    if permission is None:
        return None
    return compact({
        "sharing_mode": enum_value(permission.sharing_mode),
        "scope": enum_value(permission.scope),
        "entities": _convert_entities(permission.entities),
        "allow_comments": permission.allow_comments,
        "allow_export": permission.allow_export,
        "allow_share": permission.allow_share,
        "public_link_enabled": permission.public_link_enabled,
        "public_link_password": permission.public_link_password,
        "expires_at": permission.expires_at.isoformat() if permission.expires_at else None,
    })


# ── Whole block ────────────────────────────────────────────────────────

def convert_block(block: DashboardBlock) -> dict:
    """Full request body for POST .../blocks and PATCH .../blocks/{id}."""
    block_type = BlockType(block.block_type)
    return compact({
        "block_type": int(block_type),
        "config": CONVERTERS[block_type](block.config),
        "position": {"x": block.position.x, "y": block.position.y} if block.position else None,
        "size": {"width": block.size.width, "height": block.size.height} if block.size else None,
        "z_index": block.z_index,
        "visible": block.visible,
        "locked": block.locked,
        "permission": convert_block_permission(block.permission),
    })

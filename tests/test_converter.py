"""Tests for block -> API payload conversion."""

import json
from datetime import datetime

from lark_dashboard.builders import (
    ChartBlockBuilder, LayoutBlockBuilder, ListBlockBuilder, MetricsBlockBuilder,
    TabPageBlockBuilder, TextBlockBuilder,
)
from lark_dashboard.converter import convert_block, convert_dashboard_permission
from lark_dashboard.permissions import BlockPermissionBuilder, DashboardPermissionBuilder
from lark_dashboard.types import AggregationType, FilterOperator, PermissionLevel


class TestConvertBlock:
    """Wire names, enum values and omission of unset fields."""

    def test_chart_payload(self):
        block = (ChartBlockBuilder.bar()
                 .data_source("app1", "tbl1")
                 .x_axis("Category")
                 .y_axis("Revenue", AggregationType.SUM)
                 .title("Sales")
                 .build())

        assert convert_block(block) == {
            "block_type": 1,
            "config": {
                "chart_type": 1,
                "data_source": {"app_token": "app1", "table_id": "tbl1"},
                "x_axis": {"field_name": "Category"},
                "y_axis": [{"field_name": "Revenue", "aggregation": "Sum"}],
                "title": "Sales",
            },
        }

    def test_payload_is_json_serializable(self):
        block = (MetricsBlockBuilder.average("Score").data_source("a", "t")
                 .add_conditional_format(FilterOperator.IS_LESS, 50, "#ef4444")
                 .position(1, 2).size(3, 2).build())
        payload = json.loads(json.dumps(convert_block(block)))
        assert payload["block_type"] == 3
        assert payload["config"]["aggregation"] == "Average"
        assert payload["config"]["conditional_formats"] == [
            {"operator": "isLess", "value": 50, "color": "#ef4444"}]
        assert payload["position"] == {"x": 1, "y": 2}
        assert payload["size"] == {"width": 3, "height": 2}

    def test_colors_passed_through_verbatim(self):
        block = (ChartBlockBuilder.line().data_source("a", "t").x_axis("x").y_axis("y")
                 .colors(["#ABCDEF", "#3b82f6"]).build())
        assert convert_block(block)["config"]["colors"] == ["#ABCDEF", "#3b82f6"]

    def test_false_values_kept(self):
        block = ChartBlockBuilder.pie().data_source("a", "t").legend(False).visible(False).build()
        payload = convert_block(block)
        assert payload["config"]["show_legend"] is False
        assert payload["visible"] is False
        assert "locked" not in payload

    def test_filters(self):
        block = (ChartBlockBuilder.bar().data_source("a", "t").x_axis("x").y_axis("y")
                 .add_filter("Tag", FilterOperator.IS_ANY_OF, values=("a", "b"))
                 .build())
        assert convert_block(block)["config"]["filters"] == {
            "conjunction": "and",
            "conditions": [{"field_name": "Tag", "operator": "isAnyOf", "values": ["a", "b"]}],
        }

    def test_layout_payload(self):
        block = LayoutBlockBuilder().add_column(4, ["b1"]).add_column(8).gap(16).build()
        assert convert_block(block) == {
            "block_type": 4,
            "config": {
                "columns": [{"width": 4, "block_ids": ["b1"]}, {"width": 8, "block_ids": []}],
                "gap": 16,
            },
        }

    def test_text_payload(self):
        block = TextBlockBuilder().add_bold("Hi").add_link("docs", "https://x").build()
        assert convert_block(block)["config"]["elements"] == [
            {"content": "Hi", "style": {"bold": True}},
            {"content": "docs", "link": "https://x"},
        ]

    def test_list_payload(self):
        block = (ListBlockBuilder.grid().data_source("a", "t").title_field("Name")
                 .add_edit_button().sort_desc("Due").pagination(True, 50).build())
        config = convert_block(block)["config"]
        assert config["layout_style"] == "grid"
        assert config["item_template"] == {
            "title_field": "Name",
            "action_buttons": [{"label": "Edit", "action": "edit", "icon": "edit"}],
        }
        assert config["sorting"] == [{"field": "Due", "direction": "desc"}]
        assert config["pagination"] == {"enabled": True, "page_size": 50}

    def test_tab_page_payload(self):
        block = TabPageBlockBuilder.dropdown().tab("t1", "One", ["b1"]).build()
        assert convert_block(block) == {
            "block_type": 7,
            "config": {
                "layout": "dropdown",
                "tabs": [{"id": "t1", "label": "One", "block_ids": ["b1"]}],
            },
        }

    def test_block_permission(self):
        permission = (BlockPermissionBuilder().block_id("blk1")
                      .add_user("u1", PermissionLevel.VIEW).build())
        block = TextBlockBuilder.paragraph("x").permission(permission).build()
        assert convert_block(block)["permission"] == {
            "block_id": "blk1",
            "entities": [{"type": "user", "id": "u1", "level": "view"}],
        }


class TestConvertDashboardPermission:

    def test_expiry_as_iso_string(self):
        permission = (DashboardPermissionBuilder().share_via_link("secret1")
                      .expires_at(datetime(2030, 1, 2, 3, 4, 5)).build())
        assert convert_dashboard_permission(permission) == {
            "sharing_mode": "link",
            "scope": "dashboard",
            "entities": [],
            "public_link_enabled": True,
            "public_link_password": "secret1",
            "expires_at": "2030-01-02T03:04:05",
        }

    def test_none(self):
        assert convert_dashboard_permission(None) is None

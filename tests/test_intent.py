"""Tests for chat intent parsing and intent -> builder mapping."""

import pytest

from lark_dashboard.intent import (
    ConversationContext, DashboardRef, IntentType, builder_for_intent, parse_intent,
)
from lark_dashboard.types import AggregationType, BlockType, ChartType, TextStyle, ViewType
from lark_dashboard.validation import ValidationError


@pytest.fixture
def context():
    return ConversationContext(user_id="ou_1",
                               current_dashboard=DashboardRef("app1", "dash1", "Sales"))


class TestParseIntent:
    """Keyword rules, checked in order."""

    def test_create_dashboard(self):
        intent = parse_intent("Create a new dashboard called Sales Q3")
        assert intent.type == IntentType.CREATE_DASHBOARD
        assert intent.confidence == 0.9
        assert intent.entities.dashboard_name == "Sales Q3"

    def test_add_chart(self, context):
        intent = parse_intent("add a bar chart table_id: tbl1 x_axis: Month y_axis: Revenue",
                              context)
        e = intent.entities
        assert intent.type == IntentType.ADD_CHART
        assert intent.confidence == 0.85
        assert e.chart_type == ChartType.BAR
        assert e.field_names == ["Month", "Revenue"]
        assert (e.app_token, e.dashboard_id, e.table_id) == ("app1", "dash1", "tbl1")

    def test_multiple_y_axes(self, context):
        intent = parse_intent("plot a line graph table_id: t x_axis: Date y_axis: A, B", context)
        assert intent.entities.chart_type == ChartType.LINE
        assert intent.entities.field_names == ["Date", "A", "B"]

    def test_add_metrics(self):
        intent = parse_intent("show the sum of field: Revenue table_id: tbl2 app_token: app9")
        e = intent.entities
        assert intent.type == IntentType.ADD_METRICS
        assert intent.confidence == 0.8
        assert e.aggregation == AggregationType.SUM
        assert e.field_names == ["Revenue"]
        assert e.app_token == "app9"
        assert e.dashboard_id is None

    def test_average_keyword(self):
        intent = parse_intent("kpi avg of field: Score")
        assert intent.entities.aggregation == AggregationType.AVG

    @pytest.mark.parametrize("message,view_type", [
        ("add a kanban view table_id: tbl1", ViewType.KANBAN),
        ("add a table view", ViewType.GRID),
        ("embed the gantt view", ViewType.GANTT),
    ])
    def test_add_view(self, message, view_type):
        intent = parse_intent(message)
        assert intent.type == IntentType.ADD_VIEW
        assert intent.entities.view_type == view_type

    def test_view_id_alone_is_not_a_view(self):
        intent = parse_intent("view_id: vew1")
        assert intent.type == IntentType.UNKNOWN
        assert intent.entities.view_id == "vew1"

    def test_add_text(self):
        intent = parse_intent('add a heading "Q3 Results"')
        assert intent.type == IntentType.ADD_TEXT
        assert intent.confidence == 0.7
        assert intent.entities.content == "Q3 Results"

    @pytest.mark.parametrize("message,intent_type,confidence", [
        ("list my dashboards", IntentType.LIST_DASHBOARDS, 0.9),
        ("delete dashboard dashboard_id: d1", IntentType.DELETE_DASHBOARD, 0.85),
        ("help", IntentType.HELP, 1.0),
        ("?", IntentType.HELP, 1.0),
        ("what's the weather", IntentType.UNKNOWN, 0.0),
    ])
    def test_other_intents(self, message, intent_type, confidence):
        intent = parse_intent(message)
        assert (intent.type, intent.confidence) == (intent_type, confidence)
        assert intent.raw_text == message

    def test_delete_extracts_dashboard_id(self):
        assert parse_intent("delete dashboard dashboard_id: d1").entities.dashboard_id == "d1"

    def test_context_remembers_last_intent(self, context):
        intent = parse_intent("help", context)
        assert context.last_intent is intent


class TestBuilderForIntent:
    """Parsed intents turned into ready-to-build builders."""

    def test_chart(self, context):
        intent = parse_intent("add a bar chart table_id: tbl1 x_axis: Month y_axis: Revenue",
                              context)
        block = builder_for_intent(intent).build()
        assert block.block_type == BlockType.CHART
        assert block.config.data_source.app_token == "app1"
        assert block.config.x_axis.field_name == "Month"
        assert block.config.y_axis[0].aggregation == AggregationType.SUM

    def test_chart_needs_app_token(self):
        intent = parse_intent("add a line chart table_id: tbl1 x_axis: a y_axis: b")
        with pytest.raises(ValidationError, match="create a dashboard first"):
            builder_for_intent(intent)

    def test_chart_needs_table(self, context):
        with pytest.raises(ValidationError, match="I need a table ID"):
            builder_for_intent(parse_intent("add a bar chart", context))

    def test_chart_needs_type(self, context):
        with pytest.raises(ValidationError, match="What type of chart"):
            builder_for_intent(parse_intent("add a chart table_id: tbl1", context))

    def test_chart_needs_both_axes(self, context):
        intent = parse_intent("add a pie chart table_id: tbl1 x_axis: Region", context)
        with pytest.raises(ValidationError, match="X and Y axes"):
            builder_for_intent(intent)

    def test_metrics(self, context):
        intent = parse_intent("count of field: Orders table_id: tbl1", context)
        block = builder_for_intent(intent).build()
        assert block.config.aggregation == AggregationType.COUNT
        assert block.config.field_name == "Orders"

    def test_metrics_needs_field(self, context):
        with pytest.raises(ValidationError, match="Which field"):
            builder_for_intent(parse_intent("show a kpi table_id: tbl1", context))

    def test_view(self, context):
        block = builder_for_intent(parse_intent("add a gallery view table_id: tbl1",
                                                context)).build()
        assert block.config.view_type == ViewType.GALLERY
        assert block.config.data_source.table_id == "tbl1"

    def test_view_needs_type(self, context):
        with pytest.raises(ValidationError, match="What type of view"):
            builder_for_intent(parse_intent("add a view table_id: tbl1", context))

    def test_heading(self):
        block = builder_for_intent(parse_intent('add a heading "Q3 Results"')).build()
        assert block.config.elements[0].style == TextStyle(bold=True, font_size=24)

    def test_paragraph(self):
        block = builder_for_intent(parse_intent('add text "Hello team"')).build()
        assert block.config.elements[0].content == "Hello team"
        assert block.config.elements[0].style is None

    def test_text_needs_content(self):
        with pytest.raises(ValidationError, match="What text"):
            builder_for_intent(parse_intent("add some text"))

    def test_non_block_intent(self):
        with pytest.raises(ValidationError, match="No block to build for intent: help"):
            builder_for_intent(parse_intent("help"))

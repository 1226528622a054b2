"""Chat message -> dashboard intent, and intent -> block builder.

Keyword and regex based, no model calls. parse_intent() never raises;
builder_for_intent() raises ValidationError when the message lacked
something the block needs (table id, chart type, axes, ...).

Example:
    intent = parse_intent("add a bar chart table_id: tbl1 x_axis: Month y_axis: Revenue",
                          context)
    block = builder_for_intent(intent).build()
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .builders import ChartBlockBuilder, MetricsBlockBuilder, TextBlockBuilder, ViewBlockBuilder
from .types import AggregationType, ChartType, ViewType
from .validation import ValidationError

logger = logging.getLogger(__name__)


class IntentType(str, Enum):
    CREATE_DASHBOARD = "create_dashboard"
    ADD_CHART = "add_chart"
    ADD_METRICS = "add_metrics"
    ADD_VIEW = "add_view"
    ADD_TEXT = "add_text"
    LIST_DASHBOARDS = "list_dashboards"
    DELETE_DASHBOARD = "delete_dashboard"
    HELP = "help"
    UNKNOWN = "unknown"


@dataclass
class IntentEntities:
    dashboard_name: Optional[str] = None
    app_token: Optional[str] = None
    dashboard_id: Optional[str] = None
    table_id: Optional[str] = None
    view_id: Optional[str] = None
    chart_type: Optional[ChartType] = None
    view_type: Optional[ViewType] = None
    field_names: List[str] = field(default_factory=list)
    aggregation: Optional[AggregationType] = None
    title: Optional[str] = None
    content: Optional[str] = None


@dataclass
class ParsedIntent:
    type: IntentType
    confidence: float
    entities: IntentEntities
    raw_text: str


@dataclass(frozen=True)
class DashboardRef:
    app_token: str
    dashboard_id: str
    name: Optional[str] = None


@dataclass
class ConversationContext:
    """Per-chat state. current_dashboard fills in app token and dashboard id."""

    user_id: Optional[str] = None
    session_id: Optional[str] = None
    current_dashboard: Optional[DashboardRef] = None
    last_intent: Optional[ParsedIntent] = None


# ── Patterns ───────────────────────────────────────────────────────────

APP_TOKEN_RE = re.compile(r"(?:app[-_\s]?token|base)[:=\s]+([a-zA-Z0-9]+)", re.I)
DASHBOARD_ID_RE = re.compile(r"(?:dashboard[-_\s]?id)[:=\s]+([a-zA-Z0-9]+)", re.I)
TABLE_ID_RE = re.compile(r"(?:table[-_\s]?id)[:=\s]+([a-zA-Z0-9]+)", re.I)
VIEW_ID_RE = re.compile(r"(?:view[-_\s]?id)[:=\s]+([a-zA-Z0-9]+)", re.I)
DASHBOARD_NAME_RES = (
    re.compile(r"(?:called|named|name)[:=\s]+[\"']?([^\"'\n]+)[\"']?", re.I),
    re.compile(r"dashboard[\"'\s]+([^\"'\n]+)", re.I),
)
X_AXIS_RE = re.compile(r"x[-_\s]?axis[:=\s]+([a-zA-Z0-9_]+)", re.I)
Y_AXIS_RE = re.compile(r"y[-_\s]?axis[:=\s]+([a-zA-Z0-9_,\s]+)", re.I)
TITLE_RE = re.compile(r"(?:title|called|named)[:=\s]+[\"']?([^\"'\n]+)[\"']?", re.I)
FIELD_RE = re.compile(r"(?:field|column)[:=\s]+([a-zA-Z0-9_]+)", re.I)
QUOTED_RE = re.compile(r"[\"']([^\"']+)[\"']")

# "table" names a view here; the chart sense needs the word "chart" too
VIEW_KEYWORDS = (
    ("grid", ViewType.GRID),
    ("table", ViewType.GRID),
    ("kanban", ViewType.KANBAN),
    ("gallery", ViewType.GALLERY),
    ("gantt", ViewType.GANTT),
    ("form", ViewType.FORM),
    ("calendar", ViewType.CALENDAR),
    ("timeline", ViewType.TIMELINE),
)

AGGREGATION_KEYWORDS = (
    (("sum",), AggregationType.SUM),
    (("count",), AggregationType.COUNT),
    (("average", "avg"), AggregationType.AVG),
    (("max",), AggregationType.MAX),
    (("min",), AggregationType.MIN),
)


def _has_word(text: str, word: str) -> bool:
    # \b keeps "table" from matching inside "table_id"
    return re.search(rf"\b{word}\b", text) is not None


def _has_any(text: str, *words) -> bool:
    return any(w in text for w in words)


# ── Parsing ────────────────────────────────────────────────────────────

def _extract_ids(message: str, entities: IntentEntities, context: Optional[ConversationContext]):
    current = context.current_dashboard if context else None

    m = APP_TOKEN_RE.search(message)
    if m:
        entities.app_token = m.group(1)
    elif current:
        entities.app_token = current.app_token

    m = DASHBOARD_ID_RE.search(message)
    if m:
        entities.dashboard_id = m.group(1)
    elif current:
        entities.dashboard_id = current.dashboard_id

    m = TABLE_ID_RE.search(message)
    if m:
        entities.table_id = m.group(1)

    m = VIEW_ID_RE.search(message)
    if m:
        entities.view_id = m.group(1)


def _classify(message: str, lower: str, entities: IntentEntities):
    """Return (IntentType, confidence), filling intent-specific entities."""
    if "create" in lower and _has_any(lower, "dashboard", "new"):
        for pattern in DASHBOARD_NAME_RES:
            m = pattern.search(message)
            if m:
                entities.dashboard_name = m.group(1).strip()
                break
        return IntentType.CREATE_DASHBOARD, 0.9

    if _has_any(lower, "chart", "graph", "plot"):
        for chart_type in ChartType:
            if _has_word(lower, chart_type.name.lower()):
                entities.chart_type = chart_type
                break
        m = X_AXIS_RE.search(message)
        if m:
            entities.field_names = [m.group(1)]
        m = Y_AXIS_RE.search(message)
        if m:
            entities.field_names += [f.strip() for f in m.group(1).split(",") if f.strip()]
        m = TITLE_RE.search(message)
        if m:
            entities.title = m.group(1).strip()
        return IntentType.ADD_CHART, 0.85

    if _has_any(lower, "metric", "kpi", "sum", "count", "average", "avg"):
        for words, aggregation in AGGREGATION_KEYWORDS:
            if _has_any(lower, *words):
                entities.aggregation = aggregation
                break
        m = FIELD_RE.search(message)
        if m:
            entities.field_names = [m.group(1)]
        return IntentType.ADD_METRICS, 0.8

    if "view" in lower and "view_id" not in lower:
        for word, view_type in VIEW_KEYWORDS:
            if _has_word(lower, word):
                entities.view_type = view_type
                break
        return IntentType.ADD_VIEW, 0.75

    if _has_any(lower, "add", "create") and _has_any(lower, "text", "heading", "title"):
        m = QUOTED_RE.search(message)
        if m:
            entities.content = m.group(1)
        return IntentType.ADD_TEXT, 0.7

    if "list" in lower and "dashboard" in lower:
        return IntentType.LIST_DASHBOARDS, 0.9

    if "delete" in lower and "dashboard" in lower:
        return IntentType.DELETE_DASHBOARD, 0.85

    if "help" in lower or lower.strip() == "?":
        return IntentType.HELP, 1.0

    return IntentType.UNKNOWN, 0.0


def parse_intent(message: str, context: Optional[ConversationContext] = None) -> ParsedIntent:
    """Classify a chat message. Rules are checked in a fixed order, first match wins."""
    entities = IntentEntities()
    _extract_ids(message, entities, context)
    intent_type, confidence = _classify(message, message.lower(), entities)
    intent = ParsedIntent(intent_type, confidence, entities, message)
    logger.debug("Parsed %s (%.2f) from %r", intent_type.value, confidence, message)
    if context is not None:
        context.last_intent = intent
    return intent


# ── Intent -> builder ──────────────────────────────────────────────────

def _require_table(e: IntentEntities):
    if not e.app_token:
        raise ValidationError("Please create a dashboard first (no app token)")
    if not e.table_id:
        raise ValidationError('I need a table ID. Example: "table_id: tblXXXX"')


def builder_for_intent(intent: ParsedIntent):
    """Builder (not yet built) for an add-* intent. Raises ValidationError on missing input."""
    e = intent.entities

    if intent.type == IntentType.ADD_CHART:
        _require_table(e)
        if e.chart_type is None:
            raise ValidationError("What type of chart? (bar, line, pie, etc.)")
        if len(e.field_names) < 2:
            raise ValidationError(
                'I need field names for X and Y axes. Example: "x_axis: Date, y_axis: Revenue"')
        builder = (ChartBlockBuilder.of(e.chart_type)
                   .data_source(e.app_token, e.table_id, e.view_id)
                   .x_axis(e.field_names[0]))
        for name in e.field_names[1:]:
            builder.y_axis(name, AggregationType.SUM)
        if e.title:
            builder.title(e.title)
        return builder

    if intent.type == IntentType.ADD_METRICS:
        _require_table(e)
        if not e.field_names:
            raise ValidationError("Which field should I aggregate?")
        if e.aggregation is None:
            raise ValidationError("What aggregation? (sum, count, average, max, min)")
        return (MetricsBlockBuilder.of(e.aggregation, e.field_names[0])
                .data_source(e.app_token, e.table_id, e.view_id))

    if intent.type == IntentType.ADD_VIEW:
        _require_table(e)
        if e.view_type is None:
            raise ValidationError(
                "What type of view? (grid, kanban, gallery, gantt, form, calendar, timeline)")
        return (ViewBlockBuilder()
                .view_type(e.view_type)
                .data_source(e.app_token, e.table_id, e.view_id))

    if intent.type == IntentType.ADD_TEXT:
        if not e.content:
            raise ValidationError("What text should I add?")
        lower = intent.raw_text.lower()
        if "heading" in lower or "title" in lower:
            return TextBlockBuilder.heading(e.content)
        return TextBlockBuilder.paragraph(e.content)

    raise ValidationError(f"No block to build for intent: {intent.type.value}")

"""Lark/Feishu Bitable dashboard SDK: block builders, validation, API client, chat intents."""

from .builders import (
    ChartBlockBuilder, LayoutBlockBuilder, ListBlockBuilder, MetricsBlockBuilder,
    TabPageBlockBuilder, TextBlockBuilder, ViewBlockBuilder,
)
from .client import APIError, ClientConfig, LarkDashboardClient, get_client
from .converter import convert_block
from .intent import (
    ConversationContext, DashboardRef, IntentType, ParsedIntent, builder_for_intent, parse_intent,
)
from .permissions import BlockPermissionBuilder, DashboardPermissionBuilder, PermissionHelper
from .types import (
    AggregationType, BlockType, ChartType, Dashboard, DashboardBlock, FilterConjunction,
    FilterOperator, ListLayoutStyle, PermissionLevel, SharingMode, TabPageLayout, ViewType,
)
from .validation import ValidationError, ValidationResult, validate_block

__version__ = "1.0.0"

"""Fluent builders, one per block kind."""

from .chart import ChartBlockBuilder
from .layout import LayoutBlockBuilder
from .list_block import ListBlockBuilder
from .metrics import MetricsBlockBuilder
from .tabpage import TabPageBlockBuilder
from .text import TextBlockBuilder
from .view import ViewBlockBuilder

__all__ = [
    "ChartBlockBuilder",
    "LayoutBlockBuilder",
    "ListBlockBuilder",
    "MetricsBlockBuilder",
    "TabPageBlockBuilder",
    "TextBlockBuilder",
    "ViewBlockBuilder",
]

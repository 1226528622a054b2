"""Layout block builder: a 12-unit column grid holding other blocks."""

from typing import Optional

from ..types import BlockType, LayoutBreakpoints, LayoutColumn
from ._base import _BlockMixin, _as_tuple


class LayoutBlockBuilder(_BlockMixin):
    BLOCK_TYPE = BlockType.LAYOUT

    def __init__(self):
        super().__init__()
        self._columns = []

    def add_column(self, width: int, block_ids=(), **options):
        """Append a column of `width` grid units (1-12).

        options: min_width, max_width, collapsible, collapsed.
        """
        self._columns.append(LayoutColumn(width, _as_tuple(block_ids), **options))
        return self

    def columns(self, columns):
        """Replace all columns."""
        self._columns = list(columns)
        return self

    def gap(self, gap: int):
        return self._set(gap=gap)

    def padding(self, padding: int):
        return self._set(padding=padding)

    def responsive(self, enabled: bool = True):
        return self._set(responsive=enabled)

    def breakpoints(self, mobile: Optional[int] = None, tablet: Optional[int] = None,
                    desktop: Optional[int] = None):
        return self._set(breakpoints=LayoutBreakpoints(mobile, tablet, desktop))

    def background_color(self, color: str):
        return self._set(background_color=color)

    def border_radius(self, radius: int):
        return self._set(border_radius=radius)

    def _collect(self) -> dict:
        return dict(self._fields, columns=tuple(self._columns))

    # ── Recipes (widths always sum to 12) ──────────────────────

    @classmethod
    def of_widths(cls, *widths) -> "LayoutBlockBuilder":
        builder = cls()
        for width in widths:
            builder.add_column(width)
        return builder

    @classmethod
    def two_column(cls):
        return cls.of_widths(6, 6)

    @classmethod
    def three_column(cls):
        return cls.of_widths(4, 4, 4)

    @classmethod
    def sidebar(cls):
        return cls.of_widths(3, 9)

    @classmethod
    def main_aside(cls):
        return cls.of_widths(8, 4)

    @classmethod
    def full_width(cls):
        return cls.of_widths(12)

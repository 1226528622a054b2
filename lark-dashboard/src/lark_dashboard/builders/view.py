"""View block builder: embeds a table view (grid, kanban, gallery, ...)."""

from typing import Optional

from ..types import BlockType, ViewType
from ._base import _BlockMixin


class ViewBlockBuilder(_BlockMixin):
    BLOCK_TYPE = BlockType.VIEW

    def view_type(self, view_type: ViewType):
        return self._set(view_type=view_type)

    type = view_type

    def data_source(self, app_token: str, table_id: str, view_id: Optional[str] = None):
        return self._data_source(app_token, table_id, view_id)

    def title(self, title: str):
        return self._set(title=title)

    def toolbar(self, show: bool = True):
        return self._set(show_toolbar=show)

    show_toolbar = toolbar

    def height(self, height: int):
        """Pixel height; build() rejects anything under 100."""
        return self._set(height=height)

    def page_size(self, page_size: int):
        return self._set(page_size=page_size)

    def enable_search(self, enabled: bool = True):
        return self._set(enable_search=enabled)

    def enable_filters(self, enabled: bool = True):
        return self._set(enable_filters=enabled)

    def enable_sort(self, enabled: bool = True):
        return self._set(enable_sort=enabled)

    # ── Recipes ────────────────────────────────────────────────

    @classmethod
    def grid(cls):
        return cls().view_type(ViewType.GRID)

    @classmethod
    def kanban(cls):
        return cls().view_type(ViewType.KANBAN)

    @classmethod
    def gallery(cls):
        return cls().view_type(ViewType.GALLERY)

    @classmethod
    def gantt(cls):
        return cls().view_type(ViewType.GANTT)

    @classmethod
    def form(cls):
        return cls().view_type(ViewType.FORM)

    @classmethod
    def calendar(cls):
        return cls().view_type(ViewType.CALENDAR)

    @classmethod
    def timeline(cls):
        return cls().view_type(ViewType.TIMELINE)

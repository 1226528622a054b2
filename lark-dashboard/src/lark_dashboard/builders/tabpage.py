"""Tab page block builder: groups other blocks under switchable tabs."""

from typing import Optional, Union

from ..types import BlockType, TabPageItem, TabPageLayout
from ._base import _BlockMixin, _as_tuple


class TabPageBlockBuilder(_BlockMixin):
    BLOCK_TYPE = BlockType.TAB_PAGE

    def __init__(self):
        super().__init__()
        self._tabs = []

    def layout(self, layout: TabPageLayout):
        return self._set(layout=layout)

    def title(self, title: str):
        return self._set(title=title)

    def add_tab(self, tab: TabPageItem):
        self._tabs.append(tab)
        return self

    def tab(self, id: str, label: str, block_ids=(), icon: Optional[str] = None,
            badge: Optional[Union[str, int]] = None, disabled: Optional[bool] = None):
        return self.add_tab(TabPageItem(id, label, _as_tuple(block_ids), icon, badge, disabled))

    def default_tab(self, tab_id: str):
        return self._set(default_tab=tab_id)

    def show_tab_count(self, show: bool = True):
        return self._set(show_tab_count=show)

    def animate_transition(self, animate: bool = True):
        return self._set(animate_transition=animate)

    def allow_reorder(self, allow: bool = True):
        return self._set(allow_reorder=allow)

    def allow_close(self, allow: bool = True):
        return self._set(allow_close=allow)

    def max_tabs(self, max_tabs: int):
        return self._set(max_tabs=max_tabs)

    def _collect(self) -> dict:
        return dict(self._fields, tabs=tuple(self._tabs))

    # ── Recipes ────────────────────────────────────────────────

    @classmethod
    def horizontal_tabs(cls):
        return cls().layout(TabPageLayout.HORIZONTAL_TABS)

    @classmethod
    def vertical_tabs(cls):
        return cls().layout(TabPageLayout.VERTICAL_TABS)

    @classmethod
    def pills(cls):
        return cls().layout(TabPageLayout.PILLS)

    @classmethod
    def sidebar(cls):
        return cls().layout(TabPageLayout.SIDEBAR)

    @classmethod
    def dropdown(cls):
        return cls().layout(TabPageLayout.DROPDOWN)

"""List block builder.

Template fields describe how each record renders (title, subtitle, image, ...).
Action buttons and sort rules accumulate in side lists and are merged into
the config only at build(), in the order they were added.
"""

from typing import Optional

from ..types import (
    BlockType, FilterConjunction, FilterGroup, ListActionButton,
    ListItemTemplate, ListLayoutStyle, ListPagination, ListSorting,
)
from ._base import _BlockMixin, _as_tuple


class ListBlockBuilder(_BlockMixin):
    BLOCK_TYPE = BlockType.LIST

    def __init__(self):
        super().__init__()
        self._template = {}
        self._buttons = []
        self._sorting = []

    def data_source(self, app_token: str, table_id: str, view_id: Optional[str] = None):
        return self._data_source(app_token, table_id, view_id)

    def layout_style(self, style: ListLayoutStyle):
        return self._set(layout_style=style)

    def title(self, title: str):
        return self._set(title=title)

    # ── Item template ──────────────────────────────────────────

    def _template_field(self, key, value):
        self._template[key] = value
        return self

    def title_field(self, field_name: str):
        return self._template_field("title_field", field_name)

    def subtitle_field(self, field_name: str):
        return self._template_field("subtitle_field", field_name)

    def description_field(self, field_name: str):
        return self._template_field("description_field", field_name)

    def image_field(self, field_name: str):
        return self._template_field("image_field", field_name)

    def icon_field(self, field_name: str):
        return self._template_field("icon_field", field_name)

    def badge_field(self, field_name: str):
        return self._template_field("badge_field", field_name)

    def meta_fields(self, fields):
        return self._template_field("meta_fields", _as_tuple(fields))

    # ── Action buttons ─────────────────────────────────────────

    def add_action_button(self, button: ListActionButton):
        self._buttons.append(button)
        return self

    def add_link_button(self, label: str, url: str, icon: Optional[str] = None,
                        color: Optional[str] = None):
        return self.add_action_button(ListActionButton(label, "link", url, icon, color))

    def add_edit_button(self, label: str = "Edit", icon: Optional[str] = None):
        return self.add_action_button(ListActionButton(label, "edit", icon=icon or "edit"))

    def add_delete_button(self, label: str = "Delete", icon: Optional[str] = None):
        return self.add_action_button(
            ListActionButton(label, "delete", icon=icon or "delete", color="danger"))

    # ── Sorting, filters, paging ───────────────────────────────

    def add_sorting(self, field: str, direction: str, priority: Optional[int] = None):
        """direction: asc | desc. Without a priority, call order decides."""
        self._sorting.append(ListSorting(field, direction, priority))
        return self

    def sort_asc(self, field: str, priority: Optional[int] = None):
        return self.add_sorting(field, "asc", priority)

    def sort_desc(self, field: str, priority: Optional[int] = None):
        return self.add_sorting(field, "desc", priority)

    def filters(self, conjunction: FilterConjunction, conditions):
        return self._set(filters=FilterGroup(conjunction, tuple(conditions)))

    def pagination(self, enabled: bool, page_size: int = 20):
        return self._set(pagination=ListPagination(enabled, page_size))

    def group_by(self, field_name: str):
        return self._set(group_by=field_name)

    def show_search(self, show: bool = True):
        return self._set(show_search=show)

    def show_filters(self, show: bool = True):
        return self._set(show_filters=show)

    def clickable(self, clickable: bool = True, action: Optional[str] = None):
        """action: detail | edit | custom."""
        self._set(clickable=clickable)
        if action is not None:
            self._set(on_click_action=action)
        return self

    def _collect(self) -> dict:
        fields = dict(self._fields)
        if self._template or self._buttons:
            fields["item_template"] = ListItemTemplate(
                action_buttons=tuple(self._buttons) or None, **self._template)
        if self._sorting:
            fields["sorting"] = tuple(self._sorting)
        return fields

    # ── Recipes ────────────────────────────────────────────────

    @classmethod
    def vertical(cls):
        return cls().layout_style(ListLayoutStyle.VERTICAL)

    @classmethod
    def horizontal(cls):
        return cls().layout_style(ListLayoutStyle.HORIZONTAL)

    @classmethod
    def grid(cls):
        return cls().layout_style(ListLayoutStyle.GRID)

    @classmethod
    def compact(cls):
        return cls().layout_style(ListLayoutStyle.COMPACT)

    @classmethod
    def detailed(cls):
        return cls().layout_style(ListLayoutStyle.DETAILED)

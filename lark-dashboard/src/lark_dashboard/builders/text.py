"""Text block builder: rich text as a sequence of styled runs."""

from typing import Optional

from ..types import BlockType, TextElement, TextStyle
from ._base import _BlockMixin


class TextBlockBuilder(_BlockMixin):
    BLOCK_TYPE = BlockType.TEXT

    def __init__(self):
        super().__init__()
        self._elements = []

    def add_text(self, content: str, style: Optional[TextStyle] = None,
                 link: Optional[str] = None):
        self._elements.append(TextElement(content, style, link))
        return self

    def add_bold(self, content: str):
        return self.add_text(content, TextStyle(bold=True))

    def add_italic(self, content: str):
        return self.add_text(content, TextStyle(italic=True))

    def add_underline(self, content: str):
        return self.add_text(content, TextStyle(underline=True))

    def add_strikethrough(self, content: str):
        return self.add_text(content, TextStyle(strikethrough=True))

    def add_code(self, content: str):
        return self.add_text(content, TextStyle(code=True))

    def add_link(self, content: str, url: str):
        return self.add_text(content, link=url)

    def add_colored(self, content: str, color: str):
        return self.add_text(content, TextStyle(color=color))

    def add_heading(self, content: str, font_size: int = 24):
        return self.add_text(content, TextStyle(bold=True, font_size=font_size))

    def add_line_break(self):
        return self.add_text("\n")

    def alignment(self, alignment: str):
        """left | center | right."""
        return self._set(alignment=alignment)

    def background_color(self, color: str):
        return self._set(background_color=color)

    def padding(self, padding: int):
        return self._set(padding=padding)

    def _collect(self) -> dict:
        return dict(self._fields, elements=tuple(self._elements))

    # ── Recipes ────────────────────────────────────────────────

    @classmethod
    def heading(cls, content: str, font_size: int = 24):
        return cls().add_heading(content, font_size)

    @classmethod
    def paragraph(cls, content: str):
        return cls().add_text(content)

    @classmethod
    def link(cls, content: str, url: str):
        return cls().add_link(content, url)

"""Diagram code blocks handed to an external renderer.

Mermaid fences are not emitted as code. The emitter records their source and
references a virtual image path (``/__mermaid_<n>.svg``); whoever compiles the
document is expected to serve an SVG at that path.
"""

from __future__ import annotations

from dataclasses import dataclass
from html import escape
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:  # pragma: no cover - typing only
    from silkprint.theme import ResolvedTheme


MERMAID_VPATH_PREFIX = "/__mermaid_"
DIAGRAM_LANGUAGES = frozenset({"mermaid"})
DEFAULT_FONT = "Inter, ui-sans-serif, system-ui, sans-serif"


@dataclass(frozen=True)
class DiagramSource:
    index: int
    source: str
    language: str
    vpath: str

    @property
    def filename(self) -> str:
        return self.vpath.lstrip("/")


def diagram_vpath(index: int) -> str:
    return f"{MERMAID_VPATH_PREFIX}{index}.svg"


def mermaid_config(theme: ResolvedTheme) -> dict[str, Any]:
    """Return a mermaid ``initialize`` configuration matching the theme colors."""
    tokens = theme.tokens
    background = tokens.page.background or "#ffffff"
    node_fill = tokens.code_block.background or "#f4f4f8"
    border = tokens.code_block.border_color or "#c8c8d4"
    text = tokens.text.color or "#1a1a2e"
    accent = tokens.headings.color or text
    line = tokens.table.header_border_color or border
    font = tokens.fonts.body or DEFAULT_FONT
    return {
        "theme": "base",
        "themeVariables": {
            "background": background,
            "primaryColor": node_fill,
            "primaryBorderColor": border,
            "primaryTextColor": text,
            "secondaryColor": background,
            "tertiaryColor": node_fill,
            "lineColor": line,
            "textColor": text,
            "titleColor": accent,
            "edgeLabelBackground": background,
            "fontFamily": font,
        },
    }


def placeholder_svg(index: int, message: str = "diagram not rendered") -> str:
    """Return a small SVG standing in for a diagram that could not be rendered."""
    return (
        '<svg xmlns="http://www.w3.org/2000/svg" width="320" height="60" viewBox="0 0 320 60">'
        '<rect x="1" y="1" width="318" height="58" rx="6" fill="#f4f4f8" stroke="#c8c8d4"/>'
        '<text x="160" y="35" text-anchor="middle" font-family="sans-serif" font-size="13" '
        f'fill="#5c5f77">Diagram {index + 1}: {escape(message)}</text>'
        "</svg>\n"
    )


__all__ = [
    "DIAGRAM_LANGUAGES",
    "MERMAID_VPATH_PREFIX",
    "DiagramSource",
    "diagram_vpath",
    "mermaid_config",
    "placeholder_svg",
]

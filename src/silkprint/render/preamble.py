"""Typst preamble generation.

The preamble turns the resolved theme tokens, the document front matter and
the render options into ``#set``/``#show`` rules, helper functions used by the
emitted body (``silk-alert``, ``silk-table-fill``), the optional title page and
the optional outline.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import re
from typing import TYPE_CHECKING, Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from silkprint.core.frontmatter import FrontMatter
from silkprint.core.options import PaperSize, RenderOptions

from .escape import escape_content, quote


if TYPE_CHECKING:  # pragma: no cover - typing only
    from silkprint.theme import ResolvedTheme


TEMPLATE_DIR = Path(__file__).parent / "templates"
PREAMBLE_TEMPLATE = "preamble.typ.jinja"
THEME_VPATH = "/__silkprint_theme.tmTheme"
MITEX_PACKAGE = "@preview/mitex:0.2.5"
DEFAULT_PAPER = PaperSize.A4
DEFAULT_TOC_DEPTH = 3

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_LENGTH = re.compile(r"^-?\d+(?:\.\d+)?(?:pt|mm|cm|in|em|%)$")
_LANGUAGE = re.compile(r"^[a-z]{2,3}$")
_NUMBER_ALIGN = {
    "bottom-center": "center + bottom",
    "bottom-left": "left + bottom",
    "bottom-right": "right + bottom",
    "top-center": "center + top",
    "top-left": "left + top",
    "top-right": "right + top",
}


def typst_color(value: object, fallback: str = "#000000", opacity: float | None = None) -> str:
    """Return a Typst color expression, using ``fallback`` for unset values."""
    color = value if isinstance(value, str) and _HEX_COLOR.match(value) else fallback
    expression = f'rgb("{color}")'
    if opacity is not None and 0 < opacity < 1:
        expression += f".transparentize({round((1 - opacity) * 100)}%)"
    return expression


def typst_length(value: object, fallback: str) -> str:
    if isinstance(value, str) and _LENGTH.match(value.strip()):
        return value.strip()
    return fallback


def typst_fonts(primary: str, fallbacks: list[str], default: str) -> str:
    """Return a Typst font array: the primary family, then its fallbacks."""
    names = [name for name in (primary or default, *fallbacks) if name]
    return "(" + ", ".join(quote(name) for name in names) + ",)"


def typst_leading(line_height: float, fallback: str = "0.65em") -> str:
    """Translate a CSS-like line height into Typst's inter-line ``leading``."""
    if line_height <= 0:
        return fallback
    return f"{max(line_height - 1.0, 0.1):.2f}em"


@dataclass(frozen=True)
class DocumentSettings:
    """Values decided from options, front matter and theme together."""

    paper: PaperSize
    toc: bool
    toc_depth: int
    title_page: bool
    numbering: bool
    font_size: str
    lang: str | None


def resolve_settings(
    theme: ResolvedTheme, front_matter: FrontMatter, options: RenderOptions
) -> DocumentSettings:
    """Apply precedence: explicit option, then front matter, then theme."""
    tokens = theme.tokens
    if options.paper is not None:
        paper = options.paper
    elif front_matter.paper:
        paper = PaperSize.parse(front_matter.paper)
    elif tokens.page.paper:
        paper = PaperSize.parse(tokens.page.paper)
    else:
        paper = DEFAULT_PAPER

    toc = options.toc if options.toc is not None else bool(front_matter.toc)
    title_page = (
        tokens.title_page.enabled
        and bool(front_matter.title)
        and options.title_page is not False
    )
    lang = front_matter.lang.lower() if front_matter.lang else None
    return DocumentSettings(
        paper=paper,
        toc=toc,
        toc_depth=front_matter.toc_depth or tokens.toc.max_depth or DEFAULT_TOC_DEPTH,
        title_page=title_page,
        numbering=bool(front_matter.numbering),
        font_size=typst_length(front_matter.font_size or tokens.font_sizes.body, "11pt"),
        lang=lang if lang and _LANGUAGE.match(lang) else None,
    )


def _environment() -> Environment:
    environment = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
        block_start_string=r"\BLOCK{",
        block_end_string="}",
        variable_start_string=r"\VAR{",
        variable_end_string="}",
        comment_start_string=r"\COMMENT{",
        comment_end_string="}",
    )
    environment.filters["color"] = typst_color
    environment.filters["length"] = typst_length
    environment.filters["markup"] = escape_content
    environment.filters["string"] = quote
    environment.filters["leading"] = typst_leading
    environment.globals["fonts"] = typst_fonts
    return environment


_ENVIRONMENT: Environment | None = None


def _template_environment() -> Environment:
    global _ENVIRONMENT
    if _ENVIRONMENT is None:
        _ENVIRONMENT = _environment()
    return _ENVIRONMENT


def build_preamble(
    theme: ResolvedTheme,
    front_matter: FrontMatter | None = None,
    options: RenderOptions | None = None,
) -> str:
    """Render the Typst preamble for a document."""
    if front_matter is None:
        front_matter = FrontMatter()
    if options is None:
        options = RenderOptions()
    settings = resolve_settings(theme, front_matter, options)
    tokens = theme.tokens
    context: dict[str, Any] = {
        "tokens": tokens,
        "theme_name": theme.name or "custom",
        "settings": settings,
        "meta": front_matter,
        "theme_vpath": THEME_VPATH,
        "mitex_package": MITEX_PACKAGE,
        "number_align": _NUMBER_ALIGN.get(tokens.page_numbers.position, "center + bottom"),
        "headings": [
            (depth, tokens.headings.level(depth), getattr(tokens.font_sizes, f"h{depth}"))
            for depth in range(1, 7)
        ],
    }
    template = _template_environment().get_template(PREAMBLE_TEMPLATE)
    return template.render(**context)


__all__ = [
    "MITEX_PACKAGE",
    "THEME_VPATH",
    "DocumentSettings",
    "build_preamble",
    "resolve_settings",
    "typst_color",
    "typst_fonts",
    "typst_length",
]

"""Raw HTML sub-converter.

HTML embedded in Markdown is parsed with BeautifulSoup and re-emitted as Typst
markup. The output depends on where the fragment sits:

``BLOCK``
: a standalone HTML block; headings, tables, lists and rules are allowed.

``INLINE``
: HTML inside a paragraph; only inline constructs survive.

``TABLE_CELL``
: content of an HTML table cell; images drop their figure wrapper.

Tags without a handler are unwrapped (their children are kept) and reported
with an :class:`~silkprint.core.diagnostics.UnsupportedHtmlTag` warning.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
import logging
import re
import sys

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from silkprint.core.diagnostics import RemoteImageSkipped, UnsupportedHtmlTag, WarningCollector
from silkprint.core.rules import RenderRegistry, renders

from .escape import escape_content, link_destination, quote, raw_inline


logger = logging.getLogger(__name__)

MAX_IMAGE_POINTS = 454
CHECKED_BOX = "\u2611"
UNCHECKED_BOX = "\u2610"
_ALIGNMENTS = frozenset({"left", "center", "right"})
_TEXT_ALIGN = re.compile(r"text-align\s*:\s*([a-z]+)", re.IGNORECASE)
_PIXELS = re.compile(r"^(\d+(?:\.\d+)?)(?:px)?$")


class HtmlMode(Enum):
    BLOCK = "block"
    INLINE = "inline"
    TABLE_CELL = "table-cell"


@dataclass(slots=True)
class HtmlContext:
    registry: RenderRegistry
    warnings: WarningCollector
    mode: HtmlMode = HtmlMode.BLOCK
    buffer: list[str] = field(default_factory=list)

    @property
    def is_block(self) -> bool:
        return self.mode is HtmlMode.BLOCK

    def write(self, text: str) -> None:
        if text:
            self.buffer.append(text)

    def render(self, node: PageElement) -> None:
        if isinstance(node, PreformattedString):
            # Comments, doctypes, CDATA and processing instructions.
            return
        if isinstance(node, NavigableString):
            self.write(escape_content(str(node)))
            return
        if not isinstance(node, Tag):
            return
        rule = self.registry.lookup(node.name.lower())
        if rule is None:
            self.warnings.add(UnsupportedHtmlTag(node.name.lower()))
            self.render_children(node)
            return
        rule.handler(node, self)

    def render_children(self, tag: Tag) -> None:
        for child in tag.children:
            self.render(child)

    @contextmanager
    def scoped(self, mode: HtmlMode) -> Iterator[list[str]]:
        saved_mode, saved_buffer = self.mode, self.buffer
        self.mode, self.buffer = mode, []
        try:
            yield self.buffer
        finally:
            self.mode, self.buffer = saved_mode, saved_buffer

    def rendered_children(self, tag: Tag, mode: HtmlMode | None = None) -> str:
        with self.scoped(mode or self.mode) as captured:
            self.render_children(tag)
        return "".join(captured)


def _alignment(tag: Tag) -> str | None:
    value = tag.get("align")
    if isinstance(value, str) and value.lower() in _ALIGNMENTS:
        return value.lower()
    style = tag.get("style")
    if isinstance(style, str):
        match = _TEXT_ALIGN.search(style)
        if match and match.group(1).lower() in _ALIGNMENTS:
            return match.group(1).lower()
    return None


def _clean_inline(text: str) -> str:
    return " ".join(text.replace("\\\n", " ").split())


def parse_image_width(value: str | None) -> str:
    """Translate an HTML ``width`` attribute into a Typst length."""
    if not value:
        return "100%"
    value = value.strip()
    if value.endswith("%") and value[:-1].strip().isdigit():
        return f"{value[:-1].strip()}%"
    match = _PIXELS.match(value)
    if match is None:
        return "100%"
    points = float(match.group(1))
    if points > MAX_IMAGE_POINTS:
        return "80%"
    return f"{points:g}pt"


def is_remote(src: str) -> bool:
    return src.startswith(("http://", "https://"))


# -- block structure --------------------------------------------------------


@renders("h1", "h2", "h3", "h4", "h5", "h6")
def render_heading(tag: Tag, context: HtmlContext) -> None:
    if not context.is_block:
        context.render_children(tag)
        return
    text = _clean_inline(context.rendered_children(tag, HtmlMode.INLINE))
    if not text:
        return
    marker = "=" * int(tag.name[1])
    align = _alignment(tag)
    if align:
        context.write(f"#align({align})[{marker} {text}]\n\n")
    else:
        context.write(f"{marker} {text}\n\n")


@renders("p", "div", "center")
def render_paragraph(tag: Tag, context: HtmlContext) -> None:
    if not context.is_block:
        context.render_children(tag)
        return
    content = context.rendered_children(tag).strip()
    if not content:
        return
    align = "center" if tag.name == "center" else _alignment(tag)
    if align:
        context.write(f"#align({align})[{content}]\n\n")
    else:
        context.write(f"{content}\n\n")


@renders("blockquote")
def render_blockquote(tag: Tag, context: HtmlContext) -> None:
    if not context.is_block:
        context.render_children(tag)
        return
    content = context.rendered_children(tag).strip()
    if content:
        context.write(f"#quote(block: true)[{content}]\n\n")


@renders("hr")
def render_rule(tag: Tag, context: HtmlContext) -> None:
    if context.is_block:
        context.write("#line(length: 100%)\n\n")


@renders("ul", "ol")
def render_list(tag: Tag, context: HtmlContext) -> None:
    if not context.is_block:
        context.render_children(tag)
        return
    marker = "+" if tag.name == "ol" else "-"
    lines: list[str] = []
    for item in tag.find_all("li", recursive=False):
        content = _clean_inline(context.rendered_children(item, HtmlMode.INLINE))
        lines.append(f"{marker} {content}\n")
    if lines:
        context.write("".join(lines) + "\n")


def _table_rows(table: Tag) -> list[Tag]:
    rows: list[Tag] = []
    for child in table.find_all(True, recursive=False):
        if child.name == "tr":
            rows.append(child)
        elif child.name in {"thead", "tbody", "tfoot"}:
            rows.extend(child.find_all("tr", recursive=False))
    return rows


@renders("table")
def render_table(tag: Tag, context: HtmlContext) -> None:
    if not context.is_block:
        return
    rows = [row.find_all(["td", "th"], recursive=False) for row in _table_rows(tag)]
    columns = max((len(cells) for cells in rows), default=0)
    if columns == 0:
        return

    lines = ["#table(\n", f"  columns: {columns},\n"]
    for cells in rows:
        for cell in cells:
            content = context.rendered_children(cell, HtmlMode.TABLE_CELL).strip()
            if cell.name == "th" and content:
                content = f"*{content}*"
            align = _alignment(cell)
            if align:
                lines.append(f"  [#align({align})[{content}]],\n")
            else:
                lines.append(f"  [{content}],\n")
        lines.extend("  [],\n" for _ in range(columns - len(cells)))
    lines.append(")\n\n")
    context.write("".join(lines))


@renders(
    "thead", "tbody", "tfoot", "tr", "td", "th", "li", "span", "html", "head", "body", "picture"
)
def render_transparent(tag: Tag, context: HtmlContext) -> None:
    context.render_children(tag)


@renders("source", "script", "style", "title", "meta", "link")
def render_dropped(tag: Tag, context: HtmlContext) -> None:
    logger.debug("dropping <%s> from raw HTML", tag.name)


# -- inline -----------------------------------------------------------------


@renders("img")
def render_image(tag: Tag, context: HtmlContext) -> None:
    src = tag.get("src")
    if not isinstance(src, str) or not src:
        return
    alt = tag.get("alt")
    if is_remote(src):
        context.warnings.add(RemoteImageSkipped(src))
        if isinstance(alt, str) and alt:
            context.write(escape_content(alt))
        return
    width_attr = tag.get("width")
    width = parse_image_width(width_attr if isinstance(width_attr, str) else None)
    if context.mode is HtmlMode.TABLE_CELL:
        context.write(f"#image({quote(src)}, width: {width})")
    elif context.mode is HtmlMode.INLINE:
        size = f", width: {width}" if isinstance(width_attr, str) else ", height: 1em"
        context.write(f"#box(image({quote(src)}{size}))")
    else:
        context.write(f"#figure(image({quote(src)}, width: {width}))")


@renders("a")
def render_link(tag: Tag, context: HtmlContext) -> None:
    content = context.rendered_children(tag)
    href = tag.get("href")
    if not isinstance(href, str) or not href:
        context.write(content)
        return
    context.write(f"#link({link_destination(href)})[{content}]")


def _wrap(tag: Tag, context: HtmlContext, opening: str, closing: str) -> None:
    content = context.rendered_children(tag)
    if content.strip():
        context.write(f"{opening}{content}{closing}")


@renders("strong", "b")
def render_strong(tag: Tag, context: HtmlContext) -> None:
    _wrap(tag, context, "#strong[", "]")


@renders("em", "i")
def render_emphasis(tag: Tag, context: HtmlContext) -> None:
    _wrap(tag, context, "#emph[", "]")


@renders("s", "del", "strike")
def render_strike(tag: Tag, context: HtmlContext) -> None:
    _wrap(tag, context, "#strike[", "]")


@renders("u", "ins")
def render_underline(tag: Tag, context: HtmlContext) -> None:
    _wrap(tag, context, "#underline[", "]")


@renders("mark")
def render_mark(tag: Tag, context: HtmlContext) -> None:
    _wrap(tag, context, "#highlight[", "]")


@renders("sub")
def render_sub(tag: Tag, context: HtmlContext) -> None:
    _wrap(tag, context, "#sub[", "]")


@renders("sup")
def render_sup(tag: Tag, context: HtmlContext) -> None:
    _wrap(tag, context, "#super[", "]")


@renders("code", "kbd", "samp", "tt")
def render_code(tag: Tag, context: HtmlContext) -> None:
    context.write(raw_inline(tag.get_text()))


@renders("br")
def render_break(tag: Tag, context: HtmlContext) -> None:
    context.write("\\\n")


@renders("input")
def render_checkbox(tag: Tag, context: HtmlContext) -> None:
    if str(tag.get("type", "")).lower() != "checkbox":
        return
    context.write(CHECKED_BOX if tag.has_attr("checked") else UNCHECKED_BOX)


_DEFAULT_REGISTRY: RenderRegistry | None = None


def default_html_registry() -> RenderRegistry:
    """Return the registry holding this module's tag handlers."""
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        registry = RenderRegistry()
        registry.collect_from(sys.modules[__name__])
        _DEFAULT_REGISTRY = registry
    return _DEFAULT_REGISTRY


def convert_html(
    fragment: str,
    mode: HtmlMode = HtmlMode.BLOCK,
    *,
    warnings: WarningCollector | None = None,
    registry: RenderRegistry | None = None,
) -> str:
    """Convert an HTML fragment to Typst markup in the given context."""
    soup = BeautifulSoup(fragment, "html.parser")
    context = HtmlContext(
        registry=registry or default_html_registry(),
        warnings=warnings if warnings is not None else WarningCollector(),
        mode=mode,
    )
    context.render_children(soup)
    return "".join(context.buffer)


__all__ = [
    "CHECKED_BOX",
    "UNCHECKED_BOX",
    "HtmlContext",
    "HtmlMode",
    "convert_html",
    "default_html_registry",
    "parse_image_width",
]

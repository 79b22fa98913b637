"""Inline handlers: text, emphasis variants, links, images and inline math."""

from __future__ import annotations

from typing import TYPE_CHECKING

from silkprint.core.diagnostics import RemoteImageSkipped
from silkprint.core.rules import renders
from silkprint.render.escape import escape_content, link_destination, quote, raw_inline
from silkprint.render.html import is_remote
from silkprint.render.nodes import NodeKind, plain_text


if TYPE_CHECKING:  # pragma: no cover - typing only
    from markdown_it.tree import SyntaxTreeNode

    from silkprint.render.context import EmissionContext


_WRAPPERS: dict[str, str] = {
    NodeKind.EMPHASIS.value: "emph",
    NodeKind.STRIKETHROUGH.value: "strike",
    NodeKind.MARK.value: "highlight",
    NodeKind.SUPERSCRIPT.value: "super",
    NodeKind.SUBSCRIPT.value: "sub",
}


@renders(NodeKind.TEXT)
def render_text(node: SyntaxTreeNode, context: EmissionContext) -> None:
    context.write_text(node.content)


@renders(NodeKind.SOFTBREAK)
def render_softbreak(node: SyntaxTreeNode, context: EmissionContext) -> None:
    context.write("\n")


@renders(NodeKind.HARDBREAK)
def render_hardbreak(node: SyntaxTreeNode, context: EmissionContext) -> None:
    context.write("\\\n")


def _wrap(function: str, node: SyntaxTreeNode, context: EmissionContext) -> None:
    content = context.rendered(node, children_only=True)
    if content.strip():
        context.write(f"#{function}[{content}]")


@renders(NodeKind.STRONG)
def render_strong(node: SyntaxTreeNode, context: EmissionContext) -> None:
    # `__text__` is underline, `**text**` is strong.
    _wrap("underline" if node.markup == "__" else "strong", node, context)


@renders(
    NodeKind.EMPHASIS,
    NodeKind.STRIKETHROUGH,
    NodeKind.MARK,
    NodeKind.SUPERSCRIPT,
    NodeKind.SUBSCRIPT,
)
def render_span(node: SyntaxTreeNode, context: EmissionContext) -> None:
    _wrap(_WRAPPERS[node.type], node, context)


@renders(NodeKind.CODE_INLINE)
def render_code_inline(node: SyntaxTreeNode, context: EmissionContext) -> None:
    context.write(raw_inline(node.content))


@renders(NodeKind.LINK)
def render_link(node: SyntaxTreeNode, context: EmissionContext) -> None:
    href = str(node.attrGet("href") or "")
    content = context.rendered(node, children_only=True)
    if not href:
        context.write(content)
        return
    destination = link_destination(href, context.known_labels)
    if href.startswith("#") and not destination.startswith("<"):
        context.write(content)
        return
    if not content.strip() or plain_text(node) == href:
        context.write(f"#link({destination})")
    else:
        context.write(f"#link({destination})[{content}]")


@renders(NodeKind.WIKILINK)
def render_wikilink(node: SyntaxTreeNode, context: EmissionContext) -> None:
    label = escape_content(node.content)
    destination = link_destination("#" + node.meta.get("target", ""), context.known_labels)
    if destination.startswith("<"):
        context.write(f"#link({destination})[{label}]")
    else:
        context.write(label)


def _is_standalone(node: SyntaxTreeNode) -> bool:
    inline = node.parent
    if inline is None or len(inline.children) != 1:
        return False
    paragraph = inline.parent
    return paragraph is not None and paragraph.type == NodeKind.PARAGRAPH.value


@renders(NodeKind.IMAGE)
def render_image(node: SyntaxTreeNode, context: EmissionContext) -> None:
    src = str(node.attrGet("src") or "")
    alt = (node.content or plain_text(node)).strip()
    if not src:
        context.write_text(alt)
        return
    if is_remote(src):
        context.warn(RemoteImageSkipped(src))
        context.write_text(alt)
        return
    if _is_standalone(node):
        caption = f", caption: [{escape_content(alt)}]" if alt else ""
        context.write(f"#figure(image({quote(src)}){caption})")
    else:
        context.write(f"#box(image({quote(src)}, height: 1em))")


@renders(NodeKind.MATH_INLINE)
def render_math_inline(node: SyntaxTreeNode, context: EmissionContext) -> None:
    context.write(f"#mi({quote(node.content.strip())})")


@renders(NodeKind.MATH_INLINE_DOUBLE)
def render_math_display(node: SyntaxTreeNode, context: EmissionContext) -> None:
    context.write(f"#mitex({quote(node.content.strip())})")


__all__: list[str] = []

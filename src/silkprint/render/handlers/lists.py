"""Bullet and numbered lists."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from silkprint.core.rules import renders
from silkprint.render.nodes import NodeKind

from ._helpers import indent_continuation


if TYPE_CHECKING:  # pragma: no cover - typing only
    from markdown_it.tree import SyntaxTreeNode

    from silkprint.render.context import EmissionContext


logger = logging.getLogger(__name__)


def is_tight(node: SyntaxTreeNode) -> bool:
    """Return whether every paragraph of the list's items is hidden (tight)."""
    paragraphs = [
        child
        for item in node.children
        for child in item.children
        if child.type == NodeKind.PARAGRAPH.value
    ]
    return all(paragraph.hidden for paragraph in paragraphs)


def _item_body(item: SyntaxTreeNode, context: EmissionContext, tight: bool) -> str:
    parts = []
    with context.tight_scope(tight):
        for child in item.children:
            rendered = context.rendered(child).strip("\n")
            if rendered.strip():
                parts.append(rendered)
    return ("\n" if tight else "\n\n").join(parts)


def _render_list(node: SyntaxTreeNode, context: EmissionContext, markers: list[str]) -> None:
    tight = is_tight(node)
    logger.debug("list at depth %d (%s)", context.indent, "tight" if tight else "loose")
    context.indent += 1
    try:
        items = []
        for marker, item in zip(markers, node.children, strict=False):
            body = indent_continuation(_item_body(item, context, tight))
            items.append(f"{marker} {body}".rstrip())
    finally:
        context.indent -= 1
    context.write(("\n" if tight else "\n\n").join(items) + "\n\n")


@renders(NodeKind.BULLET_LIST)
def render_bullet_list(node: SyntaxTreeNode, context: EmissionContext) -> None:
    _render_list(node, context, ["-"] * len(node.children))


@renders(NodeKind.ORDERED_LIST)
def render_ordered_list(node: SyntaxTreeNode, context: EmissionContext) -> None:
    start = node.attrGet("start")
    first = int(start) if start is not None else 1
    markers = [f"{first + offset}." for offset in range(len(node.children))]
    _render_list(node, context, markers)


@renders(NodeKind.LIST_ITEM)
def render_list_item(node: SyntaxTreeNode, context: EmissionContext) -> None:
    # Items are rendered by their list; a stray item keeps its content.
    context.render_children(node)


__all__ = ["is_tight"]

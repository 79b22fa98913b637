"""Footnotes.

Definitions usually sit at the end of the document, after the references that
use them. :func:`collect_footnotes` runs before emission and renders every
definition body into ``context.footnotes``; references then inline the body
as ``#footnote[...]``. The definition block itself emits nothing.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from slugify import slugify

from silkprint.core.diagnostics import FootnoteNotFound
from silkprint.core.rules import renders
from silkprint.render.escape import escape_content
from silkprint.render.nodes import NodeKind


if TYPE_CHECKING:  # pragma: no cover - typing only
    from markdown_it.tree import SyntaxTreeNode

    from silkprint.render.context import EmissionContext


logger = logging.getLogger(__name__)

_PENDING = "\0pending"


def footnote_name(node: SyntaxTreeNode) -> str:
    """Return the lookup key of a definition or reference node."""
    meta = node.meta or {}
    label = meta.get("label")
    return str(label) if label else str(meta.get("id", ""))


def footnote_label(name: str) -> str:
    """Label attached to the first reference so later ones reuse its number."""
    return f"<fn-{slugify(name) or 'x'}>"


def _render_body(name: str, context: EmissionContext) -> str | None:
    rendered = context.footnotes.get(name)
    if rendered == _PENDING:
        logger.debug("footnote %r references itself", name)
        return None
    if rendered is not None:
        return rendered
    node = context.footnote_nodes.get(name)
    if node is None:
        return None

    context.footnotes[name] = _PENDING
    with context.tight_scope(False):
        body = context.rendered(node, children_only=True).strip()
    context.footnotes[name] = body
    return body


def collect_footnotes(tree: SyntaxTreeNode, context: EmissionContext) -> None:
    """Render every footnote definition in ``tree`` into ``context.footnotes``."""
    definitions = [node for node in tree.walk() if node.type == NodeKind.FOOTNOTE.value]
    for node in definitions:
        context.footnote_nodes.setdefault(footnote_name(node), node)
    for name in context.footnote_nodes:
        _render_body(name, context)
    logger.debug("collected %d footnote definition(s)", len(context.footnotes))


@renders(NodeKind.FOOTNOTE_REF)
def render_footnote_ref(node: SyntaxTreeNode, context: EmissionContext) -> None:
    name = footnote_name(node)
    body = _render_body(name, context)
    if body is None:
        context.warn(FootnoteNotFound(name))
        context.write(f"#super[{escape_content(name)}]")
        return
    label = footnote_label(name)
    if name in context.footnotes_used:
        context.write(f"#footnote({label})")
        return
    context.footnotes_used.add(name)
    context.write(f"#footnote[{body}]{label}")


@renders(NodeKind.FOOTNOTE_BLOCK, NodeKind.FOOTNOTE_ANCHOR)
def render_footnote_definitions(node: SyntaxTreeNode, context: EmissionContext) -> None:
    return None


@renders(NodeKind.FOOTNOTE)
def render_footnote(node: SyntaxTreeNode, context: EmissionContext) -> None:
    context.render_children(node)


__all__ = ["collect_footnotes", "footnote_label", "footnote_name"]

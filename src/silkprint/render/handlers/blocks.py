"""Block-level handlers: paragraphs, headings, quotes, alerts and rules."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from silkprint.core.rules import renders
from silkprint.render.escape import quote
from silkprint.render.nodes import NodeKind, plain_text

from ._helpers import block, indent_continuation, label_for, single_line


if TYPE_CHECKING:  # pragma: no cover - typing only
    from markdown_it.tree import SyntaxTreeNode

    from silkprint.render.context import EmissionContext


ALERT_KINDS: dict[str, tuple[str, str]] = {
    "note": ("Note", "ⓘ"),
    "tip": ("Tip", "✦"),
    "important": ("Important", "❢"),
    "warning": ("Warning", "⚠"),
    "caution": ("Caution", "⛔"),
}
_ALERT_MARKER = re.compile(r"^\[!([A-Za-z]+)\]\s*$")


@renders(NodeKind.ROOT, NodeKind.INLINE)
def render_container(node: SyntaxTreeNode, context: EmissionContext) -> None:
    context.render_children(node)


@renders(NodeKind.PARAGRAPH)
def render_paragraph(node: SyntaxTreeNode, context: EmissionContext) -> None:
    content = context.rendered(node, children_only=True).strip()
    if not content:
        return
    context.write(f"{content}\n" if context.tight else block(content))


@renders(NodeKind.HEADING)
def render_heading(node: SyntaxTreeNode, context: EmissionContext) -> None:
    content = single_line(context.rendered(node, children_only=True))
    if not content:
        return
    level = int(node.tag[1:])
    label = context.heading_label(plain_text(node))
    context.write(block(f"{'=' * level} {content} <{label}>"))


@renders(NodeKind.RULE)
def render_rule(node: SyntaxTreeNode, context: EmissionContext) -> None:
    context.write(block("#line(length: 100%)"))


@renders(NodeKind.HTML_BLOCK)
def render_html_block(node: SyntaxTreeNode, context: EmissionContext) -> None:
    converted = context.convert_html(node.content, inline=False).strip()
    if converted:
        context.write(block(converted))


# -- quotes and alerts ------------------------------------------------------


def split_alert(node: SyntaxTreeNode) -> tuple[str, list[SyntaxTreeNode]] | None:
    """Detect a ``> [!KIND]`` marker and return the kind plus remaining inlines."""
    if not node.children or node.children[0].type != NodeKind.PARAGRAPH.value:
        return None
    paragraph = node.children[0]
    if not paragraph.children:
        return None
    inlines = paragraph.children[0].children

    prefix, consumed = "", 0
    while consumed < len(inlines) and inlines[consumed].type == NodeKind.TEXT.value:
        prefix += inlines[consumed].content
        consumed += 1
    match = _ALERT_MARKER.match(prefix)
    if match is None or match.group(1).lower() not in ALERT_KINDS:
        return None

    remaining = list(inlines[consumed:])
    if remaining and remaining[0].type not in {"softbreak", "hardbreak"}:
        return None
    return match.group(1).lower(), remaining[1:]


def _alert_title(kind: str, context: EmissionContext) -> str | None:
    label, icon = ALERT_KINDS[kind]
    parts = []
    if context.flags.alert_icons:
        parts.append(icon)
    if context.flags.alert_labels:
        parts.append(label)
    return " ".join(parts) or None


@renders(NodeKind.BLOCKQUOTE)
def render_blockquote(node: SyntaxTreeNode, context: EmissionContext) -> None:
    alert = split_alert(node)
    with context.tight_scope(False):
        if alert is None:
            body = context.rendered(node, children_only=True).strip()
            context.write(block(f"#quote(block: true)[\n{body}\n]"))
            return

        kind, lead = alert
        parts = []
        lead_text = context.rendered_nodes(lead).strip()
        if lead_text:
            parts.append(block(lead_text))
        parts.extend(context.rendered(child) for child in node.children[1:])
        body = "".join(parts).strip()

    title = _alert_title(kind, context)
    arguments = quote(kind) if title is None else f"{quote(kind)}, title: {quote(title)}"
    context.write(block(f"#silk-alert({arguments})[\n{body}\n]"))


# -- term lists -------------------------------------------------------------


@renders(NodeKind.DEFINITION_LIST)
def render_definition_list(node: SyntaxTreeNode, context: EmissionContext) -> None:
    entries: list[tuple[str, list[str]]] = []
    for child in node.children:
        if child.type == NodeKind.DEFINITION_TERM.value:
            term = single_line(context.rendered(child, children_only=True))
            if ":" in term:
                # A bare colon would end the term early.
                term = f"#[{term}]"
            entries.append((term, []))
        elif child.type == NodeKind.DEFINITION_BODY.value and entries:
            with context.tight_scope(False):
                description = context.rendered(child, children_only=True).strip()
            if description:
                entries[-1][1].append(description)

    lines = []
    for term, descriptions in entries:
        body = indent_continuation("\n\n".join(descriptions))
        lines.append(f"/ {term}: {body}".rstrip())
    if lines:
        context.write(block("\n".join(lines)))


@renders(NodeKind.DEFINITION_TERM, NodeKind.DEFINITION_BODY)
def render_definition_part(node: SyntaxTreeNode, context: EmissionContext) -> None:
    context.render_children(node)


# -- math -------------------------------------------------------------------


@renders(NodeKind.MATH_BLOCK, NodeKind.MATH_BLOCK_LABEL)
def render_math_block(node: SyntaxTreeNode, context: EmissionContext) -> None:
    equation = f"#mitex({quote(node.content.strip())})"
    label = label_for(node.info) if node.type == NodeKind.MATH_BLOCK_LABEL.value else None
    context.write(block(f"{equation} <{label}>" if label else equation))


__all__ = ["ALERT_KINDS", "split_alert"]

"""Closed enumeration of the document node kinds the emitter understands."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING


if TYPE_CHECKING:  # pragma: no cover - typing only
    from markdown_it.tree import SyntaxTreeNode


class NodeKind(str, Enum):
    """Node ``type`` values produced by the configured Markdown parser."""

    ROOT = "root"
    INLINE = "inline"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    TEXT = "text"
    SOFTBREAK = "softbreak"
    HARDBREAK = "hardbreak"
    EMPHASIS = "em"
    STRONG = "strong"
    STRIKETHROUGH = "s"
    MARK = "mark"
    SUPERSCRIPT = "sup"
    SUBSCRIPT = "sub"
    LINK = "link"
    WIKILINK = "wikilink"
    IMAGE = "image"
    CODE_INLINE = "code_inline"
    CODE_BLOCK = "code_block"
    FENCE = "fence"
    HTML_BLOCK = "html_block"
    HTML_INLINE = "html_inline"
    BLOCKQUOTE = "blockquote"
    BULLET_LIST = "bullet_list"
    ORDERED_LIST = "ordered_list"
    LIST_ITEM = "list_item"
    TABLE = "table"
    THEAD = "thead"
    TBODY = "tbody"
    ROW = "tr"
    HEADER_CELL = "th"
    DATA_CELL = "td"
    RULE = "hr"
    FOOTNOTE_REF = "footnote_ref"
    FOOTNOTE_BLOCK = "footnote_block"
    FOOTNOTE = "footnote"
    FOOTNOTE_ANCHOR = "footnote_anchor"
    DEFINITION_LIST = "dl"
    DEFINITION_TERM = "dt"
    DEFINITION_BODY = "dd"
    MATH_INLINE = "math_inline"
    MATH_INLINE_DOUBLE = "math_inline_double"
    MATH_BLOCK = "math_block"
    MATH_BLOCK_LABEL = "math_block_label"

    @classmethod
    def of(cls, node_type: str) -> NodeKind | None:
        try:
            return cls(node_type)
        except ValueError:
            return None


_TEXT_KINDS = frozenset({"text", "code_inline", "math_inline", "math_inline_double", "wikilink"})


def plain_text(node: SyntaxTreeNode) -> str:
    """Return the visible text of a node with all markup flattened."""
    if node.type in _TEXT_KINDS:
        return node.content
    if node.type in {"softbreak", "hardbreak"}:
        return " "
    return "".join(plain_text(child) for child in node.children)


__all__ = ["NodeKind", "plain_text"]

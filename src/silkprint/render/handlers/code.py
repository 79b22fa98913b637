"""Code blocks and diagram fences."""

from __future__ import annotations

from functools import lru_cache
import re
from typing import TYPE_CHECKING

from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from silkprint.core.diagnostics import UnknownLanguage
from silkprint.core.rules import renders
from silkprint.render.diagrams import DIAGRAM_LANGUAGES
from silkprint.render.escape import quote
from silkprint.render.nodes import NodeKind

from ._helpers import block


if TYPE_CHECKING:  # pragma: no cover - typing only
    from markdown_it.tree import SyntaxTreeNode

    from silkprint.render.context import EmissionContext


PLAIN_LANGUAGES = frozenset({"", "text", "txt", "plain", "plaintext", "typ", "typc", "typst"})
_LANGUAGE_TAG = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")
_BACKTICK_RUN = re.compile(r"`+")


@lru_cache(maxsize=256)
def is_known_language(language: str) -> bool:
    """Return whether Pygments (and so the highlighter) knows ``language``."""
    if language.lower() in PLAIN_LANGUAGES:
        return True
    try:
        get_lexer_by_name(language)
    except ClassNotFound:
        return False
    return True


def fence_for(code: str) -> str:
    """Return a backtick run one longer than any run inside ``code`` (min three)."""
    longest = max((len(run) for run in _BACKTICK_RUN.findall(code)), default=0)
    return "`" * max(3, longest + 1)


def code_block(code: str, language: str = "") -> str:
    if not code.endswith("\n"):
        code += "\n"
    if language and not _LANGUAGE_TAG.match(language):
        # Tags such as ``c++`` cannot follow the opening fence.
        text = quote(code.rstrip("\n"))
        return f"#raw(block: true, lang: {quote(language)}, {text})"
    fence = fence_for(code)
    return f"{fence}{language}\n{code}{fence}"


def _info_language(info: str) -> str:
    words = info.strip().split()
    return words[0].strip("{}.") if words else ""


def is_diagram_fence(node: SyntaxTreeNode) -> bool:
    if node.type != NodeKind.FENCE.value:
        return False
    return _info_language(node.info).lower() in DIAGRAM_LANGUAGES


def diagram_fences(tree: SyntaxTreeNode) -> list[SyntaxTreeNode]:
    """Return the diagram fences of ``tree`` in document order."""
    return [node for node in tree.walk() if is_diagram_fence(node)]


@renders(NodeKind.FENCE)
def render_fence(node: SyntaxTreeNode, context: EmissionContext) -> None:
    language = _info_language(node.info)
    if is_diagram_fence(node):
        diagram = context.register_diagram(node.content, language.lower(), node=node)
        context.write(block(f"#align(center)[#image({quote(diagram.vpath)})]"))
        return
    if language and not is_known_language(language):
        context.warn(UnknownLanguage(language))
    context.write(block(code_block(node.content, language)))


@renders(NodeKind.CODE_BLOCK)
def render_indented_code(node: SyntaxTreeNode, context: EmissionContext) -> None:
    context.write(block(code_block(node.content)))


__all__ = [
    "PLAIN_LANGUAGES",
    "code_block",
    "diagram_fences",
    "fence_for",
    "is_diagram_fence",
    "is_known_language",
]

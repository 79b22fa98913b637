"""Markdown parser configuration.

The parser is ``markdown-it-py`` with the GFM-like preset (tables,
strikethrough, autolinks) plus ``mdit-py-plugins`` for footnotes, task lists,
description lists and dollar math. A few small inline rules add superscript
(``^x^``), subscript (``~x~``), highlight (``==x==``) and wikilinks
(``[[Target|label]]``). Emoji shortcodes are replaced by the characters they
name once inline parsing is done.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import lru_cache
import re

import emoji
from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.rules_inline import StateInline
from markdown_it.token import Token
from markdown_it.tree import SyntaxTreeNode
from mdit_py_plugins.deflist import deflist_plugin
from mdit_py_plugins.dollarmath import dollarmath_plugin
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin


MARKDOWN_EXTENSIONS: tuple[str, ...] = (
    "table",
    "strikethrough",
    "linkify",
    "footnote",
    "tasklists",
    "deflist",
    "dollarmath",
    "superscript",
    "subscript",
    "mark",
    "underline",
    "alerts",
    "emoji",
    "wikilinks",
)

_ESCAPED_CHAR = re.compile(r"\\([ \\!\"#$%&'()*+,./:;<=>?@\[\]^_`{|}~-])")

InlineRule = Callable[[StateInline, bool], bool]


def _span_rule(marker: str, name: str, tag: str, *, allow_spaces: bool) -> InlineRule:
    """Build an inline rule for ``<marker>content<marker>`` spans."""

    def rule(state: StateInline, silent: bool) -> bool:
        start = state.pos
        maximum = state.posMax
        width = len(marker)
        src = state.src
        if silent or not src.startswith(marker, start):
            return False
        # A doubled single-char marker belongs to another rule (``~~`` strike).
        if width == 1 and (src[start + 1 : start + 2] == marker or src[start - 1 : start] == marker):
            return False
        if start + 2 * width >= maximum:
            return False

        state.pos = start + width
        found = False
        while state.pos < maximum:
            if src.startswith(marker, state.pos):
                found = True
                break
            state.md.inline.skipToken(state)

        end = state.pos
        content = src[start + width : end]
        if (
            not found
            or not content
            or content != content.strip()
            or (not allow_spaces and re.search(r"(^|[^\\])(\\\\)*\s", content))
        ):
            state.pos = start
            return False

        state.posMax = end
        state.pos = start + width
        token = state.push(f"{name}_open", tag, 1)
        token.markup = marker
        if allow_spaces:
            state.md.inline.tokenize(state)
        else:
            text = state.push("text", "", 0)
            text.content = _ESCAPED_CHAR.sub(r"\1", content)
        token = state.push(f"{name}_close", tag, -1)
        token.markup = marker
        state.pos = end + width
        state.posMax = maximum
        return True

    return rule


def _wikilink_rule(state: StateInline, silent: bool) -> bool:
    start = state.pos
    src = state.src
    if not src.startswith("[[", start):
        return False
    end = src.find("]]", start + 2, state.posMax)
    if end < 0:
        return False
    inner = src[start + 2 : end]
    if not inner.strip() or "\n" in inner or "[" in inner:
        return False
    if not silent:
        target, _, label = inner.partition("|")
        token = state.push("wikilink", "", 0)
        token.content = (label or target).strip()
        token.meta = {"target": target.strip()}
    state.pos = end + 2
    return True


def _emoji_shortcodes(state: StateCore) -> None:
    for token in state.tokens:
        if token.type != "inline" or not token.children:
            continue
        for child in token.children:
            if child.type == "text" and ":" in child.content:
                child.content = emoji.emojize(child.content, language="alias")


@lru_cache(maxsize=1)
def create_parser() -> MarkdownIt:
    """Return the shared, fully configured parser."""
    md = (
        MarkdownIt("gfm-like", {"html": True, "typographer": False})
        .use(footnote_plugin)
        .use(deflist_plugin)
        .use(tasklists_plugin)
        .use(dollarmath_plugin, allow_digits=False)
    )
    md.inline.ruler.before("link", "wikilink", _wikilink_rule)
    md.inline.ruler.push("mark", _span_rule("==", "mark", "mark", allow_spaces=True))
    md.inline.ruler.push("superscript", _span_rule("^", "sup", "sup", allow_spaces=False))
    md.inline.ruler.push("subscript", _span_rule("~", "sub", "sub", allow_spaces=False))
    md.core.ruler.push("emoji_shortcodes", _emoji_shortcodes)
    return md


def parse_tokens(text: str) -> list[Token]:
    return create_parser().parse(text)


def parse_document(text: str) -> SyntaxTreeNode:
    """Parse Markdown into the node tree consumed by the emitter."""
    return SyntaxTreeNode(parse_tokens(text))


__all__ = [
    "MARKDOWN_EXTENSIONS",
    "create_parser",
    "parse_document",
    "parse_tokens",
]

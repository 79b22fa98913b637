"""Accumulation of raw HTML tag runs spread over sibling inline nodes.

The parser emits ``<span>`` and ``</span>`` as separate ``html_inline`` nodes
with ordinary text nodes in between. :func:`accumulate_inline_html` walks the
siblings with a depth counter and returns the combined fragment so the HTML
converter sees one balanced element.

Siblings other than plain text (footnote references, math, emphasis...) are
rendered by the Markdown emitter and stand in the fragment as opaque
placeholders; :meth:`HtmlRun.restore` splices their markup back into the
converted output.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from html import escape
import re
from typing import TYPE_CHECKING


if TYPE_CHECKING:  # pragma: no cover - typing only
    from markdown_it.tree import SyntaxTreeNode


VOID_ELEMENTS = frozenset(
    {
        "area", "base", "br", "col", "embed", "hr", "img",
        "input", "link", "meta", "source", "track", "wbr",
    }
)

_OPEN_TAG = re.compile(r"^<([A-Za-z][A-Za-z0-9-]*)(?:\s[^>]*)?>$", re.DOTALL)
_CLOSE_TAG = re.compile(r"^</([A-Za-z][A-Za-z0-9-]*)\s*>$")
# Private-use code points pass through BeautifulSoup and Typst escaping untouched.
_OPEN_MARK = "\ue000"
_CLOSE_MARK = "\ue001"
_PLACEHOLDER = re.compile(f"{_OPEN_MARK}(\\d+){_CLOSE_MARK}")


def tag_depth_delta(raw: str) -> int:
    """Return +1 for an opening tag, -1 for a closing tag, 0 otherwise."""
    raw = raw.strip()
    if _CLOSE_TAG.match(raw):
        return -1
    match = _OPEN_TAG.match(raw)
    if match is None or raw.endswith("/>"):
        return 0
    if match.group(1).lower() in VOID_ELEMENTS:
        return 0
    return 1


@dataclass(slots=True)
class HtmlRun:
    """A balanced HTML fragment and the pre-rendered markup it refers to."""

    fragment: str
    end: int
    substitutions: list[str] = field(default_factory=list)

    def placeholder(self, markup: str) -> str:
        self.substitutions.append(markup)
        return f"{_OPEN_MARK}{len(self.substitutions) - 1}{_CLOSE_MARK}"

    def restore(self, converted: str) -> str:
        """Replace placeholders in ``converted`` with the markup they stand for."""
        if not self.substitutions:
            return converted
        return _PLACEHOLDER.sub(lambda match: self.substitutions[int(match.group(1))], converted)


def accumulate_inline_html(
    siblings: Sequence[SyntaxTreeNode],
    start: int,
    render: Callable[[SyntaxTreeNode], str],
) -> HtmlRun:
    """Collect the HTML fragment starting at ``siblings[start]``.

    ``render`` turns a non-text sibling into Typst markup. Collection stops as
    soon as the depth returns to zero; an unclosed element swallows the
    remaining siblings.
    """
    run = HtmlRun(fragment="", end=start)
    parts: list[str] = []
    depth = 0
    index = start
    while index < len(siblings):
        node = siblings[index]
        if node.type == "html_inline":
            depth += tag_depth_delta(node.content)
            parts.append(node.content)
        elif depth <= 0:
            break
        elif node.type == "text":
            parts.append(escape(node.content, quote=False))
        elif node.type == "softbreak":
            parts.append("\n")
        else:
            parts.append(run.placeholder(render(node)))
        index += 1
        if depth <= 0:
            break
    run.fragment = "".join(parts)
    run.end = index
    return run


__all__ = ["VOID_ELEMENTS", "HtmlRun", "accumulate_inline_html", "tag_depth_delta"]

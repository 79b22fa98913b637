"""Escaping helpers for Typst markup and string literals."""

from __future__ import annotations

from collections.abc import Collection
import re

from slugify import slugify


_MARKUP_SPECIALS = frozenset("\\#*_@<>$~`[]")
_COMMENT_OPENER = re.compile(r"/(?=[/*])")
_LINE_MARKER = re.compile(r"^(\s*)([=+\-/]|\d+\.)(?=\s|$)")


def escape_content(text: str, *, line_start: bool = False) -> str:
    """Escape ``text`` for use as Typst markup.

    With ``line_start`` the text begins a markup line, so leading heading, list,
    enum and term markers are neutralised as well.
    """
    escaped = "".join(f"\\{char}" if char in _MARKUP_SPECIALS else char for char in text)
    escaped = _COMMENT_OPENER.sub(r"\\/", escaped)
    if line_start:
        escaped = _LINE_MARKER.sub(_escape_marker, escaped, count=1)
    return escaped


def _escape_marker(match: re.Match[str]) -> str:
    indent, marker = match.group(1), match.group(2)
    if marker[-1] == "." and marker[:-1].isdigit():
        return f"{indent}{marker[:-1]}\\."
    return f"{indent}\\{marker}"


def escape_string(text: str) -> str:
    """Escape ``text`` for use inside a double-quoted Typst string literal."""
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def quote(text: str) -> str:
    return f'"{escape_string(text)}"'


def link_destination(href: str, labels: Collection[str] = ()) -> str:
    """Return the ``#link`` target.

    ``#anchor`` links become label references when the slugged anchor is one of
    ``labels``; Typst refuses to compile links to labels that do not exist.
    """
    if href.startswith("#") and len(href) > 1:
        label = slugify(href[1:])
        if label and label in labels:
            return f"<{label}>"
    return quote(href)


def raw_inline(code: str) -> str:
    """Return inline raw text, falling back to ``#raw`` when backticks collide."""
    if "`" in code or not code or code != code.strip():
        return f"#raw({quote(code)})"
    return f"`{code}`"


__all__ = ["escape_content", "escape_string", "link_destination", "quote", "raw_inline"]

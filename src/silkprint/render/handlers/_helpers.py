"""Small formatting helpers shared by the Markdown handlers."""

from __future__ import annotations

from slugify import slugify


def indent_continuation(text: str, prefix: str = "  ") -> str:
    """Indent every line after the first so it stays inside a list marker."""
    lines = text.split("\n")
    rest = [f"{prefix}{line}" if line.strip() else "" for line in lines[1:]]
    return "\n".join([lines[0], *rest])


def single_line(text: str) -> str:
    """Fold soft line breaks for constructs that must fit on one markup line."""
    return text.replace("\\\n", " ").replace("\n", " ").strip()


def block(content: str) -> str:
    """Terminate a block so the next one starts a fresh paragraph."""
    return f"{content.rstrip()}\n\n"


def label_for(text: str) -> str | None:
    slug = slugify(text)
    return slug or None


__all__ = ["block", "indent_continuation", "label_for", "single_line"]

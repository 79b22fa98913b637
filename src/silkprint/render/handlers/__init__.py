"""Markdown node handlers, one module per family of constructs."""

from __future__ import annotations

from . import blocks, code, footnotes, inline, lists, tables


HANDLER_MODULES = (blocks, inline, lists, tables, code, footnotes)


__all__ = ["HANDLER_MODULES"]

"""Command implementations for the SilkPrint CLI."""

from __future__ import annotations

from .render import render
from .themes import themes


__all__ = ["render", "themes"]

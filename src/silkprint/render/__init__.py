"""Markup Emission Engine: Markdown trees to Typst markup."""

from __future__ import annotations

from .context import EmissionContext, EmitterFlags
from .diagrams import DiagramSource, mermaid_config, placeholder_svg
from .emitter import EmissionResult, MarkupEmitter, default_registry, flags_from_theme
from .html import HtmlMode, convert_html
from .markdown import parse_document
from .nodes import NodeKind
from .preamble import THEME_VPATH, build_preamble


__all__ = [
    "THEME_VPATH",
    "DiagramSource",
    "EmissionContext",
    "EmissionResult",
    "EmitterFlags",
    "HtmlMode",
    "MarkupEmitter",
    "NodeKind",
    "build_preamble",
    "convert_html",
    "default_registry",
    "flags_from_theme",
    "mermaid_config",
    "parse_document",
    "placeholder_svg",
]

"""Markdown to Typst with themes."""

from __future__ import annotations

from silkprint.api import RenderResult, check_document, list_themes, render_to_typst
from silkprint.core.diagnostics import RenderWarning, WarningCollector
from silkprint.core.exceptions import SilkprintError
from silkprint.core.options import DEFAULT_THEME, PaperSize, RenderOptions, ThemeSource
from silkprint.theme import ResolvedTheme, load_theme
from silkprint.version import get_version


__version__ = get_version()


__all__ = [
    "DEFAULT_THEME",
    "PaperSize",
    "RenderOptions",
    "RenderResult",
    "RenderWarning",
    "ResolvedTheme",
    "SilkprintError",
    "ThemeSource",
    "WarningCollector",
    "__version__",
    "check_document",
    "list_themes",
    "load_theme",
    "render_to_typst",
]

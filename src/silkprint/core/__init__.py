"""Core primitives shared by the theme engine and the emitters."""

from __future__ import annotations

from .diagnostics import (
    DiagnosticEmitter,
    LoggingEmitter,
    NullEmitter,
    RenderWarning,
    WarningCollector,
)
from .exceptions import (
    FrontMatterError,
    InvalidPaperSizeError,
    SilkprintError,
    ThemeCycleError,
    ThemeInheritanceDepthError,
    ThemeInvalidError,
    ThemeNotFoundError,
)
from .options import DEFAULT_THEME, PaperSize, RenderOptions, ThemeSource
from .rules import RenderRegistry, renders


__all__ = [
    "DEFAULT_THEME",
    "DiagnosticEmitter",
    "FrontMatterError",
    "InvalidPaperSizeError",
    "LoggingEmitter",
    "NullEmitter",
    "PaperSize",
    "RenderOptions",
    "RenderRegistry",
    "RenderWarning",
    "SilkprintError",
    "ThemeCycleError",
    "ThemeInheritanceDepthError",
    "ThemeInvalidError",
    "ThemeNotFoundError",
    "ThemeSource",
    "WarningCollector",
    "renders",
]

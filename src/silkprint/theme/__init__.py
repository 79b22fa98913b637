"""Theme Resolution Engine.

``load_theme`` turns a theme source into a :class:`ResolvedTheme`:

1. read the TOML description (built-in name, file path or inline text);
2. walk and fold the ``extends`` chain (child values win unless unset);
3. resolve palette aliases and every color-bearing field;
4. fall back to the base syntax palette when the theme has none;
5. audit contrast (warnings only) and generate the ``.tmTheme`` document.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path

from silkprint.core.diagnostics import WarningCollector
from silkprint.core.exceptions import ThemeNotFoundError
from silkprint.core.options import ThemeSource, ThemeSourceKind

from .colors import resolve_all_colors
from .contrast import audit_contrast
from .merge import MAX_INHERITANCE_DEPTH, resolve_inheritance
from .registry import ThemeInfo, ThemeRegistry, builtin_catalog, parse_theme
from .syntax import ResolvedSyntaxStyle, apply_syntax_fallback, resolve_syntax_styles
from .tmtheme import DEFAULT_BACKGROUND, DEFAULT_FOREGROUND, generate_tmtheme
from .tokens import ThemeTokens


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedTheme:
    """Merged, color-resolved theme plus its generated highlighting theme."""

    tokens: ThemeTokens
    tmtheme: str
    background: str
    foreground: str
    syntax_styles: tuple[ResolvedSyntaxStyle, ...]

    @property
    def name(self) -> str:
        return self.tokens.meta.name

    @property
    def variant(self) -> str:
        return self.tokens.meta.variant or "light"


def _read_source(source: ThemeSource, registry: ThemeRegistry) -> tuple[str, str, ThemeRegistry]:
    if source.kind is ThemeSourceKind.BUILTIN:
        return registry.source(source.value), f"'{source.value}'", registry
    if source.kind is ThemeSourceKind.PATH:
        path = Path(source.value).expanduser()
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ThemeNotFoundError(str(path)) from exc
        return text, str(path), registry.with_search_path(path.resolve().parent)
    return source.value, "<inline theme>", registry


def load_theme(
    source: ThemeSource | str,
    *,
    registry: ThemeRegistry | None = None,
    warnings: WarningCollector | None = None,
) -> ResolvedTheme:
    """Resolve a theme source into a :class:`ResolvedTheme`."""
    if isinstance(source, str):
        source = ThemeSource.from_reference(source)
    registry = registry or ThemeRegistry()
    text, origin, registry = _read_source(source, registry)
    logger.debug("loading theme %s", origin)

    tokens = parse_theme(text, origin=origin)
    tokens = resolve_inheritance(tokens, registry)
    tokens = resolve_all_colors(tokens)
    tokens = apply_syntax_fallback(tokens)
    audit_contrast(tokens, warnings)

    styles = tuple(resolve_syntax_styles(tokens))
    background = tokens.syntax.background or tokens.code_block.background or DEFAULT_BACKGROUND
    foreground = tokens.syntax.text.color or tokens.text.color or DEFAULT_FOREGROUND
    tmtheme = generate_tmtheme(tokens.meta.name, background, foreground, styles)
    return ResolvedTheme(
        tokens=tokens,
        tmtheme=tmtheme,
        background=background,
        foreground=foreground,
        syntax_styles=styles,
    )


def list_themes() -> list[ThemeInfo]:
    """Return the built-in theme catalog."""
    return list(builtin_catalog())


__all__ = [
    "MAX_INHERITANCE_DEPTH",
    "ResolvedSyntaxStyle",
    "ResolvedTheme",
    "ThemeInfo",
    "ThemeRegistry",
    "ThemeTokens",
    "list_themes",
    "load_theme",
]

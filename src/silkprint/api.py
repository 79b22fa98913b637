"""High-level entry points: Markdown (plus front matter) to Typst source.

Usage Example
:
    >>> from silkprint.api import render_to_typst
    >>> result = render_to_typst("# Hello\\n\\nWorld")
    >>> "= Hello <hello>" in result.source
    True
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging

from silkprint.core.diagnostics import DiagnosticEmitter, RenderWarning, WarningCollector
from silkprint.core.frontmatter import FrontMatter, parse_front_matter
from silkprint.core.options import RenderOptions, ThemeSource
from silkprint.render.diagrams import DiagramSource
from silkprint.render.emitter import MarkupEmitter
from silkprint.render.markdown import parse_document
from silkprint.render.preamble import build_preamble
from silkprint.theme import ResolvedTheme, ThemeInfo, ThemeRegistry, load_theme
from silkprint.theme import list_themes as _list_themes


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RenderResult:
    """Everything produced by one render: Typst source and its side files."""

    source: str
    tmtheme: str
    theme: ResolvedTheme
    front_matter: FrontMatter
    diagrams: list[DiagramSource] = field(default_factory=list)
    warnings: list[RenderWarning] = field(default_factory=list)


def effective_theme(options: RenderOptions, front_matter: FrontMatter) -> ThemeSource:
    """Pick the theme: explicit option, then front matter, then the default.

    A :class:`ThemeSource` in ``options.theme`` always counts as explicit and is
    used unchanged; plain strings go through :meth:`ThemeSource.from_reference`.
    """
    if isinstance(options.theme, ThemeSource):
        return options.theme
    if options.theme_explicit or not front_matter.theme:
        return ThemeSource.from_reference(options.theme)
    return ThemeSource.from_reference(front_matter.theme)


def render_to_typst(
    markdown: str,
    options: RenderOptions | None = None,
    *,
    registry: ThemeRegistry | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> RenderResult:
    """Convert Markdown into a complete Typst document.

    Args:
        markdown: Document text, optionally starting with YAML front matter.
        options: Render options; defaults apply when omitted.
        registry: Theme registry used to resolve theme names and parents.
        emitter: Receives warnings as they are recorded.

    Raises:
        FrontMatterError: The front matter block is not a valid mapping.
        ThemeNotFoundError: The selected theme or one of its parents is unknown.
        ThemeInvalidError: A theme description cannot be parsed.
        ThemeCycleError: The inheritance chain loops.
        ThemeInheritanceDepthError: The inheritance chain is too deep.
        InvalidPaperSizeError: The front matter or theme names an unknown paper.
    """
    if options is None:
        options = RenderOptions()
    warnings = WarningCollector() if emitter is None else WarningCollector(emitter=emitter)

    front_matter, body = parse_front_matter(markdown, warnings)
    source = effective_theme(options, front_matter)
    logger.debug("rendering with theme %s", source.describe())
    theme = load_theme(source, registry=registry, warnings=warnings)

    emission = MarkupEmitter.for_theme(theme.tokens).emit(parse_document(body), warnings=warnings)
    preamble = build_preamble(theme, front_matter, options)
    typst = f"{preamble.rstrip()}\n\n{emission.markup}" if emission.markup else preamble

    return RenderResult(
        source=typst,
        tmtheme=theme.tmtheme,
        theme=theme,
        front_matter=front_matter,
        diagrams=emission.diagrams,
        warnings=warnings.items,
    )


def check_document(
    markdown: str,
    options: RenderOptions | None = None,
    *,
    registry: ThemeRegistry | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> list[RenderWarning]:
    """Validate a document and its theme, returning the warnings raised."""
    result = render_to_typst(markdown, options, registry=registry, emitter=emitter)
    return result.warnings


def list_themes() -> list[ThemeInfo]:
    """Return the built-in theme catalog sorted by family and name."""
    return _list_themes()


__all__ = [
    "RenderResult",
    "check_document",
    "effective_theme",
    "list_themes",
    "render_to_typst",
]

"""TextMate ``.tmTheme`` generation for Typst's raw block highlighting."""

from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, Template

from .syntax import ResolvedSyntaxStyle


TEMPLATE_DIR = Path(__file__).parent / "templates"
DEFAULT_BACKGROUND = "#ffffff"
DEFAULT_FOREGROUND = "#000000"


@lru_cache(maxsize=1)
def _template() -> Template:
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=True,
        keep_trailing_newline=True,
    )
    return env.get_template("theme.tmTheme.jinja")


def generate_tmtheme(
    name: str,
    background: str,
    foreground: str,
    styles: Sequence[ResolvedSyntaxStyle],
) -> str:
    """Render the plist document; styles without a color are left out."""
    return _template().render(
        name=name or "silkprint",
        background=background or DEFAULT_BACKGROUND,
        foreground=foreground or DEFAULT_FOREGROUND,
        styles=[style for style in styles if style.foreground],
    )


__all__ = ["generate_tmtheme"]

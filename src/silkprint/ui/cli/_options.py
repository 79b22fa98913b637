"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from silkprint.core.options import DEFAULT_THEME


INPUTS_PANEL = "Input"
RENDERING_PANEL = "Rendering"
OUTPUT_PANEL = "Output"
DIAGNOSTICS_PANEL = "Diagnostics"

InputArgument = Annotated[
    Path,
    typer.Argument(
        metavar="INPUT",
        help="Markdown document to render (front matter allowed).",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

OutputOption = Annotated[
    str | None,
    typer.Option(
        "--output",
        "-o",
        metavar="PATH",
        help="Output .typ path, or '-' for stdout [default: <input>.typ].",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

ThemeOption = Annotated[
    str | None,
    typer.Option(
        "--theme",
        "-t",
        metavar="NAME",
        help=f"Theme name or path to a .toml file [default: front matter, then {DEFAULT_THEME}].",
        rich_help_panel=RENDERING_PANEL,
    ),
]

PaperOption = Annotated[
    str | None,
    typer.Option(
        "--paper",
        "-p",
        metavar="SIZE",
        help="Paper size: a4, a5, letter, legal (case-insensitive).",
        rich_help_panel=RENDERING_PANEL,
    ),
]

TocOption = Annotated[
    bool,
    typer.Option(
        "--toc",
        help="Force the table of contents on (overrides front matter).",
        rich_help_panel=RENDERING_PANEL,
    ),
]

NoTocOption = Annotated[
    bool,
    typer.Option(
        "--no-toc",
        help="Force the table of contents off.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

NoTitlePageOption = Annotated[
    bool,
    typer.Option(
        "--no-title-page",
        help="Suppress the title page even if the theme enables it.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

FontDirOption = Annotated[
    list[Path] | None,
    typer.Option(
        "--font-dir",
        metavar="DIR",
        help="Additional font directory recorded for the Typst compiler (repeatable).",
        file_okay=False,
        dir_okay=True,
        rich_help_panel=RENDERING_PANEL,
    ),
]

CheckOption = Annotated[
    bool,
    typer.Option(
        "--check",
        help="Validate the document and theme without writing anything.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

DumpTypstOption = Annotated[
    bool,
    typer.Option(
        "--dump-typst",
        help="Print the generated Typst source to stdout.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v, -vv, -vvv).",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

QuietOption = Annotated[
    bool,
    typer.Option(
        "--quiet",
        "-q",
        help="Suppress everything except errors.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks when an unexpected error occurs.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]


__all__ = [
    "CheckOption",
    "DebugOption",
    "DumpTypstOption",
    "FontDirOption",
    "InputArgument",
    "NoTitlePageOption",
    "NoTocOption",
    "OutputOption",
    "PaperOption",
    "QuietOption",
    "ThemeOption",
    "TocOption",
    "VerboseOption",
]

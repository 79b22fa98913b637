"""Implementation of the ``silkprint render`` command."""

from __future__ import annotations

import json
from pathlib import Path
import shlex

import typer

from silkprint.api import RenderResult, render_to_typst
from silkprint.core.exceptions import (
    ConflictingOptionsError,
    SilkprintError,
    exception_hint,
)
from silkprint.core.options import DEFAULT_THEME, PaperSize, RenderOptions
from silkprint.render.diagrams import mermaid_config, placeholder_svg
from silkprint.render.preamble import THEME_VPATH

from .._options import (
    CheckOption,
    DebugOption,
    DumpTypstOption,
    FontDirOption,
    InputArgument,
    NoTitlePageOption,
    NoTocOption,
    OutputOption,
    PaperOption,
    QuietOption,
    ThemeOption,
    TocOption,
    VerboseOption,
)
from ..diagnostics import CliEmitter
from ..state import CLIState, configure_logging, emit_error, set_cli_state


STDOUT = "-"
MERMAID_CONFIG_NAME = "__mermaid_config.json"


def validate_flags(
    *,
    verbose: int,
    quiet: bool,
    toc: bool,
    no_toc: bool,
    check: bool,
    dump_typst: bool,
    output: str | None,
) -> None:
    """Reject flag combinations that cannot be honoured together."""
    if quiet and verbose > 0:
        raise ConflictingOptionsError("cannot combine --quiet and --verbose")
    if toc and no_toc:
        raise ConflictingOptionsError("cannot combine --toc and --no-toc")
    if check and (dump_typst or output is not None):
        raise ConflictingOptionsError("--check does not write output (drop --output/--dump-typst)")
    if dump_typst and output is not None:
        raise ConflictingOptionsError("--dump-typst prints to stdout (drop --output)")


def build_options(
    *,
    theme: str | None,
    paper: str | None,
    toc: bool,
    no_toc: bool,
    no_title_page: bool,
    font_dirs: list[Path] | None,
) -> RenderOptions:
    return RenderOptions(
        theme=theme or DEFAULT_THEME,
        theme_explicit=theme is not None,
        paper=PaperSize.parse(paper) if paper else None,
        toc=True if toc else (False if no_toc else None),
        title_page=False if no_title_page else None,
        font_dirs=list(font_dirs or []),
    )


def write_outputs(result: RenderResult, target: Path) -> list[Path]:
    """Write the Typst source and its sidecar files, returning what was written."""
    directory = target.parent
    directory.mkdir(parents=True, exist_ok=True)
    written = [target]
    target.write_text(result.source, encoding="utf-8")

    theme_path = directory / THEME_VPATH.lstrip("/")
    theme_path.write_text(result.tmtheme, encoding="utf-8")
    written.append(theme_path)

    if result.diagrams:
        config_path = directory / MERMAID_CONFIG_NAME
        config_path.write_text(
            json.dumps(mermaid_config(result.theme), indent=2) + "\n", encoding="utf-8"
        )
        written.append(config_path)
    for diagram in result.diagrams:
        source_path = directory / Path(diagram.filename).with_suffix(".mmd")
        source_path.write_text(diagram.source, encoding="utf-8")
        written.append(source_path)
        image_path = directory / diagram.filename
        if not image_path.exists():
            # Keeps the document compilable until the diagram is rendered.
            image_path.write_text(placeholder_svg(diagram.index), encoding="utf-8")
            written.append(image_path)
    return written


def compile_hint(target: Path, font_dirs: list[Path]) -> str:
    arguments = ["typst", "compile", str(target)]
    for directory in font_dirs:
        arguments.extend(["--font-path", str(directory)])
    return shlex.join(arguments)


def _report(state: CLIState, result: RenderResult, written: list[Path], hint: str) -> None:
    if state.quiet:
        return
    console = state.console
    console.print(
        f"[bold green]✓[/] wrote [cyan]{written[0]}[/] "
        f"(theme [magenta]{result.theme.name}[/], {len(result.warnings)} warning(s))"
    )
    for path in written[1:]:
        console.print(f"  [dim]+ {path}[/]")
    console.print(f"  [dim]compile with:[/] {hint}")


def render(
    ctx: typer.Context,
    input_path: InputArgument,
    output: OutputOption = None,
    theme: ThemeOption = None,
    paper: PaperOption = None,
    toc: TocOption = False,
    no_toc: NoTocOption = False,
    no_title_page: NoTitlePageOption = False,
    font_dirs: FontDirOption = None,
    check: CheckOption = False,
    dump_typst: DumpTypstOption = False,
    verbose: VerboseOption = 0,
    quiet: QuietOption = False,
    debug: DebugOption = False,
) -> None:
    """Render a Markdown document into a themed Typst source file."""
    state = set_cli_state(ctx=ctx, verbosity=verbose, quiet=quiet, debug=debug)
    try:
        validate_flags(
            verbose=verbose,
            quiet=quiet,
            toc=toc,
            no_toc=no_toc,
            check=check,
            dump_typst=dump_typst,
            output=output,
        )
        options = build_options(
            theme=theme,
            paper=paper,
            toc=toc,
            no_toc=no_toc,
            no_title_page=no_title_page,
            font_dirs=font_dirs,
        )
    except SilkprintError as exc:
        emit_error(exception_hint(exc) or str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    configure_logging(state)
    try:
        markdown = input_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        emit_error(f"failed to read '{input_path}': {exc}", exception=exc)
        raise typer.Exit(code=1) from exc

    try:
        result = render_to_typst(markdown, options, emitter=CliEmitter(state))
    except SilkprintError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    if check:
        if not quiet:
            state.console.print(
                f"[bold green]✓[/] {input_path.name}: ok "
                f"(theme [magenta]{result.theme.name}[/], {len(result.warnings)} warning(s))"
            )
        return

    if dump_typst or output == STDOUT:
        typer.echo(result.source, nl=False)
        return

    target = Path(output) if output else input_path.with_suffix(".typ")
    try:
        written = write_outputs(result, target)
    except OSError as exc:
        emit_error(f"failed to write '{target}': {exc}", exception=exc)
        raise typer.Exit(code=1) from exc
    _report(state, result, written, compile_hint(target, options.font_dirs))


__all__ = ["build_options", "compile_hint", "render", "validate_flags", "write_outputs"]

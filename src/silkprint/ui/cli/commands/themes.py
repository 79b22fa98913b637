"""Implementation of the ``silkprint themes`` command."""

from __future__ import annotations

from typing import Annotated

import typer

from silkprint.api import list_themes

from ..state import get_cli_state


def themes(
    ctx: typer.Context,
    family: Annotated[
        str | None,
        typer.Option("--family", "-f", metavar="NAME", help="Only list themes of this family."),
    ] = None,
) -> None:
    """List the built-in themes."""
    from rich import box
    from rich.table import Table

    state = get_cli_state(ctx)
    entries = [info for info in list_themes() if family is None or info.family == family]
    if not entries:
        typer.echo(f"No themes found for family '{family}'.")
        return

    table = Table(
        title="Available Themes",
        box=box.SQUARE,
        show_edge=True,
        header_style="bold cyan",
    )
    table.add_column("Name", style="bold")
    table.add_column("Family")
    table.add_column("Variant")
    table.add_column("Print-safe", justify="center")
    table.add_column("Description", overflow="fold")

    for info in entries:
        table.add_row(
            info.name,
            info.family,
            info.variant,
            "[green]yes[/]" if info.print_safe else "[dim]no[/]",
            info.description or "-",
        )

    state.console.print(table)


__all__ = ["themes"]

"""Pipe tables rendered as ``#table`` calls."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from silkprint.core.rules import renders
from silkprint.render.nodes import NodeKind, plain_text

from ._helpers import block, single_line


if TYPE_CHECKING:  # pragma: no cover - typing only
    from markdown_it.tree import SyntaxTreeNode

    from silkprint.render.context import EmissionContext


_TEXT_ALIGN = re.compile(r"text-align\s*:\s*(left|center|right)")


def cell_alignment(cell: SyntaxTreeNode) -> str:
    match = _TEXT_ALIGN.search(str(cell.attrGet("style") or ""))
    return match.group(1) if match else "auto"


def header_is_empty(cells: list[SyntaxTreeNode]) -> bool:
    """Return whether every header cell flattens to blank text."""
    return all(not plain_text(cell).strip() for cell in cells)


def _rows(section: SyntaxTreeNode | None) -> list[SyntaxTreeNode]:
    if section is None:
        return []
    return [row for row in section.children if row.type == NodeKind.ROW.value]


def _section(node: SyntaxTreeNode, kind: NodeKind) -> SyntaxTreeNode | None:
    for child in node.children:
        if child.type == kind.value:
            return child
    return None


def _render_row(
    row: SyntaxTreeNode, context: EmissionContext, columns: int, *, header: bool
) -> list[str]:
    cells = []
    for index, cell in enumerate(row.children[:columns]):
        context.cell_index = index
        content = single_line(context.rendered(cell, children_only=True))
        if header and content:
            content = f"*{content}*"
        cells.append(f"[{content}]")
    cells.extend("[]" for _ in range(columns - len(cells)))
    context.cell_index = -1
    return cells


@renders(NodeKind.TABLE)
def render_table(node: SyntaxTreeNode, context: EmissionContext) -> None:
    header_rows = _rows(_section(node, NodeKind.THEAD))
    body_rows = _rows(_section(node, NodeKind.TBODY))
    header_cells = header_rows[0].children if header_rows else []
    columns = len(header_cells) or max((len(row.children) for row in body_rows), default=0)
    if columns == 0:
        return

    context.table_alignments = [cell_alignment(cell) for cell in header_cells]
    lines = [f"  columns: {columns},"]
    if any(align != "auto" for align in context.table_alignments):
        lines.append(f"  align: ({', '.join(context.table_alignments)},),")

    try:
        if header_cells and not header_is_empty(header_cells):
            context.row_index = 0
            cells = _render_row(header_rows[0], context, columns, header=True)
            lines.append(f"  table.header({', '.join(cells)}),")
        else:
            # Without a header the first data row keeps plain styling.
            lines.append("  fill: silk-table-fill(header: false),")
        for index, row in enumerate(body_rows, start=1):
            context.row_index = index
            lines.append(f"  {', '.join(_render_row(row, context, columns, header=False))},")
    finally:
        context.row_index = -1
        context.table_alignments = []

    context.write(block("#table(\n" + "\n".join(lines) + "\n)"))


@renders(NodeKind.THEAD, NodeKind.TBODY, NodeKind.ROW, NodeKind.HEADER_CELL, NodeKind.DATA_CELL)
def render_table_part(node: SyntaxTreeNode, context: EmissionContext) -> None:
    context.render_children(node)


__all__ = ["cell_alignment", "header_is_empty"]

"""Emission context threaded through the Markdown tree walk."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
import logging
import re
from typing import TYPE_CHECKING

from slugify import slugify

from silkprint.core.diagnostics import RenderWarning, WarningCollector
from silkprint.core.rules import RenderRegistry

from .diagrams import DiagramSource, diagram_vpath
from .escape import escape_content
from .html import HtmlMode, convert_html
from .inline_html import accumulate_inline_html
from .nodes import NodeKind


if TYPE_CHECKING:  # pragma: no cover - typing only
    from markdown_it.tree import SyntaxTreeNode


logger = logging.getLogger(__name__)

_CALL_CONTINUATION = re.compile(r"\(|\.[A-Za-z_]")


def unique_label(text: str, counts: dict[str, int]) -> str:
    """Return a unique label for a heading, GitHub style (``x``, ``x-1``...)."""
    base = slugify(text) or "section"
    count = counts.get(base, 0)
    counts[base] = count + 1
    return base if count == 0 else f"{base}-{count}"


@dataclass(frozen=True, slots=True)
class EmitterFlags:
    """Theme switches that change emitted content rather than formatting."""

    alert_labels: bool = True
    alert_icons: bool = False


@dataclass(slots=True)
class EmissionContext:
    """Mutable state for one document render."""

    registry: RenderRegistry
    html_registry: RenderRegistry
    warnings: WarningCollector = field(default_factory=WarningCollector)
    flags: EmitterFlags = field(default_factory=EmitterFlags)
    buffer: list[str] = field(default_factory=list)
    indent: int = 0
    footnotes: dict[str, str] = field(default_factory=dict)
    footnote_nodes: dict[str, SyntaxTreeNode] = field(default_factory=dict)
    footnotes_used: set[str] = field(default_factory=set)
    table_alignments: list[str] = field(default_factory=list)
    tight: bool = False
    row_index: int = -1
    cell_index: int = -1
    diagrams: list[DiagramSource] = field(default_factory=list)
    diagram_slots: dict[int, int] = field(default_factory=dict)
    heading_labels: dict[str, int] = field(default_factory=dict)
    known_labels: set[str] = field(default_factory=set)

    # -- output -----------------------------------------------------------
    def write(self, text: str) -> None:
        if text:
            self.buffer.append(text)

    def write_text(self, text: str) -> None:
        """Write escaped text, neutralising block markers at line starts."""
        escaped = escape_content(text, line_start=self.at_line_start())
        if self._after_call() and _CALL_CONTINUATION.match(escaped):
            # `#strong[x](y)` would call the strong element with `(y)`.
            escaped = "\\" + escaped
        self.write(escaped)

    def _after_call(self) -> bool:
        for chunk in reversed(self.buffer):
            if chunk:
                return chunk.endswith(("]", ")"))
        return False

    def at_line_start(self) -> bool:
        for chunk in reversed(self.buffer):
            if chunk:
                return chunk.endswith("\n")
        return True

    def ensure_blank_line(self) -> None:
        """Terminate the current block so the next one starts a new paragraph."""
        text = "".join(self.buffer[-2:])
        if not text or text.endswith("\n\n"):
            return
        self.write("\n" if text.endswith("\n") else "\n\n")

    @contextmanager
    def capture(self) -> Iterator[list[str]]:
        """Redirect writes into a fresh buffer for the duration of the block."""
        saved = self.buffer
        self.buffer = []
        try:
            yield self.buffer
        finally:
            self.buffer = saved

    @contextmanager
    def tight_scope(self, tight: bool) -> Iterator[None]:
        saved = self.tight
        self.tight = tight
        try:
            yield
        finally:
            self.tight = saved

    # -- dispatch ---------------------------------------------------------
    def render(self, node: SyntaxTreeNode) -> None:
        rule = self.registry.lookup(node.type)
        if rule is None:
            logger.debug("no handler for node type %r, rendering children", node.type)
            self.render_children(node)
            return
        rule.handler(node, self)

    def render_children(self, node: SyntaxTreeNode) -> None:
        self.render_nodes(node.children)

    def render_nodes(self, nodes: Sequence[SyntaxTreeNode]) -> None:
        """Render siblings, merging raw HTML tag runs into single fragments."""
        index = 0
        while index < len(nodes):
            current = nodes[index]
            if current.type == NodeKind.HTML_INLINE.value:
                run = accumulate_inline_html(nodes, index, self.rendered)
                self.write(run.restore(self.convert_html(run.fragment, inline=True)))
                index = run.end
                continue
            self.render(current)
            index += 1

    def rendered(self, node: SyntaxTreeNode, *, children_only: bool = False) -> str:
        with self.capture() as captured:
            if children_only:
                self.render_children(node)
            else:
                self.render(node)
        return "".join(captured)

    def rendered_nodes(self, nodes: Sequence[SyntaxTreeNode]) -> str:
        with self.capture() as captured:
            self.render_nodes(nodes)
        return "".join(captured)

    def convert_html(self, fragment: str, *, inline: bool) -> str:
        mode = HtmlMode.INLINE if inline else HtmlMode.BLOCK
        return convert_html(fragment, mode, warnings=self.warnings, registry=self.html_registry)

    # -- bookkeeping ------------------------------------------------------
    def warn(self, warning: RenderWarning) -> None:
        self.warnings.add(warning)

    def register_diagram(
        self,
        source: str,
        language: str = "mermaid",
        *,
        node: SyntaxTreeNode | None = None,
    ) -> DiagramSource:
        """Record a diagram, numbered by the fence's position in the document.

        Footnote bodies are rendered before the main flow, so indices come from
        ``diagram_slots`` rather than from registration order.
        """
        index = self.diagram_slots.get(id(node)) if node is not None else None
        for existing in self.diagrams:
            if index is not None and existing.index == index:
                return existing
        if index is None:
            taken = [len(self.diagram_slots) - 1, *(item.index for item in self.diagrams)]
            index = max(taken) + 1
        diagram = DiagramSource(
            index=index, source=source, language=language, vpath=diagram_vpath(index)
        )
        self.diagrams.append(diagram)
        self.diagrams.sort(key=lambda item: item.index)
        return diagram

    def heading_label(self, text: str) -> str:
        return unique_label(text, self.heading_labels)


__all__ = ["EmissionContext", "EmitterFlags", "unique_label"]

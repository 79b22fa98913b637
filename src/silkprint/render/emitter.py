"""Markup Emission Engine.

:class:`MarkupEmitter` walks a parsed Markdown tree and produces Typst markup
in two passes over the same :class:`EmissionContext`:

1. collect heading and equation labels, then render every footnote definition
   into a name-keyed map so references can appear before their definitions;
2. visit the tree, dispatching each node to the handler registered for its
   :class:`~silkprint.render.nodes.NodeKind`.

Handlers are plain functions decorated with :func:`~silkprint.core.rules.renders`
and collected into a :class:`~silkprint.core.rules.RenderRegistry`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import TYPE_CHECKING

from silkprint.core.diagnostics import RenderWarning, WarningCollector
from silkprint.core.rules import RenderRegistry

from .context import EmissionContext, EmitterFlags, unique_label
from .diagrams import DiagramSource
from .handlers import HANDLER_MODULES
from .handlers._helpers import label_for
from .handlers.code import diagram_fences
from .handlers.footnotes import collect_footnotes
from .html import default_html_registry
from .markdown import parse_document
from .nodes import NodeKind, plain_text


if TYPE_CHECKING:  # pragma: no cover - typing only
    from markdown_it.tree import SyntaxTreeNode

    from silkprint.theme.tokens import ThemeTokens


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class EmissionResult:
    """Typst body markup plus the side products of one emission."""

    markup: str
    diagrams: list[DiagramSource] = field(default_factory=list)
    warnings: list[RenderWarning] = field(default_factory=list)


def flags_from_theme(tokens: ThemeTokens | None) -> EmitterFlags:
    if tokens is None:
        return EmitterFlags()
    return EmitterFlags(
        alert_labels=tokens.alerts.show_label,
        alert_icons=tokens.alerts.show_icon,
    )


def default_registry() -> RenderRegistry:
    """Return a registry holding every built-in Markdown node handler."""
    registry = RenderRegistry()
    registry.collect_from(*HANDLER_MODULES)
    return registry


def collect_labels(tree: SyntaxTreeNode) -> set[str]:
    """Return the labels emission will attach to headings and equations."""
    counts: dict[str, int] = {}
    labels: set[str] = set()
    for node in tree.walk():
        if node.type == NodeKind.HEADING.value:
            if plain_text(node).strip():
                labels.add(unique_label(plain_text(node), counts))
        elif node.type == NodeKind.MATH_BLOCK_LABEL.value:
            label = label_for(node.info)
            if label:
                labels.add(label)
    return labels


class MarkupEmitter:
    """Convert Markdown trees into Typst markup."""

    def __init__(
        self,
        *,
        flags: EmitterFlags | None = None,
        registry: RenderRegistry | None = None,
        html_registry: RenderRegistry | None = None,
    ) -> None:
        self.flags = flags or EmitterFlags()
        self.registry = registry or default_registry()
        self.html_registry = html_registry or default_html_registry()

    @classmethod
    def for_theme(cls, tokens: ThemeTokens | None, **kwargs) -> MarkupEmitter:
        return cls(flags=flags_from_theme(tokens), **kwargs)

    def emit(
        self, tree: SyntaxTreeNode, *, warnings: WarningCollector | None = None
    ) -> EmissionResult:
        """Emit Typst markup for an already parsed document tree."""
        context = EmissionContext(
            registry=self.registry,
            html_registry=self.html_registry,
            warnings=warnings if warnings is not None else WarningCollector(),
            flags=self.flags,
        )
        first_warning = len(context.warnings)

        context.known_labels = collect_labels(tree)
        context.diagram_slots = {
            id(node): index for index, node in enumerate(diagram_fences(tree))
        }
        collect_footnotes(tree, context)
        context.render(tree)

        markup = "".join(context.buffer).strip()
        logger.debug(
            "emitted %d characters, %d diagram(s)", len(markup), len(context.diagrams)
        )
        return EmissionResult(
            markup=f"{markup}\n" if markup else "",
            diagrams=list(context.diagrams),
            warnings=context.warnings.items[first_warning:],
        )

    def emit_markdown(
        self, text: str, *, warnings: WarningCollector | None = None
    ) -> EmissionResult:
        return self.emit(parse_document(text), warnings=warnings)


__all__ = [
    "EmissionResult",
    "MarkupEmitter",
    "collect_labels",
    "default_registry",
    "flags_from_theme",
]

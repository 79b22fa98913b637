"""Palette alias resolution.

Theme fields may name a palette entry (``heading = "violet"``) instead of a
literal color. Palette entries may themselves alias other entries; the table is
rewritten until nothing changes, bounded to :data:`MAX_ALIAS_PASSES` passes.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any

from .tokens import SYNTAX_CATEGORIES, ThemeTokens


logger = logging.getLogger(__name__)

MAX_ALIAS_PASSES = 10

COLOR_FIELDS: tuple[str, ...] = (
    "page.background",
    "text.color",
    "headings.color",
    "code_block.background",
    "code_block.border_color",
    "code_block.left_accent_color",
    "code_block.language_label_color",
    "code_inline.background",
    "code_inline.border_color",
    "blockquote.border_color",
    "blockquote.background",
    "blockquote.text_color",
    "table.header_background",
    "table.header_border_color",
    "table.row_border_color",
    "table.stripe_background",
    "horizontal_rule.color",
    "links.color",
    "images.caption_color",
    "list.bullet_color",
    "list.task_checked_color",
    "list.task_unchecked_color",
    "footnotes.separator_color",
    "footnotes.number_color",
    "footnotes.backref_color",
    "alerts.note_color",
    "alerts.tip_color",
    "alerts.important_color",
    "alerts.warning_color",
    "alerts.caution_color",
    "toc.entry_color",
    "toc.page_number_color",
    "page_numbers.color",
    "title_page.title_color",
    "title_page.subtitle_color",
    "title_page.author_color",
    "title_page.date_color",
    "title_page.separator_color",
    "emphasis.strikethrough_color",
    "math.color",
    "highlight.fill",
    "highlight.text_color",
    "description_list.term_color",
    "syntax.background",
    *(f"syntax.{category}.color" for category in SYNTAX_CATEGORIES),
)


def is_literal_color(value: str) -> bool:
    return value.startswith("#")


def resolve_palette(colors: Mapping[str, str]) -> dict[str, str]:
    """Rewrite aliases in a palette until it reaches a fixed point."""
    resolved = dict(colors)
    for passes in range(1, MAX_ALIAS_PASSES + 1):
        snapshot = dict(resolved)
        changed = False
        for key, value in snapshot.items():
            if not value or is_literal_color(value):
                continue
            target = snapshot.get(value)
            if target is not None and target != value:
                resolved[key] = target
                changed = True
        if not changed:
            logger.debug("palette settled after %d pass(es)", passes)
            break
    return resolved


def resolve_color_ref(value: str, palette: Mapping[str, str]) -> str:
    """Return the literal color for ``value``, or ``value`` itself when unknown."""
    if not value or is_literal_color(value):
        return value
    return palette.get(value, value)


def _resolve_path(tree: dict[str, Any], path: str, palette: Mapping[str, str]) -> None:
    *parents, leaf = path.split(".")
    node: Any = tree
    for part in parents:
        node = node.get(part)
        if not isinstance(node, dict):
            return
    value = node.get(leaf)
    if isinstance(value, str):
        node[leaf] = resolve_color_ref(value, palette)


def resolve_all_colors(tokens: ThemeTokens) -> ThemeTokens:
    """Return ``tokens`` with its palette and every color field resolved."""
    palette = resolve_palette(tokens.colors)
    tree = tokens.to_tree()
    tree["colors"] = palette
    for path in COLOR_FIELDS:
        _resolve_path(tree, path, palette)
    return ThemeTokens.model_validate(tree)


__all__ = [
    "COLOR_FIELDS",
    "MAX_ALIAS_PASSES",
    "is_literal_color",
    "resolve_all_colors",
    "resolve_color_ref",
    "resolve_palette",
]

"""Syntax category resolution and base palette fallback."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from .registry import load_base_syntax
from .tokens import SYNTAX_CATEGORIES, ThemeTokens


logger = logging.getLogger(__name__)

TOKEN_SCOPE_MAP: dict[str, tuple[str, ...]] = {
    "text": ("source",),
    "keyword": (
        "keyword",
        "keyword.control",
        "keyword.control.import",
        "keyword.control.flow",
        "keyword.control.conditional",
        "keyword.control.loop",
        "keyword.operator.word",
        "keyword.other",
        "storage.modifier",
        "storage.type.class",
        "storage.type.function",
        "storage.type.interface",
    ),
    "string": (
        "string",
        "string.quoted",
        "string.quoted.double",
        "string.quoted.single",
        "string.quoted.template",
        "string.template",
        "string.interpolated",
        "string.regexp",
        "string.other.link",
    ),
    "number": (
        "constant.numeric",
        "constant.numeric.integer",
        "constant.numeric.float",
        "constant.numeric.hex",
    ),
    "function": (
        "entity.name.function",
        "support.function",
        "meta.function-call",
        "variable.function",
        "entity.name.function.decorator",
        "meta.annotation",
    ),
    "type": (
        "entity.name.type",
        "entity.name.class",
        "entity.name.struct",
        "entity.name.enum",
        "entity.name.interface",
        "entity.name.trait",
        "entity.name.namespace",
        "entity.name.module",
        "support.type",
        "support.class",
        "storage.type",
    ),
    "comment": (
        "comment",
        "comment.line",
        "comment.block",
        "comment.documentation",
        "comment.block.documentation",
        "comment.line.documentation",
    ),
    "constant": (
        "constant",
        "constant.language",
        "constant.language.null",
        "constant.language.undefined",
    ),
    "boolean": ("constant.language.boolean",),
    "operator": (
        "keyword.operator",
        "keyword.operator.logical",
        "keyword.operator.arithmetic",
        "keyword.operator.comparison",
        "keyword.operator.assignment",
        "keyword.operator.ternary",
    ),
    "property": (
        "variable.other.property",
        "variable.other.object.property",
        "variable.other.member",
        "support.variable.property",
    ),
    "tag": (
        "entity.name.tag",
        "entity.name.tag.html",
        "entity.name.tag.css",
        "entity.name.tag.yaml",
    ),
    "attribute": (
        "entity.other.attribute-name",
        "entity.other.attribute-name.html",
        "entity.other.attribute-name.css",
    ),
    "variable": (
        "variable",
        "variable.other",
        "variable.parameter",
        "variable.language",
        "variable.language.this",
        "variable.language.self",
        "variable.other.readwrite",
    ),
    "builtin": (
        "support.function.builtin",
        "support.class.builtin",
        "support.constant",
        "support.variable",
    ),
    "punctuation": (
        "punctuation",
        "punctuation.separator",
        "punctuation.terminator",
        "punctuation.accessor",
        "punctuation.definition",
        "punctuation.definition.string",
        "punctuation.definition.template-expression",
        "punctuation.section",
        "punctuation.section.braces",
        "punctuation.section.brackets",
        "punctuation.section.parens",
    ),
    "escape": (
        "constant.character.escape",
        "constant.character",
        "constant.other.placeholder",
    ),
}


@dataclass(frozen=True)
class ResolvedSyntaxStyle:
    """One highlighting rule ready for the ``.tmTheme`` generator."""

    name: str
    scope: str
    foreground: str
    bold: bool = False
    italic: bool = False

    @property
    def font_style(self) -> str:
        return " ".join(style for style, on in (("bold", self.bold), ("italic", self.italic)) if on)


def apply_syntax_fallback(tokens: ThemeTokens) -> ThemeTokens:
    """Swap in the base syntax palette when the theme defines no syntax colors."""
    if tokens.syntax.has_colors():
        return tokens
    variant = tokens.meta.variant or "light"
    logger.debug("theme %s has no syntax colors, using the %s base", tokens.meta.name, variant)
    base = load_base_syntax(variant)
    return tokens.model_copy(update={"syntax": base.syntax})


def resolve_syntax_styles(tokens: ThemeTokens) -> list[ResolvedSyntaxStyle]:
    """Return one style per syntax category in catalog order."""
    styles: list[ResolvedSyntaxStyle] = []
    for category in SYNTAX_CATEGORIES:
        style = tokens.syntax.style(category)
        styles.append(
            ResolvedSyntaxStyle(
                name=category,
                scope=", ".join(TOKEN_SCOPE_MAP[category]),
                foreground=style.color,
                bold=bool(style.bold),
                italic=bool(style.italic),
            )
        )
    return styles


__all__ = [
    "TOKEN_SCOPE_MAP",
    "ResolvedSyntaxStyle",
    "apply_syntax_fallback",
    "resolve_syntax_styles",
]

"""Theme token schema.

Every leaf has an "unset" sentinel (``""``, ``0``, ``0.0``, ``False``, an empty
list, or ``None`` for optional per-heading overrides). The merge engine relies
on these sentinels: an unset value in a child theme never overrides its parent.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TokenSection(BaseModel):
    """Common configuration for every token section."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, validate_assignment=True)


class MetaTokens(TokenSection):
    name: str = ""
    version: str = ""
    variant: str = ""
    description: str = ""
    print_safe: bool = False
    extends: str = ""


class FontTokens(TokenSection):
    heading: str = ""
    heading_weight: int = Field(default=0, ge=0)
    heading_italic: bool = False
    body: str = ""
    body_weight: int = Field(default=0, ge=0)
    body_italic: bool = False
    mono: str = ""
    mono_weight: int = Field(default=0, ge=0)
    mono_ligatures: bool = False
    heading_fallback: list[str] = Field(default_factory=list)
    body_fallback: list[str] = Field(default_factory=list)
    mono_fallback: list[str] = Field(default_factory=list)


class FontSizeTokens(TokenSection):
    body: str = ""
    small: str = ""
    code: str = ""
    h1: str = ""
    h2: str = ""
    h3: str = ""
    h4: str = ""
    h5: str = ""
    h6: str = ""


class PageTokens(TokenSection):
    background: str = ""
    margin_top: str = ""
    margin_bottom: str = ""
    margin_left: str = ""
    margin_right: str = ""
    paper: str = ""
    columns: int = Field(default=0, ge=0)
    column_gap: str = ""


class TextTokens(TokenSection):
    color: str = ""
    line_height: float = 0.0
    paragraph_gap: str = ""
    justification: str = ""
    spacing_mode: str = ""
    first_line_indent: str = ""
    orphan_lines: int = Field(default=0, ge=0)
    widow_lines: int = Field(default=0, ge=0)


class HeadingLevelTokens(TokenSection):
    """Per-level heading overrides; ``None`` means inherit the shared value."""

    weight: int = Field(default=0, ge=0)
    line_height: float | None = None
    border: bool | None = None
    above: str = ""
    below: str = ""
    page_break_before: bool | None = None
    uppercase: bool | None = None
    letter_spacing: str | None = None


class HeadingTokens(TokenSection):
    color: str = ""
    font: str = ""
    line_height: float = 0.0
    letter_spacing: str = ""
    h1: HeadingLevelTokens = Field(default_factory=HeadingLevelTokens)
    h2: HeadingLevelTokens = Field(default_factory=HeadingLevelTokens)
    h3: HeadingLevelTokens = Field(default_factory=HeadingLevelTokens)
    h4: HeadingLevelTokens = Field(default_factory=HeadingLevelTokens)
    h5: HeadingLevelTokens = Field(default_factory=HeadingLevelTokens)
    h6: HeadingLevelTokens = Field(default_factory=HeadingLevelTokens)

    def level(self, depth: int) -> HeadingLevelTokens:
        return getattr(self, f"h{min(max(depth, 1), 6)}")


class CodeBlockTokens(TokenSection):
    background: str = ""
    border_color: str = ""
    border_radius: str = ""
    padding_vertical: str = ""
    padding_horizontal: str = ""
    line_height: float = 0.0
    left_accent: bool = False
    left_accent_color: str = ""
    line_numbers: bool = False
    language_label: bool = False
    language_label_color: str = ""
    language_label_size: str = ""
    wrap: bool = False


class CodeInlineTokens(TokenSection):
    background: str = ""
    border_color: str = ""
    border_radius: str = ""


class BlockquoteTokens(TokenSection):
    border_color: str = ""
    border_width: str = ""
    background: str = ""
    background_opacity: float = 0.0
    text_color: str = ""
    italic: bool = False
    left_padding: str = ""


class TableTokens(TokenSection):
    header_background: str = ""
    header_border_color: str = ""
    header_border_width: str = ""
    header_font: str = ""
    header_weight: int = Field(default=0, ge=0)
    row_border_color: str = ""
    row_border_width: str = ""
    stripe_background: str = ""
    vertical_lines: bool = False
    cell_padding: str = ""


class HorizontalRuleTokens(TokenSection):
    color: str = ""
    width: str = ""
    thickness: str = ""
    style: str = ""


class LinkTokens(TokenSection):
    color: str = ""
    underline: bool = False


class ImageTokens(TokenSection):
    max_width: str = ""
    alignment: str = ""
    border: bool = False
    border_radius: str = ""
    caption_font: str = ""
    caption_size: str = ""
    caption_color: str = ""
    caption_italic: bool = False
    caption_position: str = ""


class ListTokens(TokenSection):
    bullet_color: str = ""
    indent: str = ""
    nested_indent: str = ""
    task_checked_color: str = ""
    task_unchecked_color: str = ""


class FootnoteTokens(TokenSection):
    separator_color: str = ""
    separator_width: str = ""
    text_size: str = ""
    number_color: str = ""
    backref_color: str = ""


class AlertTokens(TokenSection):
    note_color: str = ""
    tip_color: str = ""
    important_color: str = ""
    warning_color: str = ""
    caution_color: str = ""
    border_width: str = ""
    background_opacity: float = 0.0
    show_icon: bool = False
    show_label: bool = False


class TocTokens(TokenSection):
    title: str = ""
    title_size: str = ""
    entry_color: str = ""
    page_number_color: str = ""
    leader_style: str = ""
    indent: str = ""
    max_depth: int = Field(default=0, ge=0)


class PageNumberTokens(TokenSection):
    enabled: bool = False
    position: str = ""
    format: str = ""
    font: str = ""
    size: str = ""
    color: str = ""
    first_page: bool = False


class TitlePageTokens(TokenSection):
    enabled: bool = False
    title_font: str = ""
    title_size: str = ""
    title_color: str = ""
    subtitle_color: str = ""
    author_color: str = ""
    date_color: str = ""
    separator_color: str = ""


class EmphasisTokens(TokenSection):
    strikethrough_color: str = ""


class MathTokens(TokenSection):
    color: str = ""


class HighlightTokens(TokenSection):
    fill: str = ""
    fill_opacity: float = 0.0
    text_color: str = ""
    border_radius: str = ""


class DescriptionListTokens(TokenSection):
    term_font: str = ""
    term_weight: int = Field(default=0, ge=0)
    term_color: str = ""
    definition_indent: str = ""
    term_spacing: str = ""
    item_spacing: str = ""


class SyntaxStyleTokens(TokenSection):
    color: str = ""
    bold: bool | None = None
    italic: bool | None = None


SYNTAX_CATEGORIES: tuple[str, ...] = (
    "text",
    "keyword",
    "string",
    "number",
    "function",
    "type",
    "comment",
    "constant",
    "boolean",
    "operator",
    "property",
    "tag",
    "attribute",
    "variable",
    "builtin",
    "punctuation",
    "escape",
)


class SyntaxTokens(TokenSection):
    background: str = ""
    text: SyntaxStyleTokens = Field(default_factory=SyntaxStyleTokens)
    keyword: SyntaxStyleTokens = Field(default_factory=SyntaxStyleTokens)
    string: SyntaxStyleTokens = Field(default_factory=SyntaxStyleTokens)
    number: SyntaxStyleTokens = Field(default_factory=SyntaxStyleTokens)
    function: SyntaxStyleTokens = Field(default_factory=SyntaxStyleTokens)
    type_: SyntaxStyleTokens = Field(default_factory=SyntaxStyleTokens, alias="type")
    comment: SyntaxStyleTokens = Field(default_factory=SyntaxStyleTokens)
    constant: SyntaxStyleTokens = Field(default_factory=SyntaxStyleTokens)
    boolean: SyntaxStyleTokens = Field(default_factory=SyntaxStyleTokens)
    operator: SyntaxStyleTokens = Field(default_factory=SyntaxStyleTokens)
    property: SyntaxStyleTokens = Field(default_factory=SyntaxStyleTokens)
    tag: SyntaxStyleTokens = Field(default_factory=SyntaxStyleTokens)
    attribute: SyntaxStyleTokens = Field(default_factory=SyntaxStyleTokens)
    variable: SyntaxStyleTokens = Field(default_factory=SyntaxStyleTokens)
    builtin: SyntaxStyleTokens = Field(default_factory=SyntaxStyleTokens)
    punctuation: SyntaxStyleTokens = Field(default_factory=SyntaxStyleTokens)
    escape: SyntaxStyleTokens = Field(default_factory=SyntaxStyleTokens)

    def style(self, category: str) -> SyntaxStyleTokens:
        """Return the style for a category name such as ``"type"``."""
        if category not in SYNTAX_CATEGORIES:
            raise KeyError(category)
        return getattr(self, "type_" if category == "type" else category)

    def has_colors(self) -> bool:
        """Return whether any of the core categories carries a color."""
        return any(
            self.style(category).color for category in ("keyword", "string", "function", "comment")
        )


class ThemeTokens(TokenSection):
    """Complete theme token hierarchy."""

    meta: MetaTokens = Field(default_factory=MetaTokens)
    colors: dict[str, str] = Field(default_factory=dict)
    fonts: FontTokens = Field(default_factory=FontTokens)
    font_sizes: FontSizeTokens = Field(default_factory=FontSizeTokens)
    page: PageTokens = Field(default_factory=PageTokens)
    text: TextTokens = Field(default_factory=TextTokens)
    headings: HeadingTokens = Field(default_factory=HeadingTokens)
    code_block: CodeBlockTokens = Field(default_factory=CodeBlockTokens)
    code_inline: CodeInlineTokens = Field(default_factory=CodeInlineTokens)
    blockquote: BlockquoteTokens = Field(default_factory=BlockquoteTokens)
    table: TableTokens = Field(default_factory=TableTokens)
    horizontal_rule: HorizontalRuleTokens = Field(default_factory=HorizontalRuleTokens)
    links: LinkTokens = Field(default_factory=LinkTokens)
    images: ImageTokens = Field(default_factory=ImageTokens)
    list: ListTokens = Field(default_factory=ListTokens)
    footnotes: FootnoteTokens = Field(default_factory=FootnoteTokens)
    alerts: AlertTokens = Field(default_factory=AlertTokens)
    toc: TocTokens = Field(default_factory=TocTokens)
    page_numbers: PageNumberTokens = Field(default_factory=PageNumberTokens)
    title_page: TitlePageTokens = Field(default_factory=TitlePageTokens)
    emphasis: EmphasisTokens = Field(default_factory=EmphasisTokens)
    math: MathTokens = Field(default_factory=MathTokens)
    highlight: HighlightTokens = Field(default_factory=HighlightTokens)
    description_list: DescriptionListTokens = Field(default_factory=DescriptionListTokens)
    syntax: SyntaxTokens = Field(default_factory=SyntaxTokens)

    def to_tree(self) -> dict:
        """Return the nested plain-data form used by the merge engine."""
        return self.model_dump(by_alias=True)


__all__ = [
    "SYNTAX_CATEGORIES",
    "HeadingLevelTokens",
    "SyntaxStyleTokens",
    "SyntaxTokens",
    "ThemeTokens",
    "TokenSection",
]

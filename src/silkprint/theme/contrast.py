"""WCAG 2.x contrast auditing for resolved themes."""

from __future__ import annotations

from dataclasses import dataclass

from silkprint.core.diagnostics import ContrastRatio, WarningCollector

from .tokens import SYNTAX_CATEGORIES, ThemeTokens


TEXT_MINIMUM = 4.5
LARGE_TEXT_MINIMUM = 3.0


def parse_hex(color: str) -> tuple[int, int, int] | None:
    """Parse ``#rrggbb`` into channels; anything else yields ``None``."""
    digits = color.strip().removeprefix("#")
    if len(digits) != 6:
        return None
    try:
        return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)
    except ValueError:
        return None


def _linearize(channel: int) -> float:
    value = channel / 255.0
    if value <= 0.04045:
        return value / 12.92
    return ((value + 0.055) / 1.055) ** 2.4


def relative_luminance(color: str) -> float | None:
    rgb = parse_hex(color)
    if rgb is None:
        return None
    red, green, blue = (_linearize(channel) for channel in rgb)
    return 0.2126 * red + 0.7152 * green + 0.0722 * blue


def contrast_ratio(foreground: str, background: str) -> float | None:
    """Return the WCAG contrast ratio, or ``None`` when a color is malformed."""
    first = relative_luminance(foreground)
    second = relative_luminance(background)
    if first is None or second is None:
        return None
    lighter, darker = max(first, second), min(first, second)
    return (lighter + 0.05) / (darker + 0.05)


@dataclass(frozen=True)
class ContrastCheck:
    element: str
    foreground: str
    background: str
    minimum: float


def contrast_checks(tokens: ThemeTokens) -> list[ContrastCheck]:
    """Return the structural pairs audited for a theme."""
    page = tokens.page.background
    code = tokens.code_block.background
    checks = [
        ContrastCheck("body text", tokens.text.color, page, TEXT_MINIMUM),
        ContrastCheck("headings", tokens.headings.color, page, LARGE_TEXT_MINIMUM),
        ContrastCheck("links", tokens.links.color, page, TEXT_MINIMUM),
        ContrastCheck("blockquote text", tokens.blockquote.text_color, page, TEXT_MINIMUM),
        ContrastCheck(
            "table header", tokens.text.color, tokens.table.header_background, TEXT_MINIMUM
        ),
        ContrastCheck("caption text", tokens.images.caption_color, page, TEXT_MINIMUM),
        ContrastCheck("footnote numbers", tokens.footnotes.number_color, page, TEXT_MINIMUM),
        ContrastCheck("page numbers", tokens.page_numbers.color, page, LARGE_TEXT_MINIMUM),
    ]
    for category in SYNTAX_CATEGORIES:
        color = tokens.syntax.style(category).color
        checks.append(ContrastCheck(f"syntax: {category}", color, code, TEXT_MINIMUM))
    return checks


def audit_contrast(
    tokens: ThemeTokens, warnings: WarningCollector | None = None
) -> list[ContrastRatio]:
    """Return (and record) a warning for every pair below its minimum ratio.

    Pairs with an empty or malformed color are skipped silently.
    """
    findings: list[ContrastRatio] = []
    for check in contrast_checks(tokens):
        if not check.foreground or not check.background:
            continue
        ratio = contrast_ratio(check.foreground, check.background)
        if ratio is None or ratio >= check.minimum:
            continue
        finding = ContrastRatio(check.element, ratio, check.minimum)
        findings.append(finding)
        if warnings is not None:
            warnings.add(finding)
    return findings


__all__ = [
    "ContrastCheck",
    "audit_contrast",
    "contrast_checks",
    "contrast_ratio",
    "parse_hex",
    "relative_luminance",
]

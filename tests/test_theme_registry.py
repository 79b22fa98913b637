from pathlib import Path

import pytest

from silkprint.core.exceptions import ThemeInvalidError, ThemeNotFoundError
from silkprint.core.options import ThemeSource
from silkprint.theme import ThemeRegistry, list_themes, load_theme
from silkprint.theme.registry import find_suggestions, levenshtein, load_base_syntax, parse_theme
from silkprint.theme.syntax import TOKEN_SCOPE_MAP, ResolvedSyntaxStyle
from silkprint.theme.tmtheme import generate_tmtheme
from silkprint.theme.tokens import SYNTAX_CATEGORIES


BUILTIN_NAMES = [info.name for info in list_themes()]


def test_catalog_lists_public_themes_only() -> None:
    assert "silk-light" in BUILTIN_NAMES
    assert "silk-dark" in BUILTIN_NAMES
    assert not any(name.startswith("_") for name in BUILTIN_NAMES)


def test_catalog_carries_family_and_variant() -> None:
    catalog = {info.name: info for info in list_themes()}
    assert catalog["silk-light"].family == "signature"
    assert catalog["silk-light"].variant == "light"
    assert catalog["silk-light"].print_safe is True
    assert catalog["dracula"].variant == "dark"


@pytest.mark.parametrize("name", BUILTIN_NAMES)
def test_every_builtin_theme_resolves(name: str) -> None:
    theme = load_theme(name)
    assert theme.name == name
    assert theme.background.startswith("#")
    assert theme.foreground.startswith("#")
    assert theme.tmtheme.startswith("<?xml")
    assert len(theme.syntax_styles) == len(SYNTAX_CATEGORIES)


def test_levenshtein() -> None:
    assert levenshtein("kitten", "sitting") == 3
    assert levenshtein("", "abc") == 3
    assert levenshtein("same", "same") == 0


def test_unknown_theme_suggests_close_names() -> None:
    with pytest.raises(ThemeNotFoundError) as excinfo:
        load_theme("silk-lite")
    assert "silk-light" in excinfo.value.suggestions
    assert str(excinfo.value).startswith("theme 'silk-lite' not found")
    assert "Did you mean:" in str(excinfo.value)


def test_suggestions_fall_back_to_first_names() -> None:
    candidates = ["a1", "b2", "c3", "d4", "e5", "f6"]
    assert find_suggestions("zzzzzzzzzz", candidates) == candidates[:5]


def test_suggestions_match_substrings_case_insensitively() -> None:
    assert find_suggestions("NEON", ["silkcircuit-neon", "nord"]) == ["silkcircuit-neon", "nord"]


def test_invalid_toml_reports_location() -> None:
    text = '[meta]\nname = \n'
    with pytest.raises(ThemeInvalidError) as excinfo:
        parse_theme(text)
    assert excinfo.value.location is not None
    assert excinfo.value.location[0] == 2
    assert excinfo.value.snippet() == "name = "
    assert excinfo.value.source == text


def test_schema_violation_is_invalid_theme() -> None:
    with pytest.raises(ThemeInvalidError):
        parse_theme("[fonts]\nheading_weight = -3\n")


def test_unknown_sections_are_ignored() -> None:
    tokens = parse_theme('[meta]\nname = "x"\n[sparkles]\nenabled = true\n')
    assert tokens.meta.name == "x"


def test_missing_theme_file_is_not_found(tmp_path: Path) -> None:
    with pytest.raises(ThemeNotFoundError):
        load_theme(ThemeSource.path(tmp_path / "nope.toml"))


def test_theme_file_parents_resolve_from_its_directory(tmp_path: Path) -> None:
    (tmp_path / "house.toml").write_text(
        '[meta]\nname = "house"\nextends = "silk-light"\n[text]\ncolor = "#101010"\n',
        encoding="utf-8",
    )
    child = tmp_path / "report.toml"
    child.write_text(
        '[meta]\nname = "report"\nextends = "house"\n[links]\ncolor = "#0033aa"\n',
        encoding="utf-8",
    )

    theme = load_theme(ThemeSource.path(child))

    assert theme.name == "report"
    assert theme.tokens.text.color == "#101010"
    assert theme.tokens.links.color == "#0033aa"


def test_registry_prefers_registered_themes() -> None:
    registry = ThemeRegistry(themes={"silk-light": '[meta]\nname = "override"\n'})
    assert registry.load("silk-light").meta.name == "override"
    assert registry.names()[0] == "silk-light"


@pytest.mark.parametrize("variant", ["light", "dark"])
def test_syntax_fallback_uses_variant_base(variant: str) -> None:
    source = ThemeSource.inline(f'[meta]\nname = "bare"\nvariant = "{variant}"\n')
    theme = load_theme(source)
    base = load_base_syntax(variant)
    assert theme.tokens.syntax.keyword.color == base.syntax.keyword.color
    assert theme.tokens.syntax.keyword.color


def test_theme_syntax_colors_are_kept() -> None:
    source = ThemeSource.inline('[syntax.keyword]\ncolor = "#ff0000"\n')
    theme = load_theme(source)
    assert theme.tokens.syntax.keyword.color == "#ff0000"
    assert theme.tokens.syntax.string.color == ""


def test_scope_map_covers_every_category() -> None:
    assert set(TOKEN_SCOPE_MAP) == set(SYNTAX_CATEGORIES)


def test_tmtheme_skips_uncolored_styles_and_escapes() -> None:
    styles = [
        ResolvedSyntaxStyle("keyword", "keyword", "#ff0000", bold=True, italic=True),
        ResolvedSyntaxStyle("string", "string", ""),
    ]
    document = generate_tmtheme("R&D", "#ffffff", "#000000", styles)

    assert "<string>R&amp;D</string>" in document
    assert "<string>keyword</string>" in document
    assert "<string>bold italic</string>" in document
    assert "<string>string</string>" not in document
    assert document.rstrip().endswith("</plist>")

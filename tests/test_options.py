from pathlib import Path

import pytest

from silkprint.core.exceptions import InvalidPaperSizeError
from silkprint.core.options import (
    DEFAULT_THEME,
    PaperSize,
    RenderOptions,
    ThemeSource,
    ThemeSourceKind,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("a4", PaperSize.A4),
        ("A5", PaperSize.A5),
        ("Letter", PaperSize.LETTER),
        ("us-legal", PaperSize.LEGAL),
        (" legal ", PaperSize.LEGAL),
    ],
)
def test_paper_size_parsing(value: str, expected: PaperSize) -> None:
    assert PaperSize.parse(value) is expected


def test_unknown_paper_size() -> None:
    with pytest.raises(InvalidPaperSizeError) as excinfo:
        PaperSize.parse("tabloid")
    assert "tabloid" in str(excinfo.value)


def test_render_options_defaults() -> None:
    options = RenderOptions()
    assert options.theme == DEFAULT_THEME == "silk-light"
    assert options.theme_explicit is False
    assert options.paper is None
    assert options.toc is None
    assert options.font_dirs == []


def test_render_options_parse_paper_strings() -> None:
    assert RenderOptions(paper="letter").paper is PaperSize.LETTER


def test_render_options_reject_unknown_fields() -> None:
    with pytest.raises(ValueError):
        RenderOptions(colour="red")


def test_theme_reference_interpretation() -> None:
    assert ThemeSource.from_reference("nord").kind is ThemeSourceKind.BUILTIN
    path_source = ThemeSource.from_reference("themes/house.TOML")
    assert path_source.kind is ThemeSourceKind.PATH
    assert ThemeSource.path(Path("x.toml")).value == "x.toml"
    assert ThemeSource.inline("[meta]").describe() == "<inline theme>"


def test_theme_option_accepts_a_source() -> None:
    inline = ThemeSource.inline('[meta]\nname = "inline"\n')
    options = RenderOptions(theme=inline)
    assert options.theme == inline
    assert RenderOptions(theme="nord").theme == "nord"

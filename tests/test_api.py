from pathlib import Path

import pytest

from silkprint.api import check_document, effective_theme, list_themes, render_to_typst
from silkprint.core.diagnostics import UnknownLanguage, UnrecognizedFrontMatter
from silkprint.core.exceptions import FrontMatterError, ThemeNotFoundError
from silkprint.core.frontmatter import FrontMatter
from silkprint.core.options import RenderOptions, ThemeSource, ThemeSourceKind
from silkprint.render.preamble import build_preamble
from silkprint.theme import ThemeRegistry


class RecordingEmitter:
    debug_enabled = False

    def __init__(self) -> None:
        self.warnings: list[str] = []
        self.errors: list[str] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.warnings.append(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self.errors.append(message)


def test_render_produces_preamble_and_body() -> None:
    result = render_to_typst("# Hello\n\nWorld\n")
    assert result.source.startswith('// Generated by silkprint from theme "silk-light".')
    assert "= Hello <hello>" in result.source
    assert result.source.index("#set page(") < result.source.index("= Hello <hello>")
    assert result.theme.name == "silk-light"
    assert "<plist" in result.tmtheme
    assert result.warnings == []
    assert result.diagrams == []


def test_empty_document_is_preamble_only() -> None:
    result = render_to_typst("")
    assert result.source == build_preamble(result.theme)


def test_front_matter_selects_theme() -> None:
    result = render_to_typst("---\ntheme: silk-dark\ntitle: Notes\n---\nBody\n")
    assert result.theme.name == "silk-dark"
    assert result.front_matter.title == "Notes"
    assert "Body" in result.source


def test_explicit_theme_beats_front_matter() -> None:
    options = RenderOptions(theme="silk-light", theme_explicit=True)
    result = render_to_typst("---\ntheme: silk-dark\n---\nBody\n", options)
    assert result.theme.name == "silk-light"


def test_default_theme_yields_to_front_matter() -> None:
    source = effective_theme(RenderOptions(), FrontMatter(theme="silk-dark"))
    assert source.kind is ThemeSourceKind.BUILTIN
    assert source.value == "silk-dark"
    assert effective_theme(RenderOptions(), FrontMatter()).value == "silk-light"


def test_front_matter_theme_file(tmp_path: Path) -> None:
    theme_file = tmp_path / "custom.toml"
    theme_file.write_text(
        '[meta]\nname = "custom"\nextends = "silk-light"\n[links]\ncolor = "#0033aa"\n',
        encoding="utf-8",
    )
    result = render_to_typst(f"---\ntheme: {theme_file}\n---\nBody\n")
    assert result.theme.name == "custom"
    assert 'from theme "custom"' in result.source
    assert '#show link: set text(fill: rgb("#0033aa"))' in result.source


def test_inline_theme_source_wins_over_front_matter() -> None:
    inline = ThemeSource.inline(
        '[meta]\nname = "inline"\nextends = "silk-light"\n[links]\ncolor = "#0033aa"\n'
    )
    options = RenderOptions(theme=inline)
    assert effective_theme(options, FrontMatter(theme="silk-dark")) == inline

    result = render_to_typst("---\ntheme: silk-dark\n---\nhi\n", options)
    assert result.theme.name == "inline"
    assert 'from theme "inline"' in result.source
    assert '#show link: set text(fill: rgb("#0033aa"))' in result.source


def test_registry_is_used_for_names() -> None:
    registry = ThemeRegistry(
        themes={"house": '[meta]\nname = "house"\nextends = "silk-light"\n'}
    )
    result = render_to_typst("Body\n", RenderOptions(theme="house"), registry=registry)
    assert result.theme.name == "house"


def test_warnings_reach_the_emitter() -> None:
    emitter = RecordingEmitter()
    result = render_to_typst(
        "---\nmood: calm\n---\n```klingon\nqapla\n```\n", emitter=emitter
    )
    kinds = {type(warning) for warning in result.warnings}
    assert kinds == {UnrecognizedFrontMatter, UnknownLanguage}
    assert len(emitter.warnings) == 2
    assert "unrecognized front matter field 'mood'" in emitter.warnings
    assert emitter.errors == []


def test_check_document_returns_warnings() -> None:
    warnings = check_document("![x](https://example.com/x.png)\n")
    assert [warning.kind for warning in warnings] == ["remote-image"]
    assert check_document("plain\n") == []


def test_unknown_theme_raises_with_suggestions() -> None:
    with pytest.raises(ThemeNotFoundError) as excinfo:
        render_to_typst("Body", RenderOptions(theme="silk-lite", theme_explicit=True))
    assert "silk-light" in excinfo.value.suggestions


def test_bad_front_matter_is_fatal() -> None:
    with pytest.raises(FrontMatterError):
        render_to_typst("---\n- just\n- a list\n---\nBody\n")


def test_rendering_is_deterministic() -> None:
    document = "# Title\n\nText[^a].\n\n[^a]: Note.\n\n| a | b |\n|---|---|\n| 1 | 2 |\n"
    assert render_to_typst(document).source == render_to_typst(document).source


def test_list_themes_exposes_catalog() -> None:
    names = [info.name for info in list_themes()]
    assert "silk-light" in names
    assert "silk-dark" in names
    assert not any(name.startswith("_") for name in names)

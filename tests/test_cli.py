import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from silkprint.core.exceptions import ConflictingOptionsError, InvalidPaperSizeError
from silkprint.core.options import PaperSize
from silkprint.ui.cli import app
from silkprint.ui.cli.commands.render import build_options, compile_hint, validate_flags


WIDE = {"COLUMNS": "200"}


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def document(tmp_path: Path) -> Path:
    path = tmp_path / "doc.md"
    path.write_text("---\ntitle: Report\n---\n# Intro\n\nHello *world*.\n", encoding="utf-8")
    return path


def test_render_writes_source_and_theme(runner: CliRunner, document: Path) -> None:
    result = runner.invoke(app, ["render", str(document)], env=WIDE)
    assert result.exit_code == 0, result.output
    target = document.with_suffix(".typ")
    source = target.read_text(encoding="utf-8")
    assert source.startswith('// Generated by silkprint from theme "silk-light".')
    assert "= Intro <intro>" in source
    assert "Hello #emph[world]." in source
    tmtheme = document.parent / "__silkprint_theme.tmTheme"
    assert "<plist" in tmtheme.read_text(encoding="utf-8")
    assert "typst compile" in result.stdout


def test_render_to_explicit_output(runner: CliRunner, document: Path, tmp_path: Path) -> None:
    target = tmp_path / "out" / "report.typ"
    result = runner.invoke(app, ["render", str(document), "-o", str(target), "-q"])
    assert result.exit_code == 0, result.output
    assert target.exists()
    assert (target.parent / "__silkprint_theme.tmTheme").exists()
    assert "wrote" not in result.stdout


def test_render_to_stdout(runner: CliRunner, document: Path) -> None:
    result = runner.invoke(app, ["render", str(document), "-o", "-"])
    assert result.exit_code == 0, result.output
    assert "// Generated by silkprint" in result.stdout
    assert "= Intro <intro>" in result.stdout
    assert not document.with_suffix(".typ").exists()
    assert not (document.parent / "__silkprint_theme.tmTheme").exists()


def test_dump_typst(runner: CliRunner, document: Path) -> None:
    result = runner.invoke(app, ["render", str(document), "--dump-typst", "--theme", "silk-dark"])
    assert result.exit_code == 0, result.output
    assert 'from theme "silk-dark"' in result.stdout
    assert not document.with_suffix(".typ").exists()


def test_check_writes_nothing(runner: CliRunner, document: Path) -> None:
    result = runner.invoke(app, ["render", str(document), "--check"], env=WIDE)
    assert result.exit_code == 0, result.output
    assert "doc.md: ok" in result.stdout
    assert not document.with_suffix(".typ").exists()


def test_conflicting_flags_exit_with_error(runner: CliRunner, document: Path) -> None:
    result = runner.invoke(app, ["render", str(document), "-q", "-v"], env=WIDE)
    assert result.exit_code == 1
    assert "cannot combine --quiet and --verbose" in result.output


def test_unknown_theme_exits_with_error(runner: CliRunner, document: Path) -> None:
    result = runner.invoke(app, ["render", str(document), "--theme", "silk-lite"], env=WIDE)
    assert result.exit_code == 1
    assert "theme 'silk-lite' not found" in result.output
    assert not document.with_suffix(".typ").exists()


def test_unknown_paper_exits_with_error(runner: CliRunner, document: Path) -> None:
    result = runner.invoke(app, ["render", str(document), "--paper", "tabloid"], env=WIDE)
    assert result.exit_code == 1
    assert "tabloid" in result.output


def test_missing_input_is_a_usage_error(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(app, ["render", str(tmp_path / "missing.md")])
    assert result.exit_code == 2


def test_mermaid_sidecars(runner: CliRunner, tmp_path: Path) -> None:
    document = tmp_path / "flow.md"
    document.write_text("```mermaid\ngraph TD\nA-->B\n```\n", encoding="utf-8")
    result = runner.invoke(app, ["render", str(document), "-q"])
    assert result.exit_code == 0, result.output
    assert '#image("/__mermaid_0.svg")' in document.with_suffix(".typ").read_text(encoding="utf-8")
    assert (tmp_path / "__mermaid_0.mmd").read_text(encoding="utf-8") == "graph TD\nA-->B\n"
    assert "<svg" in (tmp_path / "__mermaid_0.svg").read_text(encoding="utf-8")
    config = json.loads((tmp_path / "__mermaid_config.json").read_text(encoding="utf-8"))
    assert config["theme"] == "base"
    assert "primaryColor" in config["themeVariables"]


def test_existing_diagram_svg_is_kept(runner: CliRunner, tmp_path: Path) -> None:
    document = tmp_path / "flow.md"
    document.write_text("```mermaid\ngraph TD\n```\n", encoding="utf-8")
    rendered = tmp_path / "__mermaid_0.svg"
    rendered.write_text("<svg>real</svg>", encoding="utf-8")
    result = runner.invoke(app, ["render", str(document), "-q"])
    assert result.exit_code == 0, result.output
    assert rendered.read_text(encoding="utf-8") == "<svg>real</svg>"


def test_warnings_are_reported(runner: CliRunner, tmp_path: Path) -> None:
    document = tmp_path / "doc.md"
    document.write_text("---\nmood: calm\n---\nBody\n", encoding="utf-8")
    result = runner.invoke(app, ["render", str(document), "--check"], env=WIDE)
    assert result.exit_code == 0, result.output
    assert "unrecognized front matter field 'mood'" in result.output
    assert "1 warning(s)" in result.stdout


def test_themes_lists_catalog(runner: CliRunner) -> None:
    result = runner.invoke(app, ["themes"], env=WIDE)
    assert result.exit_code == 0, result.output
    assert "Available Themes" in result.stdout
    assert "silk-light" in result.stdout
    assert "_base-syntax-light" not in result.stdout


def test_themes_family_filter(runner: CliRunner) -> None:
    result = runner.invoke(app, ["themes", "--family", "no-such-family"])
    assert result.exit_code == 0
    assert "No themes found for family 'no-such-family'." in result.stdout


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.stdout.startswith("silkprint ")


@pytest.mark.parametrize(
    "flags",
    [
        {"quiet": True, "verbose": 1},
        {"toc": True, "no_toc": True},
        {"check": True, "dump_typst": True},
        {"check": True, "output": "x.typ"},
        {"dump_typst": True, "output": "x.typ"},
    ],
)
def test_validate_flags_conflicts(flags: dict[str, object]) -> None:
    arguments: dict[str, object] = {
        "verbose": 0,
        "quiet": False,
        "toc": False,
        "no_toc": False,
        "check": False,
        "dump_typst": False,
        "output": None,
    }
    arguments.update(flags)
    with pytest.raises(ConflictingOptionsError):
        validate_flags(**arguments)  # type: ignore[arg-type]


def test_build_options() -> None:
    options = build_options(
        theme=None, paper="Letter", toc=False, no_toc=True, no_title_page=True, font_dirs=None
    )
    assert options.theme == "silk-light"
    assert options.theme_explicit is False
    assert options.paper is PaperSize.LETTER
    assert options.toc is False
    assert options.title_page is False
    assert options.font_dirs == []

    explicit = build_options(
        theme="silk-dark", paper=None, toc=True, no_toc=False, no_title_page=False, font_dirs=None
    )
    assert explicit.theme_explicit is True
    assert explicit.toc is True
    assert explicit.title_page is None

    with pytest.raises(InvalidPaperSizeError):
        build_options(
            theme=None, paper="b5", toc=False, no_toc=False, no_title_page=False, font_dirs=None
        )


def test_compile_hint_quotes_paths() -> None:
    hint = compile_hint(Path("my doc.typ"), [Path("fonts")])
    assert hint == "typst compile 'my doc.typ' --font-path fonts"

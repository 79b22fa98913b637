import pytest

from silkprint.core.diagnostics import (
    FootnoteNotFound,
    RemoteImageSkipped,
    UnsupportedHtmlTag,
    WarningCollector,
)
from silkprint.render import MarkupEmitter


@pytest.fixture
def emitter() -> MarkupEmitter:
    return MarkupEmitter()


def emit(emitter: MarkupEmitter, text: str) -> str:
    return emitter.emit_markdown(text).markup.strip()


@pytest.mark.parametrize(
    ("markdown", "expected"),
    [
        ("Some **bold** and *it*.", "Some #strong[bold] and #emph[it]."),
        ("un*frigging*believable", "un#emph[frigging]believable"),
        ("__under__", "#underline[under]"),
        ("~~gone~~", "#strike[gone]"),
        ("==hi==", "#highlight[hi]"),
        ("x^2^", "x#super[2]"),
        ("H~2~O", "H#sub[2]O"),
        ("**a *b* c**", "#strong[a #emph[b] c]"),
    ],
)
def test_emphasis_variants(emitter: MarkupEmitter, markdown: str, expected: str) -> None:
    assert emit(emitter, markdown) == expected


def test_text_after_call_is_not_an_argument(emitter: MarkupEmitter) -> None:
    assert emit(emitter, "**a**(b)") == "#strong[a]\\(b)"
    assert emit(emitter, "*a*.method") == "#emph[a]\\.method"


def test_special_characters_are_escaped(emitter: MarkupEmitter) -> None:
    assert emit(emitter, "Tag #1 and @me_too") == "Tag \\#1 and \\@me\\_too"


def test_line_leading_markers_are_escaped(emitter: MarkupEmitter) -> None:
    assert emit(emitter, "\\- not a list") == "\\- not a list"
    assert emit(emitter, "\\= not a heading") == "\\= not a heading"


def test_comment_openers_are_escaped(emitter: MarkupEmitter) -> None:
    assert emit(emitter, "a // b and /* c") == "a \\// b and /\\* c"


def test_inline_code(emitter: MarkupEmitter) -> None:
    assert emit(emitter, "Use `x = 1` here") == "Use `x = 1` here"
    assert emit(emitter, "``a`b``") == '#raw("a`b")'


def test_hard_break(emitter: MarkupEmitter) -> None:
    assert emit(emitter, "a  \nb") == "a\\\nb"


def test_soft_break_is_kept(emitter: MarkupEmitter) -> None:
    assert emit(emitter, "a\nb") == "a\nb"


def test_external_links(emitter: MarkupEmitter) -> None:
    assert emit(emitter, "[site](https://example.com)") == '#link("https://example.com")[site]'
    assert emit(emitter, "<https://example.com>") == '#link("https://example.com")'
    assert (
        emit(emitter, "visit https://example.com now")
        == 'visit #link("https://example.com") now'
    )


def test_internal_links_target_known_labels(emitter: MarkupEmitter) -> None:
    markup = emit(emitter, "# Intro\n\nSee [the intro](#intro) or [that](#missing).")
    assert "#link(<intro>)[the intro]" in markup
    assert "or that." in markup
    assert "<missing>" not in markup


def test_wikilinks(emitter: MarkupEmitter) -> None:
    markup = emit(emitter, "## Setup\n\nSee [[setup|the setup]] and [[Nowhere]].")
    assert "#link(<setup>)[the setup]" in markup
    assert "and Nowhere." in markup


def test_standalone_image_becomes_figure(emitter: MarkupEmitter) -> None:
    assert emit(emitter, "![Alt text](img/a.png)") == (
        '#figure(image("img/a.png"), caption: [Alt text])'
    )


def test_inline_image_is_boxed(emitter: MarkupEmitter) -> None:
    assert emit(emitter, "Icon ![i](i.png) here") == 'Icon #box(image("i.png", height: 1em)) here'


def test_remote_image_falls_back_to_alt_text(emitter: MarkupEmitter) -> None:
    warnings = WarningCollector()
    result = emitter.emit_markdown("![A chart](https://example.com/c.png)", warnings=warnings)
    assert result.markup.strip() == "A chart"
    assert warnings.of_kind(RemoteImageSkipped) == [RemoteImageSkipped("https://example.com/c.png")]
    assert result.warnings == warnings.items


def test_inline_math(emitter: MarkupEmitter) -> None:
    assert emit(emitter, "Area $x^2$ units") == 'Area #mi("x^2") units'


def test_emoji_shortcodes(emitter: MarkupEmitter) -> None:
    assert emit(emitter, "Launch :rocket:") == "Launch \U0001f680"


def test_inline_html_runs_are_merged(emitter: MarkupEmitter) -> None:
    assert emit(emitter, "Some <span>*x*</span> end") == "Some #emph[x] end"
    assert emit(emitter, "Press <kbd>Ctrl</kbd>") == "Press `Ctrl`"
    assert emit(emitter, "a<br>b") == "a\\\nb"


def test_inline_html_keeps_footnotes_and_math(emitter: MarkupEmitter) -> None:
    warnings = WarningCollector()
    result = emitter.emit_markdown(
        "See <span>this[^n] note</span>.\n\n[^n]: Body text.\n", warnings=warnings
    )
    assert result.markup.strip() == "See this#footnote[Body text.]<fn-n> note."
    assert warnings.of_kind(FootnoteNotFound) == []
    assert emit(emitter, "<span>area $x^2$</span>") == 'area #mi("x^2")'
    assert emit(emitter, "<span>[[Home]]</span>") == emit(emitter, "[[Home]]")


def test_unsupported_inline_html_keeps_content(emitter: MarkupEmitter) -> None:
    warnings = WarningCollector()
    result = emitter.emit_markdown("<blink>hi</blink> there", warnings=warnings)
    assert result.markup.strip() == "hi there"
    assert warnings.of_kind(UnsupportedHtmlTag) == [UnsupportedHtmlTag("blink")]

import pytest

from silkprint.render.escape import (
    escape_content,
    escape_string,
    link_destination,
    quote,
    raw_inline,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("plain words", "plain words"),
        ("#let x", "\\#let x"),
        ("a*b_c", "a\\*b\\_c"),
        ("<label> @ref", "\\<label\\> \\@ref"),
        ("$5 ~ `x`", "\\$5 \\~ \\`x\\`"),
        ("[link]", "\\[link\\]"),
        ("back\\slash", "back\\\\slash"),
        ("a // b", "a \\// b"),
    ],
)
def test_escape_content(text: str, expected: str) -> None:
    assert escape_content(text) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("= Title", "\\= Title"),
        ("- item", "\\- item"),
        ("+ item", "\\+ item"),
        ("/ term", "\\/ term"),
        ("12. twelve", "12\\. twelve"),
        ("  - nested", "  \\- nested"),
        ("-dash", "-dash"),
        ("=", "\\="),
    ],
)
def test_escape_content_at_line_start(text: str, expected: str) -> None:
    assert escape_content(text, line_start=True) == expected


def test_line_markers_only_matter_at_line_start() -> None:
    assert escape_content("= Title") == "= Title"


def test_string_literals() -> None:
    assert escape_string('say "hi"\\\n') == 'say \\"hi\\"\\\\\\n'
    assert quote("a4") == '"a4"'


def test_link_destination() -> None:
    assert link_destination("https://example.com") == '"https://example.com"'
    assert link_destination("#Getting Started", {"getting-started"}) == "<getting-started>"
    assert link_destination("#missing", {"getting-started"}) == '"#missing"'
    assert link_destination("#") == '"#"'


def test_raw_inline() -> None:
    assert raw_inline("print()") == "`print()`"
    assert raw_inline("a`b") == '#raw("a`b")'
    assert raw_inline(" padded ") == '#raw(" padded ")'
    assert raw_inline("") == '#raw("")'

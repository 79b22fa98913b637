import copy
import random

import pytest

from silkprint.core.exceptions import ThemeCycleError, ThemeInheritanceDepthError
from silkprint.theme import ThemeRegistry, load_theme
from silkprint.theme.merge import build_chain, deep_merge, is_unset, merge_tokens
from silkprint.theme.registry import parse_theme
from silkprint.theme.tokens import ThemeTokens


_MISSING = object()
_KEYS = ("alpha", "beta", "gamma", "delta", "epsilon")
_LEAVES = ("", "ink", "#112233", 0, 7, 2.5, 0.0, True, False, [], ["serif"])


def _schema(rng: random.Random, depth: int = 0) -> dict:
    schema = {}
    for key in _KEYS:
        if depth < 2 and rng.random() < 0.3:
            schema[key] = _schema(rng, depth + 1)
        else:
            schema[key] = None
    return schema


def _sparse_tree(rng: random.Random, schema: dict) -> dict:
    tree = {}
    for key, nested in schema.items():
        if rng.random() < 0.4:
            continue
        tree[key] = _sparse_tree(rng, nested) if nested is not None else rng.choice(_LEAVES)
    return tree


def _leaves(tree: dict, prefix: tuple[str, ...] = ()):
    for key, value in tree.items():
        if isinstance(value, dict):
            yield from _leaves(value, (*prefix, key))
        else:
            yield (*prefix, key), value


def _lookup(tree: dict, path: tuple[str, ...]):
    node = tree
    for part in path:
        if not isinstance(node, dict) or part not in node:
            return _MISSING
        node = node[part]
    return node


@pytest.mark.parametrize("seed", range(25))
def test_deep_merge_child_set_values_win(seed: int) -> None:
    rng = random.Random(seed)
    schema = _schema(rng)
    base = _sparse_tree(rng, schema)
    child = _sparse_tree(rng, schema)
    original_child = copy.deepcopy(child)

    merged = deep_merge(copy.deepcopy(base), child)

    assert child == original_child
    for path, value in _leaves(child):
        if not is_unset(value):
            assert _lookup(merged, path) == value
            continue
        inherited = _lookup(base, path)
        if inherited is not _MISSING:
            assert _lookup(merged, path) == inherited
        else:
            found = _lookup(merged, path)
            assert found is _MISSING or is_unset(found)
    for path, value in _leaves(base):
        override = _lookup(child, path)
        if override is _MISSING or is_unset(override):
            assert _lookup(merged, path) == value


@pytest.mark.parametrize("value", ["", 0, 0.0, False, None, [], {}])
def test_unset_sentinels(value: object) -> None:
    assert is_unset(value)


@pytest.mark.parametrize("value", ["x", 1, 0.5, True, ["a"], {"a": 1}])
def test_set_values(value: object) -> None:
    assert not is_unset(value)


def test_merge_tokens_keeps_parent_values_for_unset_child_fields() -> None:
    parent = parse_theme('[meta]\nname = "parent"\n[text]\ncolor = "#111111"\nline_height = 1.5\n')
    child = parse_theme('[meta]\nname = "child"\n[text]\nline_height = 1.2\n')

    merged = merge_tokens(parent, child)

    assert merged.meta.name == "child"
    assert merged.text.color == "#111111"
    assert merged.text.line_height == 1.2


def test_merge_tokens_keeps_syntax_type_alias() -> None:
    parent = parse_theme('[syntax.type]\ncolor = "#00aa00"\n')
    merged = merge_tokens(parent, ThemeTokens())
    assert merged.syntax.style("type").color == "#00aa00"


def test_heading_level_overrides_merge_individually() -> None:
    parent = parse_theme('[headings.h1]\nweight = 800\nuppercase = true\n')
    child = parse_theme('[headings.h1]\nabove = "2em"\n')

    merged = merge_tokens(parent, child)

    assert merged.headings.h1.weight == 800
    assert merged.headings.h1.uppercase is True
    assert merged.headings.h1.above == "2em"


def _chain_registry(length: int) -> ThemeRegistry:
    themes = {}
    for index in range(1, length + 1):
        extends = f'extends = "t{index + 1}"\n' if index < length else ""
        themes[f"t{index}"] = f'[meta]\nname = "t{index}"\n{extends}'
    return ThemeRegistry(themes=themes, include_builtins=False)


def test_inheritance_depth_of_five_is_accepted() -> None:
    registry = _chain_registry(5)
    chain = build_chain(registry.load("t1"), registry)
    assert [tokens.meta.name for tokens in chain] == ["t1", "t2", "t3", "t4", "t5"]
    assert load_theme("t1", registry=registry).name == "t1"


def test_inheritance_depth_of_six_fails() -> None:
    registry = _chain_registry(6)
    with pytest.raises(ThemeInheritanceDepthError) as excinfo:
        load_theme("t1", registry=registry)
    assert excinfo.value.max_depth == 5
    assert excinfo.value.chain == ["t1", "t2", "t3", "t4", "t5", "t6"]
    assert "max 5" in str(excinfo.value)


def test_inheritance_cycle_is_reported() -> None:
    registry = ThemeRegistry(
        themes={
            "a": '[meta]\nname = "a"\nextends = "b"\n',
            "b": '[meta]\nname = "b"\nextends = "a"\n',
        },
        include_builtins=False,
    )
    with pytest.raises(ThemeCycleError) as excinfo:
        load_theme("a", registry=registry)
    assert excinfo.value.chain == ["a", "b", "a"]
    assert "a -> b -> a" in str(excinfo.value)


def test_self_reference_is_a_cycle() -> None:
    registry = ThemeRegistry(
        themes={"loop": '[meta]\nname = "loop"\nextends = "loop"\n'}, include_builtins=False
    )
    with pytest.raises(ThemeCycleError):
        load_theme("loop", registry=registry)


def test_child_of_builtin_inherits_everything_else() -> None:
    registry = ThemeRegistry(
        themes={"mine": '[meta]\nname = "mine"\nextends = "silk-light"\n[text]\ncolor = "#202020"\n'}
    )
    theme = load_theme("mine", registry=registry)
    parent = load_theme("silk-light")

    assert theme.tokens.text.color == "#202020"
    assert theme.tokens.fonts.body == parent.tokens.fonts.body
    assert theme.tokens.page.margin_top == parent.tokens.page.margin_top

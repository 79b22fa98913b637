"""Inheritance chain walking and the sentinel-aware deep merge."""

from __future__ import annotations

from collections.abc import Mapping
import copy
import logging
from typing import Any

from pydantic import ValidationError

from silkprint.core.exceptions import (
    ThemeCycleError,
    ThemeInheritanceDepthError,
    ThemeInvalidError,
)

from .registry import ThemeRegistry
from .tokens import ThemeTokens


logger = logging.getLogger(__name__)

MAX_INHERITANCE_DEPTH = 5


def is_unset(value: Any) -> bool:
    """Return whether ``value`` is the unset sentinel of its type."""
    if value is None:
        return True
    if isinstance(value, bool):
        return value is False
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) == 0
    return False


def deep_merge(base: dict[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``overlay`` into ``base`` in place and return ``base``.

    Nested mappings merge recursively. Any other overlay value replaces the
    base value unless it is the unset sentinel.
    """
    for key, value in overlay.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            deep_merge(current, value)
        elif not is_unset(value):
            base[key] = copy.deepcopy(value)
    return base


def merge_tokens(base: ThemeTokens, child: ThemeTokens) -> ThemeTokens:
    """Return ``child`` layered over ``base``."""
    merged = deep_merge(base.to_tree(), child.to_tree())
    try:
        return ThemeTokens.model_validate(merged)
    except ValidationError as exc:  # pragma: no cover - both inputs were valid trees
        raise ThemeInvalidError(f"Merged theme failed validation: {exc}") from exc


def build_chain(root: ThemeTokens, registry: ThemeRegistry) -> list[ThemeTokens]:
    """Follow ``meta.extends`` from ``root`` and return the chain, most derived first."""
    chain = [root]
    names = [root.meta.name or "<root>"]
    seen = {root.meta.name} if root.meta.name else set()

    while True:
        parent_name = chain[-1].meta.extends
        if not parent_name:
            break
        if parent_name in seen:
            raise ThemeCycleError([*names, parent_name])
        if len(chain) >= MAX_INHERITANCE_DEPTH:
            raise ThemeInheritanceDepthError([*names, parent_name], MAX_INHERITANCE_DEPTH)
        logger.debug("theme %s extends %s", names[-1], parent_name)
        parent = registry.load(parent_name)
        seen.add(parent_name)
        names.append(parent_name)
        chain.append(parent)
    return chain


def fold_chain(chain: list[ThemeTokens]) -> ThemeTokens:
    """Fold a chain from its root ancestor down to the most derived theme."""
    merged = chain[-1]
    for child in reversed(chain[:-1]):
        merged = merge_tokens(merged, child)
    return merged


def resolve_inheritance(root: ThemeTokens, registry: ThemeRegistry) -> ThemeTokens:
    """Return ``root`` with its whole ``extends`` chain merged in."""
    if not root.meta.extends:
        return root
    return fold_chain(build_chain(root, registry))


__all__ = [
    "MAX_INHERITANCE_DEPTH",
    "build_chain",
    "deep_merge",
    "fold_chain",
    "is_unset",
    "merge_tokens",
    "resolve_inheritance",
]

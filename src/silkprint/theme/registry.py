"""Theme catalog and theme description loading.

Built-in themes live in ``themes/<family>/<name>.toml`` next to this module.
Files whose name starts with an underscore (the base syntax palettes) are
loadable by name but hidden from the public catalog.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from functools import lru_cache
import logging
from pathlib import Path
import re


try:  # Python >=3.11
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # Python 3.10
    import tomli as tomllib
from pydantic import ValidationError

from silkprint.core.exceptions import ThemeInvalidError, ThemeNotFoundError

from .tokens import ThemeTokens


logger = logging.getLogger(__name__)

THEMES_ROOT = Path(__file__).parent / "themes"
BASE_SYNTAX_THEMES = {"light": "_base-syntax-light", "dark": "_base-syntax-dark"}
MAX_SUGGESTION_DISTANCE = 3
FALLBACK_SUGGESTIONS = 5

_LOCATION_PATTERN = re.compile(r"line (\d+), column (\d+)")


@dataclass(frozen=True)
class ThemeInfo:
    """Catalog entry describing one built-in theme."""

    name: str
    variant: str
    description: str
    print_safe: bool
    family: str
    path: Path


def _read_meta(path: Path) -> dict[str, object]:
    try:
        content = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        logger.warning("skipping unreadable built-in theme %s", path, exc_info=True)
        return {}
    meta = content.get("meta", {})
    return meta if isinstance(meta, dict) else {}


@lru_cache(maxsize=1)
def _builtin_files() -> dict[str, Path]:
    files: dict[str, Path] = {}
    for path in sorted(THEMES_ROOT.rglob("*.toml")):
        files.setdefault(path.stem, path)
    return files


@lru_cache(maxsize=1)
def builtin_catalog() -> tuple[ThemeInfo, ...]:
    """Return the public built-in themes ordered by family then name."""
    entries: list[ThemeInfo] = []
    for name, path in _builtin_files().items():
        if name.startswith("_"):
            continue
        meta = _read_meta(path)
        entries.append(
            ThemeInfo(
                name=name,
                variant=str(meta.get("variant", "") or "light"),
                description=str(meta.get("description", "")),
                print_safe=bool(meta.get("print_safe", False)),
                family=path.parent.name if path.parent != THEMES_ROOT else "core",
                path=path,
            )
        )
    entries.sort(key=lambda info: (info.family, info.name))
    return tuple(entries)


def levenshtein(left: str, right: str) -> int:
    """Return the edit distance between two strings."""
    if len(left) < len(right):
        left, right = right, left
    previous = list(range(len(right) + 1))
    for i, left_char in enumerate(left, start=1):
        current = [i]
        for j, right_char in enumerate(right, start=1):
            cost = 0 if left_char == right_char else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


def find_suggestions(name: str, candidates: Iterable[str]) -> list[str]:
    """Return candidates resembling ``name``, or the first few when none do."""
    pool = list(candidates)
    needle = name.lower()
    matches = [
        candidate
        for candidate in pool
        if needle in candidate.lower()
        or candidate.lower() in needle
        or levenshtein(needle, candidate.lower()) <= MAX_SUGGESTION_DISTANCE
    ]
    if not matches:
        return pool[:FALLBACK_SUGGESTIONS]
    return matches


def parse_theme(text: str, *, origin: str = "<inline theme>") -> ThemeTokens:
    """Parse a TOML theme description into a token tree."""
    try:
        content = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ThemeInvalidError(
            f"Invalid theme {origin}: {exc}",
            source=text,
            location=_decode_location(exc),
        ) from exc

    try:
        return ThemeTokens.model_validate(content)
    except ValidationError as exc:
        raise ThemeInvalidError(f"Theme {origin} validation failed: {exc}", source=text) from exc


def _decode_location(exc: tomllib.TOMLDecodeError) -> tuple[int, int] | None:
    line = getattr(exc, "lineno", None)
    column = getattr(exc, "colno", None)
    if isinstance(line, int) and isinstance(column, int):
        return line, column
    match = _LOCATION_PATTERN.search(str(exc))
    if match:
        return int(match.group(1)), int(match.group(2))
    return None


class ThemeRegistry:
    """Resolve theme names to TOML descriptions.

    Lookup order: explicitly registered themes, then ``<name>.toml`` inside each
    search directory, then the built-in collection.
    """

    def __init__(
        self,
        *,
        themes: Mapping[str, str] | None = None,
        search_paths: Iterable[Path] = (),
        include_builtins: bool = True,
    ) -> None:
        self._themes = dict(themes or {})
        self._search_paths = [Path(path) for path in search_paths]
        self._include_builtins = include_builtins

    def with_search_path(self, path: Path) -> ThemeRegistry:
        """Return a copy that also searches ``path`` first on disk."""
        return ThemeRegistry(
            themes=self._themes,
            search_paths=[Path(path), *self._search_paths],
            include_builtins=self._include_builtins,
        )

    def names(self) -> list[str]:
        """Return every public theme name this registry can resolve."""
        names = list(self._themes)
        for directory in self._search_paths:
            if directory.is_dir():
                names.extend(path.stem for path in sorted(directory.glob("*.toml")))
        if self._include_builtins:
            names.extend(info.name for info in builtin_catalog())
        unique: list[str] = []
        for name in names:
            if name not in unique:
                unique.append(name)
        return unique

    def source(self, name: str) -> str:
        """Return the TOML text for ``name`` or raise :class:`ThemeNotFoundError`."""
        if name in self._themes:
            return self._themes[name]
        for directory in self._search_paths:
            candidate = directory / f"{name}.toml"
            if candidate.is_file():
                logger.debug("theme %s found in %s", name, directory)
                return candidate.read_text(encoding="utf-8")
        if self._include_builtins:
            path = _builtin_files().get(name)
            if path is not None:
                return path.read_text(encoding="utf-8")
        raise ThemeNotFoundError(name, self.suggest(name))

    def load(self, name: str) -> ThemeTokens:
        return parse_theme(self.source(name), origin=f"'{name}'")

    def suggest(self, name: str) -> list[str]:
        return find_suggestions(name, self.names())


def load_base_syntax(variant: str) -> ThemeTokens:
    """Return the base syntax palette for a light or dark variant."""
    name = BASE_SYNTAX_THEMES["dark" if variant == "dark" else "light"]
    path = _builtin_files()[name]
    return parse_theme(path.read_text(encoding="utf-8"), origin=f"'{name}'")


__all__ = [
    "BASE_SYNTAX_THEMES",
    "THEMES_ROOT",
    "ThemeInfo",
    "ThemeRegistry",
    "builtin_catalog",
    "find_suggestions",
    "levenshtein",
    "load_base_syntax",
    "parse_theme",
]

"""YAML front matter extraction and validation."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import yaml

from .diagnostics import UnrecognizedFrontMatter, WarningCollector
from .exceptions import FrontMatterError


class FrontMatter(BaseModel):
    """Document metadata declared at the top of a Markdown file."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    title: str | None = None
    subtitle: str | None = None
    author: str | None = None
    date: str | None = None
    lang: str | None = None
    theme: str | None = None
    paper: str | None = None
    toc: bool | None = None
    toc_depth: int | None = Field(default=None, alias="toc-depth", ge=1, le=6)
    numbering: bool | None = None
    font_size: str | None = Field(default=None, alias="font-size")

    @field_validator("author", mode="before")
    @classmethod
    def _join_authors(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return ", ".join(str(item) for item in value if item)
        return value

    @field_validator("title", "subtitle", "date", "lang", "theme", "paper", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        # YAML turns bare dates and numbers into native objects.
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("font_size", mode="before")
    @classmethod
    def _font_size_unit(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return f"{value}pt"
        return value

    def unknown_fields(self) -> list[str]:
        return sorted((self.model_extra or {}).keys())


def split_front_matter(source: str) -> tuple[dict[str, Any], str]:
    """Split YAML front matter from Markdown content, returning metadata and body.

    An unterminated block is treated as regular content. A terminated block that
    is not valid YAML, or not a mapping, raises :class:`FrontMatterError`.
    """
    candidate = source.lstrip("\ufeff")
    lines = candidate.splitlines()
    if not lines or lines[0].strip() != "---":
        return {}, candidate

    front_matter_lines: list[str] = []
    closing_index: int | None = None
    for idx, line in enumerate(lines[1:], start=1):
        stripped = line.strip()
        if stripped in {"---", "..."}:
            closing_index = idx
            break
        front_matter_lines.append(line)

    if closing_index is None:
        return {}, candidate

    raw_block = "\n".join(front_matter_lines)
    try:
        metadata = yaml.safe_load(raw_block) or {}
    except yaml.YAMLError as exc:
        raise FrontMatterError(f"Invalid front matter: {exc}") from exc

    if not isinstance(metadata, dict):
        raise FrontMatterError("Invalid front matter: expected a mapping of fields.")

    body = "\n".join(lines[closing_index + 1 :])
    if candidate.endswith("\n"):
        body += "\n"
    return metadata, body


def parse_front_matter(
    source: str, warnings: WarningCollector | None = None
) -> tuple[FrontMatter, str]:
    """Return the validated front matter and the remaining Markdown body."""
    metadata, body = split_front_matter(source)
    try:
        front_matter = FrontMatter.model_validate(metadata)
    except ValidationError as exc:
        raise FrontMatterError(f"Invalid front matter: {exc}") from exc

    if warnings is not None:
        for name in front_matter.unknown_fields():
            warnings.add(UnrecognizedFrontMatter(name))
    return front_matter, body


__all__ = ["FrontMatter", "parse_front_matter", "split_front_matter"]

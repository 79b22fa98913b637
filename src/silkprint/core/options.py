"""Render options shared by the API and the command line."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .exceptions import InvalidPaperSizeError


DEFAULT_THEME = "silk-light"


class PaperSize(str, Enum):
    """Paper sizes understood by the preamble, valued by their Typst names."""

    A4 = "a4"
    A5 = "a5"
    LETTER = "us-letter"
    LEGAL = "us-legal"

    @classmethod
    def parse(cls, value: str | PaperSize) -> PaperSize:
        """Parse a user supplied paper name case-insensitively."""
        if isinstance(value, PaperSize):
            return value
        key = value.strip().lower()
        aliases = {
            "a4": cls.A4,
            "a5": cls.A5,
            "letter": cls.LETTER,
            "us-letter": cls.LETTER,
            "legal": cls.LEGAL,
            "us-legal": cls.LEGAL,
        }
        try:
            return aliases[key]
        except KeyError:
            raise InvalidPaperSizeError(value) from None


class ThemeSourceKind(str, Enum):
    BUILTIN = "builtin"
    PATH = "path"
    INLINE = "inline"


class ThemeSource(BaseModel):
    """Where a theme description comes from."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: ThemeSourceKind
    value: str

    @classmethod
    def builtin(cls, name: str) -> ThemeSource:
        return cls(kind=ThemeSourceKind.BUILTIN, value=name)

    @classmethod
    def path(cls, path: str | Path) -> ThemeSource:
        return cls(kind=ThemeSourceKind.PATH, value=str(path))

    @classmethod
    def inline(cls, text: str) -> ThemeSource:
        return cls(kind=ThemeSourceKind.INLINE, value=text)

    @classmethod
    def from_reference(cls, reference: str) -> ThemeSource:
        """Interpret a bare reference: ``*.toml`` is a file, anything else a name."""
        if reference.strip().lower().endswith(".toml"):
            return cls.path(reference)
        return cls.builtin(reference)

    def describe(self) -> str:
        if self.kind is ThemeSourceKind.INLINE:
            return "<inline theme>"
        return self.value


class RenderOptions(BaseModel):
    """Options driving a single render call."""

    model_config = ConfigDict(extra="forbid")

    theme: ThemeSource | str = DEFAULT_THEME
    theme_explicit: bool = False
    paper: PaperSize | None = None
    toc: bool | None = None
    title_page: bool | None = None
    font_dirs: list[Path] = Field(default_factory=list)

    @field_validator("paper", mode="before")
    @classmethod
    def _parse_paper(cls, value: object) -> object:
        if isinstance(value, str):
            return PaperSize.parse(value)
        return value


__all__ = [
    "DEFAULT_THEME",
    "PaperSize",
    "RenderOptions",
    "ThemeSource",
    "ThemeSourceKind",
]

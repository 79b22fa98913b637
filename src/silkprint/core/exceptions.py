"""Custom exception hierarchy for the SilkPrint rendering pipeline."""

from __future__ import annotations

from collections.abc import Sequence


class SilkprintError(RuntimeError):
    """Base exception for fatal rendering failures."""


class ThemeNotFoundError(SilkprintError):
    """Raised when a theme name cannot be resolved to any known source."""

    def __init__(self, name: str, suggestions: Sequence[str] = ()) -> None:
        self.name = name
        self.suggestions = list(suggestions)
        super().__init__(f"theme '{name}' not found")

    @property
    def hint(self) -> str | None:
        """Return the ``Did you mean`` line built from the suggestions."""
        if not self.suggestions:
            return None
        return f"Did you mean: {', '.join(self.suggestions)}"

    def __str__(self) -> str:
        message = super().__str__()
        hint = self.hint
        return f"{message}\n{hint}" if hint else message


class ThemeInvalidError(SilkprintError):
    """Raised when a theme description cannot be parsed or validated."""

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        location: tuple[int, int] | None = None,
    ) -> None:
        self.source = source
        self.location = location
        super().__init__(message)

    def snippet(self) -> str | None:
        """Return the offending source line when a location is known."""
        if self.source is None or self.location is None:
            return None
        lines = self.source.splitlines()
        line_no = self.location[0]
        if 1 <= line_no <= len(lines):
            return lines[line_no - 1]
        return None


class ThemeCycleError(SilkprintError):
    """Raised when a theme ``extends`` chain loops back on itself."""

    def __init__(self, chain: Sequence[str]) -> None:
        self.chain = list(chain)
        super().__init__(f"Theme inheritance cycle detected: {' -> '.join(self.chain)}")


class ThemeInheritanceDepthError(SilkprintError):
    """Raised when a theme ``extends`` chain grows beyond the supported depth."""

    def __init__(self, chain: Sequence[str], max_depth: int) -> None:
        self.chain = list(chain)
        self.max_depth = max_depth
        super().__init__(
            f"Theme inheritance depth exceeded (max {max_depth}): {' -> '.join(self.chain)}"
        )


class FrontMatterError(SilkprintError):
    """Raised when the YAML front matter block is malformed."""


class InvalidPaperSizeError(SilkprintError, ValueError):
    """Raised when a paper size name is not recognised."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(
            f"invalid paper size '{value}' (expected one of: a4, a5, letter, legal)"
        )


class ConflictingOptionsError(SilkprintError):
    """Raised when mutually exclusive options are combined."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "ConflictingOptionsError",
    "FrontMatterError",
    "InvalidPaperSizeError",
    "SilkprintError",
    "ThemeCycleError",
    "ThemeInheritanceDepthError",
    "ThemeInvalidError",
    "ThemeNotFoundError",
    "exception_hint",
    "exception_messages",
]

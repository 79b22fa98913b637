"""Diagnostic abstractions shared across the rendering pipeline.

Fatal problems travel as exceptions (see :mod:`silkprint.core.exceptions`).
Everything else is a :class:`RenderWarning`: an immutable record appended to a
:class:`WarningCollector` and forwarded to a :class:`DiagnosticEmitter` so the
caller decides how to surface it.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
import logging
from typing import ClassVar, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Interface used to surface warnings and errors."""

    debug_enabled: bool

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def error(self, message: str, exc: BaseException | None = None) -> None: ...


class NullEmitter:
    """Emitter that ignores every diagnostic."""

    debug_enabled: bool = False

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        return

    def error(self, message: str, exc: BaseException | None = None) -> None:
        return


class LoggingEmitter:
    """Emitter that forwards diagnostics to the standard logging module."""

    def __init__(
        self, *, logger_obj: logging.Logger | None = None, debug_enabled: bool = False
    ) -> None:
        self._logger = logger_obj or logger
        self.debug_enabled = debug_enabled

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None:
            self._logger.warning(message, exc_info=exc)
        else:
            self._logger.warning(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None:
            self._logger.error(message, exc_info=exc)
        else:
            self._logger.error(message)


@dataclass(frozen=True)
class RenderWarning:
    """Base class for non-fatal rendering diagnostics."""

    kind: ClassVar[str] = "warning"

    @property
    def message(self) -> str:
        return self.kind

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class UnknownLanguage(RenderWarning):
    lang: str
    kind: ClassVar[str] = "unknown-language"

    @property
    def message(self) -> str:
        return f"code block language '{self.lang}' not recognized for highlighting"


@dataclass(frozen=True)
class RemoteImageSkipped(RenderWarning):
    url: str
    kind: ClassVar[str] = "remote-image"

    @property
    def message(self) -> str:
        return f"remote image '{self.url}' skipped (only local images are embedded)"


@dataclass(frozen=True)
class UnsupportedHtmlTag(RenderWarning):
    tag: str
    kind: ClassVar[str] = "unsupported-html"

    @property
    def message(self) -> str:
        return f"unsupported HTML tag <{self.tag}>, rendering its content only"


@dataclass(frozen=True)
class FootnoteNotFound(RenderWarning):
    name: str
    kind: ClassVar[str] = "footnote-not-found"

    @property
    def message(self) -> str:
        return f"footnote '{self.name}' referenced but never defined"


@dataclass(frozen=True)
class ContrastRatio(RenderWarning):
    element: str
    ratio: float
    minimum: float
    kind: ClassVar[str] = "contrast"

    @property
    def message(self) -> str:
        return (
            f"{self.element}: contrast ratio {self.ratio:.2f}:1 "
            f"below minimum {self.minimum:.1f}:1"
        )


@dataclass(frozen=True)
class UnrecognizedFrontMatter(RenderWarning):
    field_name: str
    kind: ClassVar[str] = "front-matter"

    @property
    def message(self) -> str:
        return f"unrecognized front matter field '{self.field_name}'"


@dataclass
class WarningCollector:
    """Ordered, append-only sink for :class:`RenderWarning` records."""

    emitter: DiagnosticEmitter = field(default_factory=NullEmitter)
    _items: list[RenderWarning] = field(default_factory=list, init=False, repr=False)

    def add(self, warning: RenderWarning) -> None:
        self._items.append(warning)
        logger.debug("warning recorded: %s", warning.message)
        self.emitter.warning(warning.message)

    def extend(self, warnings: list[RenderWarning]) -> None:
        for warning in warnings:
            self.add(warning)

    def of_kind(self, kind: type[RenderWarning]) -> list[RenderWarning]:
        return [item for item in self._items if isinstance(item, kind)]

    @property
    def items(self) -> list[RenderWarning]:
        return list(self._items)

    def __iter__(self) -> Iterator[RenderWarning]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)


__all__ = [
    "ContrastRatio",
    "DiagnosticEmitter",
    "FootnoteNotFound",
    "LoggingEmitter",
    "NullEmitter",
    "RemoteImageSkipped",
    "RenderWarning",
    "UnknownLanguage",
    "UnrecognizedFrontMatter",
    "UnsupportedHtmlTag",
    "WarningCollector",
]

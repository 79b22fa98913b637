"""Rule declaration and dispatch registry for the markup emitters.

Handlers declare the node kinds they render via the ``@renders`` decorator,
which records a lightweight :class:`RuleDefinition` on the callable. A
:class:`RenderRegistry` collects those declarations from handler modules and
answers one question during the tree walk: which handler owns this kind?

The same registry serves both walkers: the Markdown emitter keys rules by
:class:`~silkprint.render.nodes.NodeKind` values, the raw HTML converter keys
them by tag name.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
import logging
from types import ModuleType
from typing import Any


logger = logging.getLogger(__name__)

RuleCallable = Callable[[Any, Any], None]


@dataclass
class RenderRule:
    """Concrete rendering rule registered in a registry."""

    priority: int
    kinds: tuple[str, ...]
    name: str
    handler: RuleCallable


@dataclass(frozen=True)
class RuleDefinition:
    """Descriptor installed on handler callables by the decorator."""

    kinds: tuple[str, ...]
    priority: int = 0
    name: str | None = None

    def bind(self, handler: RuleCallable) -> RenderRule:
        """Create a concrete rule instance bound to the callable."""
        name = self.name or getattr(handler, "__name__", handler.__class__.__name__)
        return RenderRule(
            priority=self.priority,
            kinds=self.kinds,
            name=name,
            handler=handler,
        )


def _normalise_kind(kind: str | Enum) -> str:
    if isinstance(kind, Enum):
        return str(kind.value)
    return str(kind)


def renders(
    *kinds: str | Enum,
    priority: int = 0,
    name: str | None = None,
) -> Callable[[RuleCallable], RuleCallable]:
    """Decorator attaching rendering metadata to a handler."""
    if not kinds:
        raise ValueError("@renders needs at least one node kind")
    definition = RuleDefinition(
        kinds=tuple(_normalise_kind(kind) for kind in kinds),
        priority=priority,
        name=name,
    )

    def decorator(func: RuleCallable) -> RuleCallable:
        func.__render_rule__ = definition  # type: ignore[attr-defined]
        return func

    return decorator


class RenderRegistry:
    """Container mapping node kinds to their highest-priority handler."""

    def __init__(self) -> None:
        self._rules: dict[str, list[RenderRule]] = {}

    def register(self, rule: RenderRule) -> None:
        """Register a rule for every kind it declares."""
        for kind in rule.kinds:
            bucket = self._rules.setdefault(kind, [])
            if any(existing.handler is rule.handler for existing in bucket):
                continue
            logger.debug("registering rule %s for %s", rule.name, kind)
            bucket.append(rule)
            bucket.sort(key=lambda item: (-item.priority, item.name))

    def register_handler(self, handler: RuleCallable) -> None:
        definition = getattr(handler, "__render_rule__", None)
        if definition is None:
            raise TypeError(f"{handler!r} is not decorated with @renders")
        self.register(definition.bind(handler))

    def collect_from(self, *sources: ModuleType | Iterable[RuleCallable]) -> None:
        """Register every decorated callable found in modules or iterables."""
        for source in sources:
            if isinstance(source, ModuleType):
                candidates: Iterable[Any] = vars(source).values()
            else:
                candidates = source
            for candidate in candidates:
                if callable(candidate) and hasattr(candidate, "__render_rule__"):
                    self.register_handler(candidate)

    def lookup(self, kind: str | Enum) -> RenderRule | None:
        bucket = self._rules.get(_normalise_kind(kind))
        if not bucket:
            return None
        return bucket[0]

    def kinds(self) -> list[str]:
        return sorted(self._rules)

    def describe(self) -> list[dict[str, object]]:
        """Return a serialisable snapshot of the registered rules."""
        entries: list[dict[str, object]] = []
        for kind in self.kinds():
            for order, rule in enumerate(self._rules[kind]):
                entries.append(
                    {"kind": kind, "name": rule.name, "priority": rule.priority, "order": order}
                )
        return entries


__all__ = [
    "RenderRegistry",
    "RenderRule",
    "RuleDefinition",
    "renders",
]

"""Named extension points used by the assembly pipeline.

Every stage of :func:`atomsmith.assemble` offers its intermediate value to a
hook named after the component, e.g. ``section-title_markup``. A hook is a
chain of callbacks registered under that name; each callback receives the
current value (plus any extra arguments forwarded by the caller) and returns
the value handed to the next one.

Architecture

`Declaration layer`
: ``@hook`` stores a :class:`HookDefinition` on a callable without registering
  it anywhere.

`Registry layer`
: :class:`HookRegistry` keeps callbacks per name ordered by priority and
  registration sequence, and folds values through them in :meth:`apply`.

`Dispatch seam`
: the pipeline only depends on the :class:`HookDispatcher` protocol, so tests
  can inject a private registry or the pass-through :class:`NullDispatcher`.

The process-wide default registry lives behind :func:`get_hook_registry`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from itertools import count
import logging
import threading
from typing import Any, Protocol, cast, runtime_checkable

from .exceptions import HookRegistrationError


logger = logging.getLogger(__name__)

HookCallback = Callable[..., Any]

DEFAULT_PRIORITY = 10


def hook_name(component: str, *parts: str) -> str:
    """Return the hook name for ``component`` and the given suffix parts."""
    return "_".join((component, *parts))


@runtime_checkable
class HookDispatcher(Protocol):
    """Interface consumed by the pipeline to offer values to hooks."""

    def apply(self, name: str, value: Any, *args: Any) -> Any: ...


class NullDispatcher:
    """Dispatcher that returns every value untouched."""

    def apply(self, name: str, value: Any, *args: Any) -> Any:
        return value


def offer(
    dispatcher: HookDispatcher | None,
    name: str,
    value: Any,
    *args: Any,
    suppressed: bool = False,
) -> Any:
    """Offer ``value`` to hook ``name`` unless hooks are suppressed.

    A missing dispatcher falls back to the process-wide registry.
    """
    if suppressed:
        return value
    if dispatcher is None:
        dispatcher = GlobalDispatcher()
    return dispatcher.apply(name, value, *args)


@dataclass(frozen=True)
class HookEntry:
    """Callback registered under a hook name."""

    name: str
    callback: HookCallback
    priority: int
    sequence: int

    @property
    def label(self) -> str:
        return getattr(self.callback, "__qualname__", type(self.callback).__name__)


@dataclass(frozen=True)
class HookDefinition:
    """Descriptor installed on callables by the ``@hook`` decorator."""

    names: tuple[str, ...]
    priority: int = DEFAULT_PRIORITY


class HookRegistry:
    """Priority-ordered filter table implementing :class:`HookDispatcher`."""

    def __init__(self) -> None:
        self._entries: dict[str, list[HookEntry]] = {}
        self._sequence = count()
        self._lock = threading.Lock()

    def add(
        self, name: str, callback: HookCallback, *, priority: int = DEFAULT_PRIORITY
    ) -> HookEntry:
        """Register ``callback`` under ``name``.

        Lower priorities run first; callbacks sharing a priority run in the
        order they were added.
        """
        if not name:
            raise HookRegistrationError("Hook name must be a non-empty string")
        if not callable(callback):
            msg = f"Hook '{name}' expects a callable, got {type(callback).__name__}"
            raise HookRegistrationError(msg)

        with self._lock:
            entry = HookEntry(
                name=name, callback=callback, priority=priority, sequence=next(self._sequence)
            )
            bucket = self._entries.setdefault(name, [])
            bucket.append(entry)
            bucket.sort(key=lambda item: (item.priority, item.sequence))
        logger.debug("Registered hook %s -> %s (priority %d)", name, entry.label, priority)
        return entry

    def remove(self, name: str, callback: HookCallback | None = None) -> int:
        """Remove callbacks registered under ``name`` and return how many went.

        Without ``callback`` every callback of the hook is dropped.
        """
        with self._lock:
            bucket = self._entries.get(name)
            if not bucket:
                return 0
            if callback is None:
                removed = len(bucket)
                del self._entries[name]
                return removed
            kept = [entry for entry in bucket if entry.callback != callback]
            removed = len(bucket) - len(kept)
            if kept:
                self._entries[name] = kept
            else:
                del self._entries[name]
            return removed

    def clear(self) -> None:
        """Drop every registration."""
        with self._lock:
            self._entries.clear()

    def has(self, name: str) -> bool:
        """Return True when at least one callback listens on ``name``."""
        with self._lock:
            return bool(self._entries.get(name))

    def entries(self, name: str) -> tuple[HookEntry, ...]:
        """Return the callbacks of ``name`` in execution order."""
        with self._lock:
            return tuple(self._entries.get(name, ()))

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._entries)

    def apply(self, name: str, value: Any, *args: Any) -> Any:
        """Fold ``value`` through the callbacks registered under ``name``."""
        for entry in self.entries(name):
            value = entry.callback(value, *args)
        return value

    def describe(self) -> list[dict[str, object]]:
        """Return a serialisable snapshot of the registrations."""
        snapshot: list[dict[str, object]] = []
        for name in self.names():
            for order, entry in enumerate(self.entries(name)):
                snapshot.append(
                    {
                        "hook": name,
                        "callback": entry.label,
                        "priority": entry.priority,
                        "order": order,
                    }
                )
        return snapshot

    def register(self, callback: HookCallback) -> list[HookEntry]:
        """Register a standalone callable decorated with ``@hook``."""
        definition = _definition_of(callback)
        if definition is None:
            msg = "Callback must be decorated with @hook"
            raise HookRegistrationError(msg)
        return [self.add(name, callback, priority=definition.priority) for name in definition.names]

    def collect_from(self, owner: Any) -> list[HookEntry]:
        """Register every ``@hook`` decorated attribute of an object or module."""
        collected: list[HookEntry] = []
        for attribute in dir(owner):
            callback = getattr(owner, attribute)
            definition = _definition_of(callback)
            if definition is None:
                continue
            for name in definition.names:
                collected.append(self.add(name, callback, priority=definition.priority))
        return collected


def _definition_of(callback: Any) -> HookDefinition | None:
    definition = getattr(callback, "__atom_hook__", None)
    if definition is None and hasattr(callback, "__func__"):
        definition = getattr(callback.__func__, "__atom_hook__", None)
    return definition if isinstance(definition, HookDefinition) else None


def hook(
    *names: str, priority: int = DEFAULT_PRIORITY
) -> Callable[[HookCallback], HookCallback]:
    """Decorator marking a callable as a callback for the given hook names."""
    if not names:
        raise HookRegistrationError("@hook requires at least one hook name")
    definition = HookDefinition(names=tuple(names), priority=priority)

    def decorator(callback: HookCallback) -> HookCallback:
        cast(Any, callback).__atom_hook__ = definition
        return callback

    return decorator


_REGISTRY: HookRegistry | None = None
_LOCK = threading.Lock()


def get_hook_registry() -> HookRegistry:
    """Return the lazily created process-wide registry."""
    global _REGISTRY
    with _LOCK:
        if _REGISTRY is None:
            _REGISTRY = HookRegistry()
        return _REGISTRY


def set_hook_registry(registry: HookRegistry) -> HookRegistry:
    """Replace the process-wide registry and return it."""
    global _REGISTRY
    with _LOCK:
        _REGISTRY = registry
        return _REGISTRY


@contextmanager
def hook_registry_context(registry: HookRegistry | None = None) -> Iterator[HookRegistry]:
    """Temporarily swap the process-wide registry."""
    global _REGISTRY
    with _LOCK:
        previous = _REGISTRY
        _REGISTRY = registry or HookRegistry()
        current = _REGISTRY
    try:
        yield current
    finally:
        with _LOCK:
            _REGISTRY = previous


class GlobalDispatcher:
    """Dispatcher resolving the process-wide registry at call time."""

    def apply(self, name: str, value: Any, *args: Any) -> Any:
        return get_hook_registry().apply(name, value, *args)


def add_hook(name: str, callback: HookCallback, *, priority: int = DEFAULT_PRIORITY) -> HookEntry:
    """Register ``callback`` on the process-wide registry."""
    return get_hook_registry().add(name, callback, priority=priority)


def remove_hook(name: str, callback: HookCallback | None = None) -> int:
    """Remove callbacks from the process-wide registry."""
    return get_hook_registry().remove(name, callback)


__all__ = [
    "DEFAULT_PRIORITY",
    "GlobalDispatcher",
    "HookCallback",
    "HookDefinition",
    "HookDispatcher",
    "HookEntry",
    "HookRegistry",
    "NullDispatcher",
    "add_hook",
    "get_hook_registry",
    "hook",
    "hook_name",
    "hook_registry_context",
    "offer",
    "remove_hook",
    "set_hook_registry",
]

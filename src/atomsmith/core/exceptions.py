"""Exceptions raised at the configuration seams of the assembly pipeline.

Assembling markup never raises on its own: malformed input degrades to a
renderable default. The classes below only cover registering hooks and
loading settings.
"""

from __future__ import annotations


class AtomsmithError(RuntimeError):
    """Base exception for atomsmith failures."""


class HookRegistrationError(AtomsmithError):
    """Raised when a hook callback cannot be registered."""


class ConfigurationError(AtomsmithError):
    """Raised when settings cannot be read or fail validation."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the first line of every message along the cause chain.

    ``ConfigurationError`` wraps the YAML, OS or validation error that caused
    it; the wrapper comes first and the root cause last.
    """
    messages: list[str] = []
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        lines = str(current).strip().splitlines()
        if lines and lines[0].strip():
            messages.append(lines[0].strip())
        current = current.__cause__ or current.__context__
    return messages


__all__ = [
    "AtomsmithError",
    "ConfigurationError",
    "HookRegistrationError",
    "exception_messages",
]

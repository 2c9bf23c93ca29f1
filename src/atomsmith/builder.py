"""Atom builder orchestrating the assembly stages.

:class:`AtomBuilder` runs the four stages in order::

    resolve_args -> normalize_attributes -> resolve_content -> render

and owns the collaborators they share: the hook dispatcher, the option
defaults and the debug sink. The module-level functions delegate to a default
builder wired to the process-wide hook registry, with debug tracing switched
on through the ``ATOMSMITH_DEBUG_*`` environment variables.

Example::

    >>> assemble("section-title", {"tag": "h2", "content": "A Section Title"})
    '<h2 class="section-title">A Section Title</h2>'
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
import logging
import threading
from typing import Any

from .core.attributes import RenderedAttributes, normalize_attributes as _normalize_attributes
from .core.config import AtomsmithSettings, settings_from_env
from .core.diagnostics import DebugSink, NullSink, sink_from_config
from .core.hooks import GlobalDispatcher, HookDispatcher
from .core.options import DEFAULT_OPTIONS, merge_defaults, resolve_args as _resolve_args
from .core.rendering import Fragment, render as _render, resolve_content as _resolve_content


logger = logging.getLogger(__name__)


class TracingDispatcher:
    """Dispatcher decorator reporting every hook firing to a debug sink."""

    def __init__(self, dispatcher: HookDispatcher, sink: DebugSink) -> None:
        self.dispatcher = dispatcher
        self.sink = sink

    def apply(self, name: str, value: Any, *args: Any) -> Any:
        result = self.dispatcher.apply(name, value, *args)
        logger.debug("Applied hook %s", name)
        self.sink.write("Hook", name)
        return result


class AtomBuilder:
    """Assemble HTML fragments from declarative atom descriptions."""

    def __init__(
        self,
        *,
        dispatcher: HookDispatcher | None = None,
        defaults: Mapping[str, Any] | None = None,
        sink: DebugSink | None = None,
    ) -> None:
        self.sink: DebugSink = sink or NullSink()
        self.defaults = merge_defaults(defaults, DEFAULT_OPTIONS)
        self.dispatcher: HookDispatcher = TracingDispatcher(
            dispatcher or GlobalDispatcher(), self.sink
        )

    @classmethod
    def from_settings(
        cls,
        settings: AtomsmithSettings,
        *,
        dispatcher: HookDispatcher | None = None,
    ) -> AtomBuilder:
        """Create a builder honouring configured defaults and debug flags."""
        return cls(
            dispatcher=dispatcher,
            defaults=settings.option_defaults(),
            sink=sink_from_config(settings.debug),
        )

    def resolve_args(self, name: str, options: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return _resolve_args(name, options, defaults=self.defaults, dispatcher=self.dispatcher)

    def normalize_attributes(
        self,
        name: str,
        raw_attributes: Mapping[str, Any] | None,
        options: Mapping[str, Any],
    ) -> RenderedAttributes:
        return _normalize_attributes(name, raw_attributes, options, dispatcher=self.dispatcher)

    def resolve_content(self, name: str, options: Mapping[str, Any]) -> str:
        return _resolve_content(name, options, dispatcher=self.dispatcher)

    def render(
        self,
        name: str,
        options: Mapping[str, Any],
        attributes: Mapping[str, str] | Sequence[str] | None,
        content: str = "",
    ) -> Fragment:
        return _render(name, options, attributes, content, dispatcher=self.dispatcher)

    def assemble(self, name: str, options: Mapping[str, Any] | None = None) -> Fragment:
        """Run every stage for the atom ``name`` and return its markup."""
        resolved = self.resolve_args(name, options)
        attributes = self.normalize_attributes(name, resolved.get("attributes"), resolved)
        content = self.resolve_content(name, resolved)
        return self.render(name, resolved, attributes, content)


_DEFAULT_BUILDER: AtomBuilder | None = None
_LOCK = threading.Lock()


def get_default_builder() -> AtomBuilder:
    """Return the lazily created builder behind the module-level helpers."""
    global _DEFAULT_BUILDER
    with _LOCK:
        if _DEFAULT_BUILDER is None:
            _DEFAULT_BUILDER = AtomBuilder.from_settings(settings_from_env())
        return _DEFAULT_BUILDER


def set_default_builder(builder: AtomBuilder | None) -> AtomBuilder | None:
    """Replace the default builder; ``None`` rebuilds it lazily on next use."""
    global _DEFAULT_BUILDER
    with _LOCK:
        _DEFAULT_BUILDER = builder
        return _DEFAULT_BUILDER


def assemble(name: str, options: Mapping[str, Any] | None = None) -> Fragment:
    """Assemble an atom with the default builder."""
    return get_default_builder().assemble(name, options)


def resolve_args(name: str, options: Mapping[str, Any] | None = None) -> dict[str, Any]:
    return get_default_builder().resolve_args(name, options)


def normalize_attributes(
    name: str, raw_attributes: Mapping[str, Any] | None, options: Mapping[str, Any]
) -> RenderedAttributes:
    return get_default_builder().normalize_attributes(name, raw_attributes, options)


def resolve_content(name: str, options: Mapping[str, Any]) -> str:
    return get_default_builder().resolve_content(name, options)


def render(
    name: str,
    options: Mapping[str, Any],
    attributes: Mapping[str, str] | Sequence[str] | None,
    content: str = "",
) -> Fragment:
    return get_default_builder().render(name, options, attributes, content)


__all__ = [
    "AtomBuilder",
    "TracingDispatcher",
    "assemble",
    "get_default_builder",
    "normalize_attributes",
    "render",
    "resolve_args",
    "resolve_content",
    "set_default_builder",
]

"""Core building blocks of the atom assembly pipeline."""

from __future__ import annotations

from .attributes import (
    AttributeValue,
    Empty,
    RenderedAttributes,
    Text,
    Tokens,
    coerce_value,
    escape_attribute,
    get_classes,
    get_id,
    normalize_attributes,
    sanitize_html_class,
)
from .config import AtomsmithSettings, DebugConfig, load_settings, settings_from_env
from .diagnostics import (
    DebugSink,
    FileSink,
    LoggingSink,
    NullSink,
    StreamSink,
    format_debug_entry,
    sink_from_config,
)
from .exceptions import (
    AtomsmithError,
    ConfigurationError,
    HookRegistrationError,
    exception_messages,
)
from .hooks import (
    GlobalDispatcher,
    HookDispatcher,
    HookRegistry,
    NullDispatcher,
    add_hook,
    get_hook_registry,
    hook,
    hook_name,
    hook_registry_context,
    remove_hook,
    set_hook_registry,
)
from .options import DEFAULT_OPTIONS, TagType, merge_defaults, resolve_args
from .rendering import Fragment, SplitMarkup, render, resolve_content


__all__ = [
    "DEFAULT_OPTIONS",
    "AtomsmithError",
    "AtomsmithSettings",
    "AttributeValue",
    "ConfigurationError",
    "DebugConfig",
    "DebugSink",
    "Empty",
    "FileSink",
    "Fragment",
    "GlobalDispatcher",
    "HookDispatcher",
    "HookRegistrationError",
    "HookRegistry",
    "LoggingSink",
    "NullDispatcher",
    "NullSink",
    "RenderedAttributes",
    "SplitMarkup",
    "StreamSink",
    "TagType",
    "Text",
    "Tokens",
    "add_hook",
    "coerce_value",
    "escape_attribute",
    "exception_messages",
    "format_debug_entry",
    "get_classes",
    "get_hook_registry",
    "get_id",
    "hook",
    "hook_name",
    "hook_registry_context",
    "load_settings",
    "merge_defaults",
    "normalize_attributes",
    "remove_hook",
    "render",
    "resolve_args",
    "resolve_content",
    "sanitize_html_class",
    "set_hook_registry",
    "settings_from_env",
    "sink_from_config",
]

"""Primary public API for atomsmith.

atomsmith assembles small HTML fragments ("atoms") from a declarative
description and lets callers rewrite every intermediate value through named
hooks, e.g. ``section-title_markup``.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _pkg_version

from atomsmith.builder import (
    AtomBuilder,
    assemble,
    get_default_builder,
    normalize_attributes,
    render,
    resolve_args,
    resolve_content,
    set_default_builder,
)
from atomsmith.core.attributes import Empty, Text, Tokens, sanitize_html_class
from atomsmith.core.config import AtomsmithSettings, DebugConfig, load_settings
from atomsmith.core.exceptions import (
    AtomsmithError,
    ConfigurationError,
    HookRegistrationError,
    exception_messages,
)
from atomsmith.core.hooks import (
    HookDispatcher,
    HookRegistry,
    NullDispatcher,
    add_hook,
    get_hook_registry,
    hook,
    hook_registry_context,
    remove_hook,
)
from atomsmith.core.options import DEFAULT_OPTIONS, TagType
from atomsmith.core.rendering import Fragment, SplitMarkup


try:
    __version__ = _pkg_version("atomsmith")
except PackageNotFoundError:
    __version__ = "0.0.0"


__all__ = [
    "DEFAULT_OPTIONS",
    "AtomBuilder",
    "AtomsmithError",
    "AtomsmithSettings",
    "ConfigurationError",
    "DebugConfig",
    "Empty",
    "Fragment",
    "HookDispatcher",
    "HookRegistrationError",
    "HookRegistry",
    "NullDispatcher",
    "SplitMarkup",
    "TagType",
    "Text",
    "Tokens",
    "__version__",
    "add_hook",
    "assemble",
    "exception_messages",
    "get_default_builder",
    "get_hook_registry",
    "hook",
    "hook_registry_context",
    "load_settings",
    "normalize_attributes",
    "remove_hook",
    "render",
    "resolve_args",
    "resolve_content",
    "sanitize_html_class",
    "set_default_builder",
]

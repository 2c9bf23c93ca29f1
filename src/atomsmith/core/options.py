"""Option defaults, tag types and argument resolution."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from .hooks import HookDispatcher, hook_name, offer


class TagType(Enum):
    """Rendering branch selected for an atom."""

    STANDARD = "standard"
    """Content wrapped in an opening and a closing tag."""

    SELF_CLOSING = "selfClosing"
    """Attributes only, rendered as ``<tag ... />``."""

    SPLIT = "split"
    """Open and close tags returned separately for caller-side nesting."""

    EMPTY_IF_NO_CONTENT = "emptyIfNoContent"
    """Standard markup, or an empty string when there is no content."""

    CONTENT_ONLY = "contentOnly"
    """Content with its wrappers, tag and attributes dropped."""

    @classmethod
    def parse(cls, value: Any) -> TagType:
        """Return the tag type for ``value``, falling back to ``STANDARD``."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            member = _TAG_TYPE_LOOKUP.get(value.strip())
            if member is not None:
                return member
        return cls.STANDARD


_LEGACY_TAG_TYPES = {
    "": TagType.STANDARD,
    "self-closing": TagType.SELF_CLOSING,
    "false_without_content": TagType.EMPTY_IF_NO_CONTENT,
    "content-only": TagType.CONTENT_ONLY,
}

_TAG_TYPE_LOOKUP: dict[str, TagType] = {
    **{member.value: member for member in TagType},
    **{member.name.lower(): member for member in TagType},
    **_LEGACY_TAG_TYPES,
}


DEFAULT_OPTIONS: dict[str, Any] = {
    "tag": "div",
    "tag_type": TagType.STANDARD.value,
    "content": "",
    "attributes": {},
    "attribute_quote_style": '"',
    "before": "",
    "after": "",
    "suppress_hooks": False,
}

OPTION_ALIASES: dict[str, str] = {
    "tagType": "tag_type",
    "attributeQuoteStyle": "attribute_quote_style",
    "suppressHooks": "suppress_hooks",
    "suppress_filters": "suppress_hooks",
}


def normalize_option_keys(options: Mapping[str, Any] | None) -> dict[str, Any]:
    """Fold aliased option keys onto their canonical spelling.

    When both spellings are present the canonical key wins.
    """
    normalized: dict[str, Any] = {}
    if not options:
        return normalized
    for key, value in options.items():
        canonical = OPTION_ALIASES.get(key, key)
        if canonical != key and canonical in options:
            continue
        normalized[canonical] = value
    return normalized


def merge_defaults(
    options: Mapping[str, Any] | None, defaults: Mapping[str, Any] = DEFAULT_OPTIONS
) -> dict[str, Any]:
    """Merge ``options`` over ``defaults``; unknown keys pass through unchanged."""
    merged = {key: _fresh(value) for key, value in defaults.items()}
    merged.update(normalize_option_keys(options))
    return merged


def _fresh(value: Any) -> Any:
    # mutable defaults must not leak between calls
    if isinstance(value, dict):
        return dict(value)
    if isinstance(value, list):
        return list(value)
    return value


def get_option(options: Mapping[str, Any], key: str, default: Any = None) -> Any:
    """Read ``key`` from ``options``, falling back to its aliased spellings."""
    if key in options:
        return options[key]
    for alias, canonical in OPTION_ALIASES.items():
        if canonical == key and alias in options:
            return options[alias]
    return default


def hooks_suppressed(options: Mapping[str, Any]) -> bool:
    return bool(get_option(options, "suppress_hooks", False))


def quote_style(options: Mapping[str, Any]) -> str:
    style = get_option(options, "attribute_quote_style")
    if isinstance(style, str) and style:
        return style
    return DEFAULT_OPTIONS["attribute_quote_style"]


def resolve_args(
    name: str,
    options: Mapping[str, Any] | None,
    *,
    defaults: Mapping[str, Any] = DEFAULT_OPTIONS,
    dispatcher: HookDispatcher | None = None,
) -> dict[str, Any]:
    """Merge ``options`` over ``defaults`` and offer the result to ``{name}_args``.

    The hook may add, drop or change any key; its return value is adopted
    without further validation.
    """
    resolved = merge_defaults(options, defaults)
    return offer(
        dispatcher,
        hook_name(name, "args"),
        resolved,
        suppressed=hooks_suppressed(resolved),
    )


__all__ = [
    "DEFAULT_OPTIONS",
    "OPTION_ALIASES",
    "TagType",
    "get_option",
    "hooks_suppressed",
    "merge_defaults",
    "normalize_option_keys",
    "quote_style",
    "resolve_args",
]

"""Attribute normalisation for assembled atoms.

Raw attribute values come in three shapes, modelled as the :data:`AttributeValue`
sum type:

`Empty`
: rendered as a bare attribute name, e.g. ``disabled``.

`Text`
: a single string used as-is.

`Tokens`
: an ordered list of strings joined with single spaces.

Plain Python values (``""``, ``None``, ``str``, lists and tuples) are accepted
at the API boundary and coerced by :func:`coerce_value`.

``class`` and ``id`` run through dedicated pipelines: class names are split on
commas and sanitised one by one, ids collapse to their first token. Every other
attribute is escaped for inclusion in a quoted HTML attribute.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from html import escape
import re
from typing import Any, TypeAlias

from .hooks import HookDispatcher, hook_name, offer
from .options import hooks_suppressed, quote_style


@dataclass(frozen=True)
class Empty:
    """Attribute rendered without a value."""


@dataclass(frozen=True)
class Text:
    """Attribute value given as a single string."""

    value: str


@dataclass(frozen=True)
class Tokens:
    """Attribute value given as an ordered list of strings."""

    values: tuple[str, ...]


AttributeValue: TypeAlias = Empty | Text | Tokens

RenderedAttributes: TypeAlias = dict[str, str]

_PERCENT_OCTET = re.compile(r"%[a-fA-F0-9]{2}")
_UNSAFE_CLASS_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def coerce_value(raw: Any) -> AttributeValue:
    """Return the :data:`AttributeValue` variant matching ``raw``.

    Values that are neither strings nor sequences of strings degrade to
    :class:`Empty`.
    """
    if isinstance(raw, (Empty, Text, Tokens)):
        if isinstance(raw, Text) and raw.value == "":
            return Empty()
        return raw
    if isinstance(raw, str):
        return Text(raw) if raw != "" else Empty()
    if isinstance(raw, (list, tuple)):
        return Tokens(tuple(str(item) for item in raw if item is not None))
    return Empty()


def sanitize_html_class(value: str, fallback: str = "") -> str:
    """Strip a string down to characters valid in an HTML class or id.

    Percent-encoded octets are removed first, then everything outside
    ``A-Z a-z 0-9 _ -``. ``fallback`` is sanitised and returned when nothing
    survives.
    """
    sanitized = _UNSAFE_CLASS_CHARS.sub("", _PERCENT_OCTET.sub("", str(value)))
    if sanitized == "" and fallback:
        return sanitize_html_class(fallback)
    return sanitized


def escape_attribute(value: str) -> str:
    """Escape ``value`` for a single- or double-quoted attribute."""
    return escape(str(value), quote=True)


def _quoted(attribute: str, value: str, quote: str) -> str:
    return f"{attribute}={quote}{value}{quote}"


def get_classes(
    name: str,
    raw: Any,
    options: Mapping[str, Any],
    *,
    dispatcher: HookDispatcher | None = None,
) -> str:
    """Run the class pipeline and return the space-joined class list.

    Blank and repeated class names are dropped, first occurrence wins.
    """
    value = coerce_value(raw)
    if isinstance(value, Text):
        candidates = value.value.split(",")
    elif isinstance(value, Tokens):
        candidates = list(value.values)
    else:
        candidates = []

    classes = [sanitize_html_class(candidate) for candidate in candidates]
    classes = offer(
        dispatcher,
        hook_name(name, "classes"),
        classes,
        suppressed=hooks_suppressed(options),
    )
    unique = dict.fromkeys(str(item) for item in classes if item)
    return " ".join(unique)


def get_id(
    name: str,
    raw: Any,
    options: Mapping[str, Any],
    *,
    dispatcher: HookDispatcher | None = None,
) -> str | None:
    """Run the id pipeline; ``None`` means the element carries no id."""
    if isinstance(raw, Text):
        raw = raw.value
    if not isinstance(raw, str) or raw == "":
        return None

    tokens = raw.strip().split()
    element_id = sanitize_html_class(tokens[0]) if tokens else ""
    element_id = offer(
        dispatcher,
        hook_name(name, "id"),
        element_id,
        suppressed=hooks_suppressed(options),
    )
    return element_id or None


def render_value(
    name: str,
    attribute: str,
    raw: Any,
    options: Mapping[str, Any],
    *,
    dispatcher: HookDispatcher | None = None,
) -> str:
    """Render a generic attribute token."""
    value = coerce_value(raw)
    if isinstance(value, Empty):
        return attribute

    joined = value.value if isinstance(value, Text) else " ".join(value.values)
    joined = offer(
        dispatcher,
        hook_name(name, attribute, "value"),
        joined,
        suppressed=hooks_suppressed(options),
    )
    return _quoted(attribute, escape_attribute(joined), quote_style(options))


def normalize_attributes(
    name: str,
    raw_attributes: Mapping[str, Any] | None,
    options: Mapping[str, Any],
    *,
    dispatcher: HookDispatcher | None = None,
) -> RenderedAttributes:
    """Render ``raw_attributes`` into ordered ``name -> token`` pairs.

    A ``class`` attribute defaulting to the component name is appended when
    the caller did not supply one. An id that resolves to nothing is left out
    entirely.
    """
    attributes: dict[str, Any] = dict(raw_attributes) if isinstance(raw_attributes, Mapping) else {}
    if "class" not in attributes:
        attributes["class"] = name

    quote = quote_style(options)
    rendered: RenderedAttributes = {}
    for attribute, raw in attributes.items():
        attribute = str(attribute)
        if attribute == "class":
            classes = get_classes(name, raw, options, dispatcher=dispatcher)
            rendered[attribute] = _quoted(attribute, classes, quote)
        elif attribute == "id":
            element_id = get_id(name, raw, options, dispatcher=dispatcher)
            if element_id is not None:
                rendered[attribute] = _quoted(attribute, element_id, quote)
        else:
            rendered[attribute] = render_value(
                name, attribute, raw, options, dispatcher=dispatcher
            )

    return offer(
        dispatcher,
        hook_name(name, "attributes"),
        rendered,
        suppressed=hooks_suppressed(options),
    )


__all__ = [
    "AttributeValue",
    "Empty",
    "RenderedAttributes",
    "Text",
    "Tokens",
    "coerce_value",
    "escape_attribute",
    "get_classes",
    "get_id",
    "normalize_attributes",
    "render_value",
    "sanitize_html_class",
]

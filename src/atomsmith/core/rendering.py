"""Content resolution and tag-type dependent rendering."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import asdict, dataclass
from typing import Any, TypeAlias

from .hooks import HookDispatcher, hook_name, offer
from .options import DEFAULT_OPTIONS, TagType, get_option, hooks_suppressed


@dataclass(frozen=True)
class SplitMarkup(Mapping[str, str]):
    """Opening and closing markup returned for ``split`` atoms.

    The caller places its own inner markup between :attr:`open` and
    :attr:`close`; :meth:`wrap` does exactly that.
    """

    before: str
    open: str
    close: str
    after: str

    def wrap(self, inner: str = "") -> str:
        return f"{self.before}{self.open}{inner}{self.close}{self.after}"

    def as_dict(self) -> dict[str, str]:
        return asdict(self)

    def __getitem__(self, key: str) -> str:
        if key not in self._fields():
            raise KeyError(key)
        return getattr(self, key)

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields())

    def __len__(self) -> int:
        return len(self._fields())

    @staticmethod
    def _fields() -> tuple[str, ...]:
        return ("before", "open", "close", "after")


Fragment: TypeAlias = str | SplitMarkup


@dataclass(frozen=True)
class _Parts:
    tag: str
    attributes: str
    content: str
    before: str
    after: str

    @property
    def open(self) -> str:
        return f"<{self.tag} {self.attributes}>"

    @property
    def close(self) -> str:
        return f"</{self.tag}>"


def _render_standard(parts: _Parts) -> Fragment:
    return f"{parts.before}{parts.open}{parts.content}{parts.close}{parts.after}"


def _render_self_closing(parts: _Parts) -> Fragment:
    return f"{parts.before}<{parts.tag} {parts.attributes} />{parts.after}"


def _render_split(parts: _Parts) -> Fragment:
    return SplitMarkup(before=parts.before, open=parts.open, close=parts.close, after=parts.after)


def _render_empty_if_no_content(parts: _Parts) -> Fragment:
    if not parts.content:
        return ""
    return _render_standard(parts)


def _render_content_only(parts: _Parts) -> Fragment:
    return f"{parts.before}{parts.content}{parts.after}"


_RENDERERS: dict[TagType, Callable[[_Parts], Fragment]] = {
    TagType.STANDARD: _render_standard,
    TagType.SELF_CLOSING: _render_self_closing,
    TagType.SPLIT: _render_split,
    TagType.EMPTY_IF_NO_CONTENT: _render_empty_if_no_content,
    TagType.CONTENT_ONLY: _render_content_only,
}


def _text(options: Mapping[str, Any], key: str) -> str:
    value = options.get(key)
    if value is None:
        return DEFAULT_OPTIONS.get(key, "")
    return str(value)


def join_attributes(attributes: Mapping[str, str] | Sequence[str] | None) -> str:
    """Space-join rendered attribute tokens, keeping their order."""
    if not attributes:
        return ""
    if isinstance(attributes, Mapping):
        tokens = attributes.values()
    elif isinstance(attributes, str):
        tokens = [attributes]
    else:
        tokens = attributes
    return " ".join(str(token) for token in tokens if token)


def resolve_content(
    name: str, options: Mapping[str, Any], *, dispatcher: HookDispatcher | None = None
) -> str:
    """Return the inner content of the atom after the ``{name}_content`` hook."""
    content = options.get("content", "")
    if content is None:
        content = ""
    return offer(
        dispatcher,
        hook_name(name, "content"),
        content,
        suppressed=hooks_suppressed(options),
    )


def render(
    name: str,
    options: Mapping[str, Any],
    attributes: Mapping[str, str] | Sequence[str] | None,
    content: str = "",
    *,
    dispatcher: HookDispatcher | None = None,
) -> Fragment:
    """Combine tag, attributes and content according to the tag type."""
    parts = _Parts(
        tag=_text(options, "tag"),
        attributes=join_attributes(attributes),
        content="" if content is None else str(content),
        before=_text(options, "before"),
        after=_text(options, "after"),
    )
    tag_type = TagType.parse(get_option(options, "tag_type"))
    markup = _RENDERERS[tag_type](parts)
    return offer(
        dispatcher,
        hook_name(name, "markup"),
        markup,
        suppressed=hooks_suppressed(options),
    )


__all__ = [
    "Fragment",
    "SplitMarkup",
    "join_attributes",
    "render",
    "resolve_content",
]

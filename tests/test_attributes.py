from __future__ import annotations

import pytest

from atomsmith.core.attributes import (
    Empty,
    Text,
    Tokens,
    coerce_value,
    escape_attribute,
    get_classes,
    get_id,
    normalize_attributes,
    sanitize_html_class,
)
from atomsmith.core.hooks import HookRegistry, NullDispatcher
from atomsmith.core.options import merge_defaults


OPTIONS = merge_defaults({})
QUIET = NullDispatcher()


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("", Empty()),
        (None, Empty()),
        ("lazy", Text("lazy")),
        (["a", "b"], Tokens(("a", "b"))),
        (("a", None, 2), Tokens(("a", "2"))),
        (42, Empty()),
        ({"nested": True}, Empty()),
        (Text(""), Empty()),
        (Tokens(("x",)), Tokens(("x",))),
    ],
)
def test_coerce_value(raw: object, expected: object) -> None:
    assert coerce_value(raw) == expected


def test_sanitize_html_class_strips_unsafe_characters() -> None:
    assert sanitize_html_class(" hero banner!") == "herobanner"
    assert sanitize_html_class("caf%C3%A9-card") == "caf-card"
    assert sanitize_html_class("snake_case-ok") == "snake_case-ok"


def test_sanitize_html_class_uses_fallback() -> None:
    assert sanitize_html_class("***", fallback="card block") == "cardblock"
    assert sanitize_html_class("***") == ""


def test_escape_attribute_handles_both_quote_styles() -> None:
    assert escape_attribute('say "hi" & \'bye\'') == "say &quot;hi&quot; &amp; &#x27;bye&#x27;"


def test_class_pipeline_splits_commas_and_drops_blanks() -> None:
    rendered = normalize_attributes("card", {"class": "a, b ,,c"}, OPTIONS, dispatcher=QUIET)

    assert rendered == {"class": 'class="a b c"'}


def test_class_list_is_sanitized_token_by_token() -> None:
    assert get_classes("card", ["one", "t w o", ""], OPTIONS, dispatcher=QUIET) == "one two"


def test_class_defaults_to_component_name() -> None:
    rendered = normalize_attributes("section-title", {}, OPTIONS, dispatcher=QUIET)

    assert rendered == {"class": 'class="section-title"'}


def test_injected_class_follows_caller_attributes() -> None:
    rendered = normalize_attributes("card", {"role": "note"}, OPTIONS, dispatcher=QUIET)

    assert list(rendered) == ["role", "class"]


def test_id_collapses_to_first_token() -> None:
    rendered = normalize_attributes("card", {"id": "first second"}, OPTIONS, dispatcher=QUIET)

    assert rendered["id"] == 'id="first"'


@pytest.mark.parametrize("raw", ["", "   ", None, ["main"], 7, "!!!"])
def test_unusable_id_is_omitted(raw: object) -> None:
    rendered = normalize_attributes("card", {"id": raw}, OPTIONS, dispatcher=QUIET)

    assert "id" not in rendered
    assert 'id=""' not in rendered.values()


def test_get_id_returns_none_for_non_strings() -> None:
    assert get_id("card", ["main"], OPTIONS, dispatcher=QUIET) is None
    assert get_id("card", Text("  main extra "), OPTIONS, dispatcher=QUIET) == "main"


def test_generic_attributes_render_bare_joined_and_escaped() -> None:
    rendered = normalize_attributes(
        "field",
        {
            "disabled": "",
            "aria-describedby": ["hint", "error"],
            "title": 'Say "hi"',
            "tabindex": 3,
        },
        OPTIONS,
        dispatcher=QUIET,
    )

    assert rendered["disabled"] == "disabled"
    assert rendered["aria-describedby"] == 'aria-describedby="hint error"'
    assert rendered["title"] == 'title="Say &quot;hi&quot;"'
    assert rendered["tabindex"] == "tabindex"


def test_sum_type_values_are_accepted() -> None:
    rendered = normalize_attributes(
        "field",
        {"required": Empty(), "name": Text("email"), "rel": Tokens(("noopener", "nofollow"))},
        OPTIONS,
        dispatcher=QUIET,
    )

    assert rendered["required"] == "required"
    assert rendered["name"] == 'name="email"'
    assert rendered["rel"] == 'rel="noopener nofollow"'


def test_quote_style_is_applied() -> None:
    options = merge_defaults({"attribute_quote_style": "'"})

    rendered = normalize_attributes(
        "link", {"href": "/a", "id": "x", "class": "c"}, options, dispatcher=QUIET
    )

    assert list(rendered.values()) == ["href='/a'", "id='x'", "class='c'"]


def test_attribute_order_is_preserved() -> None:
    rendered = normalize_attributes(
        "card", {"id": "main", "class": "box", "data-x": "1"}, OPTIONS, dispatcher=QUIET
    )

    assert list(rendered) == ["id", "class", "data-x"]


def test_malformed_attribute_collection_degrades_to_class_only() -> None:
    rendered = normalize_attributes("card", ["not", "a", "mapping"], OPTIONS, dispatcher=QUIET)

    assert rendered == {"class": 'class="card"'}


def test_attribute_hooks_fire_in_order(registry: HookRegistry) -> None:
    fired: list[str] = []

    def _track(name: str):
        def _callback(value):
            fired.append(name)
            return value

        return _callback

    for name in ("card_href_value", "card_id", "card_classes", "card_attributes"):
        registry.add(name, _track(name))

    normalize_attributes("card", {"href": "/x", "id": "main"}, OPTIONS, dispatcher=registry)

    assert fired == ["card_href_value", "card_id", "card_classes", "card_attributes"]


def test_value_hook_rewrites_before_escaping(registry: HookRegistry) -> None:
    registry.add("card_href_value", lambda value: f"{value}?ref=<nav>")

    rendered = normalize_attributes("card", {"href": "/x"}, OPTIONS, dispatcher=registry)

    assert rendered["href"] == 'href="/x?ref=&lt;nav&gt;"'


def test_bare_attribute_skips_value_hook(registry: HookRegistry) -> None:
    calls: list[str] = []
    registry.add("card_hidden_value", lambda value: calls.append(value) or value)

    normalize_attributes("card", {"hidden": ""}, OPTIONS, dispatcher=registry)

    assert calls == []


def test_classes_hook_receives_sanitized_list(registry: HookRegistry) -> None:
    seen: list[list[str]] = []

    def _extend(classes: list[str]) -> list[str]:
        seen.append(list(classes))
        return [*classes, "is-active", ""]

    registry.add("card_classes", _extend)

    rendered = normalize_attributes("card", {"class": "card, big!"}, OPTIONS, dispatcher=registry)

    assert seen == [["card", "big"]]
    assert rendered["class"] == 'class="card big is-active"'


def test_id_hook_returning_empty_omits_id(registry: HookRegistry) -> None:
    registry.add("card_id", lambda value: "")

    rendered = normalize_attributes("card", {"id": "main"}, OPTIONS, dispatcher=registry)

    assert "id" not in rendered


def test_attributes_hook_may_reorder(registry: HookRegistry) -> None:
    registry.add("card_attributes", lambda attrs: dict(reversed(list(attrs.items()))))

    rendered = normalize_attributes(
        "card", {"id": "main", "role": "region"}, OPTIONS, dispatcher=registry
    )

    assert list(rendered) == ["class", "role", "id"]


def test_hooks_never_fire_when_suppressed(registry: HookRegistry) -> None:
    calls: list[object] = []
    for name in ("card_href_value", "card_id", "card_classes", "card_attributes"):
        registry.add(name, lambda value: calls.append(value) or value)

    options = merge_defaults({"suppress_hooks": True})
    rendered = normalize_attributes("card", {"href": "/x", "id": "a"}, options, dispatcher=registry)

    assert calls == []
    assert rendered == {"href": 'href="/x"', "id": 'id="a"', "class": 'class="card"'}


def test_repeated_class_names_render_once() -> None:
    from_text = normalize_attributes("card", {"class": "a, a, b"}, OPTIONS, dispatcher=QUIET)
    from_list = normalize_attributes(
        "card", {"class": ["b", "a", "b", "", "a"]}, OPTIONS, dispatcher=QUIET
    )

    assert from_text["class"] == 'class="a b"'
    assert from_list["class"] == 'class="b a"'


def test_classes_hook_duplicates_are_dropped(registry: HookRegistry) -> None:
    registry.add("card_classes", lambda classes: [*classes, "card"])

    assert get_classes("card", "card, wide", OPTIONS, dispatcher=registry) == "card wide"

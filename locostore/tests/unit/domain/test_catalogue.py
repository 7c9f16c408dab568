from __future__ import annotations

import pytest

from locostore.domain.catalogue import MessageCatalogue
from locostore.domain.message import Message


def test_get_falls_back_to_key() -> None:
    catalogue = MessageCatalogue("fr", {"messages": {"hello": "Bonjour"}})

    assert catalogue.get("hello") == "Bonjour"
    assert catalogue.get("missing") == "missing"
    assert catalogue.has("hello")
    assert not catalogue.has("hello", "admin")


def test_add_catalogue_merges_messages_and_metadata() -> None:
    target = MessageCatalogue("fr", {"messages": {"a": "A", "b": "old"}})
    source = MessageCatalogue("fr", {"messages": {"b": "B"}, "admin": {"c": "C"}})
    source.set_metadata("c", {"notes": [{"content": "n"}]}, "admin")

    target.add_catalogue(source)

    assert target.all() == {"messages": {"a": "A", "b": "B"}, "admin": {"c": "C"}}
    assert target.get_metadata("c", "admin") == {"notes": [{"content": "n"}]}


def test_add_catalogue_rejects_other_locale() -> None:
    with pytest.raises(ValueError):
        MessageCatalogue("fr").add_catalogue(MessageCatalogue("de"))


def test_messages_yields_value_objects_with_metadata() -> None:
    catalogue = MessageCatalogue("fr", {"messages": {"items": "%count% éléments"}})
    catalogue.set_metadata("items", {"parameters": ["%count%"]}, "messages")

    messages = list(catalogue.messages("messages"))

    assert messages == [
        Message("items", "messages", "fr", "%count% éléments", {"parameters": ["%count%"]})
    ]
    assert messages[0].get_meta("parameters") == ["%count%"]
    assert messages[0].get_meta("missing", "x") == "x"


def test_get_metadata_without_key_returns_domain_metadata() -> None:
    catalogue = MessageCatalogue("fr")
    catalogue.set_metadata("a", {"x": 1})

    assert catalogue.get_metadata() == {"a": {"x": 1}}
    assert catalogue.get_metadata("b") is None

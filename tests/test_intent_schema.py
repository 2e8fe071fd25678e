"""Tests for the ParsedIntent/Client schema and its derived flags."""

from __future__ import annotations

import pytest

from src.intent.schema import Client, DocumentType, ParsedIntent, clients_from_obj


def test_empty_intent_has_no_flags() -> None:
    intent = ParsedIntent()
    assert intent.document_type is None
    assert intent.client_match is None
    assert intent.project_title is None
    assert intent.has_document_type is False
    assert intent.has_client is False


def test_flags_follow_fields() -> None:
    client = Client(first_name="Jean", last_name="Dupont")
    intent = ParsedIntent(document_type=DocumentType.invoice, client_match=client)
    assert intent.has_document_type is True
    assert intent.has_client is True
    assert intent.client_match is client


def test_flags_are_serialized() -> None:
    dumped = ParsedIntent(document_type=DocumentType.quote).model_dump(mode="json")
    assert dumped["document_type"] == "quote"
    assert dumped["has_document_type"] is True
    assert dumped["has_client"] is False


def test_flags_cannot_be_passed_in() -> None:
    with pytest.raises(ValueError):
        ParsedIntent(has_client=True)  # type: ignore[call-arg]


def test_client_keeps_extra_fields_and_is_frozen() -> None:
    client = Client.model_validate({"id": "c1", "first_name": "Jean", "siret": "123"})
    assert client.model_extra == {"siret": "123"}
    assert client.display_name == "Jean"
    with pytest.raises(ValueError):
        client.first_name = "Paul"  # type: ignore[misc]


def test_display_name_skips_missing_parts() -> None:
    assert Client(last_name="Dupont").display_name == "Dupont"
    assert Client().display_name == ""


def test_clients_from_obj_requires_list() -> None:
    assert clients_from_obj([{"first_name": "A"}])[0].first_name == "A"
    with pytest.raises(ValueError):
        clients_from_obj({"first_name": "A"})

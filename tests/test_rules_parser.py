"""Tests for the deterministic rules-based French intent parser."""

from __future__ import annotations

import pytest

from src.intent.rules_parser import parse_user_intent
from src.intent.schema import Client, DocumentType

JEAN = Client(id="c1", first_name="Jean", last_name="Dupont")


def test_parse_quote_with_client_and_project() -> None:
    intent = parse_user_intent(
        "Je voudrais un devis pour monsieur Dupont concernant le chantier de rénovation toiture",
        [JEAN],
    )
    assert intent.document_type == DocumentType.quote
    assert intent.client_match is JEAN
    assert intent.project_title == "Rénovation toiture"
    assert intent.has_document_type is True
    assert intent.has_client is True


def test_invoice_keyword_before_quote_keyword() -> None:
    intent = parse_user_intent("facture pour Dupont, devis non merci", [JEAN])
    assert intent.document_type == DocumentType.invoice
    assert intent.client_match is JEAN


def test_nothing_detected() -> None:
    intent = parse_user_intent("Bonjour", [JEAN])
    assert intent.document_type is None
    assert intent.client_match is None
    assert intent.project_title is None
    assert intent.has_document_type is False
    assert intent.has_client is False


def test_short_objet_capture_is_not_returned() -> None:
    intent = parse_user_intent("Une facture, objet: a", [JEAN])
    assert intent.project_title is None


def test_empty_roster_never_matches() -> None:
    intent = parse_user_intent("Un devis pour monsieur Dupont", [])
    assert intent.client_match is None
    assert intent.has_client is False


def test_message_is_trimmed_and_lowercased() -> None:
    intent = parse_user_intent("   FACTURE CHEZ MADAME DUPONT   ", [JEAN])
    assert intent.document_type == DocumentType.invoice
    assert intent.client_match is JEAN


def test_parse_is_pure_and_repeatable() -> None:
    roster = [JEAN]
    message = "Devis pour Jean Dupont, projet: terrasse bois"
    first = parse_user_intent(message, roster)
    second = parse_user_intent(message, roster)
    assert first == second
    assert first is not second
    assert first.project_title == "Terrasse bois"


@pytest.mark.parametrize(
    "message",
    ["", "devis", "facture pour dupont", "objet: abcd", "chez personne", "pour le client x"],
)
def test_flags_match_fields(message: str) -> None:
    intent = parse_user_intent(message, [JEAN])
    assert intent.has_document_type == (intent.document_type is not None)
    assert intent.has_client == (intent.client_match is not None)


def test_roster_is_scanned_in_order(roster: list[Client]) -> None:
    intent = parse_user_intent("Un devis chez Martin, projet: véranda", roster)
    assert intent.document_type == DocumentType.quote
    assert intent.client_match is roster[2]
    assert intent.project_title == "Véranda"


def test_fallback_scan_without_cue_phrase(roster: list[Client]) -> None:
    intent = parse_user_intent("Marie Curie a validé, il faut facturer", roster)
    assert intent.document_type == DocumentType.invoice
    assert intent.client_match is roster[1]

"""Tests for cue-pattern extraction and roster matching."""

from __future__ import annotations

from src.intent.clients import find_client_in_message, iter_candidate_names, match_client_by_name
from src.intent.schema import Client

JEAN = Client(id="c1", first_name="Jean", last_name="Dupont")
MARIE = Client(id="c2", first_name="Marie", last_name="Curie")
LEA = Client(id="c3", first_name="Léa", last_name="Martin")
PAUL = Client(id="c4", first_name="Paul", last_name="Li")


def test_empty_roster_returns_none() -> None:
    assert find_client_in_message("un devis pour monsieur dupont", []) is None


def test_pour_monsieur_pattern_resolves_by_last_name() -> None:
    text = "je voudrais un devis pour monsieur dupont concernant le chantier"
    assert next(iter_candidate_names(text)) == "dupont concernant"
    assert find_client_in_message(text, [MARIE, JEAN]) is JEAN


def test_pour_le_client_pattern() -> None:
    assert find_client_in_message("facture pour le client marie curie", [JEAN, MARIE]) is MARIE


def test_client_colon_pattern() -> None:
    assert find_client_in_message("nouvelle facture, client: curie", [JEAN, MARIE]) is MARIE


def test_chez_madame_pattern() -> None:
    assert find_client_in_message("travaux chez madame curie", [JEAN, MARIE]) is MARIE


def test_de_mme_pattern() -> None:
    assert find_client_in_message("la cuisine de mme. curie", [JEAN, MARIE]) is MARIE


def test_unresolved_pattern_moves_on_to_next_pattern() -> None:
    # "pour toi" resolves to nobody; "chez dupont" then resolves.
    assert find_client_in_message("un devis pour toi chez dupont", [JEAN]) is JEAN


def test_roster_order_decides_between_matches() -> None:
    twin = Client(id="c9", first_name="Anne", last_name="Dupont")
    assert find_client_in_message("facture pour dupont", [twin, JEAN]) is twin
    assert find_client_in_message("facture pour dupont", [JEAN, twin]) is JEAN


def test_match_client_by_name_rules() -> None:
    roster = [JEAN]
    assert match_client_by_name("jean dupont", roster) is JEAN
    assert match_client_by_name("dupont", roster) is JEAN
    assert match_client_by_name("jean", roster) is JEAN
    assert match_client_by_name("an dup", roster) is JEAN  # contained in the full name
    assert match_client_by_name("jean dupont junior", roster) is JEAN  # contains the full name
    assert match_client_by_name("dupont et fils", roster) is JEAN  # contains the last name
    assert match_client_by_name("martin", roster) is None


def test_fallback_scan_full_name() -> None:
    assert find_client_in_message("rappeler marie curie demain", [JEAN, MARIE]) is MARIE


def test_fallback_scan_last_name_needs_three_letters() -> None:
    assert find_client_in_message("appel avec li ce matin", [PAUL]) is None
    assert find_client_in_message("appel avec martin ce matin", [LEA]) is LEA


def test_fallback_first_name_must_be_a_whole_token() -> None:
    roster = [Client(first_name="Marc", last_name="Ab")]
    assert find_client_in_message("le marché est fini", roster) is None
    assert find_client_in_message("appeler marc demain", roster) is roster[0]


def test_short_first_name_is_not_used_in_fallback() -> None:
    roster = [Client(first_name="Léo", last_name="Xy")]
    assert find_client_in_message("appeler léo demain", roster) is None


def test_client_without_last_name() -> None:
    roster = [Client(first_name="Sophie")]
    assert find_client_in_message("un devis pour sophie", roster) is roster[0]


def test_no_match_returns_none() -> None:
    assert find_client_in_message("bonjour", [JEAN, MARIE]) is None

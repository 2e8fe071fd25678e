"""Tests for project title extraction."""

from __future__ import annotations

from src.intent.project import clean_project_title, extract_project_title


def test_label_with_colon() -> None:
    assert extract_project_title("devis, projet: extension garage, merci") == "Extension garage"
    assert extract_project_title("chantier : salle de bain") == "Salle de bain"


def test_concernant_le_chantier_de() -> None:
    text = "je voudrais un devis pour monsieur dupont concernant le chantier de rénovation toiture"
    assert extract_project_title(text) == "Rénovation toiture"


def test_pour_les_travaux() -> None:
    assert extract_project_title("facture pour travaux de peinture.") == "Peinture"


def test_objet_label() -> None:
    assert extract_project_title("objet: pose de parquet\nmerci") == "Pose de parquet"


def test_capture_stops_at_comma_period_newline() -> None:
    assert extract_project_title("projet: cuisine, puis salon") == "Cuisine"
    assert extract_project_title("projet: cuisine. salon") == "Cuisine"


def test_short_capture_is_rejected() -> None:
    assert extract_project_title("objet: a") is None
    assert extract_project_title("projet: abc") is None


def test_rejected_capture_does_not_block_later_pattern() -> None:
    text = "projet: ab, concernant le chantier de ravalement façade"
    assert extract_project_title(text) == "Ravalement façade"


def test_too_long_capture_is_rejected() -> None:
    assert extract_project_title("objet: " + "x" * 100) is None
    assert extract_project_title("objet: " + "x" * 99) == "X" + "x" * 98


def test_no_label() -> None:
    assert extract_project_title("bonjour") is None


def test_clean_project_title_bounds() -> None:
    assert clean_project_title("  abcd ") == "Abcd"
    assert clean_project_title("abc") is None
    assert clean_project_title(None) is None

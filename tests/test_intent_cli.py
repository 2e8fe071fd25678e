"""Tests for the command-line parser entry point."""

from __future__ import annotations

import json

import pytest

from src.intent.cli import main


def test_cli_prints_intent_json(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    roster_path = tmp_path / "roster.json"
    roster_path.write_text(
        json.dumps([{"id": "c1", "first_name": "Jean", "last_name": "Dupont"}]),
        encoding="utf-8",
    )

    exit_code = main(
        ["Un devis pour monsieur Dupont, objet: salle de bain", "--clients", str(roster_path)]
    )

    assert exit_code == 0
    output = json.loads(capsys.readouterr().out)
    assert output["source"] == "rules"
    assert output["document_type"] == "quote"
    assert output["client_match"]["id"] == "c1"
    assert output["project_title"] == "Salle de bain"
    assert output["has_client"] is True


def test_cli_without_roster(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["Bonjour"]) == 0
    output = json.loads(capsys.readouterr().out)
    assert output["client_match"] is None
    assert output["has_document_type"] is False

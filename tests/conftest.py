"""Pytest configuration and shared fixtures.

The repository uses a flat `src/` layout. This conftest ensures tests can import from the `src.*`
namespace when running `pytest` from a checkout without installing the package.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from src.intent.schema import Client  # noqa: E402


@pytest.fixture
def roster() -> list[Client]:
    """A small company roster; order matters to the matchers."""

    return [
        Client(id="c1", first_name="Jean", last_name="Dupont"),
        Client(id="c2", first_name="Marie", last_name="Curie"),
        Client(id="c3", first_name="Léa", last_name="Martin"),
    ]

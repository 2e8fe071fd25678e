"""Rules-based French intent parser (baseline).

This parser is deterministic and cannot fail:
    - document type comes from keyword scoring with a first-occurrence tie-break,
    - the client comes from cue-phrase extraction, then a roster scan,
    - the project title comes from label phrases.

The three extractors are independent and share only the normalized text.
"""

from __future__ import annotations

from collections.abc import Sequence

from src.intent.clients import find_client_in_message
from src.intent.dictionaries import detect_document_type
from src.intent.normalize import normalize_text
from src.intent.project import extract_project_title
from src.intent.schema import Client, ParsedIntent


def parse_user_intent(message: str, clients: Sequence[Client]) -> ParsedIntent:
    """Parse a user message into a `ParsedIntent`.

    Absent matches are reported as `None` fields; no exception is raised for them.
    """

    normalized = normalize_text(message)

    return ParsedIntent(
        document_type=detect_document_type(normalized),
        client_match=find_client_in_message(normalized, clients),
        project_title=extract_project_title(normalized),
    )

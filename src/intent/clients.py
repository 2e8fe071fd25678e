"""Client matching against a caller-supplied roster.

Matching runs in two passes:
    1) cue-phrase patterns ("pour monsieur X", "client: X", "chez X", "de X") extract a candidate
       name which is resolved against the roster with permissive containment rules;
    2) if no pattern resolves, every roster entry is looked up directly in the text.

Roster order is significant everywhere: the first client that satisfies a rule wins.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence

from src.intent.schema import Client

_NAME_WORD = r"[a-zàâäéèêëïîôùûüç\-]+"
_NAME = rf"({_NAME_WORD}(?:\s+{_NAME_WORD})?)"
_TITLE = r"(?:monsieur|madame|m\.|mme\.?)?"

# Priority order is part of the contract: the first pattern whose capture resolves wins.
CLIENT_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"pour\s+(?:le\s+client\s+)?{_TITLE}\s*{_NAME}", flags=re.IGNORECASE),
    re.compile(rf"client\s*:?\s*{_NAME}", flags=re.IGNORECASE),
    re.compile(rf"chez\s+{_TITLE}\s*{_NAME}", flags=re.IGNORECASE),
    re.compile(rf"de\s+{_TITLE}\s*{_NAME}", flags=re.IGNORECASE),
)


def _name_parts(client: Client) -> tuple[str, str, str]:
    """Return `(full_name, last_name, first_name)` lowercased, missing parts as empty strings."""

    full_name = client.display_name.lower()
    last_name = (client.last_name or "").lower()
    first_name = (client.first_name or "").lower()
    return full_name, last_name, first_name


def match_client_by_name(name: str, clients: Sequence[Client]) -> Client | None:
    """Resolve an extracted (lowercased) name against the roster.

    A client matches on exact full/last/first name, on containment of the name in the full name
    or the reverse, or when the name contains the client's last name.
    """

    for client in clients:
        full_name, last_name, first_name = _name_parts(client)

        if name in (full_name, last_name, first_name):
            return client
        if name in full_name or full_name in name:
            return client
        if last_name and last_name in name:
            return client

    return None


def iter_candidate_names(text: str) -> Iterator[str]:
    """Yield the trimmed, lowercased capture of each matching cue pattern, in priority order."""

    for pattern in CLIENT_PATTERNS:
        match = pattern.search(text)
        if match and match.group(1):
            yield match.group(1).strip().lower()


def _scan_roster(text: str, clients: Sequence[Client]) -> Client | None:
    tokens = text.split()
    for client in clients:
        full_name, last_name, first_name = _name_parts(client)

        if full_name and full_name in text:
            return client
        if len(last_name) > 2 and last_name in text:
            return client
        # Whole-token check keeps short first names from matching inside unrelated words.
        if len(first_name) > 3 and first_name in text and first_name in tokens:
            return client

    return None


def find_client_in_message(text: str, clients: Sequence[Client]) -> Client | None:
    """Find the roster client referenced by a normalized message.

    Returns:
        The matching roster entry itself (never a copy), or `None`.
    """

    if not clients:
        return None

    for name in iter_candidate_names(text):
        client = match_client_by_name(name, clients)
        if client is not None:
            return client

    return _scan_roster(text, clients)

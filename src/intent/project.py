"""Project title extraction from label phrases ("projet: ...", "pour le chantier de ...")."""

from __future__ import annotations

import re

_CAPTURE = r"([^,.\n]+)"

TITLE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"(?:projet|chantier|travaux)\s*:\s*{_CAPTURE}", flags=re.IGNORECASE),
    re.compile(
        rf"(?:pour|concernant)\s+(?:le\s+)?(?:projet|chantier|travaux)\s+(?:de\s+)?{_CAPTURE}",
        flags=re.IGNORECASE,
    ),
    re.compile(rf"objet\s*:\s*{_CAPTURE}", flags=re.IGNORECASE),
)

MIN_TITLE_LENGTH = 3
MAX_TITLE_LENGTH = 100


def clean_project_title(raw: str | None) -> str | None:
    """Trim and capitalize a candidate title; reject it unless 3 < length < 100."""

    title = (raw or "").strip()
    if not MIN_TITLE_LENGTH < len(title) < MAX_TITLE_LENGTH:
        return None
    return title[0].upper() + title[1:]


def extract_project_title(text: str) -> str | None:
    """Extract a project title from normalized text.

    Patterns are tried in order. A capture rejected by the length bound does not stop the scan.
    """

    for pattern in TITLE_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        title = clean_project_title(match.group(1))
        if title is not None:
            return title
    return None

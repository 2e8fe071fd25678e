"""Text normalization for deterministic intent parsing."""

from __future__ import annotations


def normalize_text(text: str) -> str:
    """Normalize a user message for rules-based parsing.

    Normalization is intentionally minimal: surrounding whitespace is trimmed and the text is
    lowercased. Punctuation is kept because the extractors rely on it (`objet:`, `m.`, commas
    ending a project title).
    """

    return (text or "").strip().lower()

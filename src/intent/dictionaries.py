"""French keyword dictionaries for document-type detection.

These lists are used by the rules-based parser and should remain small and deterministic.
Matching is plain substring containment on normalized (lowercased) text, so "facturer" also
matches through "facture".
"""

from __future__ import annotations

from collections.abc import Iterable

from src.intent.schema import DocumentType

QUOTE_KEYWORDS: tuple[str, ...] = (
    "devis",
    "estimation",
    "chiffrage",
    "cotation",
    "proposer",
    "estimer",
)

INVOICE_KEYWORDS: tuple[str, ...] = (
    "facture",
    "facturer",
    "facturation",
    "note",
    "reçu",
)


def has_any_keyword(text: str, keywords: Iterable[str]) -> bool:
    """Whether any keyword occurs as a substring of the text."""

    return any(keyword in text for keyword in keywords)


def first_keyword_index(text: str, keywords: Iterable[str]) -> int | None:
    """Return the lowest index at which any of the keywords starts, or `None` if none occurs."""

    indexes = [idx for idx in (text.find(k) for k in keywords) if idx >= 0]
    return min(indexes) if indexes else None


def detect_document_type(text: str) -> DocumentType | None:
    """Detect whether the text asks for a quote or an invoice.

    When keywords from both sets are present, the set whose earliest keyword comes first wins.
    Equal start indexes resolve to a quote. With the current lists no quote keyword shares a first
    letter with an invoice keyword, so a tie cannot happen on real text.
    """

    has_quote = has_any_keyword(text, QUOTE_KEYWORDS)
    has_invoice = has_any_keyword(text, INVOICE_KEYWORDS)

    if has_invoice and not has_quote:
        return DocumentType.invoice
    if has_quote and not has_invoice:
        return DocumentType.quote
    if has_quote and has_invoice:
        quote_index = first_keyword_index(text, QUOTE_KEYWORDS)
        invoice_index = first_keyword_index(text, INVOICE_KEYWORDS)
        assert quote_index is not None and invoice_index is not None
        return DocumentType.invoice if invoice_index < quote_index else DocumentType.quote

    return None

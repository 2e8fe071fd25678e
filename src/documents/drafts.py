"""Draft factories for quotes and invoices.

Drafts can be created empty, converted from an accepted quote, or seeded from a parsed chat
intent (document type picks the template, client and project title are pre-filled).
"""

from __future__ import annotations

from datetime import date, timedelta

from src.documents.schema import DocumentClient, DocumentCompany, InvoiceData, QuoteData
from src.intent.schema import Client, DocumentType, ParsedIntent

INVOICE_PAYMENT_DELAY = timedelta(days=30)
DEFAULT_QUOTE_VALIDITY = "1 mois"


def create_empty_quote(
        company: DocumentCompany,
        quote_number: str,
        default_vat_rate: float = 10,
        *,
        today: date | None = None,
) -> QuoteData:
    return QuoteData(
        number=quote_number,
        date=today or date.today(),
        validity=DEFAULT_QUOTE_VALIDITY,
        company=company,
        vat_rate=default_vat_rate,
    )


def create_empty_invoice(
        company: DocumentCompany,
        invoice_number: str,
        default_vat_rate: float = 10,
        *,
        today: date | None = None,
) -> InvoiceData:
    issued = today or date.today()
    return InvoiceData(
        number=invoice_number,
        date=issued,
        due_date=issued + INVOICE_PAYMENT_DELAY,
        company=company,
        vat_rate=default_vat_rate,
    )


def convert_quote_to_invoice(
        quote: QuoteData,
        invoice_number: str,
        *,
        today: date | None = None,
) -> InvoiceData:
    """Turn an accepted quote into an invoice, keeping its content and referencing its number."""

    issued = today or date.today()
    return InvoiceData(
        number=invoice_number,
        date=issued,
        due_date=issued + INVOICE_PAYMENT_DELAY,
        company=quote.company,
        client=quote.client,
        project_title=quote.project_title,
        sections=quote.sections,
        total_ht=quote.total_ht,
        vat_rate=quote.vat_rate,
        vat_amount=quote.vat_amount,
        deposit=quote.deposit,
        total_ttc=quote.total_ttc,
        payment_conditions=quote.payment_conditions,
        legal_notice=quote.legal_notice,
        quote_number=quote.number,
    )


def document_client_from_client(client: Client) -> DocumentClient:
    return DocumentClient(
        id=client.id,
        name=client.display_name or None,
        phone=client.phone or "",
        email=client.email or "",
    )


def draft_from_intent(
        intent: ParsedIntent,
        company: DocumentCompany,
        *,
        quote_number: str,
        invoice_number: str,
        default_vat_rate: float = 10,
        today: date | None = None,
) -> QuoteData | InvoiceData | None:
    """Seed a new draft from a parsed intent.

    Returns:
        A quote or invoice draft, or `None` when the intent has no document type.
    """

    if intent.document_type is None:
        return None

    draft: QuoteData | InvoiceData
    if intent.document_type == DocumentType.quote:
        draft = create_empty_quote(company, quote_number, default_vat_rate, today=today)
    else:
        draft = create_empty_invoice(company, invoice_number, default_vat_rate, today=today)

    update: dict[str, object] = {"payment_conditions": company.payment_terms or ""}
    if intent.client_match is not None:
        update["client"] = document_client_from_client(intent.client_match)
    if intent.project_title is not None:
        update["project_title"] = intent.project_title
    return draft.model_copy(update=update)

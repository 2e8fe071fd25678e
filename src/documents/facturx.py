"""Factur-X (EN 16931, UN/CEFACT Cross Industry Invoice) XML export for invoices.

The XML is the structured part of a Factur-X invoice; embedding it into the PDF/A is left to
the PDF renderer. Elements are emitted in CII schema order.
"""

from __future__ import annotations

import datetime as dt
import re
import xml.etree.ElementTree as ET
from collections.abc import Iterator, Sequence
from typing import Literal

from src.documents.schema import InvoiceData, LineItem, Section
from src.documents.totals import round_cents, round_half_up

FacturXProfile = Literal["MINIMUM", "BASIC", "EN16931"]

NAMESPACES: dict[str, str] = {
    "rsm": "urn:un:unece:uncefact:data:standard:CrossIndustryInvoice:100",
    "ram": "urn:un:unece:uncefact:data:standard:ReusableAggregateBusinessInformationEntity:100",
    "udt": "urn:un:unece:uncefact:data:standard:UnqualifiedDataType:100",
    "qdt": "urn:un:unece:uncefact:data:standard:QualifiedDataType:100",
}

GUIDELINE_IDS: dict[str, str] = {
    "MINIMUM": "urn:factur-x.eu:1p0:minimum",
    "BASIC": "urn:cen.eu:en16931:2017#compliant#urn:factur-x.eu:1p0:basic",
    "EN16931": "urn:cen.eu:en16931:2017",
}

INVOICE_TYPE_CODE = "380"
CURRENCY = "EUR"
COUNTRY = "FR"
DEFAULT_PAYMENT_TERMS = "Paiement à réception"
# UN/ECE rec. 20 "one" (unit); rec. 5305 "S" standard VAT category.
UNIT_CODE = "C62"
VAT_CATEGORY = "S"
SIRET_SCHEME = "0002"
EMAIL_SCHEME = "EM"

for _prefix, _uri in NAMESPACES.items():
    ET.register_namespace(_prefix, _uri)


def _tag(qname: str) -> str:
    prefix, local = qname.split(":", 1)
    return f"{{{NAMESPACES[prefix]}}}{local}"


def _sub(
        parent: ET.Element,
        qname: str,
        text: str | None = None,
        attrib: dict[str, str] | None = None,
) -> ET.Element:
    element = ET.SubElement(parent, _tag(qname), attrib or {})
    if text is not None:
        element.text = text
    return element


def format_date(value: dt.date) -> str:
    """CII date format 102 (`YYYYMMDD`)."""

    return value.strftime("%Y%m%d")


def format_amount(amount: float) -> str:
    return f"{round_cents(amount):.2f}"


def _format_decimal(value: float) -> str:
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return text if text not in ("", "-0") else "0"


def sanitize_document_id(number: str) -> str:
    return re.sub(r"[^A-Za-z0-9]", "-", number)


def split_city(city: str) -> tuple[str, str]:
    """Split `"75001 Paris"` into `("75001", "Paris")`; without a leading postcode, `("", city)`."""

    parts = city.strip().split(maxsplit=1)
    if parts and parts[0].isdigit():
        return parts[0], parts[1] if len(parts) > 1 else ""
    return "", city.strip()


def facturx_filename(invoice: InvoiceData) -> str:
    return f"Facture_{invoice.number}_facturx.xml"


def _iter_lines(sections: Sequence[Section]) -> Iterator[LineItem]:
    for section in sections:
        for subsection in section.subsections:
            yield from subsection.lines


def _line_rate(line: LineItem, global_vat_rate: float) -> float:
    return line.vat_rate if line.vat_rate is not None else global_vat_rate


def vat_breakdown(
        sections: Sequence[Section],
        global_vat_rate: float,
) -> list[tuple[float, float, float]]:
    """Group lines by VAT rate: `(rate, basis_ht, vat_amount)` in order of first appearance.

    Per-group VAT uses the same per-line cent rounding as `calculate_totals`, so the groups add up
    to the document's VAT when every line carries the rate it was totalled with.
    """

    groups: dict[float, tuple[int, float]] = {}
    for line in _iter_lines(sections):
        rate = _line_rate(line, global_vat_rate)
        line_cents = round_half_up(line.total_ht * 100)
        basis_cents, vat_cents = groups.get(rate, (0, 0.0))
        vat_cents += round_half_up(line_cents * rate) / 100
        groups[rate] = (basis_cents + line_cents, vat_cents)

    return [
        (rate, basis_cents / 100, round_half_up(vat_cents) / 100)
        for rate, (basis_cents, vat_cents) in groups.items()
    ]


def _trade_party(
        parent: ET.Element,
        qname: str,
        *,
        name: str,
        address: str,
        city: str,
        phone: str,
        email: str,
        siret: str | None,
) -> None:
    party = _sub(parent, qname)
    _sub(party, "ram:Name", name)

    if siret:
        legal = _sub(party, "ram:SpecifiedLegalOrganization")
        _sub(legal, "ram:ID", siret, {"schemeID": SIRET_SCHEME})

    if phone:
        contact = _sub(party, "ram:DefinedTradeContact")
        telephone = _sub(contact, "ram:TelephoneUniversalCommunication")
        _sub(telephone, "ram:CompleteNumber", phone)

    postcode, city_name = split_city(city)
    postal = _sub(party, "ram:PostalTradeAddress")
    if postcode:
        _sub(postal, "ram:PostcodeCode", postcode)
    _sub(postal, "ram:LineOne", address)
    if city_name:
        _sub(postal, "ram:CityName", city_name)
    _sub(postal, "ram:CountryID", COUNTRY)

    if email:
        uri = _sub(party, "ram:URIUniversalCommunication")
        _sub(uri, "ram:URIID", email, {"schemeID": EMAIL_SCHEME})


def _line_items(transaction: ET.Element, invoice: InvoiceData) -> None:
    for line_id, line in enumerate(_iter_lines(invoice.sections), start=1):
        item = _sub(transaction, "ram:IncludedSupplyChainTradeLineItem")

        document = _sub(item, "ram:AssociatedDocumentLineDocument")
        _sub(document, "ram:LineID", str(line_id))

        product = _sub(item, "ram:SpecifiedTradeProduct")
        _sub(product, "ram:Name", line.designation)

        agreement = _sub(item, "ram:SpecifiedLineTradeAgreement")
        price = _sub(agreement, "ram:NetPriceProductTradePrice")
        _sub(price, "ram:ChargeAmount", format_amount(line.unit_price_ht))

        delivery = _sub(item, "ram:SpecifiedLineTradeDelivery")
        _sub(
            delivery,
            "ram:BilledQuantity",
            _format_decimal(line.quantity),
            {"unitCode": UNIT_CODE},
        )

        settlement = _sub(item, "ram:SpecifiedLineTradeSettlement")
        tax = _sub(settlement, "ram:ApplicableTradeTax")
        _sub(tax, "ram:TypeCode", "VAT")
        _sub(tax, "ram:CategoryCode", VAT_CATEGORY)
        _sub(tax, "ram:RateApplicablePercent", _format_decimal(_line_rate(line, invoice.vat_rate)))
        summation = _sub(settlement, "ram:SpecifiedTradeSettlementLineMonetarySummation")
        _sub(summation, "ram:LineTotalAmount", format_amount(line.total_ht))


def _header_settlement(transaction: ET.Element, invoice: InvoiceData) -> None:
    settlement = _sub(transaction, "ram:ApplicableHeaderTradeSettlement")
    _sub(settlement, "ram:InvoiceCurrencyCode", CURRENCY)

    breakdown = vat_breakdown(invoice.sections, invoice.vat_rate)
    if not breakdown:
        breakdown = [(invoice.vat_rate, invoice.total_ht, invoice.vat_amount)]
    for rate, basis, vat_amount in breakdown:
        tax = _sub(settlement, "ram:ApplicableTradeTax")
        _sub(tax, "ram:CalculatedAmount", format_amount(vat_amount))
        _sub(tax, "ram:TypeCode", "VAT")
        _sub(tax, "ram:BasisAmount", format_amount(basis))
        _sub(tax, "ram:CategoryCode", VAT_CATEGORY)
        _sub(tax, "ram:RateApplicablePercent", _format_decimal(rate))

    terms = _sub(settlement, "ram:SpecifiedTradePaymentTerms")
    _sub(terms, "ram:Description", invoice.payment_conditions or DEFAULT_PAYMENT_TERMS)
    due = _sub(terms, "ram:DueDateDateTime")
    _sub(due, "udt:DateTimeString", format_date(invoice.due_date), {"format": "102"})

    # `total_ttc` already has the deposit taken off; the grand total is HT + VAT.
    grand_total_cents = (
        round_half_up(invoice.total_ht * 100) + round_half_up(invoice.vat_amount * 100)
    )
    deposit_cents = round_half_up(invoice.deposit * 100)

    summation = _sub(settlement, "ram:SpecifiedTradeSettlementHeaderMonetarySummation")
    _sub(summation, "ram:LineTotalAmount", format_amount(invoice.total_ht))
    _sub(summation, "ram:TaxBasisTotalAmount", format_amount(invoice.total_ht))
    _sub(
        summation,
        "ram:TaxTotalAmount",
        format_amount(invoice.vat_amount),
        {"currencyID": CURRENCY},
    )
    _sub(summation, "ram:GrandTotalAmount", format_amount(grand_total_cents / 100))
    if deposit_cents > 0:
        _sub(summation, "ram:TotalPrepaidAmount", format_amount(deposit_cents / 100))
    _sub(
        summation,
        "ram:DuePayableAmount",
        format_amount((grand_total_cents - deposit_cents) / 100),
    )


def build_facturx_tree(invoice: InvoiceData, profile: FacturXProfile = "BASIC") -> ET.Element:
    """Build the `rsm:CrossIndustryInvoice` element for an invoice.

    Raises:
        ValueError: If `profile` is not one of the supported Factur-X profiles.
    """

    if profile not in GUIDELINE_IDS:
        raise ValueError(f"Unsupported Factur-X profile: {profile!r}")

    root = ET.Element(_tag("rsm:CrossIndustryInvoice"))

    context = _sub(root, "rsm:ExchangedDocumentContext")
    guideline = _sub(context, "ram:GuidelineSpecifiedDocumentContextParameter")
    _sub(guideline, "ram:ID", GUIDELINE_IDS[profile])

    document = _sub(root, "rsm:ExchangedDocument")
    _sub(document, "ram:ID", sanitize_document_id(invoice.number))
    _sub(document, "ram:TypeCode", INVOICE_TYPE_CODE)
    issued = _sub(document, "ram:IssueDateTime")
    _sub(issued, "udt:DateTimeString", format_date(invoice.date), {"format": "102"})

    transaction = _sub(root, "rsm:SupplyChainTradeTransaction")
    # The MINIMUM profile carries header data only.
    if profile != "MINIMUM":
        _line_items(transaction, invoice)

    agreement = _sub(transaction, "ram:ApplicableHeaderTradeAgreement")
    company = invoice.company
    _trade_party(
        agreement,
        "ram:SellerTradeParty",
        name=company.name,
        address=company.address,
        city=company.city,
        phone=company.phone,
        email=company.email,
        siret=company.siret,
    )
    client = invoice.client
    _trade_party(
        agreement,
        "ram:BuyerTradeParty",
        name=client.name or "Client",
        address=client.address,
        city=client.city,
        phone=client.phone,
        email=client.email,
        siret=client.siret,
    )

    _sub(transaction, "ram:ApplicableHeaderTradeDelivery")
    _header_settlement(transaction, invoice)
    return root


def generate_facturx_xml(invoice: InvoiceData, profile: FacturXProfile = "BASIC") -> str:
    """Serialize an invoice as Factur-X CII XML (UTF-8 declaration, 4-space indent)."""

    root = build_facturx_tree(invoice, profile)
    ET.indent(root, space="    ")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + ET.tostring(root, encoding="unicode")

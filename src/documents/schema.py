"""Quote and invoice document models (Pydantic).

Documents are hierarchical: sections contain subsections, which contain priced lines. Amounts are
stored excluding tax ("HT"); VAT rates are percentages.
"""

from __future__ import annotations

import datetime as dt
from enum import StrEnum
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def generate_id() -> str:
    return str(uuid4())


class LineType(StrEnum):
    """Labour ("main-d'oeuvre") or supplied material ("fourniture")."""

    service = "service"
    material = "material"


class LineItem(BaseModel):
    model_config = ConfigDict(extra="forbid")

    line_id: str = Field(default_factory=generate_id)
    line_number: str = ""
    designation: str = ""
    description: str | None = None
    line_type: LineType | None = None
    quantity: float = 0
    unit: str | None = None
    unit_price_ht: float = 0
    vat_rate: float | None = None
    total_ht: float = 0


class Subsection(BaseModel):
    model_config = ConfigDict(extra="forbid")

    subsection_id: str = Field(default_factory=generate_id)
    subsection_number: str = ""
    subsection_label: str = ""
    total_ht: float = 0
    lines: list[LineItem] = Field(default_factory=list)


class Section(BaseModel):
    model_config = ConfigDict(extra="forbid")

    section_id: str = Field(default_factory=generate_id)
    section_number: str = ""
    section_label: str = ""
    total_ht: float = 0
    subsections: list[Subsection] = Field(default_factory=list)


class DocumentCompany(BaseModel):
    """Issuer details printed on every document."""

    model_config = ConfigDict(extra="forbid")

    name: str = ""
    address: str = ""
    city: str = ""
    phone: str = ""
    email: str = ""
    siret: str = ""
    rcs: str | None = None
    logo_url: str | None = None
    payment_terms: str | None = None
    legal_notice: str | None = None


class DocumentClient(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str | None = None
    name: str | None = None
    address: str = ""
    city: str = ""
    phone: str = ""
    email: str = ""
    siret: str | None = None


class Totals(BaseModel):
    """Document totals in euros, already rounded to cents."""

    model_config = ConfigDict(frozen=True)

    total_ht: float
    vat_amount: float
    total_ttc: float


class _DocumentBase(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str | None = None
    number: str
    date: dt.date
    company: DocumentCompany
    client: DocumentClient = Field(default_factory=DocumentClient)
    project_title: str = ""
    sections: list[Section] = Field(default_factory=list)
    total_ht: float = 0
    vat_rate: float = 10
    vat_amount: float = 0
    deposit: float = 0
    total_ttc: float = 0
    payment_conditions: str = ""
    legal_notice: str | None = None


class QuoteData(_DocumentBase):
    type: Literal["quote"] = "quote"
    validity: str = "1 mois"
    signature: str | None = None


class InvoiceData(_DocumentBase):
    type: Literal["invoice"] = "invoice"
    due_date: dt.date
    quote_number: str | None = None


DocumentData = QuoteData | InvoiceData

"""Intent schema (Pydantic models).

This schema is the contract between the message parsers (rules/LLM) and whatever consumes the
result (the chat bot, draft seeding). A `ParsedIntent` never references a client that was not part
of the roster handed to the parser.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, computed_field


class DocumentType(StrEnum):
    """Kind of document the user is asking for."""

    quote = "quote"
    invoice = "invoice"


class Client(BaseModel):
    """A known client as stored in the `clients` table.

    Only the name fields are read by the matchers; everything else is carried through untouched.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str | None = None
    company_id: str | None = None
    type: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None

    @property
    def display_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class ParsedIntent(BaseModel):
    """Result of parsing one user message.

    Every field is optional: absence of a match is represented by `None`, never by an error.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    document_type: DocumentType | None = None
    client_match: Client | None = None
    project_title: str | None = None

    @computed_field
    @property
    def has_document_type(self) -> bool:
        return self.document_type is not None

    @computed_field
    @property
    def has_client(self) -> bool:
        return self.client_match is not None


def client_from_obj(obj: Any) -> Client:
    """Validate a client record from an arbitrary decoded JSON object or DB row mapping."""

    return Client.model_validate(obj)


def clients_from_obj(obj: Any) -> list[Client]:
    """Validate a roster (a JSON list of client objects)."""

    if not isinstance(obj, list):
        raise ValueError("client roster must be a list")
    return [client_from_obj(item) for item in obj]

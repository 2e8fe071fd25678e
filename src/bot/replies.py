"""French reply texts sent back to the chat user.

Replies summarize what was understood; they never include internal error details.
"""

from __future__ import annotations

from src.intent.schema import DocumentType, ParsedIntent

HELP_TEXT = (
    "Décrivez le document à préparer, par exemple : "
    "« Un devis pour monsieur Dupont concernant le chantier de rénovation toiture »."
)

NOT_UNDERSTOOD_TEXT = (
    "Je n'ai pas compris votre demande. "
    "Précisez s'il s'agit d'un devis ou d'une facture, et pour quel client."
)

ERROR_TEXT = "Une erreur est survenue lors de l'analyse de votre message."

_DOCUMENT_LABELS: dict[DocumentType, str] = {
    DocumentType.quote: "devis",
    DocumentType.invoice: "facture",
}


def format_intent_reply(intent: ParsedIntent) -> str:
    """Render a parsed intent as a short multi-line summary."""

    if not intent.has_document_type and not intent.has_client and intent.project_title is None:
        return NOT_UNDERSTOOD_TEXT

    lines: list[str] = []
    if intent.document_type is not None:
        lines.append(f"Document : {_DOCUMENT_LABELS[intent.document_type]}")
    else:
        lines.append("Document : non précisé (devis ou facture ?)")

    if intent.client_match is not None:
        lines.append(f"Client : {intent.client_match.display_name or 'sans nom'}")
    else:
        lines.append("Client : non trouvé parmi vos clients")

    if intent.project_title is not None:
        lines.append(f"Projet : {intent.project_title}")

    return "\n".join(lines)

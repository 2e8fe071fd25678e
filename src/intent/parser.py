"""Intent parser orchestration (LLM optional; rules-based fallback)."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Literal

from src.intent.llm_parser import (
    LLMParserError,
    intent_from_llm_obj,
    llm_config_from_env,
    parse_intent_json_via_llm,
)
from src.intent.rules_parser import parse_user_intent
from src.intent.schema import Client, ParsedIntent

logger = logging.getLogger(__name__)

ParseSource = Literal["llm", "rules"]


@dataclass(frozen=True)
class ParseResult:
    """Parsed intent plus information about which parser produced it."""

    intent: ParsedIntent
    source: ParseSource


def parse_user_intent_with_source(
        message: str,
        clients: Sequence[Client],
        *,
        llm_enabled: bool,
        llm_api_key: str | None = None,
) -> ParseResult:
    """Parse a message into a `ParsedIntent`.

    Strategy:
        1) If LLM mode is enabled, ask the LLM for strict intent JSON and validate it.
        2) On any failure/invalid JSON, fall back to the deterministic rules parser.
    """

    if llm_enabled:
        try:
            cfg = llm_config_from_env(api_key=llm_api_key)
            obj: dict[str, Any] = parse_intent_json_via_llm(message, clients, config=cfg)
            return ParseResult(intent=intent_from_llm_obj(obj, clients), source="llm")
        except (LLMParserError, ValueError) as exc:
            # Invalid LLM output must never crash the pipeline; fall back to rules.
            logger.warning("llm parser failed, falling back to rules reason=%s", exc)

    return ParseResult(intent=parse_user_intent(message, clients), source="rules")


def parse_intent(
        message: str,
        clients: Sequence[Client],
        *,
        llm_enabled: bool,
        llm_api_key: str | None = None,
) -> ParsedIntent:
    """Parse a message into a `ParsedIntent` (convenience wrapper)."""

    return parse_user_intent_with_source(
        message, clients, llm_enabled=llm_enabled, llm_api_key=llm_api_key
    ).intent

"""Optional LLM-based intent parser (feature-flagged).

The LLM is only allowed to produce **intent JSON**. The output is validated against a strict
schema, and the client name it returns is resolved against the roster, so the model can never
introduce a client that the caller did not supply.
"""

from __future__ import annotations

import http.client
import json
import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from pydantic import BaseModel, ConfigDict

from src.intent.clients import match_client_by_name
from src.intent.project import clean_project_title
from src.intent.schema import Client, DocumentType, ParsedIntent


class LLMParserError(RuntimeError):
    """Raised when the LLM parser fails to return valid JSON."""


@dataclass(frozen=True)
class LLMConfig:
    """Configuration for the OpenAI-style Chat Completions API call."""

    api_key: str
    model: str = "gpt-4o-mini"
    api_base: str = "https://api.openai.com/v1"
    timeout_s: float = 30.0


class LLMIntent(BaseModel):
    """Raw intent JSON as returned by the model, before roster resolution."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    document_type: DocumentType | None = None
    client_name: str | None = None
    project_title: str | None = None


def _load_prompt() -> str:
    prompt_path = Path(__file__).resolve().parent / "prompt_intent_v1.md"
    return prompt_path.read_text(encoding="utf-8")


def _strip_code_fences(text: str) -> str:
    value = (text or "").strip()
    if value.startswith("```"):
        value = value.strip("`")
        # After stripping backticks, try to remove leading "json" marker.
        value = value.removeprefix("json").strip()
    return value


def _chat_completions_url(api_base: str) -> str:
    return api_base.rstrip("/") + "/chat/completions"


def _roster_message(clients: Sequence[Client]) -> str:
    names = [c.display_name for c in clients if c.display_name]
    if not names:
        return "Clients connus : aucun."
    return "Clients connus :\n" + "\n".join(f"- {name}" for name in names)


def parse_intent_json_via_llm(
        user_text: str,
        clients: Sequence[Client],
        *,
        config: LLMConfig,
) -> dict[str, Any]:
    """Call an LLM and return the parsed JSON object.

    The call is compatible with OpenAI-style `/v1/chat/completions` APIs.
    """

    payload = {
        "model": config.model,
        "temperature": 0,
        "messages": [
            {"role": "system", "content": _load_prompt()},
            {"role": "system", "content": _roster_message(clients)},
            {"role": "user", "content": user_text},
        ],
    }

    req = Request(
        _chat_completions_url(config.api_base),
        method="POST",
        headers={
            "Authorization": f"Bearer {config.api_key}",
            "Content-Type": "application/json",
        },
        data=json.dumps(payload).encode(),
    )

    try:
        with urlopen(req, timeout=config.timeout_s) as resp:  # noqa: S310 (explicit, feature-flagged network call)
            body = resp.read()
    except HTTPError as exc:
        raise LLMParserError(f"LLM HTTP error: {exc.code}") from exc
    except URLError as exc:
        raise LLMParserError("LLM connection error") from exc
    except (OSError, http.client.HTTPException) as exc:
        # Timeouts and dropped connections surface outside URLError once the response is open.
        raise LLMParserError(f"LLM transport error: {type(exc).__name__}") from exc

    try:
        decoded = json.loads(body)
        content = decoded["choices"][0]["message"]["content"]
    except Exception as exc:  # noqa: BLE001
        raise LLMParserError("Unexpected LLM response format") from exc

    try:
        obj = json.loads(_strip_code_fences(content))
    except json.JSONDecodeError as exc:
        raise LLMParserError("LLM did not return valid JSON") from exc

    if not isinstance(obj, dict):
        raise LLMParserError("LLM did not return a JSON object")
    return obj


def intent_from_llm_obj(obj: Any, clients: Sequence[Client]) -> ParsedIntent:
    """Validate LLM output and resolve it against the roster.

    Raises:
        pydantic.ValidationError: If the object does not match the intent JSON schema.
    """

    raw = LLMIntent.model_validate(obj)

    client_match = None
    if raw.client_name and clients:
        client_match = match_client_by_name(raw.client_name.lower(), clients)

    return ParsedIntent(
        document_type=raw.document_type,
        client_match=client_match,
        project_title=clean_project_title(raw.project_title),
    )


def llm_config_from_env(*, api_key: str | None = None) -> LLMConfig:
    """Build LLM config from environment variables.

    Environment variables (optional):
        - LLM_MODEL
        - LLM_API_BASE
        - LLM_TIMEOUT_S
    """

    key = api_key or os.getenv("LLM_API_KEY") or ""
    if not key:
        raise LLMParserError("LLM_API_KEY is required")

    timeout_s = float(os.getenv("LLM_TIMEOUT_S") or "30")
    return LLMConfig(
        api_key=key,
        model=os.getenv("LLM_MODEL") or "gpt-4o-mini",
        api_base=os.getenv("LLM_API_BASE") or "https://api.openai.com/v1",
        timeout_s=timeout_s,
    )

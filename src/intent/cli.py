"""Parse a single message from the command line and print the intent as JSON.

Example:
    python -m src.intent.cli "Un devis pour monsieur Dupont" --clients roster.json
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from src.config.logging import configure_logging
from src.intent.parser import parse_user_intent_with_source
from src.intent.schema import Client, clients_from_obj


def _load_roster(path: str | None) -> list[Client]:
    if not path:
        return []
    return clients_from_obj(json.loads(Path(path).read_text(encoding="utf-8")))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for parsing one message."""

    parser = argparse.ArgumentParser(description="Parse a French quote/invoice request.")
    parser.add_argument("message", help="User message to parse.")
    parser.add_argument(
        "--clients",
        help="Path to a JSON list of client objects (first_name, last_name, ...).",
    )
    parser.add_argument(
        "--llm",
        action="store_true",
        help="Try the LLM parser first (requires LLM_API_KEY); falls back to rules.",
    )
    args = parser.parse_args(argv)

    configure_logging()

    result = parse_user_intent_with_source(
        args.message,
        _load_roster(args.clients),
        llm_enabled=args.llm,
    )
    output = {"source": result.source, **result.intent.model_dump(mode="json")}
    sys.stdout.write(json.dumps(output, ensure_ascii=False, indent=2) + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""Command-line entrypoint for schema setup, loading and asking.

Usage:
  docrag init-db
  docrag load ./docs
  docrag ask "How do refunds work?" --top-k 6

Results are printed as JSON using the same field names as the HTTP API.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from docrag.config import LOG_FORMAT
from docrag.db import init_db
from docrag.errors import RagError
from docrag.service import DEFAULT_TOP_K, get_service

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="docrag", description="Load documents and ask questions about them.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (default: INFO)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create the vector extension, chunk table and index")

    load_p = sub.add_parser("load", help="Replace the stored corpus with a file or directory")
    load_p.add_argument("path", help="File or directory (.pdf, .txt, .md, .html, .htm)")

    ask_p = sub.add_parser("ask", help="Answer a question from the stored corpus")
    ask_p.add_argument("question", help="Question text")
    ask_p.add_argument("--top-k", type=int, default=DEFAULT_TOP_K, help="Chunks to retrieve, clamped to 1..8")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )

    if args.command == "init-db":
        init_db()
        return 0

    service = get_service()
    try:
        if args.command == "load":
            result = service.load(args.path)
        else:
            result = service.ask(args.question, args.top_k)
    except RagError as e:
        logger.error("%s failed: %s", args.command, e)
        return 1
    print(json.dumps(result.model_dump(by_alias=True), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())

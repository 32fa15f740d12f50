from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from eulex.ingest import (
    DocumentRetrievalError,
    EULawTOCBuilder,
    EULawTOCBuilderConfig,
    fetch_document,
    parse_with_issues,
    render_markdown,
)
from eulex.ingest.fetch import DEFAULT_MAX_BYTES, DEFAULT_TIMEOUT_SECONDS


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    if Path(".env").exists():
        load_dotenv(".env", override=False)
    parser = argparse.ArgumentParser(description="Parse an EU legal text into its chapter/section/article structure.")
    parser.add_argument("source", help="Path to a plain-text document or an http(s) URL")
    parser.add_argument(
        "--format",
        choices=("json", "outline"),
        default="json",
        help="Output a JSON tree (default) or a markdown outline.",
    )
    parser.add_argument("--output", type=Path, default=None, help="Write output to this file instead of stdout")
    parser.add_argument(
        "--timeout",
        type=float,
        default=float(os.getenv("FETCH_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))),
        help="Timeout in seconds when SOURCE is a URL.",
    )
    parser.add_argument(
        "--max-bytes",
        type=int,
        default=int(os.getenv("MAX_DOCUMENT_BYTES", str(DEFAULT_MAX_BYTES))),
        help="Largest document accepted when SOURCE is a URL.",
    )
    parser.add_argument("--show-issues", action="store_true", help="Report dropped lines on stderr")
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "WARNING"))
    return parser.parse_args(argv)


def load_source(source: str, timeout: float, max_bytes: int = DEFAULT_MAX_BYTES) -> tuple[str, str]:
    """Return ``(document_id, text)`` for a file path or URL."""

    if source.startswith(("http://", "https://")):
        document_id = source.rstrip("/").rsplit("/", 1)[-1].rsplit(".", 1)[0] or "document"
        return document_id, fetch_document(source, timeout=timeout, max_bytes=max_bytes)

    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"Document not found: {path}")
    return path.stem, path.read_text(encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        document_id, text = load_source(args.source, args.timeout, args.max_bytes)
    except DocumentRetrievalError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.format == "outline":
        builder = EULawTOCBuilder(EULawTOCBuilderConfig())
        output = render_markdown(builder.build_text(text, document_id))
        issues = builder.last_issues
    else:
        result = parse_with_issues(text)
        output = json.dumps(result.document.to_dict(), indent=2, ensure_ascii=False)
        issues = result.issues

    if args.show_issues:
        for issue in issues:
            print(f"line {issue.line_number}: {issue.message}: {issue.line!r}", file=sys.stderr)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(output + "\n", encoding="utf-8")
    else:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())

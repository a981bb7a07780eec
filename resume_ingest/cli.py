"""
Command line entry point.

    resume-ingest resume.pdf              # LLM if configured, else heuristic
    resume-ingest resume.docx --no-ai     # force heuristic mode
    resume-ingest resume.txt --require-ai --out profile.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import EXTRACT_MAX_CHARS
from .errors import ResumeIngestError
from .extractor import RawDocument
from .llm_client import get_llm_client, llm_available
from .pipeline import parse_document

logger = logging.getLogger("resume_ingest.cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resume-ingest",
        description="Convert a résumé document into a normalized candidate profile (JSON).",
    )
    parser.add_argument("file", help="Path to the résumé (PDF, DOC, DOCX, TXT, RTF, ODT)")
    parser.add_argument("--mime", default=None, help="Declared MIME type (guessed from the name by default)")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--no-ai", action="store_true", help="Skip the LLM even if one is configured")
    mode.add_argument("--require-ai", action="store_true", help="Fail instead of falling back to heuristics")
    parser.add_argument("--max-chars", type=int, default=EXTRACT_MAX_CHARS, help="Extraction character cap")
    parser.add_argument("--out", default=None, help="Write JSON here instead of stdout")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    path = Path(args.file)
    if not path.is_file():
        logger.error("No such file: %s", path)
        return 1

    client = None
    if not args.no_ai and llm_available():
        client = get_llm_client()

    try:
        profile = parse_document(
            RawDocument.from_path(path, args.mime),
            client=client,
            require_ai=args.require_ai,
            max_chars=args.max_chars,
        )
    except ResumeIngestError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        if exc.preview:
            logger.error("preview: %s", exc.preview)
        return 1

    payload = json.dumps(profile, ensure_ascii=False, indent=2)
    if args.out:
        Path(args.out).write_text(payload, encoding="utf-8")
        logger.info("Wrote profile JSON to %s", args.out)
    else:
        print(payload)
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Document ➜ canonical profile.

extract → (LLM parser if a client was supplied, else rule parser).
The caller decides whether an LLM is available and passes the client in;
nothing here reads process-wide provider settings.
"""

from __future__ import annotations
import logging
from typing import Any, Dict

from .config import EXTRACT_MAX_CHARS
from .errors import AIUnavailable, ExtractionFailed
from .extractor import RawDocument, extract_text
from .llm_client import LLMClient
from .parser_llm import LLMResumeParser
from .parser_rule import parse_resume_rule

logger = logging.getLogger(__name__)


def parse_text(text: str, client: LLMClient | None = None, require_ai: bool = False) -> Dict[str, Any]:
    if client is not None:
        return LLMResumeParser(client).parse(text)
    if require_ai:
        raise AIUnavailable(
            "AI not configured. Set AI_SERVICE_API_KEY / OPENAI_API_KEY to enable resume parsing."
        )
    logger.info("no LLM client, using heuristic parser")
    return parse_resume_rule(text)


def parse_document(
    document: RawDocument,
    client: LLMClient | None = None,
    require_ai: bool = False,
    max_chars: int = EXTRACT_MAX_CHARS,
) -> Dict[str, Any]:
    extracted = extract_text(document, max_chars)
    if not extracted.text.strip():
        raise ExtractionFailed(
            "Could not extract text from file. Please upload a PDF, DOC/DOCX, or TXT with readable text.",
            preview=document.filename,
        )
    logger.info(
        "extracted %d chars from %s via %s%s",
        len(extracted.text), document.filename, extracted.driver,
        " (truncated)" if extracted.truncated else "",
    )
    return parse_text(extracted.text, client, require_ai)

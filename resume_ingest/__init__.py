"""Résumé document ➜ normalized candidate profile."""

from .cleaner import normalize
from .errors import AIParseFailed, AIUnavailable, ExtractionFailed, ResumeIngestError
from .extractor import ExtractedText, RawDocument, extract, extract_text
from .parser_llm import LLMResumeParser, is_inadequate, parse_resume_llm
from .parser_rule import build_heuristic, parse_resume_rule
from .pipeline import parse_document, parse_text

__all__ = [
    "AIParseFailed",
    "AIUnavailable",
    "ExtractedText",
    "ExtractionFailed",
    "LLMResumeParser",
    "RawDocument",
    "ResumeIngestError",
    "build_heuristic",
    "extract",
    "extract_text",
    "is_inadequate",
    "normalize",
    "parse_document",
    "parse_resume_llm",
    "parse_resume_rule",
    "parse_text",
]

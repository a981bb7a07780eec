"""
Rule-based résumé parser.

Used when no LLM backend is configured: every plausible token in the text
becomes a skill candidate, contact fields come from the normaliser's regex
fallback. Crude, but deterministic and offline.
"""

from __future__ import annotations
import re
from typing import Dict, List

from .cleaner import normalize

HEURISTIC_SUMMARY = "Parsed resume text without AI (heuristic fallback)"
MAX_TOKENS = 50

_SPLIT = re.compile(r"[\s,;/]+")
_JUNK = re.compile(r"[^A-Za-z0-9+#.\-]")

STOP = frozenset({
    "and", "or", "the", "a", "an", "to", "in", "of",
    "for", "on", "with", "at", "by", "from",
})


def extract_skills_heuristic(raw: str) -> List[str]:
    if not raw:
        return []
    seen, skills = set(), []
    for tok in _SPLIT.split(raw):
        tok = _JUNK.sub("", tok)
        if not 1 < len(tok) < 40:
            continue
        key = tok.lower()
        if key in STOP or key in seen:
            continue
        seen.add(key)
        skills.append(tok)
        if len(skills) >= MAX_TOKENS:
            break
    return skills


def parse_resume_rule(raw: str) -> Dict:
    out = {
        "skills": extract_skills_heuristic(raw),
        "contact": {},
        "summary": HEURISTIC_SUMMARY,
        "experience": [],
    }
    return normalize(out, raw)


build_heuristic = parse_resume_rule

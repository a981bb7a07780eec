"""
Schema normalisation.

normalize() turns whatever the model (or the heuristic builder) produced
into the canonical profile. It is total: absent or malformed fields fall
back to defaults, nothing raises. Missing e-mail / phone are recovered
from the original résumé text.
"""
from __future__ import annotations
import re
from typing import Any, Dict, List, Optional

from .schema_resume import empty_profile

_SPLIT = re.compile(r",|\n")
EMAIL_RE = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.I)
PHONE_RE = re.compile(r"\+?\d[\d\s\-()]{7,}\d")

# alternate spellings, first present wins
_EXPERIENCE_ALIASES = {
    "title":      ("title", "role", "position"),
    "company":    ("company", "organization", "employer"),
    "start_date": ("start_date", "startDate", "from", "start"),
    "end_date":   ("end_date", "endDate", "to", "end"),
}
_RESPONSIBILITY_KEYS = ("responsibilities", "responsibility", "bullets")


# ───────────────────────────────────────── helpers ──
def coerce_list(raw: Any) -> List[str]:
    """List → trimmed non-blank strings; string → split on comma/newline."""
    if isinstance(raw, (list, tuple)):
        items = (str(x).strip() for x in raw if x is not None)
        return [x for x in items if x]
    if isinstance(raw, str):
        return [x.strip() for x in _SPLIT.split(raw) if x.strip()]
    return []


def _first(obj: Dict[str, Any], keys) -> Any:
    for k in keys:
        if obj.get(k):
            return obj[k]
    return None


def _text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return None
    value = str(value).strip()
    return value or None


def _search(pattern: re.Pattern, text: str) -> Optional[str]:
    m = pattern.search(text or "")
    return m.group(0) if m else None


def normalize_experience(raw: Any) -> List[Dict[str, Any]]:
    if not isinstance(raw, list):
        return []
    jobs = []
    for item in raw:
        obj = item if isinstance(item, dict) else {}
        job = {field: _text(_first(obj, keys)) or ""
               for field, keys in _EXPERIENCE_ALIASES.items()}
        job["responsibilities"] = coerce_list(_first(obj, _RESPONSIBILITY_KEYS))
        jobs.append(job)
    return jobs


def normalize_education(raw: Any) -> List[Any]:
    if isinstance(raw, list):
        return list(raw)
    if isinstance(raw, str) and raw.strip():
        return [raw.strip()]
    return []


def normalize_contact(safe: Dict[str, Any], original_text: str) -> Dict[str, Optional[str]]:
    contact = safe.get("contact")
    if not isinstance(contact, dict):
        contact = {}
    email = _text(safe.get("email")) or _text(contact.get("email"))
    phone = _text(safe.get("phone")) or _text(contact.get("phone"))
    return {
        "name": _text(contact.get("name")) or _text(safe.get("name")),
        "email": email or _search(EMAIL_RE, original_text),
        "phone": phone or _search(PHONE_RE, original_text),
        "location": _text(contact.get("location")) or _text(safe.get("location")),
    }


# ───────────────────────────────────────── normaliser ──
def normalize(raw: Any, original_text: str = "") -> Dict[str, Any]:
    safe = raw if isinstance(raw, dict) else {}
    summary = safe.get("summary")

    profile = empty_profile()
    profile["skills"] = coerce_list(safe.get("skills"))
    profile["contact"] = normalize_contact(safe, original_text)
    profile["summary"] = summary.strip() if isinstance(summary, str) else ""
    profile["experience"] = normalize_experience(safe.get("experience"))
    profile["education"] = normalize_education(safe.get("education"))
    profile["certifications"] = coerce_list(safe.get("certifications"))
    profile["languages"] = coerce_list(safe.get("languages"))
    profile["links"] = coerce_list(safe.get("links"))
    return profile

"""
LLM-based résumé parser.

• Supports multiple LLM providers (OpenAI, Ollama) through llm_client
• Asks for JSON only; an unparseable reply gets one repair call that
  reformats the reply itself (temperature 0)
• A reply that parses but carries no skills, experience or contact
  triggers a second, stricter request
• At most two primary requests, each with at most one repair
"""

from __future__ import annotations
import json, logging, re, textwrap
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .cleaner import normalize
from .config import (
    AI_MAX_CHARS,
    MAX_TOKENS,
    PARSE_TEMPERATURE,
    PREVIEW_CHARS,
    REPAIR_TEMPERATURE,
    RETRY_TEMPERATURE,
    get_model_for_provider,
    get_repair_model_for_provider,
)
from .errors import AIParseFailed
from .llm_client import LLMClient, get_llm_client
from .schema_resume import SCHEMA_HINT

logger = logging.getLogger(__name__)

_SYSTEM_PROMPT = textwrap.dedent(
    f"""\
    You are a resume parser. Return ONLY JSON (no markdown, no prose).
    Schema: {SCHEMA_HINT}.
    Use ONLY the provided resume text; do not invent data."""
)

_RETRY_PROMPT = textwrap.dedent(
    f"""\
    You are a resume parser. Return ONLY JSON (no markdown).
    Extract actual data from the resume text; do not invent.
    Schema: {SCHEMA_HINT}.
    Ensure skills and experience are filled when present in text."""
)

_REPAIR_PROMPT = textwrap.dedent(
    f"""\
    You are a strict JSON reformatter. Given a model reply, return ONLY valid JSON
    matching this schema: {SCHEMA_HINT}. No markdown, no prose."""
)

_USER_TEMPLATE = "Parse this resume text and respond with JSON only (no extra text):\n\n{text}"
_REPAIR_TEMPLATE = "Fix this to valid JSON only: {reply}"

_JSON_FINDER = re.compile(r"\{.*\}", re.S)


def _extract_json(raw: str) -> dict:
    payload = (raw or "").strip().strip("`")
    try:
        data = json.loads(payload)
    except json.JSONDecodeError:
        if m := _JSON_FINDER.search(payload):
            data = json.loads(m.group())
        else:
            raise
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _try_json(raw: str) -> Optional[dict]:
    try:
        return _extract_json(raw)
    except (ValueError, RecursionError):  # JSONDecodeError included
        return None


def is_inadequate(profile: Dict[str, Any]) -> bool:
    """No usable skills, no experience and no way to contact the candidate."""
    skills = profile.get("skills") or []
    contact = profile.get("contact") or {}
    no_skills = not skills or all(not str(s).strip() for s in skills)
    no_experience = not profile.get("experience")
    no_contact = not (contact.get("name") or contact.get("email") or contact.get("phone"))
    return no_skills and no_experience and no_contact


@dataclass
class ParseAttempt:
    attempts: int = 0
    calls: int = 0
    last_response: str = ""


class LLMResumeParser:
    """Turns résumé text into a canonical profile through a completion service."""

    ATTEMPTS = (
        (_SYSTEM_PROMPT, PARSE_TEMPERATURE),
        (_RETRY_PROMPT, RETRY_TEMPERATURE),
    )

    def __init__(self, client: LLMClient, model: str | None = None, repair_model: str | None = None):
        provider = getattr(client, "provider", None)
        if provider not in ("openai", "ollama"):
            provider = None
        self.client = client
        self.model = model or get_model_for_provider(provider)
        self.repair_model = repair_model or get_repair_model_for_provider(provider)

    def parse(self, text: str) -> Dict[str, Any]:
        truncated = (text or "")[:AI_MAX_CHARS]
        state = ParseAttempt()
        profile = None

        for system_prompt, temperature in self.ATTEMPTS:
            state.attempts += 1
            reply = self._ask(state, system_prompt, truncated, temperature)
            data = _try_json(reply)
            if data is None:
                logger.info("attempt %d: reply is not JSON, requesting repair", state.attempts)
                data = _try_json(self._repair(state, reply))

            if data is None:
                logger.warning("attempt %d: no parseable JSON after repair", state.attempts)
                profile = None
                continue

            profile = normalize(data, truncated)
            if not is_inadequate(profile):
                return profile
            logger.info("attempt %d: parsed profile is empty", state.attempts)

        if profile is None:
            logger.error("AI parse failed after %d calls", state.calls)
            raise AIParseFailed(
                "Unable to parse AI response into structured JSON",
                preview=state.last_response[:PREVIEW_CHARS],
            )
        return profile

    # ───────────────────────────────────────── calls ──
    def _ask(self, state: ParseAttempt, system_prompt: str, text: str, temperature: float) -> str:
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": _USER_TEMPLATE.format(text=text)},
        ]
        state.calls += 1
        rsp = self.client.chat(
            model=self.model,
            messages=messages,
            temperature=temperature,
            json_mode=True,
            max_tokens=MAX_TOKENS,
        )
        state.last_response = rsp.message.content or ""
        return state.last_response

    def _repair(self, state: ParseAttempt, reply: str) -> str:
        messages = [
            {"role": "system", "content": _REPAIR_PROMPT},
            {"role": "user", "content": _REPAIR_TEMPLATE.format(reply=reply)},
        ]
        state.calls += 1
        try:
            rsp = self.client.chat(
                model=self.repair_model,
                messages=messages,
                temperature=REPAIR_TEMPERATURE,
                max_tokens=MAX_TOKENS,
            )
        except Exception as exc:  # noqa: BLE001
            logger.warning("repair call failed: %s", exc)
            return ""
        return rsp.message.content or ""


def parse_resume_llm(raw_text: str, client: LLMClient | None = None) -> dict:
    return LLMResumeParser(client or get_llm_client()).parse(raw_text)

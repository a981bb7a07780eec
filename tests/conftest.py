from __future__ import annotations

import json
from typing import Dict, List

import pytest

from resume_ingest.llm_client import LLMClient, LLMResponse


class FakeClient(LLMClient):
    """Replays canned replies and records every request."""

    provider = "openai"

    def __init__(self, replies: List[object]):
        self.replies = list(replies)
        self.calls: List[Dict[str, object]] = []

    def chat(self, model, messages, temperature=None, json_mode=False, max_tokens=None):
        self.calls.append(
            {
                "model": model,
                "messages": messages,
                "temperature": temperature,
                "json_mode": json_mode,
                "max_tokens": max_tokens,
            }
        )
        if not self.replies:
            raise AssertionError("unexpected extra LLM call")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return LLMResponse(reply)


@pytest.fixture
def fake_client():
    return FakeClient


@pytest.fixture
def full_reply() -> str:
    return json.dumps(
        {
            "skills": ["Python", "SQL"],
            "contact": {"name": "Jane Doe", "email": "jane@example.com", "phone": None, "location": "Berlin"},
            "summary": "Backend engineer",
            "experience": [
                {
                    "title": "Engineer",
                    "company": "Acme",
                    "start_date": "2019",
                    "end_date": "2023",
                    "responsibilities": ["Built APIs"],
                }
            ],
            "education": [{"degree": "BSc", "institution": "TU Berlin", "year": 2018}],
            "certifications": [],
            "languages": ["English", "German"],
            "links": ["https://github.com/jane"],
        }
    )


@pytest.fixture
def empty_reply() -> str:
    return json.dumps({"skills": [], "contact": {}, "experience": []})

"""
LLM client abstraction layer to support multiple providers.

This module provides a unified interface for different LLM providers,
making it easy to switch between Ollama and OpenAI API while maintaining
the same interface for the résumé parser. Only the prompt/response
contract matters to callers: a list of role/content messages in, a
single text blob out.
"""

from __future__ import annotations
from typing import List, Dict, Optional
from abc import ABC, abstractmethod

from . import config
from .errors import AIUnavailable

try:
    from ollama import Client as OllamaSDKClient
except ImportError:
    OllamaSDKClient = None

try:
    from openai import OpenAI
except ImportError:
    OpenAI = None


class LLMResponse:
    """Unified response object for LLM responses."""

    def __init__(self, content: str):
        self.message = MessageContent(content)


class MessageContent:
    """Message content wrapper."""

    def __init__(self, content: str):
        self.content = content


class LLMClient(ABC):
    """Abstract base class for LLM clients."""

    provider = "abstract"

    @abstractmethod
    def chat(
        self,
        model: str,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        json_mode: bool = False,
        max_tokens: Optional[int] = None,
    ) -> LLMResponse:
        """Send a chat request to the LLM provider."""
        pass


class OllamaClient(LLMClient):
    """Ollama client implementation."""

    provider = "ollama"

    def __init__(self, host: str | None = None):
        if OllamaSDKClient is None:
            raise ImportError("ollama package is required for OllamaClient")
        self.client = OllamaSDKClient(host=host or config.OLLAMA_BASE_URL,
                                      timeout=config.LLM_TIMEOUT)

    def chat(self, model, messages, temperature=None, json_mode=False, max_tokens=None) -> LLMResponse:
        """Send a chat request to Ollama."""
        options = {}
        if temperature is not None:
            options["temperature"] = temperature
        if max_tokens:
            options["num_predict"] = max_tokens
        response = self.client.chat(
            model=model,
            messages=messages,
            format="json" if json_mode else None,
            options=options or None,
        )
        return LLMResponse(response.message.content or "")


class OpenAIClient(LLMClient):
    """OpenAI client implementation."""

    provider = "openai"

    def __init__(self, api_key: str | None = None):
        if OpenAI is None:
            raise ImportError("openai package is required for OpenAIClient")

        # Use provided API key or the one resolved from the environment
        api_key = api_key or config.OPENAI_API_KEY
        if not api_key:
            raise AIUnavailable(
                "OpenAI API key is required. Set AI_SERVICE_API_KEY or OPENAI_API_KEY "
                "environment variable or pass api_key parameter."
            )

        self.client = OpenAI(api_key=api_key, timeout=config.LLM_TIMEOUT)

    def chat(self, model, messages, temperature=None, json_mode=False, max_tokens=None) -> LLMResponse:
        """Send a chat request to OpenAI."""
        params = {
            "model": model,
            "messages": messages,
            "temperature": config.OPENAI_MODEL_PARAMS["temperature"] if temperature is None else temperature,
            "max_tokens": max_tokens or config.OPENAI_MODEL_PARAMS["max_tokens"],
        }
        if json_mode:
            params["response_format"] = {"type": "json_object"}

        response = self.client.chat.completions.create(**params)
        return LLMResponse(response.choices[0].message.content or "")


def llm_available(provider: str | None = None) -> bool:
    """True when the configured provider can actually be constructed."""
    provider = (provider or config.LLM_PROVIDER).lower()
    if provider == "openai":
        return OpenAI is not None and bool(config.OPENAI_API_KEY)
    if provider == "ollama":
        return OllamaSDKClient is not None
    return False


def get_llm_client(provider: str | None = None) -> LLMClient:
    """Factory function to get the appropriate LLM client based on configuration."""
    provider = (provider or config.LLM_PROVIDER).lower()

    if provider not in ("openai", "ollama"):
        raise ValueError(f"Unsupported LLM provider: {provider}")
    if not llm_available(provider):
        raise AIUnavailable(
            f"LLM provider '{provider}' is not configured. "
            "Set AI_SERVICE_API_KEY / OPENAI_API_KEY (or LLM_PROVIDER=ollama) to enable resume parsing."
        )

    if provider == "openai":
        return OpenAIClient()
    return OllamaClient()

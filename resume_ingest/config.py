"""
Configuration settings for resume-ingest.

Provider, model and size limits for the résumé pipeline. Values come from
the environment (or a local .env file); a missing API key is not an error,
it simply leaves the pipeline in heuristic (no-AI) mode.
"""

from dotenv import load_dotenv
load_dotenv()          # ← must be before os.getenv(...)
import logging
import os

logger = logging.getLogger(__name__)


def _float_env(name: str, default: float) -> float:
    """Read a float from the environment; a malformed value falls back to default."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default

# LLM Provider Configuration
# Set to "ollama" or "openai"
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "openai").lower()

# Model Configuration
DEFAULT_MODEL = {
    "ollama": "llama3",
    "openai": "gpt-3.5-turbo-1106"  # supports response_format=json_object
}
LLM_MODEL = os.getenv("LLM_MODEL")
REPAIR_MODEL = os.getenv("REPAIR_MODEL", "gpt-3.5-turbo")

# OpenAI Configuration
# First match wins; hosting platforms expose the key under different names.
OPENAI_API_KEY = (
    os.getenv("AI_SERVICE_API_KEY")
    or os.getenv("OPENAI_API_KEY")
    or os.getenv("JOBS_AI_API_KEY")
)
OPENAI_MODEL_PARAMS = {
    "temperature": 0.1,
    "max_tokens": 2000
}

# Ollama Configuration
OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")

# Seconds before a completion call is abandoned
LLM_TIMEOUT = _float_env("LLM_TIMEOUT", 60.0)

# Size limits (characters)
EXTRACT_MAX_CHARS = 60_000
AI_MAX_CHARS = 15_000
PREVIEW_CHARS = 500

# Sampling
PARSE_TEMPERATURE = OPENAI_MODEL_PARAMS["temperature"]
RETRY_TEMPERATURE = OPENAI_MODEL_PARAMS["temperature"]
REPAIR_TEMPERATURE = 0
MAX_TOKENS = OPENAI_MODEL_PARAMS["max_tokens"]


def get_model_for_provider(provider: str = None) -> str:
    """Get the default model for the specified provider."""
    if LLM_MODEL:
        return LLM_MODEL
    provider = provider or LLM_PROVIDER
    return DEFAULT_MODEL.get(provider, DEFAULT_MODEL["openai"])


def get_repair_model_for_provider(provider: str = None) -> str:
    provider = provider or LLM_PROVIDER
    if provider == "openai":
        return REPAIR_MODEL
    return get_model_for_provider(provider)

"""Shared configuration for the LLM prompt client."""

from pathlib import Path

ROOT = Path(__file__).parent.parent.parent.parent.resolve()

DEFAULT_PROVIDER = "gemini"

# "azure" reads its endpoint from the environment instead of a fixed base_url
PROVIDERS = {
    "gemini": {
        "base_url": "https://generativelanguage.googleapis.com/v1beta/openai/",
        "api_key_env": "GEMINI_API_KEY",
        "default_model": "gemini-1.5-flash",
    },
    "openai": {
        "base_url": None,
        "api_key_env": "OPENAI_API_KEY",
        "default_model": "gpt-4o-mini",
    },
    "azure": {
        "base_url": None,
        "api_key_env": "AZURE_OPENAI_API_KEY",
        "default_model": "gpt-4.1",
    },
}

AZURE_ENDPOINT_ENV = "AZURE_OPENAI_ENDPOINT"
AZURE_API_VERSION_ENV = "AZURE_OPENAI_API_VERSION"
AZURE_DEFAULT_API_VERSION = "2025-04-01-preview"

# ─── Gemini Safety Settings ──────────────────────────────────────────────────

# One threshold is applied to every category
SAFETY_CATEGORIES = (
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
    "HARM_CATEGORY_HARASSMENT",
)

SAFETY_THRESHOLDS = (
    "HARM_BLOCK_THRESHOLD_UNSPECIFIED",
    "BLOCK_LOW_AND_ABOVE",
    "BLOCK_MEDIUM_AND_ABOVE",
    "BLOCK_ONLY_HIGH",
)

DEFAULT_SAFETY = "BLOCK_MEDIUM_AND_ABOVE"

# Encoding used when tiktoken does not know the model name
FALLBACK_ENCODING = "o200k_base"


def provider_config(provider: str) -> dict:
    """Return the config dict for *provider*, raising ValueError for unknown names."""
    try:
        return PROVIDERS[provider]
    except KeyError as exc:
        raise ValueError(f"Unknown provider: {provider} (expected one of {', '.join(PROVIDERS)})") from exc

"""Send prompts to an LLM chat API and count prompt tokens.

Prompts are plain text, optionally paired with an image (local file or URL)
or a document file.  Every provider is reached through the ``openai`` SDK:
Gemini via its OpenAI-compatible endpoint, OpenAI directly, and Azure OpenAI
through ``AzureOpenAI``.  The response comes back as one string, returned
without cleaning; see ``llm_tables.tables.pipeline.recover_table`` for
turning it into a table.

When asking for a table, tell the model exactly which symbols to use as the
field and row delimiters.
"""

import base64
import logging
import mimetypes
import os
import time
from pathlib import Path

import tiktoken
from dotenv import load_dotenv
from openai import AzureOpenAI, OpenAI

from llm_tables.llm.config import (
    AZURE_API_VERSION_ENV,
    AZURE_DEFAULT_API_VERSION,
    AZURE_ENDPOINT_ENV,
    DEFAULT_PROVIDER,
    DEFAULT_SAFETY,
    FALLBACK_ENCODING,
    ROOT,
    SAFETY_CATEGORIES,
    SAFETY_THRESHOLDS,
    provider_config,
)

logger = logging.getLogger(__name__)

load_dotenv(ROOT / ".env")


# ─── Client ──────────────────────────────────────────────────────────────────


def get_client(provider: str = DEFAULT_PROVIDER, api_key: str | None = None) -> OpenAI:
    """Build an SDK client for *provider*, reading the API key from the environment if not given."""
    cfg = provider_config(provider)
    key = api_key or os.getenv(cfg["api_key_env"])
    if not key:
        raise ValueError(f"API key needed! Pass api_key or set {cfg['api_key_env']}")

    if provider == "azure":
        endpoint = os.getenv(AZURE_ENDPOINT_ENV)
        if not endpoint:
            raise ValueError(f"Must set {AZURE_ENDPOINT_ENV} to use the azure provider")
        return AzureOpenAI(
            api_key=key,
            azure_endpoint=endpoint,
            api_version=os.getenv(AZURE_API_VERSION_ENV, AZURE_DEFAULT_API_VERSION),
        )
    return OpenAI(api_key=key, base_url=cfg["base_url"])


# ─── Message Building ────────────────────────────────────────────────────────


def _is_url(location: str | Path) -> bool:
    return isinstance(location, str) and location.startswith(("http://", "https://"))


def _encode_file(path: Path) -> str:
    """Base64-encode a local file."""
    with open(path, "rb") as fopen:
        return base64.b64encode(fopen.read()).decode("utf-8")


def _image_part(image: str | Path) -> dict:
    """Build an image_url content part from a URL or a local file."""
    if _is_url(image):
        return {"type": "image_url", "image_url": {"url": image}}

    path = Path(image).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"Image not found at {path}")
    mime_type = mimetypes.guess_type(path.name)[0] or "image/png"
    data_uri = f"data:{mime_type};base64,{_encode_file(path)}"
    logger.info("Attaching image %s (%s)", path.name, mime_type)
    return {"type": "image_url", "image_url": {"url": data_uri}}


def _document_part(document: str | Path) -> dict:
    """Build a file content part from a local document (PDF, text, ...)."""
    path = Path(document).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"Document not found at {path}")
    mime_type = mimetypes.guess_type(path.name)[0] or "application/pdf"
    data_uri = f"data:{mime_type};base64,{_encode_file(path)}"
    logger.info("Attaching document %s (%s)", path.name, mime_type)
    return {"type": "file", "file": {"filename": path.name, "file_data": data_uri}}


def build_messages(prompt: str, image: str | Path | None = None, document: str | Path | None = None) -> list[dict]:
    """Build the single user message for a prompt and its optional attachment."""
    if image is None and document is None:
        return [{"role": "user", "content": prompt}]

    content: list[dict] = [{"type": "text", "text": prompt}]
    if image is not None:
        content.append(_image_part(image))
    if document is not None:
        content.append(_document_part(document))
    return [{"role": "user", "content": content}]


def safety_settings(threshold: str = DEFAULT_SAFETY) -> list[dict]:
    """Gemini safety settings applying one threshold to every harm category."""
    if threshold not in SAFETY_THRESHOLDS:
        raise ValueError(f"Unknown safety threshold: {threshold} (expected one of {', '.join(SAFETY_THRESHOLDS)})")
    return [{"category": category, "threshold": threshold} for category in SAFETY_CATEGORIES]


# ─── Public API ──────────────────────────────────────────────────────────────


def send_prompt(
    prompt: str,
    *,
    image: str | Path | None = None,
    document: str | Path | None = None,
    provider: str = DEFAULT_PROVIDER,
    model: str | None = None,
    temperature: float = 0.0,
    safety: str = DEFAULT_SAFETY,
    api_key: str | None = None,
    client: OpenAI | None = None,
) -> str | None:
    """Send a prompt and return the model's text response, stripped of outer whitespace.

    Returns None (with a logged warning) when the provider withholds the
    response for safety reasons.  Lower temperatures give more repeatable
    answers; higher ones raise the chance of hallucination.
    """
    if not 0.0 <= temperature <= 2.0:
        raise ValueError(f"temperature must be between 0 and 2, got {temperature}")

    cfg = provider_config(provider)
    model = model or cfg["default_model"]
    messages = build_messages(prompt, image=image, document=document)

    # Gemini accepts its native safety settings through the extra_body passthrough
    extra_body = None
    if provider == "gemini":
        extra_body = {"extra_body": {"google": {"safety_settings": safety_settings(safety)}}}

    if client is None:
        client = get_client(provider, api_key)

    t0 = time.time()
    completion = client.chat.completions.create(
        model=model,
        messages=messages,
        temperature=temperature,
        extra_body=extra_body,
    )
    logger.debug("%s/%s responded in %.1fs", provider, model, time.time() - t0)

    choice = completion.choices[0]
    if choice.finish_reason == "content_filter":
        logger.warning("No response returned due to safety. Consider adjusting the safety threshold.")
        return None
    return (choice.message.content or "").strip()


def count_tokens(prompt: str, model: str | None = None) -> int:
    """Count the tokens in a text prompt with tiktoken.

    Model names tiktoken does not know (e.g. Gemini models) are counted with
    the o200k_base encoding, so the figure is an estimate for them.
    """
    model = model or provider_config(DEFAULT_PROVIDER)["default_model"]
    try:
        encoding = tiktoken.encoding_for_model(model)
    except KeyError:
        logger.debug("No tiktoken encoding for %s; using %s", model, FALLBACK_ENCODING)
        encoding = tiktoken.get_encoding(FALLBACK_ENCODING)
    return len(encoding.encode(prompt))

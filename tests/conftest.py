"""Shared test configuration and fixtures."""

import pytest

from llm_tables.llm.config import AZURE_ENDPOINT_ENV, PROVIDERS


@pytest.fixture(autouse=True)
def no_api_keys(monkeypatch):
    """Clear provider credentials loaded from .env so no test reaches a real API."""
    for cfg in PROVIDERS.values():
        monkeypatch.delenv(cfg["api_key_env"], raising=False)
    monkeypatch.delenv(AZURE_ENDPOINT_ENV, raising=False)

import httpx
import pytest

import kilocode_provider.plugin as plugin_mod

OPENROUTER_PAYLOAD = {
    "data": [
        {
            "id": "openai/gpt-5",
            "name": "OpenAI: GPT-5",
            "context_length": 400_000,
            "pricing": {"prompt": "0.00000125"},
        },
        {"id": "x-ai/grok-4", "name": "xAI: Grok 4", "architecture": {"modality": "text->text"}},
        {"id": "missing/name"},
        {"name": "Missing Id"},
        {"id": "", "name": "Empty Id"},
    ]
}


@pytest.fixture
def make_client():
    """Build an AsyncClient whose requests are answered by ``handler``."""

    def _make(handler):
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("KILOCODE_API_KEY", "sk-test-123")
    return "sk-test-123"


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.delenv("KILOCODE_API_KEY", raising=False)


@pytest.fixture(autouse=True)
def reset_banner(monkeypatch):
    monkeypatch.setattr(plugin_mod, "_initialized", False)


@pytest.fixture(autouse=True)
def reset_default_catalog(monkeypatch):
    monkeypatch.setattr(plugin_mod, "_default_catalog", None)

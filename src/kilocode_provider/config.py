"""
config.py — Centralised configuration for the Kilo Code provider plugin.

Endpoints, provider identity, header constants and the static model table
live here.  Nothing deeper in the stack hard-codes a URL or a model id.
"""

from __future__ import annotations

import os
from typing import Dict, Optional

from dotenv import find_dotenv, load_dotenv

PROVIDER_VERSION = "4.91.0"
API_KEY_ENV = "KILOCODE_API_KEY"

# Host templating token for an unresolved ``{env:...}`` reference.
API_KEY_PLACEHOLDER = "{env:%s}" % API_KEY_ENV


def _env_bool(key: str, default: bool) -> bool:
    val = os.getenv(key, "").lower()
    if val in ("1", "true", "yes"):
        return True
    if val in ("0", "false", "no"):
        return False
    return default


class Settings:
    """
    Simple settings object populated from environment variables.

    The API key is deliberately absent: it is read on every access so that a
    key exported after import is still picked up.
    """

    # Endpoints
    models_url: str = os.getenv("KILOCODE_MODELS_URL", "https://openrouter.ai/api/v1/models")
    base_url: str = os.getenv("KILOCODE_BASE_URL", "https://kilocode.ai/api/openrouter")

    # Catalog
    catalog_timeout: float = float(os.getenv("KILOCODE_CATALOG_TIMEOUT", "10"))
    catalog_ttl: int = int(os.getenv("KILOCODE_CATALOG_TTL", "0"))
    live_models: bool = _env_bool("KILOCODE_LIVE_MODELS", False)

    # Plugin behaviour
    exit_on_missing_key: bool = _env_bool("KILOCODE_EXIT_ON_MISSING_KEY", True)

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()


# ══════════════════════════════════════════════════════════════════════════════
# Provider identity
# ══════════════════════════════════════════════════════════════════════════════

API_CONFIG: Dict[str, str] = {
    "schema": "https://opencode.ai/config.json",
    "npm_package": "@ai-sdk/openai-compatible",
}

PROVIDER_INFO: Dict[str, str] = {
    "name": "kilocode.ai",  # key under config["provider"]
    "display_name": "Kilocode.ai Unofficial",
    "version": PROVIDER_VERSION,
    "user_agent": f"Kilo-Code/{PROVIDER_VERSION}",
    "referer": "https://kilocode.ai",
    "title": "Kilo Code",
    "key_url": "https://app.kilocode.ai/profile",
}


# ── Static model table (used when live discovery fails or is not wanted) ─────

FALLBACK_MODELS: Dict[str, str] = {
    "openrouter/sonoma-dusk-alpha": "Sonoma Dusk Alpha",
    "openrouter/sonoma-sky-alpha": "Sonoma Sky Alpha",
    "qwen/qwen3-coder:free": "Qwen: Qwen3 Coder 480B A35B (free)",
    "qwen/qwen3-coder": "Qwen: Qwen3 Coder 480B A35B",
    "openai/gpt-oss-120b:free": "OpenAI: gpt-oss-120b (free)",
    "openai/gpt-oss-120b": "OpenAI: gpt-oss-120b",
    "openai/gpt-oss-20b:free": "OpenAI: gpt-oss-20b (free)",
    "openai/gpt-oss-20b": "OpenAI: gpt-oss-20b",
    "openai/gpt-5": "OpenAI: GPT-5",
    "openai/gpt-5-mini": "OpenAI: GPT-5 Mini",
    "openai/gpt-5-nano": "OpenAI: GPT-5 Nano",
    "x-ai/grok-4": "xAI: Grok 4",
    "x-ai/grok-code-fast-1": "xAI: Grok Code Fast 1",
    "google/gemini-2.5-flash": "Google: Gemini 2.5 Flash",
    "google/gemini-2.5-pro": "Google: Gemini 2.5 Pro",
    "anthropic/claude-opus-4": "Anthropic: Claude Opus 4",
    "anthropic/claude-sonnet-4": "Anthropic: Claude Sonnet 4",
    "openai/gpt-4.1": "OpenAI: GPT-4.1",
}


def initialize_env() -> None:
    """Load the nearest .env file, searching up from the working directory.

    Existing variables are never overwritten.  Called by the CLI at process
    start, never at import time, so importing the package has no side effects.
    """
    load_dotenv(find_dotenv(usecwd=True), override=False)


def is_unresolved_placeholder(value: Optional[str]) -> bool:
    """Return True if ``value`` is missing or still the ``{env:...}`` token."""
    return not value or value == API_KEY_PLACEHOLDER

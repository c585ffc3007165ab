"""
plugin.py — Registers Kilo Code as a provider in the host configuration.

The host calls ``kilocode_provider_plugin`` once per load and gets back a
``{"config": hook}`` mapping; the hook injects the provider entry into the
host's ``config["provider"]`` mapping at most once.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Awaitable, Callable, Dict, MutableMapping, Optional

from kilocode_provider.catalog import AVAILABLE_MODELS, ModelCatalog
from kilocode_provider.config import (
    API_CONFIG,
    API_KEY_ENV,
    API_KEY_PLACEHOLDER,
    PROVIDER_INFO,
    is_unresolved_placeholder,
    settings,
)
from kilocode_provider.errors import ExitCode
from kilocode_provider.models import (
    AvailableModels,
    CredentialCheck,
    CredentialStatus,
    ProviderConfig,
    ProviderOptions,
)

logger = logging.getLogger(__name__)

# Guards the startup banner only.
_initialized = False

# Shared by every plugin load that opts into live models without its own catalog.
_default_catalog: Optional[ModelCatalog] = None


# ══════════════════════════════════════════════════════════════════════════════
# Credentials
# ══════════════════════════════════════════════════════════════════════════════


def get_api_key() -> str:
    """Return the API key, or the ``{env:KILOCODE_API_KEY}`` token if unset."""
    return os.getenv(API_KEY_ENV) or API_KEY_PLACEHOLDER


def validate_api_key() -> CredentialCheck:
    """Check KILOCODE_API_KEY without side effects.

    The caller decides what a failed check means; the plugin hook turns it
    into a process exit.
    """
    raw = os.getenv(API_KEY_ENV)
    if not is_unresolved_placeholder(raw):
        return CredentialCheck(status=CredentialStatus.SET, env_var=API_KEY_ENV)

    status = CredentialStatus.PLACEHOLDER if raw else CredentialStatus.MISSING
    message = (
        f"{API_KEY_ENV} is not set!\n"
        f"Please set the {API_KEY_ENV} environment variable.\n"
        f"You can get your API key from {PROVIDER_INFO['key_url']}\n"
        "OpenCode startup aborted."
    )
    return CredentialCheck(
        status=status,
        env_var=API_KEY_ENV,
        message=message,
        remediation_url=PROVIDER_INFO["key_url"],
    )


def log_api_key_status() -> None:
    status = "not set" if is_unresolved_placeholder(os.getenv(API_KEY_ENV)) else "set"
    logger.info("API key status: %s", status)


# ══════════════════════════════════════════════════════════════════════════════
# Provider config
# ══════════════════════════════════════════════════════════════════════════════


def create_headers(api_key: str) -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key}",
        "X-KiloCode-Version": PROVIDER_INFO["version"],
        "User-Agent": PROVIDER_INFO["user_agent"],
        "HTTP-Referer": PROVIDER_INFO["referer"],
        "X-Title": PROVIDER_INFO["title"],
    }


def create_kilocode_provider_config(models: Optional[AvailableModels] = None) -> ProviderConfig:
    """Build the full provider entry.

    ``models`` defaults to the static AVAILABLE_MODELS table; pass a fetched
    catalog to register live models instead.
    """
    api_key = get_api_key()
    return ProviderConfig(
        schema_url=API_CONFIG["schema"],
        npm=API_CONFIG["npm_package"],
        name=PROVIDER_INFO["display_name"],
        options=ProviderOptions(
            base_url=settings.base_url,
            api_key=api_key,
            headers=create_headers(api_key),
        ),
        models=dict(AVAILABLE_MODELS if models is None else models),
    )


def configure_kilocode_provider(
    config: MutableMapping[str, Any],
    models: Optional[AvailableModels] = None,
) -> CredentialCheck:
    """Inject the Kilo Code entry into ``config["provider"]``.

    Returns the credential check.  On a failed check ``config`` is left
    untouched; an existing ``kilocode.ai`` entry is never overwritten.
    """
    check = validate_api_key()
    if not check.ok:
        logger.error("%s", check.message)
        return check

    if config.get("provider") is None:
        config["provider"] = {}

    providers = config["provider"]
    if PROVIDER_INFO["name"] in providers:
        logger.debug("Provider %s already configured, skipping", PROVIDER_INFO["name"])
        return check

    log_api_key_status()
    providers[PROVIDER_INFO["name"]] = create_kilocode_provider_config(models).to_host_dict()
    logger.info("%s provider successfully configured", PROVIDER_INFO["display_name"])
    return check


# ══════════════════════════════════════════════════════════════════════════════
# Plugin entry point
# ══════════════════════════════════════════════════════════════════════════════


async def kilocode_provider_plugin(
    input: Any = None,
    *,
    catalog: Optional[ModelCatalog] = None,
    exit_on_missing_key: Optional[bool] = None,
    live_models: Optional[bool] = None,
) -> Dict[str, Callable[[MutableMapping[str, Any]], Awaitable[None]]]:
    """Plugin entry point; returns the configuration hook for the host.

    ``input`` is the host's plugin input and is not used.  With
    ``live_models`` the catalog is fetched here (once per process unless a
    ``catalog`` is passed) and registered in place of the static table.
    """
    global _initialized, _default_catalog
    if not _initialized:
        logger.info("%s Plugin initialized", PROVIDER_INFO["display_name"])
        _initialized = True

    exit_on_missing = (
        settings.exit_on_missing_key if exit_on_missing_key is None else exit_on_missing_key
    )
    use_live = settings.live_models if live_models is None else live_models

    models: Optional[AvailableModels] = None
    if use_live:
        if catalog is None:
            if _default_catalog is None:
                _default_catalog = ModelCatalog()
            catalog = _default_catalog
        models = await catalog.get_available_models()

    async def config_hook(config: MutableMapping[str, Any]) -> None:
        check = configure_kilocode_provider(config, models)
        if check.ok:
            return
        if exit_on_missing:
            raise SystemExit(int(ExitCode.MISSING_CREDENTIAL))
        check.raise_for_status()

    return {"config": config_hook}

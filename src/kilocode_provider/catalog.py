"""
catalog.py — Model catalog loading for the Kilo Code provider.

Responsibilities:
  • Fetch the live model list from OpenRouter's /api/v1/models endpoint
  • Reduce each entry to ``{id: ModelInfo(name)}``, dropping everything else
  • Fall back to the static FALLBACK_MODELS table when the fetch fails
  • Hold the fetched catalog in a single-owner cache with explicit
    invalidate / refresh

Dependencies: httpx (async HTTP), cachetools (cache container)
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, Optional

import httpx
from cachetools import Cache, TTLCache

from kilocode_provider.config import FALLBACK_MODELS, PROVIDER_INFO, settings
from kilocode_provider.errors import CatalogFetchError
from kilocode_provider.models import AvailableModels, ModelInfo

logger = logging.getLogger(__name__)

FailureHook = Callable[[CatalogFetchError], None]

_CACHE_KEY = "models"


# ══════════════════════════════════════════════════════════════════════════════
# Static table
# ══════════════════════════════════════════════════════════════════════════════


def get_fallback_models() -> AvailableModels:
    """Return a fresh copy of the hardcoded model table."""
    return {mid: ModelInfo(name=name) for mid, name in FALLBACK_MODELS.items()}


# Evaluated once at import; this is what the registrar registers by default.
AVAILABLE_MODELS: AvailableModels = get_fallback_models()


# ══════════════════════════════════════════════════════════════════════════════
# Live fetch
# ══════════════════════════════════════════════════════════════════════════════


def _parse_models_payload(data: Any) -> AvailableModels:
    """Parse an OpenRouter /api/v1/models body → AvailableModels.

    A body without a ``data`` list yields an empty mapping, not the fallback.
    """
    models: AvailableModels = {}
    if not isinstance(data, dict):
        return models
    items = data.get("data")
    if not isinstance(items, list):
        logger.debug("Models payload has no 'data' list (got %s)", type(items).__name__)
        return models

    for item in items:
        if not isinstance(item, dict):
            continue
        mid = item.get("id")
        name = item.get("name")
        if not mid or not name:
            continue
        models[str(mid)] = ModelInfo(name=str(name))
    return models


def _build_headers() -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "User-Agent": PROVIDER_INFO["user_agent"],
    }


async def _fetch_json(url: str, client: Optional[httpx.AsyncClient]) -> Any:
    headers = _build_headers()
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=settings.catalog_timeout) as owned:
                r = await owned.get(url, headers=headers, follow_redirects=True)
        else:
            r = await client.get(url, headers=headers, follow_redirects=True)
        r.raise_for_status()
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        raise CatalogFetchError(
            f"Failed to fetch models: {status}", reason="http_status", status_code=status
        ) from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise CatalogFetchError(f"Failed to fetch models: {exc!r}", reason="transport") from exc

    try:
        return r.json()
    except ValueError as exc:
        raise CatalogFetchError(
            f"Models response is not valid JSON: {exc}",
            reason="parse",
            status_code=r.status_code,
        ) from exc


def _report_failure(exc: CatalogFetchError, on_failure: Optional[FailureHook]) -> None:
    logger.warning(
        "Failed to fetch models from OpenRouter (%s), using fallback: %s",
        exc.reason,
        exc,
        extra={"catalog_failure": exc.reason, "status_code": exc.status_code},
    )
    if on_failure is None:
        return
    try:
        on_failure(exc)
    except Exception:
        logger.exception("Catalog failure hook raised")


async def fetch_available_models(
    client: Optional[httpx.AsyncClient] = None,
    on_failure: Optional[FailureHook] = None,
) -> AvailableModels:
    """Fetch the live catalog; never raises.

    Bad status, transport errors and undecodable bodies all return
    ``get_fallback_models()`` after a warning and a call to ``on_failure``.
    """
    try:
        data = await _fetch_json(settings.models_url, client)
    except CatalogFetchError as exc:
        _report_failure(exc, on_failure)
        return get_fallback_models()

    models = _parse_models_payload(data)
    logger.debug("Fetched %d models from %s", len(models), settings.models_url)
    return models


# ══════════════════════════════════════════════════════════════════════════════
# ModelCatalog: single-owner cache around the fetch
# ══════════════════════════════════════════════════════════════════════════════


class ModelCatalog:
    """
    Memoizes the fetched catalog for whoever owns the instance.

    Usage::

        catalog = ModelCatalog()
        models = await catalog.get_available_models()   # fetches once
        models = await catalog.get_available_models()   # cached
        await catalog.refresh()                          # fetch again
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        ttl: Optional[float] = None,
        on_failure: Optional[FailureHook] = None,
    ) -> None:
        ttl = settings.catalog_ttl if ttl is None else ttl
        if ttl > 0:
            self._cache: Cache = TTLCache(maxsize=1, ttl=ttl)
        else:
            self._cache = Cache(maxsize=1)
        self._client = client
        self._on_failure = on_failure
        self._lock = asyncio.Lock()

    # ── Public interface ───────────────────────────────────────────────────────

    @property
    def cached(self) -> Optional[AvailableModels]:
        return self._cache.get(_CACHE_KEY)

    async def get_available_models(self) -> AvailableModels:
        """Return the cached catalog, fetching it on first use.

        Whatever the fetch returns is cached, including the fallback table
        and an empty mapping.
        """
        cached = self._cache.get(_CACHE_KEY)
        if cached is not None:
            return cached

        async with self._lock:
            # Another task may have filled the cache while we waited.
            cached = self._cache.get(_CACHE_KEY)
            if cached is not None:
                return cached
            models = await fetch_available_models(self._client, self._on_failure)
            self._cache[_CACHE_KEY] = models
            return models

    def invalidate(self) -> None:
        self._cache.pop(_CACHE_KEY, None)
        logger.debug("Model catalog cache invalidated")

    async def refresh(self) -> AvailableModels:
        """Drop the cached catalog and fetch it again."""
        self.invalidate()
        return await self.get_available_models()

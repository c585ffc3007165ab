"""Public package surface for kilocode_provider.

Expose the primary entry points used by hosts of the plugin.
"""

__version__ = "0.1.0"

from kilocode_provider.catalog import (
    AVAILABLE_MODELS,
    ModelCatalog,
    fetch_available_models,
    get_fallback_models,
)
from kilocode_provider.config import settings
from kilocode_provider.errors import CatalogFetchError, MissingCredentialError
from kilocode_provider.models import CredentialCheck, ModelInfo, ProviderConfig
from kilocode_provider.plugin import configure_kilocode_provider, kilocode_provider_plugin

__all__ = [
    "AVAILABLE_MODELS",
    "CatalogFetchError",
    "CredentialCheck",
    "MissingCredentialError",
    "ModelCatalog",
    "ModelInfo",
    "ProviderConfig",
    "__version__",
    "configure_kilocode_provider",
    "fetch_available_models",
    "get_fallback_models",
    "kilocode_provider_plugin",
    "settings",
]

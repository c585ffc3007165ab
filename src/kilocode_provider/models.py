"""
models.py — Pydantic schemas and result types for the Kilo Code plugin.

Two layers:
  1. Provider schemas written into the host configuration (ModelInfo,
     ProviderOptions, ProviderConfig)
  2. Runtime result objects (CredentialCheck)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from kilocode_provider.errors import MissingCredentialError


# ══════════════════════════════════════════════════════════════════════════════
# Provider schemas
# ══════════════════════════════════════════════════════════════════════════════


class ModelInfo(BaseModel):
    """Display name for one model identifier."""

    model_config = ConfigDict(frozen=True)

    name: str


# model id (e.g. "openai/gpt-5") -> ModelInfo
AvailableModels = Dict[str, ModelInfo]


class ProviderOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    base_url: str = Field(alias="baseURL")
    api_key: str = Field(alias="apiKey")
    headers: Dict[str, str] = Field(default_factory=dict)


class ProviderConfig(BaseModel):
    """The provider entry registered under ``config["provider"]``."""

    model_config = ConfigDict(populate_by_name=True)

    # "schema" shadows a BaseModel attribute, hence the alias.
    schema_url: str = Field(alias="schema")
    npm: str
    name: str
    options: ProviderOptions
    models: Dict[str, ModelInfo] = Field(default_factory=dict)

    def to_host_dict(self) -> Dict[str, Any]:
        """Plain JSON-compatible dict using the host's camelCase keys."""
        return self.model_dump(by_alias=True)


# ══════════════════════════════════════════════════════════════════════════════
# Runtime results
# ══════════════════════════════════════════════════════════════════════════════


class CredentialStatus(str, Enum):
    SET = "set"
    MISSING = "missing"
    PLACEHOLDER = "placeholder"


@dataclass
class CredentialCheck:
    """Outcome of validating KILOCODE_API_KEY."""

    status: CredentialStatus
    env_var: str
    message: Optional[str] = None
    remediation_url: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is CredentialStatus.SET

    def raise_for_status(self) -> None:
        if not self.ok:
            raise MissingCredentialError(self.message or f"{self.env_var} is not set")

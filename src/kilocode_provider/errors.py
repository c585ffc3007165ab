"""Error types and exit codes for the Kilo Code provider plugin."""

from __future__ import annotations

from enum import IntEnum
from typing import Optional


class ExitCode(IntEnum):
    SUCCESS = 0
    MISSING_CREDENTIAL = 1
    RUNTIME_ERROR = 2
    PROVIDER_ERROR = 3


class KiloCodeError(Exception):
    """Base error for the plugin."""

    exit_code: ExitCode = ExitCode.RUNTIME_ERROR


class MissingCredentialError(KiloCodeError):
    """KILOCODE_API_KEY is unset or still the unresolved placeholder."""

    exit_code = ExitCode.MISSING_CREDENTIAL


class CatalogFetchError(KiloCodeError):
    """The OpenRouter model listing could not be fetched or decoded.

    Never raised out of the catalog loader; it is logged and handed to the
    failure hook so operators can tell an outage from a changed payload.
    """

    exit_code = ExitCode.PROVIDER_ERROR

    def __init__(
        self,
        message: str,
        reason: str,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.reason = reason  # "http_status" | "transport" | "parse"
        self.status_code = status_code

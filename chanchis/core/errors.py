"""Domain error types for Chanchis.

Purpose:
- Provide typed exceptions raised by the token primitives and the server
  services.
- Carry the HTTP status the API should answer with, so the exception handler
  can render them without per-route translation.

Usage:
- Catch ``ChanchisError`` for any domain failure and inspect ``status_code``.
- Catch ``TransferRelayError`` to learn which relay ``stage`` failed.
"""

from __future__ import annotations

from typing import Any, Optional


class ChanchisError(Exception):
    """Base error for Chanchis domain failures.

    Args:
        message: Human-readable error description.
        status_code: HTTP status code the API should return.
        details: Optional structured context for diagnosis.
    """

    status_code: int = 500

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details


class ConfigurationError(ChanchisError):
    """Raised when a required server secret or address is not configured."""

    status_code = 500


class InvalidAddressError(ChanchisError):
    """Raised when a value is not a valid EVM address.

    Args:
        value: The rejected value.
        field: Name of the request field it came from.
    """

    status_code = 400

    def __init__(self, value: Any, field: str = "address") -> None:
        super().__init__(f"Invalid {field}: {value!r}")
        self.value = value
        self.field = field


class InvalidAmountError(ChanchisError):
    """Raised when a token amount or uint256 string cannot be used."""

    status_code = 400


class InvalidPermitError(ChanchisError):
    """Raised when a permit is malformed, expired or not signed by its owner."""

    status_code = 400


class TransferRelayError(ChanchisError):
    """Raised when the sponsor relayer rejects one step of a gasless transfer.

    Args:
        stage: ``permit`` or ``transfer``.
        message: Error reported by the relayer.
        permit_tx_hash: Hash of the already relayed permit, for ``transfer`` failures.
    """

    status_code = 500

    def __init__(self, stage: str, message: str, *, permit_tx_hash: Optional[str] = None, details: Any = None) -> None:
        super().__init__(message, details=details)
        self.stage = stage
        self.permit_tx_hash = permit_tx_hash

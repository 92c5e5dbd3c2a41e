"""Error types specific to the Etherscan API layer."""

from __future__ import annotations

from typing import Any, Optional


class EtherscanApiError(Exception):
    """Raised when the explorer API cannot be reached or answers with a non-2xx status.

    Args:
        message: Human-readable error description.
        status_code: Optional HTTP status code associated with the failure.
        details: Optional response body.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details

"""Error types specific to the object storage layer."""

from __future__ import annotations

from typing import Any, Optional


class StorageApiError(Exception):
    """Raised when an object cannot be stored.

    Args:
        message: Human-readable error description.
        status_code: Optional HTTP status code associated with the failure.
        details: Optional structured payload from the server (e.g., JSON body).
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details

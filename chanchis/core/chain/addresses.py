"""EVM address validation helpers."""

from __future__ import annotations

from typing import Any

from web3 import Web3

from chanchis.core.errors import InvalidAddressError


def _is_mixed_case(value: str) -> bool:
    body = value[2:] if value[:2] in ("0x", "0X") else value
    return body != body.lower() and body != body.upper()


def to_checksum(value: Any, field: str = "address") -> str:
    """Validate ``value`` as a 20-byte hex address and return its checksum form.

    All-lowercase and all-uppercase input is accepted as is. Mixed-case input
    must carry a valid EIP-55 checksum.

    Raises:
        InvalidAddressError: If the value is empty, not a valid address, or
            mixed-case with a wrong checksum.
    """
    if not isinstance(value, str) or not Web3.is_address(value):
        raise InvalidAddressError(value, field)
    if _is_mixed_case(value) and not Web3.is_checksum_address(value):
        raise InvalidAddressError(value, field)
    return Web3.to_checksum_address(value)


def normalize_address(value: Any, field: str = "address") -> str:
    """Validate ``value`` and return it lowercased, the form used for storage and comparison."""
    return to_checksum(value, field).lower()

"""
EIP-2612 permit helpers.

The gasless transfer flow has the token owner sign an EIP-712 ``Permit``
authorising the sponsor wallet to spend ``value`` tokens until ``deadline``.
The sponsor then submits ``permit(owner, spender, value, deadline, v, r, s)``
on the owner's behalf, which needs the 65-byte signature split into its
``v``, ``r`` and ``s`` components.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from eth_account import Account
from eth_account.messages import encode_typed_data

from chanchis.core.errors import InvalidPermitError

from .constants import (
    CELO_CHAIN_ID,
    CHANCHIS_TOKEN_ADDRESS,
    PERMIT_DOMAIN_NAME,
    PERMIT_DOMAIN_VERSION,
)

EIP712_DOMAIN_TYPE = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]

PERMIT_TYPE = [
    {"name": "owner", "type": "address"},
    {"name": "spender", "type": "address"},
    {"name": "value", "type": "uint256"},
    {"name": "nonce", "type": "uint256"},
    {"name": "deadline", "type": "uint256"},
]


@dataclass(frozen=True)
class PermitSignature:
    """The ``(v, r, s)`` triple expected by ``permit``.

    ``r`` and ``s`` are 0x-prefixed 32-byte hex strings.
    """

    v: int
    r: str
    s: str

    def to_bytes(self) -> bytes:
        return bytes.fromhex(self.r[2:]) + bytes.fromhex(self.s[2:]) + bytes([self.v])

    def to_hex(self) -> str:
        return "0x" + self.to_bytes().hex()


def build_permit_typed_data(
    owner: str,
    spender: str,
    value: int,
    nonce: int,
    deadline: int,
    *,
    token_address: str = CHANCHIS_TOKEN_ADDRESS,
    chain_id: int = CELO_CHAIN_ID,
    domain_name: str = PERMIT_DOMAIN_NAME,
    domain_version: str = PERMIT_DOMAIN_VERSION,
) -> Dict[str, Any]:
    """Build the full EIP-712 message for an EIP-2612 ``Permit``.

    Returns:
        A dict with ``types``, ``primaryType``, ``domain`` and ``message`` keys,
        the shape wallets sign with ``eth_signTypedData_v4``.
    """
    return {
        "types": {
            "EIP712Domain": EIP712_DOMAIN_TYPE,
            "Permit": PERMIT_TYPE,
        },
        "primaryType": "Permit",
        "domain": {
            "name": domain_name,
            "version": domain_version,
            "chainId": chain_id,
            "verifyingContract": token_address,
        },
        "message": {
            "owner": owner,
            "spender": spender,
            "value": int(value),
            "nonce": int(nonce),
            "deadline": int(deadline),
        },
    }


def split_signature(signature: str) -> PermitSignature:
    """Split a 65-byte ``r || s || v`` hex signature.

    Legacy ``v`` values of 0/1 are normalised to 27/28.

    Raises:
        InvalidPermitError: If the signature is not 65 bytes of hex or ``v`` is out of range.
    """
    if not isinstance(signature, str):
        raise InvalidPermitError("Signature must be a hex string")
    raw = signature[2:] if signature.startswith(("0x", "0X")) else signature
    if len(raw) != 130:
        raise InvalidPermitError(f"Signature must be 65 bytes, got {len(raw) // 2}")
    try:
        sig_bytes = bytes.fromhex(raw)
    except ValueError as e:
        raise InvalidPermitError("Signature is not valid hex") from e

    v = sig_bytes[64]
    if v in (0, 1):
        v += 27
    if v not in (27, 28):
        raise InvalidPermitError(f"Invalid signature recovery id: {v}")
    return PermitSignature(v=v, r="0x" + sig_bytes[:32].hex(), s="0x" + sig_bytes[32:64].hex())


def recover_permit_signer(typed_data: Dict[str, Any], signature: PermitSignature) -> str:
    """Recover the checksum address that signed ``typed_data``.

    Raises:
        InvalidPermitError: If no address can be recovered from the signature.
    """
    try:
        signable = encode_typed_data(full_message=typed_data)
        return Account.recover_message(signable, signature=signature.to_bytes())
    except Exception as e:
        raise InvalidPermitError(f"Could not recover permit signer: {e}") from e


def sign_permit(private_key: str | bytes, typed_data: Dict[str, Any]) -> str:
    """Sign ``typed_data`` with ``private_key`` and return the 0x-prefixed 65-byte signature."""
    signed = Account.sign_typed_data(private_key, full_message=typed_data)
    return "0x" + bytes(signed.signature).hex()

"""
Token primitives for the CHNC ERC-20 on Celo.

Modules:
- constants: Chain id, token address and the ABI fragments the server uses
- units: Conversion between decimal amounts and base units
- addresses: EVM address validation and normalisation
- permit: EIP-2612 permit typed data, signature splitting and recovery
- token: Read-only contract access over JSON-RPC
"""

from .addresses import normalize_address, to_checksum
from .permit import (
    PermitSignature,
    build_permit_typed_data,
    recover_permit_signer,
    sign_permit,
    split_signature,
)
from .token import TokenBalance, TokenReader
from .units import format_compact, format_units, parse_units

__all__ = [
    "PermitSignature",
    "TokenBalance",
    "TokenReader",
    "build_permit_typed_data",
    "format_compact",
    "format_units",
    "normalize_address",
    "parse_units",
    "recover_permit_signer",
    "sign_permit",
    "split_signature",
    "to_checksum",
]

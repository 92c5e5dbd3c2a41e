"""
Transfer I/O models for the gasless transfer endpoints.

Field names follow the JSON the mini-app client sends (``from``, camelCase
transaction hashes); amounts and deadlines are base-10 uint256 strings.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class NonceRequest(BaseModel):
    owner: Optional[str] = Field(default=None, description="Token owner address")


class NonceResponse(BaseModel):
    nonce: str = Field(description="Current EIP-2612 nonce of the owner, as a decimal string")
    spender: str = Field(description="Sponsor wallet the permit must authorise")


class TransferRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_address: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None
    amount: Optional[str] = Field(default=None, description="Amount in base units")
    deadline: Optional[str] = Field(default=None, description="Permit deadline, unix seconds")
    signature: Optional[str] = Field(default=None, description="65-byte permit signature, 0x-prefixed hex")

    def is_complete(self) -> bool:
        return all([self.from_address, self.to, self.amount, self.deadline, self.signature])


class TransferResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    permit_tx_hash: Optional[str] = Field(default=None, alias="permitTxHash")
    transfer_tx_hash: Optional[str] = Field(default=None, alias="transferTxHash")

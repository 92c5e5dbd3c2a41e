"""Wallet and transaction history I/O models."""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field


class BalanceRead(BaseModel):
    address: str
    symbol: str
    decimals: int
    raw: str = Field(description="Balance in base units, as a decimal string")
    formatted: str = Field(description="Balance in whole tokens")


class TransactionRead(BaseModel):
    """One CHNC transfer touching the queried address."""

    model_config = ConfigDict(populate_by_name=True)

    hash: str
    from_address: str = Field(alias="from")
    to_address: str = Field(alias="to")
    value: str
    token_symbol: str = Field(alias="tokenSymbol")
    token_decimal: str = Field(alias="tokenDecimal")
    time_stamp: str = Field(alias="timeStamp")
    type: Literal["in", "out"]
    formatted_value: str = Field(alias="formattedValue")


class TransactionListResponse(BaseModel):
    transactions: List[TransactionRead]


class UploadResponse(BaseModel):
    url: str

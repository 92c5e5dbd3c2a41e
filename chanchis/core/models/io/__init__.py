"""
I/O models for API requests and responses.

These Pydantic schemas define the contract between API endpoints and
clients, separate from database entities.

Modules:
- businesses: Business directory and cashback quote models
- transfers: Gasless transfer models
- wallet: Balance, transaction history and upload models
"""

from .businesses import (
    BusinessCreate,
    BusinessListResponse,
    BusinessLookupResponse,
    BusinessRead,
    BusinessResponse,
    BusinessUpdate,
    CashbackQuoteRead,
    DeleteResponse,
)
from .transfers import NonceRequest, NonceResponse, TransferRequest, TransferResponse
from .wallet import BalanceRead, TransactionListResponse, TransactionRead, UploadResponse

__all__ = [
    "BalanceRead",
    "BusinessCreate",
    "BusinessListResponse",
    "BusinessLookupResponse",
    "BusinessRead",
    "BusinessResponse",
    "BusinessUpdate",
    "CashbackQuoteRead",
    "DeleteResponse",
    "NonceRequest",
    "NonceResponse",
    "TransactionListResponse",
    "TransactionRead",
    "TransferRequest",
    "TransferResponse",
    "UploadResponse",
]

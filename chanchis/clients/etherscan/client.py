from __future__ import annotations

import logging
from typing import Any, List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import EtherscanApiError


class TokenTransferDTO(BaseModel):
    """One row of the ``account/tokentx`` result (only the fields we consume)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    hash: str
    from_address: str = Field(alias="from")
    to_address: str = Field(alias="to")
    value: str
    token_symbol: Optional[str] = Field(default=None, alias="tokenSymbol")
    token_decimal: Optional[str] = Field(default=None, alias="tokenDecimal")
    time_stamp: str = Field(alias="timeStamp")


class _TokenTxPayloadDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: str = "0"
    message: str = ""
    # A string on errors ("Invalid API Key"), a list on success
    result: Any = None


class EtherscanApiClient:
    """
    Thin async HTTP client for the Etherscan v2 multichain API.

    Responsibilities:
    - get_token_transfers: ERC-20 transfers of one token touching an address

    Note: an explorer answer with ``status != "1"`` (including "No transactions
    found") is treated as an empty history, not as an error.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: Optional[str] = None,
        timeout: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._logger = logging.getLogger(__name__)

    async def get_token_transfers(
        self,
        *,
        address: str,
        contract_address: str,
        chain_id: int,
        page: int = 1,
        offset: int = 50,
        sort: str = "desc",
    ) -> List[TokenTransferDTO]:
        params: dict[str, str] = {
            "chainid": str(chain_id),
            "module": "account",
            "action": "tokentx",
            "contractaddress": contract_address,
            "address": address,
            "page": str(page),
            "offset": str(offset),
            "sort": sort,
        }
        self._logger.debug("EtherscanApiClient.get_token_transfers: GET %s params=%s", self.base_url, params)
        if self.api_key:
            params["apikey"] = self.api_key
        try:
            r = await self._client.get(self.base_url, params=params)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise EtherscanApiError(
                f"Etherscan tokentx failed: {e.response.status_code}",
                status_code=e.response.status_code,
                details=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            raise EtherscanApiError(f"Etherscan request failed: {e}") from e

        try:
            payload = _TokenTxPayloadDTO.model_validate(r.json())
        except ValueError as e:
            raise EtherscanApiError("Unexpected response shape from tokentx", status_code=r.status_code) from e

        if payload.status != "1" or not isinstance(payload.result, list):
            if payload.message != "No transactions found":
                self._logger.error("Etherscan API error: message=%s result=%s", payload.message, payload.result)
            return []

        try:
            transfers = [TokenTransferDTO.model_validate(item) for item in payload.result]
        except ValidationError as e:
            raise EtherscanApiError(
                "Unexpected transfer row from tokentx", status_code=r.status_code, details=str(e)
            ) from e
        self._logger.debug("EtherscanApiClient.get_token_transfers: got %d transfers", len(transfers))
        return transfers

    async def aclose(self) -> None:
        await self._client.aclose()

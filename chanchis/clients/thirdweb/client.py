from __future__ import annotations

import logging
from typing import Any, List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field

from .errors import ThirdwebApiError


class ContractCall(BaseModel):
    """One contract call in a relayer write request."""

    model_config = ConfigDict(populate_by_name=True)

    contract_address: str = Field(alias="contractAddress")
    method: str
    params: List[Any] = Field(default_factory=list)


class _WriteResultDTO(BaseModel):
    model_config = ConfigDict(extra="allow")

    transaction_ids: List[str] = Field(default_factory=list, alias="transactionIds")


class _WriteResponseDTO(BaseModel):
    model_config = ConfigDict(extra="allow")

    transaction_hash: Optional[str] = Field(default=None, alias="transactionHash")
    result: Optional[_WriteResultDTO] = None


class ContractWriteResult(BaseModel):
    """Outcome of a relayed contract write."""

    transaction_hash: Optional[str] = None
    transaction_ids: List[str] = Field(default_factory=list)

    @property
    def reference(self) -> Optional[str]:
        """The best identifier to report: the tx hash, else the first queued transaction id."""
        if self.transaction_hash:
            return self.transaction_hash
        return self.transaction_ids[0] if self.transaction_ids else None


class ThirdwebApiClient:
    """
    Thin async HTTP client for the thirdweb contract write API.

    Responsibilities:
    - write_contract: submit one or more contract calls from a server wallet

    The server wallet (the sponsor) pays the gas; the secret key authorises the
    request.
    """

    def __init__(
        self,
        base_url: str,
        *,
        secret_key: Optional[str] = None,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.secret_key = secret_key
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._logger = logging.getLogger(__name__)

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self.secret_key:
            headers["x-secret-key"] = self.secret_key
        return headers

    async def write_contract(self, calls: List[ContractCall], *, chain_id: int, sender: str) -> ContractWriteResult:
        body = {
            "calls": [c.model_dump(by_alias=True) for c in calls],
            "chainId": chain_id,
            "from": sender,
        }
        url = f"{self.base_url}/v1/contracts/write"
        self._logger.debug(
            "ThirdwebApiClient.write_contract: POST %s methods=%s",
            url,
            [c.method.split("(")[0].split()[-1] for c in calls],
        )
        try:
            r = await self._client.post(url, headers=self._headers(), json=body)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            details = _decode_body(e.response)
            raise ThirdwebApiError(
                _error_message(details) or f"Contract write failed: {e.response.status_code}",
                status_code=e.response.status_code,
                details=details,
            ) from e
        except httpx.HTTPError as e:
            raise ThirdwebApiError(f"Contract write request failed: {e}") from e

        data = _decode_body(r)
        if not isinstance(data, dict):
            raise ThirdwebApiError("Unexpected response shape from contract write", status_code=r.status_code, details=data)
        dto = _WriteResponseDTO.model_validate(data)
        result = ContractWriteResult(
            transaction_hash=dto.transaction_hash,
            transaction_ids=dto.result.transaction_ids if dto.result else [],
        )
        self._logger.debug("ThirdwebApiClient.write_contract: accepted ref=%s", result.reference)
        return result

    async def aclose(self) -> None:
        await self._client.aclose()


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def _error_message(details: Any) -> Optional[str]:
    # The relayer reports either {"error": "..."} or {"error": {"message": "..."}}
    if not isinstance(details, dict):
        return None
    error = details.get("error") or details.get("message")
    if isinstance(error, dict):
        error = error.get("message")
    return str(error) if error else None

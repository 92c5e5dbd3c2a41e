"""
Read-only access to the CHNC token contract.

Wraps an ``AsyncWeb3`` contract instance and exposes the two view calls the
server needs: the EIP-2612 permit nonce of an owner and the balance of an
account.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from web3 import AsyncWeb3

from .addresses import to_checksum
from .constants import (
    CELO_RPC_URL,
    CHANCHIS_TOKEN_ADDRESS,
    ERC20_PERMIT_READ_ABI,
    TOKEN_DECIMALS,
    TOKEN_SYMBOL,
)
from .units import format_units


@dataclass(frozen=True)
class TokenBalance:
    """Balance of one account in base units plus display metadata."""

    address: str
    raw: int
    decimals: int
    symbol: str

    @property
    def formatted(self) -> str:
        return f"{format_units(self.raw, self.decimals):f}"


class TokenReader:
    """
    Thin read-only client for the CHNC ERC-20 contract.

    Responsibilities:
    - get_nonce (EIP-2612 ``nonces(owner)``)
    - get_balance (``balanceOf(account)``)

    Note: This class never sends transactions; writes go through the sponsor relayer.
    """

    def __init__(
        self,
        rpc_url: str = CELO_RPC_URL,
        *,
        token_address: str = CHANCHIS_TOKEN_ADDRESS,
        decimals: int = TOKEN_DECIMALS,
        symbol: str = TOKEN_SYMBOL,
        web3: Optional[AsyncWeb3] = None,
    ) -> None:
        self.rpc_url = rpc_url
        self.token_address = to_checksum(token_address, "token_address")
        self.decimals = decimals
        self.symbol = symbol
        self._web3 = web3 or AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))
        self._contract = self._web3.eth.contract(address=self.token_address, abi=ERC20_PERMIT_READ_ABI)
        self._logger = logging.getLogger(__name__)

    async def get_nonce(self, owner: str) -> int:
        owner_cs = to_checksum(owner, "owner")
        self._logger.debug("TokenReader.get_nonce: nonces(%s) on %s", owner_cs, self.token_address)
        nonce = await self._contract.functions.nonces(owner_cs).call()
        return int(nonce)

    async def get_balance(self, account: str) -> TokenBalance:
        account_cs = to_checksum(account, "address")
        self._logger.debug("TokenReader.get_balance: balanceOf(%s) on %s", account_cs, self.token_address)
        raw = await self._contract.functions.balanceOf(account_cs).call()
        return TokenBalance(address=account_cs, raw=int(raw), decimals=self.decimals, symbol=self.symbol)

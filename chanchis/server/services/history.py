"""
Transaction History Service.

Reads CHNC transfers touching a wallet from the block explorer and labels
each one as incoming or outgoing relative to that wallet.
"""

from __future__ import annotations

from typing import List

from chanchis.clients.etherscan import EtherscanApiClient, TokenTransferDTO
from chanchis.core.chain.units import format_compact
from chanchis.core.errors import ConfigurationError
from chanchis.core.logging_config import get_logger
from chanchis.core.models.io.wallet import TransactionRead
from chanchis.server.core.config import CeloConfig, EtherscanConfig

logger = get_logger(__name__)


class TransactionHistoryService:
    def __init__(self, *, explorer: EtherscanApiClient, explorer_config: EtherscanConfig, chain_config: CeloConfig):
        self.explorer = explorer
        self.explorer_config = explorer_config
        self.chain_config = chain_config

    async def list_transfers(self, address: str) -> List[TransactionRead]:
        """Most recent CHNC transfers of ``address``, newest first.

        Raises:
            ConfigurationError: If no explorer API key is configured.
        """
        if not self.explorer_config.is_configured:
            raise ConfigurationError("Etherscan API key not configured")

        transfers = await self.explorer.get_token_transfers(
            address=address,
            contract_address=self.chain_config.token_address,
            chain_id=self.chain_config.chain_id,
            page=1,
            offset=self.explorer_config.page_size,
            sort="desc",
        )
        logger.debug(f"Fetched {len(transfers)} transfers for {address}")
        return [self._to_read(tx, address) for tx in transfers]

    def _to_read(self, tx: TokenTransferDTO, address: str) -> TransactionRead:
        decimals = tx.token_decimal or str(self.chain_config.token_decimals)
        try:
            formatted = format_compact(int(tx.value), int(decimals))
        except ValueError:
            formatted = "0"
        return TransactionRead(
            hash=tx.hash,
            from_address=tx.from_address,
            to_address=tx.to_address,
            value=tx.value,
            token_symbol=tx.token_symbol or self.chain_config.token_symbol,
            token_decimal=decimals,
            time_stamp=tx.time_stamp,
            type="in" if tx.to_address.lower() == address.lower() else "out",
            formatted_value=formatted,
        )

"""
Gasless Transfer Service.

Relays EIP-2612 permit based CHNC transfers through the sponsor wallet.

Flow:
1. ``get_permit_nonce``: the client learns the owner's nonce and the sponsor
   (spender) it must authorise, then signs a ``Permit`` in its wallet.
2. ``relay_transfer``: the signed permit is validated, optionally verified
   against the on-chain nonce, and then two contract writes are relayed as
   the sponsor: ``permit`` followed by ``transferFrom``.

``transferFrom`` is only submitted once the relayer accepted ``permit``.
There is no retry: a failed step is reported to the caller as-is.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

from chanchis.clients.thirdweb import ContractCall, ThirdwebApiClient, ThirdwebApiError
from chanchis.core.chain.addresses import to_checksum
from chanchis.core.chain.constants import PERMIT_METHOD, TRANSFER_FROM_METHOD
from chanchis.core.chain.permit import (
    PermitSignature,
    build_permit_typed_data,
    recover_permit_signer,
    split_signature,
)
from chanchis.core.chain.token import TokenReader
from chanchis.core.chain.units import parse_uint256
from chanchis.core.errors import (
    ConfigurationError,
    InvalidAddressError,
    InvalidAmountError,
    InvalidPermitError,
    TransferRelayError,
)
from chanchis.core.logging_config import get_logger
from chanchis.core.monitoring import log_transfer_relay
from chanchis.server.core.config import CeloConfig, ThirdwebConfig

logger = get_logger(__name__)


@dataclass(frozen=True)
class PermitNonce:
    nonce: int
    spender: str


@dataclass(frozen=True)
class TransferResult:
    permit_tx_hash: Optional[str]
    transfer_tx_hash: Optional[str]


class GaslessTransferService:
    """Orchestrates nonce lookup and the two-step sponsor relay."""

    def __init__(
        self,
        *,
        token: TokenReader,
        relayer: ThirdwebApiClient,
        relayer_config: ThirdwebConfig,
        chain_config: CeloConfig,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.token = token
        self.relayer = relayer
        self.relayer_config = relayer_config
        self.chain_config = chain_config
        self._clock = clock

    def _sponsor(self) -> Optional[str]:
        """Checksummed sponsor address, or ``None`` when it is unset or malformed."""
        sponsor = self.relayer_config.sponsor_address
        if not sponsor:
            return None
        try:
            return to_checksum(sponsor, "sponsor_address")
        except InvalidAddressError:
            logger.error("SPONSOR_WALLET_ADDRESS is not a valid address")
            return None

    async def get_permit_nonce(self, owner: str) -> PermitNonce:
        """Return the owner's current permit nonce and the sponsor to authorise.

        Raises:
            InvalidAddressError: If ``owner`` is not an address.
            ConfigurationError: If no sponsor wallet is configured.
        """
        owner_cs = to_checksum(owner, "owner")
        sponsor = self._sponsor()
        if not sponsor:
            raise ConfigurationError("Sponsor wallet not configured")
        nonce = await self.token.get_nonce(owner_cs)
        logger.debug(f"Permit nonce for {owner_cs}: {nonce}")
        return PermitNonce(nonce=nonce, spender=sponsor)

    async def relay_transfer(
        self,
        *,
        owner: str,
        recipient: str,
        amount: str,
        deadline: str,
        signature: str,
    ) -> TransferResult:
        """Validate a signed permit and relay ``permit`` then ``transferFrom``.

        Args:
            owner: Token owner who signed the permit.
            recipient: Address receiving the tokens.
            amount: Amount in base units (decimal string).
            deadline: Permit deadline in unix seconds (decimal string).
            signature: 65-byte permit signature.

        Returns:
            The relayer references of both transactions.

        Raises:
            ConfigurationError: If the relayer secret or sponsor is missing.
            InvalidAddressError, InvalidAmountError, InvalidPermitError: On bad input.
            TransferRelayError: If the relayer rejects either step.
        """
        sponsor = self._sponsor()
        if not self.relayer_config.secret_key or not sponsor:
            raise ConfigurationError("Server not configured properly")

        owner_cs = to_checksum(owner, "from")
        recipient_cs = to_checksum(recipient, "to")
        value = parse_uint256(amount, "amount")
        if value == 0:
            raise InvalidAmountError("Amount must be greater than zero")
        deadline_ts = parse_uint256(deadline, "deadline")
        if deadline_ts <= int(self._clock()):
            raise InvalidPermitError("Permit deadline has expired")
        sig = split_signature(signature)

        if self.relayer_config.verify_permit_signature:
            await self._verify_signer(owner_cs, sponsor, value, deadline_ts, sig)

        permit_call = ContractCall(
            contract_address=self.chain_config.token_address,
            method=PERMIT_METHOD,
            params=[owner_cs, sponsor, str(value), str(deadline_ts), sig.v, sig.r, sig.s],
        )
        try:
            permit = await self.relayer.write_contract(
                [permit_call], chain_id=self.chain_config.chain_id, sender=sponsor
            )
        except ThirdwebApiError as e:
            logger.error(f"Permit error for {owner_cs}: {e.message}", extra={"details": e.details})
            log_transfer_relay("permit", owner_cs, None, ok=False)
            raise TransferRelayError("permit", e.message or "Permit failed", details=e.details) from e
        log_transfer_relay("permit", owner_cs, permit.reference, ok=True)

        transfer_call = ContractCall(
            contract_address=self.chain_config.token_address,
            method=TRANSFER_FROM_METHOD,
            params=[owner_cs, recipient_cs, str(value)],
        )
        try:
            transfer = await self.relayer.write_contract(
                [transfer_call], chain_id=self.chain_config.chain_id, sender=sponsor
            )
        except ThirdwebApiError as e:
            logger.error(
                f"Transfer error for {owner_cs} after permit {permit.reference}: {e.message}",
                extra={"details": e.details},
            )
            log_transfer_relay("transfer", owner_cs, None, ok=False)
            raise TransferRelayError(
                "transfer", e.message or "Transfer failed", permit_tx_hash=permit.reference, details=e.details
            ) from e
        log_transfer_relay("transfer", owner_cs, transfer.reference, ok=True)

        logger.info(f"Relayed gasless transfer of {value} from {owner_cs} to {recipient_cs}")
        return TransferResult(permit_tx_hash=permit.reference, transfer_tx_hash=transfer.reference)

    async def _verify_signer(
        self, owner: str, sponsor: str, value: int, deadline: int, sig: PermitSignature
    ) -> None:
        nonce = await self.token.get_nonce(owner)
        typed_data = build_permit_typed_data(
            owner,
            sponsor,
            value,
            nonce,
            deadline,
            token_address=self.chain_config.token_address,
            chain_id=self.chain_config.chain_id,
            domain_name=self.chain_config.permit_domain_name,
            domain_version=self.chain_config.permit_domain_version,
        )
        signer = recover_permit_signer(typed_data, sig)
        if signer.lower() != owner.lower():
            logger.warning(f"Permit signed by {signer}, expected {owner}")
            raise InvalidPermitError("Permit signature does not match owner")

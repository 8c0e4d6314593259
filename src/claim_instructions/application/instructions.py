"""The three instruction-building operations exposed to the command surface."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..crypto.addresses import ZERO_ADDRESS, normalize_address
from ..crypto.aliasing import apply_l1_to_l2_alias
from ..domain.entities import AllocationSet
from ..domain.shared import BridgeHubProtocol
from ..envs.claim_env import ClaimsConfig
from .allocation_index import MerkleAllocationIndex
from .dtos import (
    BridgeTransactionRequestDTO,
    BridgedClaimCallsDTO,
    ClaimCallsDTO,
)
from .use_cases.bridge import BridgeTransactionBuilder
from .use_cases.claim import ClaimInstructionGenerator
from .use_cases.transfer import TransferInstructionGenerator

logger = logging.getLogger(__name__)


class ClaimInstructionsService:
    """Builds direct claims, bridged claims and bridged transfers.

    ``bridge_hub`` is only needed by the bridged operations.
    """

    def __init__(
        self,
        indexes: Sequence[MerkleAllocationIndex],
        config: ClaimsConfig,
        bridge_hub: Optional[BridgeHubProtocol] = None,
    ) -> None:
        self.config = config
        self.claims = ClaimInstructionGenerator(indexes)
        self.transfers = TransferInstructionGenerator(config)
        self._bridge_hub = bridge_hub

    @classmethod
    def from_allocation_sets(
        cls,
        allocation_sets: Sequence[AllocationSet],
        config: ClaimsConfig,
        bridge_hub: Optional[BridgeHubProtocol] = None,
    ) -> "ClaimInstructionsService":
        indexes = [MerkleAllocationIndex.from_allocation_set(s) for s in allocation_sets]
        return cls(indexes, config, bridge_hub)

    def _bridge(self) -> BridgeTransactionBuilder:
        if self._bridge_hub is None:
            raise RuntimeError("A bridge hub client is required for bridged operations")
        return BridgeTransactionBuilder(self._bridge_hub, self.config)

    def build_direct_claim(self, address: str) -> ClaimCallsDTO:
        """Claim instructions for an address that calls the distributors on L2."""
        normalize_address(address)
        return self.claims.generate(address)

    async def build_bridged_claim(
        self, address: str, gas_price: int
    ) -> BridgedClaimCallsDTO:
        """L1 bridge hub requests that claim on behalf of an L1 address.

        The distributors see the aliased address as the sender, so lookups use
        it; unspent L2 gas is refunded to the L1 caller's address.
        """
        l1_address = normalize_address(address)
        aliased = apply_l1_to_l2_alias(l1_address)
        logger.debug("L1 address %s is aliased to %s on L2", l1_address, aliased)
        claims = self.claims.generate(aliased, is_l1=True)

        requests = await self._bridge().build_many(
            [(call.target_contract, call.encoded_call) for call in claims.calls_to_claim],
            refund_recipient=l1_address,
            gas_price=gas_price,
        )
        return BridgedClaimCallsDTO(address=address, calls_to_claim=requests)

    async def build_bridged_transfer(
        self, to: str, amount: str, gas_price: int
    ) -> BridgeTransactionRequestDTO:
        """L1 bridge hub request that moves already-claimed tokens on L2."""
        transfer = self.transfers.generate(to, amount)
        return await self._bridge().build(
            transfer.target_contract,
            transfer.encoded_call,
            refund_recipient=ZERO_ADDRESS,
            gas_price=gas_price,
        )

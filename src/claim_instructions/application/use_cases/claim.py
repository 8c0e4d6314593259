"""Use case: build per-distributor claim instructions for an address."""

from __future__ import annotations

import logging
from typing import Sequence

from ...crypto.abi import bytes_to_hex, encode_claim_call
from ...crypto.aliasing import undo_l1_to_l2_alias
from ...domain.entities import Leaf
from ...domain.errors import NotEligibleError
from ..allocation_index import MerkleAllocationIndex
from ..dtos import ClaimCallsDTO, ClaimInstructionDTO, ClaimParamsDTO

logger = logging.getLogger(__name__)


def build_claim_instruction(
    distributor_address: str, leaf: Leaf, proof: Sequence[bytes]
) -> ClaimInstructionDTO:
    return ClaimInstructionDTO(
        target_contract=distributor_address,
        params=ClaimParamsDTO(
            index=leaf.index,
            amount=leaf.amount,
            proof=[bytes_to_hex(node) for node in proof],
        ),
        encoded_call=bytes_to_hex(encode_claim_call(leaf.index, leaf.amount, proof)),
    )


class ClaimInstructionGenerator:
    """Looks an L2 address up in every configured distributor, in order."""

    def __init__(self, indexes: Sequence[MerkleAllocationIndex]) -> None:
        self._indexes = tuple(indexes)

    def generate(self, address: str, *, is_l1: bool = False) -> ClaimCallsDTO:
        """Return one claim instruction per distributor holding *address*.

        Args:
            address: L2 address as seen by the distributors (already aliased
                for L1-initiated claims)
            is_l1: Whether the caller's identity lives on L1; only changes
                which address the error reports

        Raises:
            NotEligibleError: If no distributor holds the address.
        """
        calls: list[ClaimInstructionDTO] = []
        for index in self._indexes:
            leaf = index.lookup(address)
            if leaf is None:
                continue
            calls.append(
                build_claim_instruction(index.distributor_address, leaf, index.proof(leaf))
            )

        if not calls:
            raise NotEligibleError(undo_l1_to_l2_alias(address) if is_l1 else address)

        logger.info("%s has %d claim(s)", address, len(calls))
        return ClaimCallsDTO(address=address, calls_to_claim=calls)

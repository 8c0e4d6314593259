"""Merkle index over one distributor's allocation set."""

from __future__ import annotations

import logging
from typing import Optional

from ..crypto.aliasing import apply_l1_to_l2_alias
from ..crypto.merkle import MerkleTree, hash_leaf, verify_proof
from ..domain.entities import AllocationSet, Leaf
from ..domain.errors import LookupInconsistencyError
from ..timing import log_timing

logger = logging.getLogger(__name__)


def _claimant(allocation_set: AllocationSet, address: str) -> str:
    if allocation_set.is_l1_eligible(address):
        return apply_l1_to_l2_alias(address)
    return address


def _leaf(index: int, address: str, amount: int) -> Leaf:
    return Leaf(
        index=index,
        address=address,
        amount=amount,
        content_hash=hash_leaf(index, address, amount),
    )


class MerkleAllocationIndex:
    """Leaves, address lookup and proofs for a single AllocationSet.

    Leaves are kept in allocation order (position == on-chain index) and a
    separate lower-cased address -> position mapping gives O(1) lookups.
    Entries listed as L1-eligible are claimed by their L1 owner through the
    bridge, so their leaf carries the aliased address the distributor sees as
    ``msg.sender``. Addresses are assumed unique within a set; on duplicates the
    first entry wins.
    """

    def __init__(
        self,
        allocation_set: AllocationSet,
        leaves: tuple[Leaf, ...],
        positions: dict[str, int],
        tree: MerkleTree,
    ) -> None:
        self._allocation_set = allocation_set
        self._leaves = leaves
        self._positions = positions
        self._tree = tree

    @classmethod
    @log_timing("merkle_index_build")
    def from_allocation_set(cls, allocation_set: AllocationSet) -> "MerkleAllocationIndex":
        leaves = tuple(
            _leaf(i, _claimant(allocation_set, entry.address), entry.amount)
            for i, entry in enumerate(allocation_set.all_eligible)
        )
        positions: dict[str, int] = {}
        for leaf in leaves:
            positions.setdefault(leaf.address.lower(), leaf.index)
        tree = MerkleTree.build([leaf.content_hash for leaf in leaves])
        logger.debug(
            "Built index for %s: %d leaves, root %s",
            allocation_set.distributor_address,
            len(leaves),
            tree.root_hex,
        )
        return cls(allocation_set, leaves, positions, tree)

    @property
    def allocation_set(self) -> AllocationSet:
        return self._allocation_set

    @property
    def distributor_address(self) -> str:
        return self._allocation_set.distributor_address

    @property
    def root(self) -> bytes:
        return self._tree.root

    @property
    def root_hex(self) -> str:
        return self._tree.root_hex

    @property
    def leaves(self) -> tuple[Leaf, ...]:
        return self._leaves

    def __len__(self) -> int:
        return len(self._leaves)

    def lookup(self, address: str) -> Optional[Leaf]:
        """Case-insensitive address lookup; ``None`` when not in this set."""
        position = self._positions.get(address.strip().lower())
        if position is None:
            return None
        return self._leaves[position]

    def proof(self, leaf: Leaf) -> list[bytes]:
        if leaf.index >= len(self._leaves) or (
            self._tree.leaf_at(leaf.index) != leaf.content_hash
        ):
            raise LookupInconsistencyError(
                f"Leaf {leaf.index} ({leaf.address}) does not belong to distributor "
                f"{self.distributor_address}"
            )
        return self._tree.proof(leaf.index)

    def verify(self, leaf: Leaf, proof: list[bytes]) -> bool:
        return verify_proof(self._tree.root, leaf.content_hash, proof)

"""Merkle tree compatible with the deployed airdrop distributor contracts.

The layout is fixed by the contracts holding the committed root:

- leaf = keccak256(abi.encodePacked(uint256 index, address account, uint256 amount))
- parent = keccak256(min(a, b) || max(a, b))  (sorted pairs, OpenZeppelin MerkleProof)
- an odd trailing node is carried to the next level unpaired; it contributes
  no proof element at that level
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Sequence

from eth_abi.packed import encode_packed
from eth_utils import keccak

LEAF_ENCODING: Final[tuple[str, ...]] = ("uint256", "address", "uint256")
SORTED_PAIRS: Final[bool] = True
CARRY_ODD_NODE: Final[bool] = True


def hash_leaf(index: int, address: str, amount: int) -> bytes:
    """Content hash of one allocation entry in the distributor's encoding."""
    return keccak(encode_packed(list(LEAF_ENCODING), [index, address, amount]))


def hash_pair(a: bytes, b: bytes) -> bytes:
    """Hash two sibling nodes (commutative: pairs are sorted first)."""
    if a <= b:
        return keccak(a + b)
    return keccak(b + a)


def build_levels(leaves: Sequence[bytes]) -> list[list[bytes]]:
    """
    Build all tree levels from leaf hashes.

    Returns:
        levels where levels[0] is the leaves and levels[-1] holds only the root.
    """
    if not leaves:
        raise ValueError("Cannot build Merkle tree with empty leaves")

    levels: list[list[bytes]] = [list(leaves)]
    current = levels[0]
    while len(current) > 1:
        next_level: list[bytes] = []
        for i in range(0, len(current), 2):
            if i + 1 < len(current):
                next_level.append(hash_pair(current[i], current[i + 1]))
            else:
                next_level.append(current[i])
        levels.append(next_level)
        current = next_level
    return levels


def proof_from_levels(levels: Sequence[Sequence[bytes]], position: int) -> list[bytes]:
    """Sibling hashes from the leaf at *position* up to (excluding) the root."""
    if not levels:
        raise ValueError("Empty tree levels")
    if position < 0 or position >= len(levels[0]):
        raise ValueError(f"Leaf position {position} out of range [0, {len(levels[0])})")

    siblings: list[bytes] = []
    current = position
    for level in levels[:-1]:
        sibling = current ^ 1
        if sibling < len(level):
            siblings.append(level[sibling])
        current //= 2
    return siblings


def verify_proof(root: bytes, leaf_hash: bytes, proof: Sequence[bytes]) -> bool:
    """Recompute the root from a leaf and its proof (sorted-pair hashing)."""
    current = leaf_hash
    for sibling in proof:
        current = hash_pair(current, sibling)
    return current == root


@dataclass(frozen=True)
class MerkleTree:
    """Immutable tree built once from an ordered sequence of leaf hashes."""

    levels: tuple[tuple[bytes, ...], ...]

    @staticmethod
    def build(leaves: Sequence[bytes]) -> "MerkleTree":
        return MerkleTree(levels=tuple(tuple(level) for level in build_levels(leaves)))

    @property
    def root(self) -> bytes:
        return self.levels[-1][0]

    @property
    def root_hex(self) -> str:
        return "0x" + self.root.hex()

    def leaf_at(self, position: int) -> bytes:
        return self.levels[0][position]

    def proof(self, position: int) -> list[bytes]:
        return proof_from_levels(self.levels, position)

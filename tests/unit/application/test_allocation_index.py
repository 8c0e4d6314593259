"""Unit tests for MerkleAllocationIndex."""

import pytest

from claim_instructions.application.allocation_index import MerkleAllocationIndex
from claim_instructions.crypto.aliasing import apply_l1_to_l2_alias
from claim_instructions.crypto.merkle import MerkleTree, hash_leaf, verify_proof
from claim_instructions.domain.entities import AllocationSet, Leaf
from claim_instructions.domain.errors import LookupInconsistencyError
from tests.fixtures import (
    ALICE,
    BOB,
    L1_MULTISIG,
    L1_MULTISIG_ALIAS,
    NOBODY,
    allocation_set_a,
    allocation_set_b,
    allocation_set_c,
)

MIXED = "0xabcdefabcdefabcdefabcdefabcdefabcdefabcd"


@pytest.fixture
def index_c() -> MerkleAllocationIndex:
    return MerkleAllocationIndex.from_allocation_set(allocation_set_c())


class TestBuild:
    def test_leaves_follow_allocation_order(self, index_c: MerkleAllocationIndex) -> None:
        allocation_set = allocation_set_c()
        assert len(index_c) == len(allocation_set.all_eligible)
        for position, (leaf, entry) in enumerate(
            zip(index_c.leaves, allocation_set.all_eligible)
        ):
            expected = (
                apply_l1_to_l2_alias(entry.address)
                if entry.address in allocation_set.l1_eligible
                else entry.address
            )
            assert leaf.index == position
            assert leaf.address == expected
            assert leaf.amount == entry.amount
            assert leaf.content_hash == hash_leaf(position, expected, entry.amount)

    def test_root_matches_tree_over_leaf_hashes(self, index_c: MerkleAllocationIndex) -> None:
        tree = MerkleTree.build([leaf.content_hash for leaf in index_c.leaves])
        assert index_c.root == tree.root
        assert index_c.root_hex == tree.root_hex

    def test_rebuild_is_deterministic(self) -> None:
        first = MerkleAllocationIndex.from_allocation_set(allocation_set_c())
        second = MerkleAllocationIndex.from_allocation_set(allocation_set_c())
        assert first.root == second.root
        assert [first.proof(leaf) for leaf in first.leaves] == [
            second.proof(leaf) for leaf in second.leaves
        ]


class TestLookup:
    def test_lookup_found(self) -> None:
        index = MerkleAllocationIndex.from_allocation_set(allocation_set_a())
        leaf = index.lookup(BOB)
        assert leaf is not None
        assert (leaf.index, leaf.amount) == (1, 50)

    def test_lookup_not_found(self) -> None:
        index = MerkleAllocationIndex.from_allocation_set(allocation_set_a())
        assert index.lookup(NOBODY) is None

    def test_lookup_is_case_insensitive(self) -> None:
        index = MerkleAllocationIndex.from_allocation_set(
            AllocationSet.from_rows(ALICE, [(BOB, 1), (MIXED, 2)])
        )
        variants = [MIXED, MIXED.upper().replace("0X", "0x"), index.leaves[1].address]
        found = [index.lookup(v) for v in variants]
        assert all(leaf is not None for leaf in found)
        assert {leaf.index for leaf in found if leaf is not None} == {1}

    def test_duplicate_address_first_entry_wins(self) -> None:
        index = MerkleAllocationIndex.from_allocation_set(
            AllocationSet.from_rows(ALICE, [(BOB, 1), (BOB, 2)])
        )
        leaf = index.lookup(BOB)
        assert leaf is not None
        assert leaf.index == 0


class TestProof:
    @pytest.mark.parametrize(
        "make_set", [allocation_set_a, allocation_set_b, allocation_set_c]
    )
    def test_every_leaf_verifies(self, make_set) -> None:
        index = MerkleAllocationIndex.from_allocation_set(make_set())
        for leaf in index.leaves:
            proof = index.proof(leaf)
            assert verify_proof(index.root, leaf.content_hash, proof)
            assert index.verify(leaf, proof)

    def test_foreign_leaf_raises(self, index_c: MerkleAllocationIndex) -> None:
        other = MerkleAllocationIndex.from_allocation_set(allocation_set_a())
        with pytest.raises(LookupInconsistencyError, match="does not belong"):
            index_c.proof(other.leaves[0])

    def test_leaf_index_out_of_range_raises(self) -> None:
        index = MerkleAllocationIndex.from_allocation_set(allocation_set_a())
        stray = Leaf(index=9, address=ALICE, amount=1, content_hash=hash_leaf(9, ALICE, 1))
        with pytest.raises(LookupInconsistencyError):
            index.proof(stray)


class TestL1Eligible:
    def test_leaf_holds_alias(self) -> None:
        index = MerkleAllocationIndex.from_allocation_set(allocation_set_b())
        leaf = index.lookup(L1_MULTISIG_ALIAS)
        assert leaf is not None
        assert (leaf.index, leaf.address, leaf.amount) == (2, L1_MULTISIG_ALIAS, 500)
        assert leaf.content_hash == hash_leaf(2, L1_MULTISIG_ALIAS, 500)

    def test_raw_l1_address_has_no_leaf(self) -> None:
        index = MerkleAllocationIndex.from_allocation_set(allocation_set_b())
        assert index.lookup(L1_MULTISIG) is None

    def test_other_entries_are_untouched(self) -> None:
        index = MerkleAllocationIndex.from_allocation_set(allocation_set_b())
        leaf = index.lookup(ALICE)
        assert leaf is not None
        assert leaf.content_hash == hash_leaf(1, ALICE, 7)

    def test_l1_eligible_must_be_in_allocation(self) -> None:
        with pytest.raises(ValueError, match="missing from the allocation"):
            AllocationSet.from_rows(ALICE, [(BOB, 1)], [NOBODY])

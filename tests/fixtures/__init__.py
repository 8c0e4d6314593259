"""Test fixtures: in-memory collaborators and sample allocation data."""

from .allocations import (
    ALICE,
    BOB,
    CAROL,
    DAVE,
    DISTRIBUTOR_A,
    DISTRIBUTOR_B,
    DISTRIBUTOR_C,
    L1_MULTISIG,
    L1_MULTISIG_ALIAS,
    NOBODY,
    allocation_set_a,
    allocation_set_b,
    allocation_set_c,
)
from .fake_bridge_hub import FakeBridgeHub

__all__ = [
    "ALICE",
    "BOB",
    "CAROL",
    "DAVE",
    "DISTRIBUTOR_A",
    "DISTRIBUTOR_B",
    "DISTRIBUTOR_C",
    "FakeBridgeHub",
    "L1_MULTISIG",
    "L1_MULTISIG_ALIAS",
    "NOBODY",
    "allocation_set_a",
    "allocation_set_b",
    "allocation_set_c",
]

"""Shared pytest fixtures for instruction-building tests."""

from __future__ import annotations

import pytest

from claim_instructions.application.allocation_index import MerkleAllocationIndex
from claim_instructions.application.instructions import ClaimInstructionsService
from claim_instructions.envs.claim_env import ClaimsConfig
from tests.fixtures import (
    FakeBridgeHub,
    allocation_set_a,
    allocation_set_b,
    allocation_set_c,
)


@pytest.fixture
def claims_config() -> ClaimsConfig:
    """Protocol constants with non-default values so tests catch hard-coding."""
    return ClaimsConfig(
        l2_chain_id=300,
        bridge_hub_address="0x8888888888888888888888888888888888888888",
        token_address="0x9999999999999999999999999999999999999990",
        l2_tx_gas_limit=1_500_000,
        l2_gas_per_pubdata_limit=800,
        l2_value=0,
    )


@pytest.fixture
def indexes() -> list[MerkleAllocationIndex]:
    """Indexes for distributors A, B, C in configuration order."""
    return [
        MerkleAllocationIndex.from_allocation_set(s)
        for s in (allocation_set_a(), allocation_set_b(), allocation_set_c())
    ]


@pytest.fixture
def bridge_hub() -> FakeBridgeHub:
    return FakeBridgeHub(base_cost=123_456_789)


@pytest.fixture
def service(
    indexes: list[MerkleAllocationIndex],
    claims_config: ClaimsConfig,
    bridge_hub: FakeBridgeHub,
) -> ClaimInstructionsService:
    return ClaimInstructionsService(indexes, claims_config, bridge_hub)

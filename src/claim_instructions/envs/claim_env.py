from __future__ import annotations

import os
from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..crypto.addresses import normalize_address

DEFAULT_L1_JSON_RPC = "https://ethereum-rpc.publicnode.com"


class ClaimsConfig(BaseModel):
    """Protocol constants for the deployed contracts.

    Passed explicitly into every component; none of these values are computed.
    """

    model_config = ConfigDict(frozen=True)

    l2_chain_id: int = Field(324, gt=0)
    bridge_hub_address: str = "0x303a465B659cBB0ab36eE643eA362c509EEb5213"
    token_address: str = "0x5A7d6b2F92C77FAD6CCaBd7EE0624E64907Eaf3E"
    l2_tx_gas_limit: int = Field(2_097_152, gt=0)
    l2_gas_per_pubdata_limit: int = Field(800, gt=0)
    # Value forwarded to the L2 contract with every bridged call
    l2_value: int = Field(0, ge=0)

    @field_validator("bridge_hub_address", "token_address")
    @classmethod
    def validate_contract_address(cls, v: str) -> str:
        return normalize_address(v)


class Settings(BaseModel):
    """Typed settings built from environment variables."""

    l1_json_rpc: str = DEFAULT_L1_JSON_RPC
    rpc_timeout_seconds: float = Field(10.0, gt=0)
    allocations_manifest: Optional[str] = None
    claims: ClaimsConfig = ClaimsConfig()

    @field_validator("l1_json_rpc")
    @classmethod
    def validate_l1_json_rpc(cls, v: str) -> str:
        if not v:
            raise ValueError("L1 JSON-RPC URL cannot be empty")
        parsed = urlparse(v)
        if parsed.scheme not in {"http", "https"}:
            raise ValueError("L1 JSON-RPC URL must start with http:// or https://")
        if not parsed.netloc:
            raise ValueError("L1 JSON-RPC URL must include a host")
        return v


def get_claims_config() -> ClaimsConfig:
    """Return the protocol constants, with optional env overrides."""
    defaults = ClaimsConfig()
    return ClaimsConfig(
        l2_chain_id=int(os.environ.get("L2_CHAIN_ID", defaults.l2_chain_id)),
        bridge_hub_address=os.environ.get(
            "L1_BRIDGE_HUB_ADDRESS", defaults.bridge_hub_address
        ),
        token_address=os.environ.get("L2_TOKEN_ADDRESS", defaults.token_address),
        l2_tx_gas_limit=int(os.environ.get("L2_TX_GAS_LIMIT", defaults.l2_tx_gas_limit)),
        l2_gas_per_pubdata_limit=int(
            os.environ.get("L2_GAS_PER_PUBDATA_LIMIT", defaults.l2_gas_per_pubdata_limit)
        ),
        l2_value=int(os.environ.get("L2_VALUE", defaults.l2_value)),
    )


def get_settings() -> Settings:
    """Return typed settings instance sourced from env vars."""
    return Settings(
        l1_json_rpc=os.environ.get("L1_JSON_RPC", DEFAULT_L1_JSON_RPC),
        rpc_timeout_seconds=float(os.environ.get("RPC_TIMEOUT_SECONDS", "10.0")),
        allocations_manifest=os.environ.get("ALLOCATIONS_MANIFEST"),
        claims=get_claims_config(),
    )

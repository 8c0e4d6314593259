"""Instruction DTOs returned by the application layer.

``model_dump(mode="json")`` yields the structure printed by the CLI.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from .shared.serializers import WeiSerializersMixin


class ClaimParamsDTO(WeiSerializersMixin, BaseModel):
    index: int = Field(..., ge=0)
    amount: int = Field(..., ge=0)
    proof: list[str]


class ClaimInstructionDTO(BaseModel):
    """Call to ``claim(index, amount, proof)`` on an L2 Merkle distributor."""

    target_contract: str
    function_name: Literal["claim"] = "claim"
    params: ClaimParamsDTO
    encoded_call: str


class ClaimCallsDTO(BaseModel):
    address: str
    calls_to_claim: list[ClaimInstructionDTO]


class TransferParamsDTO(WeiSerializersMixin, BaseModel):
    to: str
    amount: int = Field(..., ge=0)


class TransferInstructionDTO(BaseModel):
    """Call to ``transfer(to, amount)`` on the L2 token."""

    target_contract: str
    function_name: Literal["transfer"] = "transfer"
    params: TransferParamsDTO
    encoded_call: str


class BridgeTransactionRequestDTO(WeiSerializersMixin, BaseModel):
    """L1 transaction to the bridge hub that executes an L2 call.

    ``required_value`` is the ``msg.value`` to attach (it is also the
    ``mintValue`` inside ``encoded_call``).
    """

    primary_layer_target: str
    function_name: Literal["requestL2TransactionDirect"] = "requestL2TransactionDirect"
    chain_id: int
    secondary_layer_target: str
    secondary_layer_value: int
    secondary_layer_calldata: str
    gas_limit: int
    gas_per_pubdata_limit: int
    factory_deps: list[str] = Field(default_factory=list)
    refund_recipient: str
    required_value: int
    gas_price: int
    encoded_call: str


class BridgedClaimCallsDTO(BaseModel):
    address: str
    calls_to_claim: list[BridgeTransactionRequestDTO]

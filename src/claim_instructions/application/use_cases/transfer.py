"""Use case: build an L2 token transfer instruction."""

from __future__ import annotations

from ...crypto.abi import UINT256_MAX, bytes_to_hex, encode_transfer_call
from ...crypto.addresses import normalize_address
from ...envs.claim_env import ClaimsConfig
from ..dtos import TransferInstructionDTO, TransferParamsDTO


def parse_amount(amount: str) -> int:
    """Parse a caller-supplied base-unit amount (digits only)."""
    value = str(amount).strip()
    if not value.isdigit():
        raise ValueError(f"amount must be a non-negative integer string, got: {amount!r}")
    parsed = int(value)
    if parsed > UINT256_MAX:
        raise ValueError(f"amount does not fit in uint256: {amount!r}")
    return parsed


class TransferInstructionGenerator:
    """Stateless; any destination and amount are accepted."""

    def __init__(self, config: ClaimsConfig) -> None:
        self._config = config

    def generate(self, to: str, amount: str) -> TransferInstructionDTO:
        recipient = normalize_address(to)
        value = parse_amount(amount)
        return TransferInstructionDTO(
            target_contract=self._config.token_address,
            params=TransferParamsDTO(to=recipient, amount=value),
            encoded_call=bytes_to_hex(encode_transfer_call(recipient, value)),
        )

from __future__ import annotations

from eth_abi.exceptions import DecodingError

from ...crypto.abi import bytes_to_hex, decode_uint256, encode_l2_transaction_base_cost_call, hex_to_bytes
from ...domain.errors import ExternalQueryFailure
from ...envs.claim_env import ClaimsConfig
from ...timing import log_timing
from ..rpc.json_rpc_client import AsyncJsonRpcClient


class AsyncBridgeHubClient:
    """Reads the L1 bridge hub through ``eth_call``. Implements BridgeHubProtocol."""

    def __init__(self, rpc: AsyncJsonRpcClient, config: ClaimsConfig) -> None:
        self._rpc = rpc
        self._config = config

    @log_timing("l2_transaction_base_cost")
    async def l2_transaction_base_cost(
        self,
        chain_id: int,
        gas_price: int,
        l2_gas_limit: int,
        l2_gas_per_pubdata_byte_limit: int,
    ) -> int:
        calldata = encode_l2_transaction_base_cost_call(
            chain_id, gas_price, l2_gas_limit, l2_gas_per_pubdata_byte_limit
        )
        result = await self._rpc.call(
            "eth_call",
            [
                {"to": self._config.bridge_hub_address, "data": bytes_to_hex(calldata)},
                "latest",
            ],
        )
        try:
            return decode_uint256(hex_to_bytes(result))
        except (DecodingError, ValueError, TypeError) as e:
            raise ExternalQueryFailure(
                f"Cannot decode l2TransactionBaseCost result {result!r}: {e}"
            ) from e

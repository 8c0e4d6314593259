"""Use case: wrap an L2 call into an L1 bridge hub transaction."""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from ...crypto.abi import (
    bytes_to_hex,
    encode_request_l2_transaction_direct_call,
    hex_to_bytes,
)
from ...crypto.addresses import normalize_address
from ...domain.shared import BridgeHubProtocol
from ...envs.claim_env import ClaimsConfig
from ..dtos import BridgeTransactionRequestDTO

logger = logging.getLogger(__name__)


class BridgeTransactionBuilder:
    """Builds ``requestL2TransactionDirect`` requests priced by a live query."""

    def __init__(self, bridge_hub: BridgeHubProtocol, config: ClaimsConfig) -> None:
        self._bridge_hub = bridge_hub
        self._config = config

    async def build(
        self,
        l2_contract: str,
        l2_calldata: str,
        refund_recipient: str,
        gas_price: int,
    ) -> BridgeTransactionRequestDTO:
        """Price and encode one L1 -> L2 request.

        Args:
            l2_contract: L2 contract the request calls
            l2_calldata: Hex calldata of the inner L2 call
            refund_recipient: L2 address receiving unspent gas
            gas_price: L1 gas price in wei

        Raises:
            ExternalQueryFailure: Propagated as-is from the bridge hub query.
        """
        if gas_price < 0:
            raise ValueError("gas_price must be >= 0")
        config = self._config
        l2_contract = normalize_address(l2_contract)
        refund_recipient = normalize_address(refund_recipient)

        required_value = await self._bridge_hub.l2_transaction_base_cost(
            config.l2_chain_id,
            gas_price,
            config.l2_tx_gas_limit,
            config.l2_gas_per_pubdata_limit,
        )

        encoded = encode_request_l2_transaction_direct_call(
            chain_id=config.l2_chain_id,
            mint_value=required_value,
            l2_contract=l2_contract,
            l2_value=config.l2_value,
            l2_calldata=hex_to_bytes(l2_calldata),
            l2_gas_limit=config.l2_tx_gas_limit,
            l2_gas_per_pubdata_byte_limit=config.l2_gas_per_pubdata_limit,
            factory_deps=[],
            refund_recipient=refund_recipient,
        )
        return BridgeTransactionRequestDTO(
            primary_layer_target=config.bridge_hub_address,
            chain_id=config.l2_chain_id,
            secondary_layer_target=l2_contract,
            secondary_layer_value=config.l2_value,
            secondary_layer_calldata=l2_calldata,
            gas_limit=config.l2_tx_gas_limit,
            gas_per_pubdata_limit=config.l2_gas_per_pubdata_limit,
            factory_deps=[],
            refund_recipient=refund_recipient,
            required_value=required_value,
            gas_price=gas_price,
            encoded_call=bytes_to_hex(encoded),
        )

    async def build_many(
        self,
        calls: Sequence[tuple[str, str]],
        refund_recipient: str,
        gas_price: int,
    ) -> list[BridgeTransactionRequestDTO]:
        """Build requests for ``(l2_contract, l2_calldata)`` pairs concurrently.

        The result keeps the order of *calls*. The first failing query fails
        the whole batch; no partial result is returned.
        """
        logger.debug("Pricing %d bridged call(s) at %d wei", len(calls), gas_price)
        return list(
            await asyncio.gather(
                *(
                    self.build(l2_contract, l2_calldata, refund_recipient, gas_price)
                    for l2_contract, l2_calldata in calls
                )
            )
        )

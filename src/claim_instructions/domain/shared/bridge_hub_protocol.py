"""Protocol interface for reading the L1 bridge hub.

Builders depend on this protocol rather than on the JSON-RPC client so tests
can substitute an in-memory implementation.
"""

from __future__ import annotations

from typing import Protocol


class BridgeHubProtocol(Protocol):
    """Read-only view of the bridge hub contract."""

    async def l2_transaction_base_cost(
        self,
        chain_id: int,
        gas_price: int,
        l2_gas_limit: int,
        l2_gas_per_pubdata_byte_limit: int,
    ) -> int:
        """Return the base cost (wei) of an L1 -> L2 transaction.

        Args:
            chain_id: Target L2 chain id
            gas_price: L1 gas price in wei
            l2_gas_limit: Gas limit of the L2 execution
            l2_gas_per_pubdata_byte_limit: Gas paid per byte of pubdata

        Raises:
            ExternalQueryFailure: If the node call fails.
        """
        ...

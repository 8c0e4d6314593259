"""L1 -> L2 address aliasing used by the bridge for L1-initiated transactions.

When a contract on L1 sends a priority transaction, the L2 sees
``msg.sender == alias(l1_address)``. The offset and modulus are fixed by the
bridging protocol.
"""

from __future__ import annotations

from typing import Final

from .addresses import address_to_int, int_to_address

L1_TO_L2_ALIAS_OFFSET: Final[int] = 0x1111000000000000000000000000000000001111
ADDRESS_MODULO: Final[int] = 1 << 160


def apply_l1_to_l2_alias(address: str) -> str:
    """Map an L1 address to the address the L2 observes as the sender."""
    return int_to_address((address_to_int(address) + L1_TO_L2_ALIAS_OFFSET) % ADDRESS_MODULO)


def undo_l1_to_l2_alias(address: str) -> str:
    """Inverse of :func:`apply_l1_to_l2_alias`."""
    return int_to_address((address_to_int(address) - L1_TO_L2_ALIAS_OFFSET) % ADDRESS_MODULO)

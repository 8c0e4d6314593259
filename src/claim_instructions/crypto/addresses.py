"""EVM address helpers shared by both layers."""

from __future__ import annotations

from typing import Final

from eth_utils import is_hex_address, to_checksum_address

ZERO_ADDRESS: Final[str] = "0x0000000000000000000000000000000000000000"


def normalize_address(address: str) -> str:
    """Return the EIP-55 checksum form of a hex address (input case is ignored)."""
    if not isinstance(address, str) or not is_hex_address(address.strip()):
        raise ValueError(f"Invalid EVM address: {address!r}")
    return to_checksum_address(address.strip().lower())


def address_to_int(address: str) -> int:
    return int(normalize_address(address), 16)


def int_to_address(value: int) -> str:
    if value < 0 or value >= 1 << 160:
        raise ValueError(f"Address value out of range: {value}")
    return to_checksum_address(f"0x{value:040x}")

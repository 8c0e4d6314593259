"""Unit tests for address normalization."""

import pytest

from claim_instructions.crypto.addresses import int_to_address, normalize_address


def test_normalize_address_returns_checksum() -> None:
    assert (
        normalize_address("0x5a7d6b2f92c77fad6ccabd7ee0624e64907eaf3e")
        == "0x5A7d6b2F92C77FAD6CCaBd7EE0624E64907Eaf3E"
    )


def test_normalize_address_strips_whitespace() -> None:
    assert normalize_address("  0x1111111111111111111111111111111111111111\n") == (
        "0x1111111111111111111111111111111111111111"
    )


@pytest.mark.parametrize("bad", ["", "0x12", "hello", "0x" + "g" * 40])
def test_normalize_address_rejects_invalid(bad: str) -> None:
    with pytest.raises(ValueError, match="Invalid EVM address"):
        normalize_address(bad)


def test_int_to_address_out_of_range() -> None:
    with pytest.raises(ValueError, match="out of range"):
        int_to_address(1 << 160)

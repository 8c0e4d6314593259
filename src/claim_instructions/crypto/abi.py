"""ABI encoding of the contract calls we emit or query."""

from __future__ import annotations

from typing import Any, Final, Sequence

from eth_abi import decode, encode
from eth_utils import decode_hex, encode_hex, function_signature_to_4byte_selector

# L2 Merkle distributor
CLAIM_SIGNATURE: Final[str] = "claim(uint256,uint256,bytes32[])"
# L2 ERC-20 token
TRANSFER_SIGNATURE: Final[str] = "transfer(address,uint256)"
# L1 bridge hub
L2_TRANSACTION_REQUEST_DIRECT_TUPLE: Final[str] = (
    "(uint256,uint256,address,uint256,bytes,uint256,uint256,bytes[],address)"
)
REQUEST_L2_TRANSACTION_DIRECT_SIGNATURE: Final[str] = (
    f"requestL2TransactionDirect({L2_TRANSACTION_REQUEST_DIRECT_TUPLE})"
)
L2_TRANSACTION_BASE_COST_SIGNATURE: Final[str] = (
    "l2TransactionBaseCost(uint256,uint256,uint256,uint256)"
)

UINT256_MAX: Final[int] = 2**256 - 1


def function_name(signature: str) -> str:
    return signature.split("(", 1)[0]


def selector(signature: str) -> bytes:
    """First four bytes of keccak256(signature)."""
    return function_signature_to_4byte_selector(signature)


def encode_call(signature: str, arg_types: Sequence[str], args: Sequence[Any]) -> bytes:
    """Encode a function call as ``selector || abi.encode(args)``."""
    return selector(signature) + encode(list(arg_types), list(args))


def encode_claim_call(index: int, amount: int, proof: Sequence[bytes]) -> bytes:
    return encode_call(
        CLAIM_SIGNATURE,
        ["uint256", "uint256", "bytes32[]"],
        [index, amount, list(proof)],
    )


def encode_transfer_call(to: str, amount: int) -> bytes:
    return encode_call(TRANSFER_SIGNATURE, ["address", "uint256"], [to, amount])


def encode_l2_transaction_base_cost_call(
    chain_id: int, gas_price: int, l2_gas_limit: int, l2_gas_per_pubdata_byte_limit: int
) -> bytes:
    return encode_call(
        L2_TRANSACTION_BASE_COST_SIGNATURE,
        ["uint256", "uint256", "uint256", "uint256"],
        [chain_id, gas_price, l2_gas_limit, l2_gas_per_pubdata_byte_limit],
    )


def encode_request_l2_transaction_direct_call(
    *,
    chain_id: int,
    mint_value: int,
    l2_contract: str,
    l2_value: int,
    l2_calldata: bytes,
    l2_gas_limit: int,
    l2_gas_per_pubdata_byte_limit: int,
    factory_deps: Sequence[bytes],
    refund_recipient: str,
) -> bytes:
    """Encode ``Bridgehub.requestL2TransactionDirect(L2TransactionRequestDirect)``.

    Field order follows the on-chain struct:
    (chainId, mintValue, l2Contract, l2Value, l2Calldata, l2GasLimit,
    l2GasPerPubdataByteLimit, factoryDeps, refundRecipient).
    """
    request = (
        chain_id,
        mint_value,
        l2_contract,
        l2_value,
        l2_calldata,
        l2_gas_limit,
        l2_gas_per_pubdata_byte_limit,
        list(factory_deps),
        refund_recipient,
    )
    return encode_call(
        REQUEST_L2_TRANSACTION_DIRECT_SIGNATURE,
        [L2_TRANSACTION_REQUEST_DIRECT_TUPLE],
        [request],
    )


def decode_uint256(data: bytes) -> int:
    (value,) = decode(["uint256"], data)
    return int(value)


def hex_to_bytes(data_hex: str) -> bytes:
    return decode_hex(data_hex)


def bytes_to_hex(data: bytes) -> str:
    return encode_hex(data)

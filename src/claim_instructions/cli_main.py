from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Optional, Sequence

import httpx
from eth_utils import to_wei

from claim_instructions.application.instructions import ClaimInstructionsService
from claim_instructions.domain.errors import ClaimInstructionsError
from claim_instructions.envs.claim_env import Settings, get_settings
from claim_instructions.infrastructure.allocations.loader import load_allocation_sets
from claim_instructions.infrastructure.bridge_hub.bridge_hub_client import (
    AsyncBridgeHubClient,
)
from claim_instructions.infrastructure.rpc.json_rpc_client import AsyncJsonRpcClient

logger = logging.getLogger("claim_instructions")


def parse_gas_price_gwei(value: str) -> int:
    """Convert a decimal gwei string (e.g. ``"32.5"``) to wei."""
    try:
        gwei = Decimal(value.strip())
    except (InvalidOperation, AttributeError):
        raise ValueError(f"Invalid L1 gas price: {value!r}")
    if not gwei.is_finite() or gwei < 0:
        raise ValueError(f"Invalid L1 gas price: {value!r}")
    # gwei has 9 decimals; anything finer is not a whole number of wei
    if gwei.normalize().as_tuple().exponent < -9:
        raise ValueError(f"Invalid L1 gas price: {value!r} has more than 9 decimals")
    return int(to_wei(gwei, "gwei"))


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="claim-instructions",
        description="Print unsigned airdrop claim/transfer instructions as JSON",
    )
    ap.add_argument(
        "--allocations",
        help="allocation manifest JSON (default: $ALLOCATIONS_MANIFEST)",
    )
    ap.add_argument("-v", "--verbose", action="store_true")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p = sub.add_parser("direct-claim", help="claim calls to send directly on L2")
    p.add_argument("address")

    p = sub.add_parser("bridged-claim", help="L1 bridge hub calls that claim on L2")
    p.add_argument("address")
    p.add_argument("--l1-gas-price", required=True, help="L1 gas price in gwei")
    p.add_argument("--l1-json-rpc", help="L1 JSON-RPC URL (default: $L1_JSON_RPC)")

    p = sub.add_parser("bridged-transfer", help="L1 bridge hub call that transfers on L2")
    p.add_argument("--to", required=True)
    p.add_argument("--amount", required=True, help="token amount in base units")
    p.add_argument("--l1-gas-price", required=True, help="L1 gas price in gwei")
    p.add_argument("--l1-json-rpc", help="L1 JSON-RPC URL (default: $L1_JSON_RPC)")
    return ap


def _manifest_path(args: argparse.Namespace, settings: Settings) -> Path:
    manifest = args.allocations or settings.allocations_manifest
    if not manifest:
        raise ValueError("An allocation manifest is required (--allocations or ALLOCATIONS_MANIFEST)")
    return Path(manifest)


async def run(
    args: argparse.Namespace,
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> dict[str, Any]:
    """Execute one command and return its JSON-ready result."""
    config = settings.claims
    if args.cmd == "direct-claim":
        service = ClaimInstructionsService.from_allocation_sets(
            load_allocation_sets(_manifest_path(args, settings)), config
        )
        return service.build_direct_claim(args.address).model_dump(mode="json")

    gas_price = parse_gas_price_gwei(args.l1_gas_price)
    rpc_url = args.l1_json_rpc or settings.l1_json_rpc
    async with AsyncJsonRpcClient(
        rpc_url, timeout=settings.rpc_timeout_seconds, transport=transport
    ) as rpc:
        bridge_hub = AsyncBridgeHubClient(rpc, config)
        if args.cmd == "bridged-claim":
            service = ClaimInstructionsService.from_allocation_sets(
                load_allocation_sets(_manifest_path(args, settings)), config, bridge_hub
            )
            result = await service.build_bridged_claim(args.address, gas_price)
        else:
            service = ClaimInstructionsService([], config, bridge_hub)
            result = await service.build_bridged_transfer(args.to, args.amount, gas_price)
    return result.model_dump(mode="json")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        result = asyncio.run(run(args, get_settings()))
    except (ClaimInstructionsError, ValueError, OSError) as e:
        logger.debug("Command %s failed", args.cmd, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(json.dumps(result, indent=4))
    return 0


if __name__ == "__main__":
    sys.exit(main())

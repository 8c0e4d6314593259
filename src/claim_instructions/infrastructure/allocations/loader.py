"""Load allocation sets from a JSON manifest and CSV eligibility files.

Manifest format (paths are relative to the manifest file)::

    [
      {
        "distributor_address": "0x...",
        "all_eligible_path": "allocations/distributor_1.csv",
        "l1_eligible_path": "allocations/distributor_1_l1.csv"
      }
    ]

``all_eligible_path`` CSVs have an ``address,amount`` header; the optional
``l1_eligible_path`` CSVs have an ``address`` header.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, TypeAdapter

from ...domain.entities import AllocationSet

logger = logging.getLogger(__name__)


class AllocationSource(BaseModel):
    """Where to read one distributor's allocation data from."""

    model_config = ConfigDict(extra="forbid")

    distributor_address: str
    all_eligible_path: str
    l1_eligible_path: Optional[str] = None


_MANIFEST_ADAPTER = TypeAdapter(list[AllocationSource])


def load_manifest(path: Path) -> list[AllocationSource]:
    return _MANIFEST_ADAPTER.validate_json(path.read_bytes())


def _read_rows(path: Path, required: set[str]) -> list[dict[str, str]]:
    with path.open(newline="") as f:
        reader = csv.DictReader(f)
        fieldnames = {name.strip() for name in (reader.fieldnames or [])}
        if not required <= fieldnames:
            raise ValueError(
                f"{path}: CSV needs header {','.join(sorted(required))}, got {sorted(fieldnames)}"
            )
        return [
            {(k or "").strip(): (v or "").strip() for k, v in row.items()}
            for row in reader
        ]


def read_allocation_csv(path: Path) -> list[tuple[str, int]]:
    """Read ``address,amount`` rows in file order (file order is leaf order)."""
    rows: list[tuple[str, int]] = []
    for line_no, row in enumerate(_read_rows(path, {"address", "amount"}), start=2):
        address, amount = row.get("address", ""), row.get("amount", "")
        if not address and not amount:
            continue
        if not amount.isdigit():
            raise ValueError(f"{path}:{line_no}: invalid amount {amount!r}")
        rows.append((address, int(amount)))
    if not rows:
        raise ValueError(f"{path}: no allocation rows")
    return rows


def read_address_csv(path: Path) -> list[str]:
    return [row["address"] for row in _read_rows(path, {"address"}) if row.get("address")]


def load_allocation_set(source: AllocationSource, base_dir: Path) -> AllocationSet:
    rows = read_allocation_csv(base_dir / source.all_eligible_path)
    l1_eligible = (
        read_address_csv(base_dir / source.l1_eligible_path)
        if source.l1_eligible_path
        else []
    )
    logger.info(
        "Loaded %d allocations (%d L1-eligible) for %s",
        len(rows),
        len(l1_eligible),
        source.distributor_address,
    )
    return AllocationSet.from_rows(source.distributor_address, rows, l1_eligible)


def load_allocation_sets(manifest_path: Path) -> list[AllocationSet]:
    """Load every allocation set listed in the manifest, in manifest order."""
    base_dir = manifest_path.parent
    return [load_allocation_set(source, base_dir) for source in load_manifest(manifest_path)]

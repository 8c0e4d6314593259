"""Unit tests for the manifest/CSV allocation loader."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from claim_instructions.infrastructure.allocations.loader import (
    load_allocation_sets,
    read_address_csv,
    read_allocation_csv,
)
from tests.fixtures import ALICE, BOB, CAROL, DISTRIBUTOR_A, DISTRIBUTOR_B


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


@pytest.fixture
def manifest(tmp_path: Path) -> Path:
    _write(tmp_path / "data" / "a.csv", f"address,amount\n{ALICE},100\n{BOB},50\n")
    _write(tmp_path / "data" / "a_l1.csv", f"address\n{ALICE}\n")
    _write(tmp_path / "data" / "b.csv", f"address,amount\n{CAROL},10\n")
    return _write(
        tmp_path / "manifest.json",
        json.dumps(
            [
                {
                    "distributor_address": DISTRIBUTOR_A,
                    "all_eligible_path": "data/a.csv",
                    "l1_eligible_path": "data/a_l1.csv",
                },
                {"distributor_address": DISTRIBUTOR_B, "all_eligible_path": "data/b.csv"},
            ]
        ),
    )


def test_load_allocation_sets_in_manifest_order(manifest: Path) -> None:
    sets = load_allocation_sets(manifest)
    assert [s.distributor_address for s in sets] == [DISTRIBUTOR_A, DISTRIBUTOR_B]
    assert [(e.address, e.amount) for e in sets[0].all_eligible] == [(ALICE, 100), (BOB, 50)]
    assert sets[0].l1_eligible == frozenset({ALICE})
    assert sets[1].l1_eligible == frozenset()


def test_read_allocation_csv_skips_blank_rows(tmp_path: Path) -> None:
    path = _write(tmp_path / "a.csv", f"address,amount\n{ALICE},1\n,\n{BOB},2\n")
    assert read_allocation_csv(path) == [(ALICE, 1), (BOB, 2)]


def test_read_allocation_csv_requires_header(tmp_path: Path) -> None:
    path = _write(tmp_path / "a.csv", f"wallet,tokens\n{ALICE},1\n")
    with pytest.raises(ValueError, match="CSV needs header"):
        read_allocation_csv(path)


def test_read_allocation_csv_rejects_bad_amount(tmp_path: Path) -> None:
    path = _write(tmp_path / "a.csv", f"address,amount\n{ALICE},1.5\n")
    with pytest.raises(ValueError, match=r"a.csv:2: invalid amount"):
        read_allocation_csv(path)


def test_read_allocation_csv_rejects_empty_file(tmp_path: Path) -> None:
    path = _write(tmp_path / "a.csv", "address,amount\n")
    with pytest.raises(ValueError, match="no allocation rows"):
        read_allocation_csv(path)


def test_read_address_csv(tmp_path: Path) -> None:
    path = _write(tmp_path / "l1.csv", f"address\n{ALICE}\n\n{BOB}\n")
    assert read_address_csv(path) == [ALICE, BOB]


def test_invalid_address_in_csv_fails_validation(tmp_path: Path) -> None:
    _write(tmp_path / "a.csv", "address,amount\n0x1234,1\n")
    manifest = _write(
        tmp_path / "manifest.json",
        json.dumps([{"distributor_address": DISTRIBUTOR_A, "all_eligible_path": "a.csv"}]),
    )
    with pytest.raises(ValidationError, match="Invalid EVM address"):
        load_allocation_sets(manifest)


def test_manifest_rejects_unknown_fields(tmp_path: Path) -> None:
    manifest = _write(
        tmp_path / "manifest.json",
        json.dumps(
            [{"distributor_address": DISTRIBUTOR_A, "all_eligible_path": "a.csv", "root": "0x"}]
        ),
    )
    with pytest.raises(ValidationError):
        load_allocation_sets(manifest)


def test_amount_above_uint256_fails_validation(tmp_path: Path) -> None:
    _write(tmp_path / "a.csv", f"address,amount\n{ALICE},{2**256}\n")
    manifest = _write(
        tmp_path / "manifest.json",
        json.dumps([{"distributor_address": DISTRIBUTOR_A, "all_eligible_path": "a.csv"}]),
    )
    with pytest.raises(ValidationError, match="less than or equal to"):
        load_allocation_sets(manifest)


def test_l1_eligible_outside_allocation_fails_validation(tmp_path: Path) -> None:
    _write(tmp_path / "a.csv", f"address,amount\n{ALICE},1\n")
    _write(tmp_path / "a_l1.csv", f"address\n{BOB}\n")
    manifest = _write(
        tmp_path / "manifest.json",
        json.dumps(
            [
                {
                    "distributor_address": DISTRIBUTOR_A,
                    "all_eligible_path": "a.csv",
                    "l1_eligible_path": "a_l1.csv",
                }
            ]
        ),
    )
    with pytest.raises(ValidationError, match="missing from the allocation"):
        load_allocation_sets(manifest)

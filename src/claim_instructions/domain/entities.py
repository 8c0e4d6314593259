"""Allocation entities: AllocationSet and its derived Leaf."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..crypto.abi import UINT256_MAX
from ..crypto.addresses import normalize_address


class AllocationEntry(BaseModel):
    """One (address, amount) row of a distributor's eligibility list."""

    model_config = ConfigDict(frozen=True)

    address: str
    amount: int = Field(..., ge=0, le=UINT256_MAX)

    @field_validator("address")
    @classmethod
    def validate_address(cls, v: str) -> str:
        return normalize_address(v)


class AllocationSet(BaseModel):
    """Eligibility data for a single distributor contract. Immutable once loaded."""

    model_config = ConfigDict(frozen=True)

    distributor_address: str
    all_eligible: tuple[AllocationEntry, ...]
    l1_eligible: frozenset[str] = frozenset()

    @field_validator("distributor_address")
    @classmethod
    def validate_distributor_address(cls, v: str) -> str:
        return normalize_address(v)

    @field_validator("l1_eligible")
    @classmethod
    def validate_l1_eligible(cls, v: frozenset[str]) -> frozenset[str]:
        return frozenset(normalize_address(a) for a in v)

    @model_validator(mode="after")
    def check_l1_eligible_subset(self) -> "AllocationSet":
        missing = self.l1_eligible - {entry.address for entry in self.all_eligible}
        if missing:
            raise ValueError(
                f"L1-eligible addresses missing from the allocation: {sorted(missing)}"
            )
        return self

    @classmethod
    def from_rows(
        cls,
        distributor_address: str,
        rows: list[tuple[str, int]],
        l1_eligible: list[str] | None = None,
    ) -> "AllocationSet":
        return cls(
            distributor_address=distributor_address,
            all_eligible=tuple(
                AllocationEntry(address=address, amount=amount)
                for address, amount in rows
            ),
            l1_eligible=frozenset(l1_eligible or ()),
        )

    def is_l1_eligible(self, address: str) -> bool:
        """Whether *address* claims through an L1-initiated transaction."""
        return normalize_address(address) in self.l1_eligible


class Leaf(BaseModel):
    """A hashed allocation entry; ``index`` is its position in ``all_eligible``."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)
    address: str
    amount: int = Field(..., ge=0)
    content_hash: bytes

    @property
    def content_hash_hex(self) -> str:
        return "0x" + self.content_hash.hex()

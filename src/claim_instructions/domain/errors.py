"""Domain-specific exceptions."""

from __future__ import annotations


class ClaimInstructionsError(Exception):
    """Base class for errors raised while building instructions."""


class NotEligibleError(ClaimInstructionsError):
    """Raised when an identity has no allocation in any configured distributor.

    ``address`` is the identity the caller controls (already de-aliased for
    L1-initiated lookups).
    """

    def __init__(self, address: str) -> None:
        super().__init__(f"{address} address is not eligible")
        self.address = address


class LookupInconsistencyError(ClaimInstructionsError):
    """Raised when a leaf does not belong to the index it is resolved against."""


class ExternalQueryFailure(ClaimInstructionsError):
    """Raised when the L1 node call fails; the underlying error is chained."""

"""Shared Pydantic serializers used across DTOs."""

from __future__ import annotations

from pydantic import field_serializer


class WeiSerializersMixin:
    """Serialize token amounts and wei values as decimal strings.

    These values routinely exceed 2**53, so JSON consumers must not see them as
    numbers. Uses `check_fields=False` so the mixin applies to any model that
    declares a subset of the fields.
    """

    @field_serializer(
        "amount",
        "secondary_layer_value",
        "required_value",
        "gas_price",
        check_fields=False,
    )
    def serialize_wei(self, value: int) -> str:
        return str(value)

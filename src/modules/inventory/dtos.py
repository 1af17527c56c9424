"""Inventory DTOs for the Service Layer (Pydantic v2, immutable)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from modules.inventory.models import DEFAULT_REORDER_POINT


class SaveInventoryDTO(BaseModel):
    """Input for creating or replacing a ledger entry.

    Validates:
    - ``sku`` is a non-empty string.
    - ``initial_inventory`` is an integer >= 0.  Negative values are
      rejected here, before anything reaches storage.
    - ``reorder_point`` is an integer >= 0.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    sku: str
    initial_inventory: int
    reorder_point: int = DEFAULT_REORDER_POINT

    @field_validator("sku")
    @classmethod
    def sku_must_not_be_blank(cls, v: str) -> str:
        if not v:
            raise ValueError("SKU is required.")
        return v

    @field_validator("initial_inventory")
    @classmethod
    def inventory_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(
                "Inventory value cannot be negative. Please enter 0 or higher."
            )
        return v

    @field_validator("reorder_point")
    @classmethod
    def reorder_point_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Reorder point cannot be negative.")
        return v

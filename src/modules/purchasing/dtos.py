"""Purchasing DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).

- ``PurchaseOrderItemDTO``: one line to re-order (quantity > 0).
- ``CreatePurchaseOrderDTO``: input for a direct purchase-order request.
- ``SetPurchaseOrderStatusDTO``: input for a status update.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, field_validator

from modules.purchasing.constants import PurchaseOrderStatus


class PurchaseOrderItemDTO(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    product_name: str
    quantity: int
    sku: str = ""
    variant_title: str = ""

    @field_validator("product_name")
    @classmethod
    def product_name_must_not_be_blank(cls, v: str) -> str:
        if not v:
            raise ValueError("product_name is required.")
        return v

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Quantity must be greater than zero.")
        return v

    @field_validator("sku", "variant_title", mode="before")
    @classmethod
    def none_as_empty(cls, v: object) -> object:
        return "" if v is None else v


class CreatePurchaseOrderDTO(BaseModel):
    """Validates:
    - ``order_id`` and ``shop`` are non-empty.
    - ``items`` has at least one entry.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    order_id: str
    shop: str
    items: List[PurchaseOrderItemDTO]

    @field_validator("order_id", "shop")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        if not v:
            raise ValueError("Field is required.")
        return v

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(cls, v: List[PurchaseOrderItemDTO]) -> List[PurchaseOrderItemDTO]:
        if not v:
            raise ValueError("A purchase order needs at least one item.")
        return v


class SetPurchaseOrderStatusDTO(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    status: str

    @field_validator("status")
    @classmethod
    def status_must_be_known(cls, v: str) -> str:
        if v not in PurchaseOrderStatus.values:
            raise ValueError(
                f"Unknown status {v!r}. Expected one of: {', '.join(PurchaseOrderStatus.values)}."
            )
        return v

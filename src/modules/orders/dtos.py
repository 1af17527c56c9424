"""Order status DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer and the Service layer.
DTOs are immutable (``frozen=True``).

- ``StatusChangeDTO``: input for a status-change request, optionally
  carrying the line items to re-order when stock is unavailable.  The
  items stay raw here; ``PurchaseOrderService`` validates them.
"""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.orders.constants import FulfillmentStatus


class StatusChangeDTO(BaseModel):
    """Immutable DTO for a status-change request.

    Validates:
    - ``order_id`` and ``shop`` are non-empty.
    - ``status`` is one of ``FulfillmentStatus``.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    order_id: str
    shop: str
    status: str
    notes: str = ""
    purchase_order_items: List[Any] = Field(default_factory=list)

    @field_validator("order_id", "shop")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        if not v:
            raise ValueError("Field is required.")
        return v

    @field_validator("status")
    @classmethod
    def status_must_be_known(cls, v: str) -> str:
        if v not in FulfillmentStatus.values:
            raise ValueError(
                f"Unknown status {v!r}. Expected one of: {', '.join(FulfillmentStatus.values)}."
            )
        return v

    @field_validator("notes", mode="before")
    @classmethod
    def notes_default_to_empty(cls, v: object) -> object:
        return "" if v is None else v

    @property
    def wants_purchase_order(self) -> bool:
        return (
            self.status == FulfillmentStatus.OUT_OF_STOCK
            and len(self.purchase_order_items) > 0
        )

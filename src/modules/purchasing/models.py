"""PurchaseOrder and PurchaseOrderItem models.

Business rules implemented:
- ``po_number`` is generated once at creation and never reused.
- Every line item orders a positive quantity (validator + DB constraint).
- Items keep the order they were submitted in (``position``).
"""

from __future__ import annotations

import secrets
import time

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.purchasing.constants import INITIAL_PURCHASE_ORDER_STATUS, PurchaseOrderStatus


def generate_po_number() -> str:
    """``PO-<epoch millis>-<8 hex chars>``, uppercase."""
    millis = int(time.time() * 1000)
    return f"PO-{millis}-{secrets.token_hex(4)}".upper()


class PurchaseOrder(BaseModel):
    """Procurement record raised for an order whose items are unavailable."""

    po_number: models.CharField = models.CharField(
        max_length=40, unique=True, editable=False, default=generate_po_number
    )
    shop: models.CharField = models.CharField(max_length=255)
    original_order_id: models.CharField = models.CharField(max_length=255)
    original_order_name: models.CharField = models.CharField(max_length=255)
    status: models.CharField = models.CharField(
        max_length=20,
        choices=PurchaseOrderStatus.choices,
        default=INITIAL_PURCHASE_ORDER_STATUS,
    )
    notes: models.TextField = models.TextField(blank=True, default="")

    class Meta:
        db_table = "purchase_orders"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["shop", "status"], name="purchase_order_shop_idx"),
            models.Index(fields=["original_order_id"], name="purchase_order_origin_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.po_number} ({self.status})"


class PurchaseOrderItem(BaseModel):
    """One line of a purchase order."""

    purchase_order: models.ForeignKey = models.ForeignKey(
        "purchasing.PurchaseOrder",
        on_delete=models.CASCADE,
        related_name="items",
    )
    position: models.PositiveIntegerField = models.PositiveIntegerField()
    product_name: models.CharField = models.CharField(max_length=255)
    sku: models.CharField = models.CharField(max_length=100, blank=True, default="")
    variant_title: models.CharField = models.CharField(
        max_length=255, blank=True, default=""
    )
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        validators=[MinValueValidator(1)]
    )

    class Meta:
        db_table = "purchase_order_items"
        ordering = ["purchase_order", "position"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="purchase_order_items_quantity_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.quantity}x {self.product_name} ({self.sku or 'no SKU'})"

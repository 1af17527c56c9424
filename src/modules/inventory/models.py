"""Inventory ledger entry.

Business rules implemented:
- Stock count is never negative (DTO validation + database check constraint).
- An entry is *out of stock* at zero and *low stock* at or below its
  reorder point.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel

DEFAULT_REORDER_POINT = 5


class AlertLevel(models.TextChoices):
    OUT_OF_STOCK = "out-of-stock", "Out of stock"
    LOW_STOCK = "low-stock", "Low stock"
    HEALTHY = "healthy", "Healthy"


class InventoryEntry(BaseModel):
    sku: models.CharField = models.CharField(max_length=100, unique=True)
    initial_inventory: models.IntegerField = models.IntegerField()
    reorder_point: models.PositiveIntegerField = models.PositiveIntegerField(
        default=DEFAULT_REORDER_POINT
    )

    class Meta:
        db_table = "inventory_entries"
        ordering = ["sku"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(initial_inventory__gte=0),
                name="inventory_entries_non_negative",
            ),
        ]

    @property
    def last_updated(self):
        return self.updated_at

    @property
    def is_out_of_stock(self) -> bool:
        return self.initial_inventory == 0

    @property
    def is_low_stock(self) -> bool:
        return self.initial_inventory <= self.reorder_point

    @property
    def alert_level(self) -> str:
        if self.is_out_of_stock:
            return AlertLevel.OUT_OF_STOCK
        if self.is_low_stock:
            return AlertLevel.LOW_STOCK
        return AlertLevel.HEALTHY

    def __str__(self) -> str:
        return f"{self.sku}: {self.initial_inventory}"

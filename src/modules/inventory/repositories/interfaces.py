"""Inventory ledger repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.inventory.models import InventoryEntry


class IInventoryRepository(IRepository["InventoryEntry"]):
    """Repository contract for per-SKU stock entries."""

    @abstractmethod
    def get_by_sku(self, sku: str) -> Optional[InventoryEntry]:
        """Retrieve the entry for *sku*."""

    @abstractmethod
    def upsert(self, sku: str, initial_inventory: int, reorder_point: int) -> InventoryEntry:
        """Create or replace the entry for *sku* atomically."""

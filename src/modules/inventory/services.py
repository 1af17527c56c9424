"""Inventory service layer.

Business rules enforced:
- Stock counts are never negative (validated by ``SaveInventoryDTO``
  before the repository is reached).
- Entries are classified out-of-stock / low-stock / healthy against their
  own reorder point.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

import structlog

from modules.inventory.exceptions import InventoryEntryNotFound

if TYPE_CHECKING:
    from modules.inventory.dtos import SaveInventoryDTO
    from modules.inventory.models import InventoryEntry
    from modules.inventory.repositories.interfaces import IInventoryRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class LowStockReport:
    total: int
    out_of_stock: List[InventoryEntry] = field(default_factory=list)
    low_stock: List[InventoryEntry] = field(default_factory=list)
    healthy: List[InventoryEntry] = field(default_factory=list)


class InventoryService:
    def __init__(self, repository: IInventoryRepository) -> None:
        self._repo = repository

    def save_inventory(self, dto: SaveInventoryDTO) -> InventoryEntry:
        entry = self._repo.upsert(dto.sku, dto.initial_inventory, dto.reorder_point)
        logger.info("inventory.updated", sku=dto.sku, alert_level=str(entry.alert_level))
        return entry

    def get_entry(self, sku: str) -> InventoryEntry:
        """Raises:
        InventoryEntryNotFound: no entry for *sku*.
        """
        entry = self._repo.get_by_sku(sku)
        if entry is None:
            raise InventoryEntryNotFound(f"No inventory entry for SKU {sku}.")
        return entry

    def list_inventory(self) -> List[InventoryEntry]:
        return self._repo.list()

    def low_stock_alerts(self) -> List[InventoryEntry]:
        """Entries at or below their reorder point, out-of-stock ones included."""
        return [entry for entry in self._repo.list() if entry.is_low_stock or entry.is_out_of_stock]

    def low_stock_report(self) -> LowStockReport:
        entries = self._repo.list()
        report = LowStockReport(total=len(entries))
        for entry in entries:
            if entry.is_out_of_stock:
                report.out_of_stock.append(entry)
            elif entry.is_low_stock:
                report.low_stock.append(entry)
            else:
                report.healthy.append(entry)

        logger.info(
            "inventory.low_stock_report",
            total=report.total,
            out_of_stock=len(report.out_of_stock),
            low_stock=len(report.low_stock),
        )
        return report

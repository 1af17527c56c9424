"""Purchase order repository interface.

Extends ``IRepository[PurchaseOrder]`` with the aggregate's writes.  The
purchase order and its items form one aggregate and are persisted
together.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.purchasing.models import PurchaseOrder


class IPurchaseOrderRepository(IRepository["PurchaseOrder"]):
    """Repository contract for the PurchaseOrder aggregate.

    ``list`` returns the newest purchase orders first.
    """

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> PurchaseOrder:
        """Persist a purchase order and its items atomically.

        ``data`` keys: ``shop``, ``original_order_id``,
        ``original_order_name``, ``notes``, ``items`` (list of dicts with
        ``product_name``, ``sku``, ``variant_title``, ``quantity``).
        """

    @abstractmethod
    def update_status(self, po_number: str, status: str) -> Optional[PurchaseOrder]:
        """Set the status; ``None`` when *po_number* does not exist."""

    @abstractmethod
    def get_by_po_number(self, po_number: str) -> Optional[PurchaseOrder]:
        """Retrieve a purchase order with its items prefetched."""

"""Django ORM implementation of the purchase order repository.

All writes run inside ``transaction.atomic()``: a purchase order is
either stored with all of its items or not at all.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.purchasing.constants import INITIAL_PURCHASE_ORDER_STATUS
from modules.purchasing.models import PurchaseOrder, PurchaseOrderItem
from modules.purchasing.repositories.interfaces import IPurchaseOrderRepository
from shared.infrastructure.storage import translate_storage_errors

logger = structlog.get_logger(__name__)


class PurchaseOrderDjangoRepository(IPurchaseOrderRepository):
    """Concrete purchase order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    @translate_storage_errors
    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> PurchaseOrder:
        purchase_order = PurchaseOrder.objects.create(
            shop=data["shop"],
            original_order_id=data["original_order_id"],
            original_order_name=data["original_order_name"],
            status=data.get("status", INITIAL_PURCHASE_ORDER_STATUS),
            notes=data.get("notes", ""),
        )

        items = data.get("items", [])
        PurchaseOrderItem.objects.bulk_create(
            [
                PurchaseOrderItem(
                    purchase_order=purchase_order,
                    position=position,
                    product_name=item["product_name"],
                    sku=item.get("sku", ""),
                    variant_title=item.get("variant_title", ""),
                    quantity=item["quantity"],
                )
                for position, item in enumerate(items, start=1)
            ]
        )

        logger.info(
            "purchase_order.persisted",
            po_number=purchase_order.po_number,
            item_count=len(items),
        )
        return self.get_by_po_number(purchase_order.po_number) or purchase_order

    @translate_storage_errors
    def update_status(self, po_number: str, status: str) -> Optional[PurchaseOrder]:
        """Uses ``select_for_update`` so concurrent updates serialise."""
        with transaction.atomic():
            purchase_order = (
                PurchaseOrder.objects.select_for_update()
                .filter(po_number=po_number)
                .first()
            )
            if purchase_order is None:
                return None

            purchase_order.status = status
            purchase_order.save(update_fields=["status"])

        return self.get_by_po_number(po_number)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    @translate_storage_errors
    def get_by_po_number(self, po_number: str) -> Optional[PurchaseOrder]:
        return (
            PurchaseOrder.objects.prefetch_related("items")
            .filter(po_number=po_number)
            .first()
        )

    @translate_storage_errors
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[PurchaseOrder]:
        """Supported filter keys: ``status``, ``shop``, ``original_order_id``."""
        queryset = PurchaseOrder.objects.prefetch_related("items").order_by(
            "-created_at", "-id"
        )
        if filters:
            for key in ("status", "shop", "original_order_id"):
                if filters.get(key):
                    queryset = queryset.filter(**{key: filters[key]})
        return list(queryset)

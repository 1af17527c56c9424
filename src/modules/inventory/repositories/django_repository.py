"""Django ORM implementation of the inventory repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.inventory.models import InventoryEntry
from modules.inventory.repositories.interfaces import IInventoryRepository
from shared.infrastructure.storage import translate_storage_errors

logger = structlog.get_logger(__name__)


class InventoryDjangoRepository(IInventoryRepository):
    """Concrete inventory ledger backed by Django ORM."""

    @translate_storage_errors
    def get_by_sku(self, sku: str) -> Optional[InventoryEntry]:
        return InventoryEntry.objects.filter(sku=sku).first()

    @translate_storage_errors
    @transaction.atomic
    def upsert(self, sku: str, initial_inventory: int, reorder_point: int) -> InventoryEntry:
        """``update_or_create`` locks the row (``SELECT FOR UPDATE``) when it exists."""
        entry, created = InventoryEntry.objects.update_or_create(
            sku=sku,
            defaults={
                "initial_inventory": initial_inventory,
                "reorder_point": reorder_point,
            },
        )
        logger.info(
            "inventory.saved",
            sku=sku,
            initial_inventory=initial_inventory,
            created=created,
        )
        return entry

    @translate_storage_errors
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[InventoryEntry]:
        queryset = InventoryEntry.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

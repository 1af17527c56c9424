"""Django ORM implementation of the order status repository.

Satisfies ``IOrderStatusRepository`` using Django's QuerySet API.
``upsert`` runs inside ``transaction.atomic()`` so the record and the
history row it appends are persisted together.

Concurrency control uses ``select_for_update()`` on the record row.  A
record that does not exist yet is inserted in the ``fresh`` state first,
inside a savepoint; losing that race to another writer surfaces as an
``IntegrityError`` on the unique ``order_id``, after which the winner's
row is locked instead.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.db import IntegrityError, transaction

from modules.orders.constants import INITIAL_STATUS
from modules.orders.models import OrderStatusHistory, OrderStatusRecord
from modules.orders.repositories.interfaces import IOrderStatusRepository, StatusMutator
from shared.infrastructure.storage import translate_storage_errors

logger = structlog.get_logger(__name__)


class OrderStatusDjangoRepository(IOrderStatusRepository):
    """Concrete order status repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    @translate_storage_errors
    def upsert(self, order_id: str, shop: str, mutator: StatusMutator) -> OrderStatusRecord:
        with transaction.atomic():
            record = self._lock_or_create(order_id, shop)
            entry = mutator(record)
            record.save()

            sequence = record.history.count() + 1
            OrderStatusHistory.objects.create(
                record=record,
                sequence=sequence,
                from_status=entry.from_status,
                to_status=entry.to_status,
                notes=entry.notes,
            )

        logger.info(
            "order_status.persisted",
            order_id=order_id,
            shop=shop,
            from_status=entry.from_status,
            to_status=entry.to_status,
            sequence=sequence,
        )
        return self.get_by_order_id(order_id) or record

    def _lock_or_create(self, order_id: str, shop: str) -> OrderStatusRecord:
        record = (
            OrderStatusRecord.objects.select_for_update()
            .filter(order_id=order_id)
            .first()
        )
        if record is not None:
            return record

        try:
            with transaction.atomic():
                return OrderStatusRecord.objects.create(
                    order_id=order_id, shop=shop, status=INITIAL_STATUS
                )
        except IntegrityError:
            logger.info("order_status.concurrent_create", order_id=order_id)
            return OrderStatusRecord.objects.select_for_update().get(order_id=order_id)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    @translate_storage_errors
    def get_by_order_id(self, order_id: str) -> Optional[OrderStatusRecord]:
        """Retrieve a record with its history prefetched (one extra query)."""
        return (
            OrderStatusRecord.objects.prefetch_related("history")
            .filter(order_id=order_id)
            .first()
        )

    @translate_storage_errors
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[OrderStatusRecord]:
        """List records, most recently updated first.

        Supported filter keys: ``status``, ``shop``.
        """
        queryset = OrderStatusRecord.objects.prefetch_related("history")
        if filters:
            if filters.get("status"):
                queryset = queryset.filter(status=filters["status"])
            if filters.get("shop"):
                queryset = queryset.filter(shop=filters["shop"])
        return list(queryset)

"""Order status service layer (Use Cases).

``OrderStatusService`` records fulfillment status changes with an
append-only audit trail.  ``StatusChangeService`` sequences a full
status-change request: installation check, status change, and the
purchase order an ``out_of_stock`` change may ask for.

Business rules enforced:
- Any status may follow any other; terminal states never block.
- Every change appends exactly one history entry whose ``from_status``
  is the status it replaced (``fresh`` for the first change).
- A failed purchase order never undoes the committed status change.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog

from modules.orders.constants import FulfillmentStatus
from modules.orders.exceptions import InvalidOrderStatus, OrderStatusNotFound
from modules.orders.repositories.interfaces import TransitionEntry
from modules.shops.exceptions import ShopNotInstalled
from shared.domain.exceptions import InvalidInput, PersistenceFailure, StorageUnavailable

if TYPE_CHECKING:
    from modules.orders.dtos import StatusChangeDTO
    from modules.orders.models import OrderStatusRecord
    from modules.orders.repositories.interfaces import IOrderStatusRepository
    from modules.purchasing.models import PurchaseOrder
    from modules.purchasing.services import PurchaseOrderService
    from modules.shops.services import InstallationService

logger = structlog.get_logger(__name__)


class OrderStatusService:
    """Application service for the order status state machine.

    Receives its repository via constructor injection (DIP).
    """

    def __init__(self, repository: IOrderStatusRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def record_status_change(
        self,
        order_id: str,
        shop: str,
        new_status: str,
        notes: str = "",
    ) -> OrderStatusRecord:
        """Apply *new_status* to the order and append the history entry.

        The repository creates the record in the ``fresh`` state when it
        does not exist yet, and serialises concurrent changes to the same
        ``order_id``.

        Raises:
            InvalidOrderStatus: blank identifiers or unknown status.
            StorageUnavailable: the database cannot be reached.
        """
        if not order_id or not shop:
            raise InvalidOrderStatus("order_id and shop are required.")
        if new_status not in FulfillmentStatus.values:
            raise InvalidOrderStatus(f"Unknown status {new_status!r}.")

        notes = notes or ""

        def apply(record: OrderStatusRecord) -> TransitionEntry:
            previous_status = record.transition_to(new_status, notes)
            record.shop = shop
            return TransitionEntry(
                from_status=previous_status, to_status=new_status, notes=notes
            )

        record = self._repo.upsert(order_id, shop, apply)
        logger.info(
            "order_status.changed",
            order_id=order_id,
            shop=shop,
            status=new_status,
            terminal=record.is_terminal,
        )
        return record

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_status(self, order_id: str) -> OrderStatusRecord:
        """Raises:
        OrderStatusNotFound: no status was ever recorded for *order_id*.
        """
        record = self._repo.get_by_order_id(order_id)
        if record is None:
            raise OrderStatusNotFound(f"No status recorded for order {order_id}.")
        return record

    def list_statuses(self, filters: Optional[Dict[str, Any]] = None) -> List[OrderStatusRecord]:
        return self._repo.list(filters)

    def statuses_by_order(self, shop: str) -> Dict[str, str]:
        """Current status of every tracked order of *shop*, keyed by ``order_id``."""
        return {record.order_id: record.status for record in self._repo.list({"shop": shop})}


@dataclass(frozen=True)
class StatusChangeResult:
    """Outcome of a status-change request.

    ``record`` is always present.  ``purchase_order`` and
    ``purchase_order_error`` are mutually exclusive and both ``None``
    when no purchase order was requested.
    """

    record: OrderStatusRecord
    purchase_order: Optional[PurchaseOrder] = None
    purchase_order_error: Optional[str] = None

    @property
    def purchase_order_created(self) -> bool:
        return self.purchase_order is not None


class StatusChangeService:
    """Sequences a status change end-to-end."""

    def __init__(
        self,
        installation_service: InstallationService,
        status_service: OrderStatusService,
        purchase_order_service: PurchaseOrderService,
    ) -> None:
        self._installations = installation_service
        self._statuses = status_service
        self._purchase_orders = purchase_order_service

    def handle_status_change(self, dto: StatusChangeDTO) -> StatusChangeResult:
        """Raises:
        ShopNotInstalled: the tenant has no stored credential.
        InvalidOrderStatus: the status change itself is invalid.
        StorageUnavailable: the status change could not reach the database.
        """
        log = logger.bind(order_id=dto.order_id, shop=dto.shop, status=dto.status)

        self._installations.require_access_token(dto.shop)
        record = self._statuses.record_status_change(
            dto.order_id, dto.shop, dto.status, dto.notes
        )

        if not dto.wants_purchase_order:
            return StatusChangeResult(record=record)

        try:
            purchase_order = self._purchase_orders.create_purchase_order(
                dto.order_id, dto.shop, dto.purchase_order_items
            )
        except (ShopNotInstalled, InvalidInput, PersistenceFailure, StorageUnavailable) as exc:
            log.error(
                "order_status.purchase_order_failed",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return StatusChangeResult(record=record, purchase_order_error=str(exc))

        log.info("order_status.purchase_order_created", po_number=purchase_order.po_number)
        return StatusChangeResult(record=record, purchase_order=purchase_order)

"""Purchase order service layer (Use Cases).

Business rules enforced:
- A purchase order needs at least one item, each with quantity > 0.
- Only installed shops may raise purchase orders.
- Looking up the order's display name is best effort: any remote
  failure falls back to ``"Order <order_id>"`` and never blocks creation.
- Creation is never retried; status updates are idempotent.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Sequence, Union

import structlog
from pydantic import ValidationError as PydanticValidationError

from modules.purchasing.constants import INITIAL_PURCHASE_ORDER_STATUS
from modules.purchasing.dtos import CreatePurchaseOrderDTO, SetPurchaseOrderStatusDTO
from modules.purchasing.exceptions import PurchaseOrderNotFound
from shared.domain.exceptions import InvalidInput
from shared.infrastructure.remote import RemoteCallFailure

if TYPE_CHECKING:
    from modules.purchasing.dtos import PurchaseOrderItemDTO
    from modules.purchasing.models import PurchaseOrder
    from modules.purchasing.repositories.interfaces import IPurchaseOrderRepository
    from modules.shops.client import ShopifyClient
    from modules.shops.services import InstallationService

logger = structlog.get_logger(__name__)


def fallback_order_name(order_id: str) -> str:
    return f"Order {order_id}"


class PurchaseOrderService:
    """Application service for purchase orders.

    Receives the repository, installation service and platform client
    via constructor injection (DIP).  Without a client the order-name
    lookup is skipped and the fallback name is used.
    """

    def __init__(
        self,
        repository: IPurchaseOrderRepository,
        installation_service: InstallationService,
        client: Optional[ShopifyClient] = None,
    ) -> None:
        self._repo = repository
        self._installations = installation_service
        self._client = client

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_purchase_order(
        self,
        order_id: str,
        shop: str,
        items: Sequence[Union[PurchaseOrderItemDTO, Mapping[str, Any]]],
    ) -> PurchaseOrder:
        """Create a purchase order with status ``ordered``.

        *items* may be DTOs or raw mappings straight from a request body.

        Steps:
        1. Validate the request (non-empty items, positive quantities).
        2. Resolve the shop's access token.
        3. Look up the order's display name, falling back on any remote
           failure.
        4. Persist the order and its items in one transaction.

        Raises:
            InvalidInput: no items, or an item with quantity <= 0.
            ShopNotInstalled: the shop has no stored credential.
            PersistenceFailure: the store rejected the write.
            StorageUnavailable: the database cannot be reached.
        """
        try:
            dto = CreatePurchaseOrderDTO(order_id=order_id, shop=shop, items=list(items))
        except PydanticValidationError as exc:
            raise InvalidInput(_first_error(exc)) from exc

        log = logger.bind(order_id=dto.order_id, shop=dto.shop)
        token = self._installations.require_access_token(dto.shop)
        order_name = self._resolve_order_name(dto.shop, token, dto.order_id)

        purchase_order = self._repo.create(
            {
                "shop": dto.shop,
                "original_order_id": dto.order_id,
                "original_order_name": order_name,
                "status": INITIAL_PURCHASE_ORDER_STATUS,
                "notes": f"Created for order {order_name} due to out of stock items.",
                "items": [item.model_dump() for item in dto.items],
            }
        )
        log.info(
            "purchase_order.created",
            po_number=purchase_order.po_number,
            item_count=len(dto.items),
        )
        return purchase_order

    def set_status(self, po_number: str, new_status: str) -> PurchaseOrder:
        """Set the status of *po_number*.  Repeating a call is harmless.

        Raises:
            InvalidInput: unknown status.
            PurchaseOrderNotFound: no such purchase order.
        """
        try:
            dto = SetPurchaseOrderStatusDTO(status=new_status or "")
        except PydanticValidationError as exc:
            raise InvalidInput(_first_error(exc)) from exc

        purchase_order = self._repo.update_status(po_number, dto.status)
        if purchase_order is None:
            raise PurchaseOrderNotFound(f"Purchase order {po_number} not found.")

        logger.info("purchase_order.status_changed", po_number=po_number, status=dto.status)
        return purchase_order

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_purchase_order(self, po_number: str) -> PurchaseOrder:
        """Raises:
        PurchaseOrderNotFound: no such purchase order.
        """
        purchase_order = self._repo.get_by_po_number(po_number)
        if purchase_order is None:
            raise PurchaseOrderNotFound(f"Purchase order {po_number} not found.")
        return purchase_order

    def list_purchase_orders(self, filters: Optional[Dict[str, Any]] = None) -> List[PurchaseOrder]:
        return self._repo.list(filters)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _resolve_order_name(self, shop: str, token: str, order_id: str) -> str:
        if self._client is None:
            return fallback_order_name(order_id)
        try:
            name = self._client.fetch_order_name(shop, token, order_id)
        except RemoteCallFailure as exc:
            logger.warning(
                "purchase_order.order_name_unavailable",
                order_id=order_id,
                shop=shop,
                error=str(exc),
            )
            return fallback_order_name(order_id)
        return name or fallback_order_name(order_id)


def _first_error(exc: PydanticValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = str(first.get("msg", "Invalid value."))
    return f"{location}: {message}" if location else message

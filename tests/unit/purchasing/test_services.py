"""Unit tests for PurchaseOrderService.

Covers:
- Request validation (empty items, non-positive quantity).
- Installation check before any remote call.
- Best-effort order name: platform name, unknown order, remote failure.
- Notes text and repository payload.
- Status updates: unknown status, missing purchase order.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from modules.purchasing.dtos import PurchaseOrderItemDTO
from modules.purchasing.exceptions import PurchaseOrderNotFound
from modules.purchasing.models import PurchaseOrder
from modules.purchasing.services import PurchaseOrderService
from modules.shops.exceptions import ShopNotInstalled
from shared.domain.exceptions import InvalidInput, PersistenceFailure
from shared.infrastructure.remote import RemoteCallFailure

pytestmark = pytest.mark.unit

SHOP = "demo.myshop"
WIDGET = PurchaseOrderItemDTO(product_name="Widget", sku="W-1", variant_title="Red", quantity=3)


@pytest.fixture()
def mock_repo():
    repo = MagicMock()
    repo.create.side_effect = lambda data: PurchaseOrder(
        po_number="PO-1700000000000-0A1B2C3D",
        shop=data["shop"],
        original_order_id=data["original_order_id"],
        original_order_name=data["original_order_name"],
        status=data["status"],
        notes=data["notes"],
    )
    return repo


@pytest.fixture()
def installations():
    mock = MagicMock()
    mock.require_access_token.return_value = "shpat_1"
    return mock


@pytest.fixture()
def client():
    return MagicMock()


@pytest.fixture()
def service(mock_repo, installations, client):
    return PurchaseOrderService(
        repository=mock_repo, installation_service=installations, client=client
    )


class TestCreatePurchaseOrder:
    def test_uses_platform_order_name(self, service, client, mock_repo):
        client.fetch_order_name.return_value = "#1001"

        purchase_order = service.create_purchase_order("ORD-1", SHOP, [WIDGET])

        client.fetch_order_name.assert_called_once_with(SHOP, "shpat_1", "ORD-1")
        assert purchase_order.original_order_name == "#1001"
        assert purchase_order.notes == "Created for order #1001 due to out of stock items."

    def test_remote_failure_falls_back(self, service, client, mock_repo):
        client.fetch_order_name.side_effect = RemoteCallFailure("exhausted", attempts=3)

        purchase_order = service.create_purchase_order("ORD-1", SHOP, [WIDGET])

        assert purchase_order.original_order_name == "Order ORD-1"
        assert purchase_order.status == "ordered"
        assert purchase_order.notes == "Created for order Order ORD-1 due to out of stock items."
        data = mock_repo.create.call_args.args[0]
        assert data["items"] == [
            {"product_name": "Widget", "quantity": 3, "sku": "W-1", "variant_title": "Red"}
        ]

    def test_unknown_order_falls_back(self, service, client):
        client.fetch_order_name.return_value = None

        purchase_order = service.create_purchase_order("ORD-1", SHOP, [WIDGET])

        assert purchase_order.original_order_name == "Order ORD-1"

    def test_not_installed_raises_before_remote_call(self, service, installations, client, mock_repo):
        installations.require_access_token.side_effect = ShopNotInstalled("nope")

        with pytest.raises(ShopNotInstalled):
            service.create_purchase_order("ORD-1", SHOP, [WIDGET])

        client.fetch_order_name.assert_not_called()
        mock_repo.create.assert_not_called()

    def test_empty_items_rejected(self, service, mock_repo):
        with pytest.raises(InvalidInput, match="at least one item"):
            service.create_purchase_order("ORD-1", SHOP, [])
        mock_repo.create.assert_not_called()

    def test_non_positive_quantity_rejected(self, service, mock_repo):
        with pytest.raises(InvalidInput):
            service.create_purchase_order(
                "ORD-1", SHOP, [{"product_name": "Widget", "quantity": 0}]
            )
        mock_repo.create.assert_not_called()

    def test_raw_item_mappings_are_accepted(self, service, client, mock_repo):
        client.fetch_order_name.return_value = "#1001"

        service.create_purchase_order(
            "ORD-1", SHOP, [{"product_name": "Widget", "quantity": 2, "sku": None}]
        )

        assert mock_repo.create.call_args.args[0]["items"] == [
            {"product_name": "Widget", "quantity": 2, "sku": "", "variant_title": ""}
        ]

    def test_non_mapping_item_rejected(self, service, mock_repo):
        with pytest.raises(InvalidInput):
            service.create_purchase_order("ORD-1", SHOP, ["Widget x3"])
        mock_repo.create.assert_not_called()

    def test_without_client_uses_fallback_name(self, mock_repo, installations):
        service = PurchaseOrderService(repository=mock_repo, installation_service=installations)

        purchase_order = service.create_purchase_order("ORD-1", SHOP, [WIDGET])

        assert purchase_order.original_order_name == "Order ORD-1"

    def test_persistence_failure_propagates(self, service, client, mock_repo):
        client.fetch_order_name.return_value = "#1001"
        mock_repo.create.side_effect = PersistenceFailure("write rejected")

        with pytest.raises(PersistenceFailure):
            service.create_purchase_order("ORD-1", SHOP, [WIDGET])

    def test_other_client_errors_are_not_absorbed(self, service, client):
        client.fetch_order_name.side_effect = KeyError("bug")

        with pytest.raises(KeyError):
            service.create_purchase_order("ORD-1", SHOP, [WIDGET])


class TestSetStatus:
    def test_updates_status(self, service, mock_repo):
        mock_repo.update_status.return_value = PurchaseOrder(po_number="PO-X", status="received")

        purchase_order = service.set_status("PO-X", "received")

        mock_repo.update_status.assert_called_once_with("PO-X", "received")
        assert purchase_order.status == "received"

    def test_unknown_status_rejected(self, service, mock_repo):
        with pytest.raises(InvalidInput):
            service.set_status("PO-X", "shipped")
        mock_repo.update_status.assert_not_called()

    def test_missing_purchase_order(self, service, mock_repo):
        mock_repo.update_status.return_value = None
        with pytest.raises(PurchaseOrderNotFound):
            service.set_status("PO-404", "received")


class TestQueries:
    def test_get_missing_purchase_order(self, service, mock_repo):
        mock_repo.get_by_po_number.return_value = None
        with pytest.raises(PurchaseOrderNotFound):
            service.get_purchase_order("PO-404")

    def test_list_passes_filters(self, service, mock_repo):
        mock_repo.list.return_value = []
        assert service.list_purchase_orders({"shop": SHOP}) == []
        mock_repo.list.assert_called_once_with({"shop": SHOP})

"""Integration tests for PurchaseOrderDjangoRepository and PurchaseOrderService."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from django.db import IntegrityError
from freezegun import freeze_time

from modules.purchasing.dtos import PurchaseOrderItemDTO
from modules.purchasing.models import PurchaseOrder, PurchaseOrderItem
from modules.purchasing.repositories.django_repository import PurchaseOrderDjangoRepository
from modules.purchasing.serializers import PurchaseOrderSerializer
from modules.purchasing.services import PurchaseOrderService
from modules.shops.repositories.django_repository import ShopInstallationDjangoRepository
from modules.shops.services import InstallationService
from shared.domain.exceptions import PersistenceFailure
from shared.infrastructure.remote import RemoteCallFailure

pytestmark = pytest.mark.integration

SHOP = "demo.myshop"
WIDGET = PurchaseOrderItemDTO(product_name="Widget", sku="W-1", variant_title="Red", quantity=3)


@pytest.fixture()
def repo():
    return PurchaseOrderDjangoRepository()


@pytest.fixture()
def unreachable_client():
    client = MagicMock()
    client.fetch_order_name.side_effect = RemoteCallFailure("timed out", attempts=3)
    return client


@pytest.fixture()
def service(repo, unreachable_client):
    return PurchaseOrderService(
        repository=repo,
        installation_service=InstallationService(ShopInstallationDjangoRepository()),
        client=unreachable_client,
    )


def _payload(order_id="ORD-1", items=None):
    return {
        "shop": SHOP,
        "original_order_id": order_id,
        "original_order_name": f"Order {order_id}",
        "notes": "",
        "items": items
        if items is not None
        else [{"product_name": "Widget", "sku": "W-1", "variant_title": "Red", "quantity": 3}],
    }


class TestCreate:
    def test_order_one_with_remote_unavailable(self, service, installed_shop):
        purchase_order = service.create_purchase_order("ORD-1", SHOP, [WIDGET])

        stored = PurchaseOrder.objects.get(po_number=purchase_order.po_number)
        items = list(stored.items.all())
        assert len(items) == 1
        assert (items[0].product_name, items[0].sku, items[0].variant_title, items[0].quantity) == (
            "Widget",
            "W-1",
            "Red",
            3,
        )
        assert stored.status == "ordered"
        assert stored.original_order_name == "Order ORD-1"
        assert stored.notes == "Created for order Order ORD-1 due to out of stock items."

    def test_items_keep_submission_order(self, repo):
        purchase_order = repo.create(
            _payload(
                items=[
                    {"product_name": "B", "quantity": 1},
                    {"product_name": "A", "quantity": 2},
                    {"product_name": "C", "quantity": 3},
                ]
            )
        )
        assert [i.product_name for i in purchase_order.items.all()] == ["B", "A", "C"]
        assert [i.position for i in purchase_order.items.all()] == [1, 2, 3]

    def test_several_purchase_orders_per_order(self, repo):
        first = repo.create(_payload())
        second = repo.create(_payload())
        assert first.po_number != second.po_number
        assert PurchaseOrder.objects.filter(original_order_id="ORD-1").count() == 2

    def test_rejected_item_write_persists_nothing(self, repo):
        with patch(
            "modules.purchasing.repositories.django_repository.PurchaseOrderItem.objects.bulk_create",
            side_effect=IntegrityError("CHECK constraint failed"),
        ):
            with pytest.raises(PersistenceFailure):
                repo.create(_payload())

        assert PurchaseOrder.objects.count() == 0
        assert PurchaseOrderItem.objects.count() == 0


class TestStatusUpdate:
    def test_set_status_is_idempotent(self, service, installed_shop):
        with freeze_time("2024-03-01 10:00:00"):
            purchase_order = service.create_purchase_order("ORD-1", SHOP, [WIDGET])

        with freeze_time("2024-03-02 10:00:00"):
            first = PurchaseOrderSerializer(service.set_status(purchase_order.po_number, "received")).data
        with freeze_time("2024-03-03 10:00:00"):
            second = PurchaseOrderSerializer(service.set_status(purchase_order.po_number, "received")).data

        assert first["status"] == second["status"] == "received"
        assert first["updated_at"] != second["updated_at"]
        first.pop("updated_at")
        second.pop("updated_at")
        assert first == second

    def test_update_missing_returns_none(self, repo):
        assert repo.update_status("PO-404", "received") is None


class TestList:
    def test_newest_first(self, repo):
        with freeze_time("2024-03-01"):
            older = repo.create(_payload("ORD-1"))
        with freeze_time("2024-03-05"):
            newer = repo.create(_payload("ORD-2"))

        assert [po.po_number for po in repo.list()] == [newer.po_number, older.po_number]

    def test_filters(self, repo):
        first = repo.create(_payload("ORD-1"))
        repo.create(_payload("ORD-2"))
        repo.update_status(first.po_number, "cancelled")

        assert [po.po_number for po in repo.list({"status": "cancelled"})] == [first.po_number]
        assert len(repo.list({"original_order_id": "ORD-2"})) == 1
        assert len(repo.list({"shop": "other.myshop"})) == 0

from __future__ import annotations

from django.core.management.base import BaseCommand

from modules.inventory.dtos import SaveInventoryDTO
from modules.inventory.repositories.django_repository import InventoryDjangoRepository
from modules.inventory.services import InventoryService
from modules.orders.constants import FulfillmentStatus
from modules.orders.repositories.django_repository import OrderStatusDjangoRepository
from modules.orders.services import OrderStatusService
from modules.shops.repositories.django_repository import ShopInstallationDjangoRepository
from modules.shops.services import InstallationService

DEMO_SHOP = "demo.myshopify.com"

INVENTORY = [
    ("W-1", 0, 5),
    ("W-2", 3, 5),
    ("W-3", 12, 5),
    ("G-1", 40, 10),
    ("G-2", 8, 10),
]

ORDER_HISTORY = [
    ("gid://shopify/Order/1001", [FulfillmentStatus.CONFIRMED, FulfillmentStatus.IN_STOCK]),
    ("gid://shopify/Order/1002", [FulfillmentStatus.CONFIRMED, FulfillmentStatus.OUT_OF_STOCK]),
    (
        "gid://shopify/Order/1003",
        [
            FulfillmentStatus.CONFIRMED,
            FulfillmentStatus.IN_STOCK,
            FulfillmentStatus.DISPATCHED,
            FulfillmentStatus.DELIVERED,
        ],
    ),
]


class Command(BaseCommand):
    help = "Seed a demo shop installation, inventory and order statuses for local development."

    def add_arguments(self, parser):
        parser.add_argument("--shop", default=DEMO_SHOP)
        parser.add_argument(
            "--access-token",
            default="shpat_demo0000000000000000000000000",
            help="Credential stored for the demo shop.",
        )

    def handle(self, *args, **options):
        shop = options["shop"]
        self.stdout.write(f"Seeding development data for {shop}...")

        InstallationService(ShopInstallationDjangoRepository()).register(
            shop, options["access_token"], "read_products,read_orders"
        )
        entries = self._seed_inventory()
        changes = self._seed_order_statuses(shop)

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: shop={shop}, inventory={entries}, status_changes={changes}"
            )
        )

    def _seed_inventory(self) -> int:
        service = InventoryService(InventoryDjangoRepository())
        for sku, stock, reorder_point in INVENTORY:
            service.save_inventory(
                SaveInventoryDTO(sku=sku, initial_inventory=stock, reorder_point=reorder_point)
            )
        return len(INVENTORY)

    def _seed_order_statuses(self, shop: str) -> int:
        service = OrderStatusService(OrderStatusDjangoRepository())
        seeded = {record.order_id for record in service.list_statuses({"shop": shop})}
        changes = 0
        for order_id, statuses in ORDER_HISTORY:
            if order_id in seeded:
                continue
            for status in statuses:
                service.record_status_change(order_id, shop, status, notes="Seeded")
                changes += 1
        return changes

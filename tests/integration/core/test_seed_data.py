import pytest
from django.core.management import call_command

from modules.inventory.models import InventoryEntry
from modules.orders.models import OrderStatusHistory, OrderStatusRecord
from modules.shops.models import ShopInstallation

pytestmark = pytest.mark.integration


class TestSeedData:
    def test_seeds_demo_data(self):
        call_command("seed_data", shop="seed.myshop")

        assert ShopInstallation.objects.filter(shop="seed.myshop").exists()
        assert InventoryEntry.objects.filter(initial_inventory=0).exists()
        assert OrderStatusRecord.objects.filter(shop="seed.myshop").count() == 3
        assert OrderStatusHistory.objects.count() == 8

    def test_running_twice_does_not_duplicate_history(self):
        call_command("seed_data", shop="seed.myshop")
        call_command("seed_data", shop="seed.myshop")

        assert OrderStatusHistory.objects.count() == 8
        assert ShopInstallation.objects.count() == 1

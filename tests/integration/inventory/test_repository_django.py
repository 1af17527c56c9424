"""Integration tests for InventoryDjangoRepository."""

from __future__ import annotations

import pytest
from django.db import IntegrityError, transaction

from modules.inventory.models import InventoryEntry
from modules.inventory.repositories.django_repository import InventoryDjangoRepository
from shared.domain.exceptions import PersistenceFailure

pytestmark = pytest.mark.integration


@pytest.fixture()
def repo():
    return InventoryDjangoRepository()


class TestUpsert:
    def test_creates_then_replaces(self, repo):
        repo.upsert("W-1", 10, 5)
        entry = repo.upsert("W-1", 0, 3)

        assert InventoryEntry.objects.count() == 1
        assert entry.initial_inventory == 0
        assert entry.reorder_point == 3
        assert entry.is_out_of_stock

    def test_negative_stock_rejected_by_repository(self, repo):
        with pytest.raises(PersistenceFailure):
            repo.upsert("W-1", -1, 5)
        assert not InventoryEntry.objects.filter(sku="W-1").exists()

    def test_check_constraint_rejects_direct_write(self):
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                InventoryEntry.objects.create(sku="W-2", initial_inventory=-5)


class TestRead:
    def test_get_by_sku(self, repo):
        repo.upsert("W-1", 4, 5)
        assert repo.get_by_sku("W-1").initial_inventory == 4
        assert repo.get_by_sku("missing") is None

    def test_list_sorted_by_sku(self, repo):
        repo.upsert("B", 1, 5)
        repo.upsert("A", 1, 5)
        assert [e.sku for e in repo.list()] == ["A", "B"]

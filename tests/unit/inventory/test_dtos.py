"""Unit tests for SaveInventoryDTO validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from modules.inventory.dtos import SaveInventoryDTO

pytestmark = pytest.mark.unit


class TestSaveInventoryDTO:
    def test_zero_is_accepted(self):
        dto = SaveInventoryDTO(sku="W-1", initial_inventory=0)
        assert dto.initial_inventory == 0
        assert dto.reorder_point == 5

    def test_negative_is_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            SaveInventoryDTO(sku="W-1", initial_inventory=-1)

    def test_numeric_string_is_coerced(self):
        assert SaveInventoryDTO(sku="W-1", initial_inventory="12").initial_inventory == 12

    def test_non_numeric_is_rejected(self):
        with pytest.raises(ValidationError):
            SaveInventoryDTO(sku="W-1", initial_inventory="lots")

    def test_blank_sku_is_rejected(self):
        with pytest.raises(ValidationError, match="SKU is required"):
            SaveInventoryDTO(sku="   ", initial_inventory=3)

    def test_negative_reorder_point_is_rejected(self):
        with pytest.raises(ValidationError):
            SaveInventoryDTO(sku="W-1", initial_inventory=3, reorder_point=-2)

    def test_dto_is_immutable(self):
        dto = SaveInventoryDTO(sku="W-1", initial_inventory=3)
        with pytest.raises(ValidationError):
            dto.initial_inventory = 10

"""Inventory DRF serializers for API input/output."""

from __future__ import annotations

from rest_framework import serializers

from modules.inventory.models import InventoryEntry


class InventoryEntrySerializer(serializers.ModelSerializer):
    last_updated = serializers.DateTimeField(read_only=True)
    alert_level = serializers.CharField(read_only=True)

    class Meta:
        model = InventoryEntry
        fields = [
            "sku",
            "initial_inventory",
            "reorder_point",
            "alert_level",
            "last_updated",
        ]
        read_only_fields = fields


class LowStockReportSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    out_of_stock = InventoryEntrySerializer(many=True)
    low_stock = InventoryEntrySerializer(many=True)
    healthy = InventoryEntrySerializer(many=True)


class SaveInventorySerializer(serializers.Serializer):
    """Shape of a save request; value rules live in ``SaveInventoryDTO``.

    ``reorder_point`` may be omitted or null, and then takes the default.
    """

    sku = serializers.CharField(max_length=100)
    initial_inventory = serializers.IntegerField()
    reorder_point = serializers.IntegerField(required=False, allow_null=True)


class LowStockAlertSerializer(serializers.Serializer):
    shop = serializers.CharField()
    alerts = InventoryEntrySerializer(many=True)

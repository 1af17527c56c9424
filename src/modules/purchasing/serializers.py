"""Purchasing DRF serializers for API input/output."""

from __future__ import annotations

from rest_framework import serializers

from modules.purchasing.constants import PurchaseOrderStatus
from modules.purchasing.models import PurchaseOrder, PurchaseOrderItem

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class PurchaseOrderItemInputSerializer(serializers.Serializer):
    """Validates a single line of a purchase order request."""

    product_name = serializers.CharField(max_length=255)
    quantity = serializers.IntegerField(min_value=1)
    sku = serializers.CharField(
        max_length=100, required=False, default="", allow_blank=True, allow_null=True
    )
    variant_title = serializers.CharField(
        max_length=255, required=False, default="", allow_blank=True, allow_null=True
    )


class CreatePurchaseOrderSerializer(serializers.Serializer):
    order_id = serializers.CharField(max_length=255)
    shop = serializers.CharField(max_length=255)
    items = PurchaseOrderItemInputSerializer(many=True, allow_empty=False)


class SetPurchaseOrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=PurchaseOrderStatus.choices)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class PurchaseOrderItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = PurchaseOrderItem
        fields = ["position", "product_name", "sku", "variant_title", "quantity"]
        read_only_fields = fields


class PurchaseOrderSerializer(serializers.ModelSerializer):
    """Read serializer for purchase orders with nested items."""

    items = PurchaseOrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = PurchaseOrder
        fields = [
            "po_number",
            "shop",
            "original_order_id",
            "original_order_name",
            "status",
            "notes",
            "items",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

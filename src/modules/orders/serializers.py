"""Order status DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.constants import FulfillmentStatus
from modules.orders.models import OrderStatusHistory, OrderStatusRecord

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class StatusChangeSerializer(serializers.Serializer):
    """Validates the status-change request payload."""

    order_id = serializers.CharField(max_length=255)
    shop = serializers.CharField(max_length=255)
    status = serializers.ChoiceField(choices=FulfillmentStatus.choices)
    notes = serializers.CharField(
        required=False, default="", allow_blank=True, allow_null=True
    )
    # Line items are checked when the purchase order is created, so a bad
    # item is reported as a purchase-order error and never blocks the change.
    purchase_order_items = serializers.ListField(
        required=False, default=list, allow_null=True
    )


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class StatusHistorySerializer(serializers.ModelSerializer):
    """Read serializer for one audit trail entry."""

    timestamp = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = OrderStatusHistory
        fields = ["sequence", "from_status", "to_status", "notes", "timestamp"]
        read_only_fields = fields


class OrderStatusRecordSerializer(serializers.ModelSerializer):
    """Read serializer for a status record with its full history."""

    history = StatusHistorySerializer(many=True, read_only=True)
    is_terminal = serializers.BooleanField(read_only=True)

    class Meta:
        model = OrderStatusRecord
        fields = [
            "order_id",
            "shop",
            "status",
            "notes",
            "is_terminal",
            "created_at",
            "updated_at",
            "history",
        ]
        read_only_fields = fields


class OrderStatusListSerializer(serializers.ModelSerializer):
    """Lightweight list serializer (history omitted)."""

    class Meta:
        model = OrderStatusRecord
        fields = ["order_id", "shop", "status", "notes", "updated_at"]
        read_only_fields = fields

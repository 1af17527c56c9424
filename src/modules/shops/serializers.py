"""Shop DRF serializers for API input/output."""

from __future__ import annotations

from rest_framework import serializers


class ShopQuerySerializer(serializers.Serializer):
    """Validates the ``?shop=`` query parameter of tenant-scoped reads."""

    shop = serializers.CharField(max_length=255)


class ConnectionReportSerializer(serializers.Serializer):
    shop = serializers.CharField()
    has_token = serializers.BooleanField()
    token_length = serializers.IntegerField()
    shop_info = serializers.DictField(allow_null=True)
    shop_error = serializers.CharField(allow_null=True)
    orders_count = serializers.IntegerField()
    orders_error = serializers.CharField(allow_null=True)

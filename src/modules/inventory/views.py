"""Inventory API views.

Exposes ``InventoryService`` via HTTP.  Negative stock is rejected by
``SaveInventoryDTO`` and answered with 400 by the project exception
handler before the store is touched.
"""

from __future__ import annotations

from django.conf import settings
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.throttling import ShopRateThrottle
from modules.inventory.dtos import SaveInventoryDTO
from modules.inventory.exceptions import InventoryEntryNotFound
from modules.inventory.models import InventoryEntry
from modules.inventory.repositories.django_repository import InventoryDjangoRepository
from modules.inventory.serializers import (
    InventoryEntrySerializer,
    LowStockAlertSerializer,
    LowStockReportSerializer,
    SaveInventorySerializer,
)
from modules.inventory.services import InventoryService
from modules.shops.repositories.django_repository import ShopInstallationDjangoRepository
from modules.shops.serializers import ShopQuerySerializer
from modules.shops.services import InstallationService


class InventoryViewSet(GenericViewSet):
    """ViewSet for the inventory ledger."""

    queryset = InventoryEntry.objects.all()
    serializer_class = InventoryEntrySerializer
    throttle_classes = [ShopRateThrottle]
    lookup_field = "sku"
    lookup_value_regex = "[^/]+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = InventoryService(repository=InventoryDjangoRepository())

    def list(self, request: Request) -> Response:
        """GET /api/v1/inventory/"""
        entries = self._service.list_inventory()
        return Response(InventoryEntrySerializer(entries, many=True).data)

    def retrieve(self, request: Request, sku: str | None = None) -> Response:
        """GET /api/v1/inventory/{sku}/"""
        try:
            entry = self._service.get_entry(sku or "")
        except InventoryEntryNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        return Response(InventoryEntrySerializer(entry).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/inventory/"""
        serializer = SaveInventorySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data
        reorder_point = data.get("reorder_point")
        dto = SaveInventoryDTO(
            sku=data["sku"],
            initial_inventory=data["initial_inventory"],
            reorder_point=(
                settings.DEFAULT_REORDER_POINT if reorder_point is None else reorder_point
            ),
        )

        entry = self._service.save_inventory(dto)
        return Response(
            {
                "success": True,
                "data": InventoryEntrySerializer(entry).data,
                "message": f"Inventory set to {entry.initial_inventory} for SKU: {entry.sku}",
            }
        )

    @action(detail=False, methods=["get"], url_path="low-stock")
    def low_stock(self, request: Request) -> Response:
        """GET /api/v1/inventory/low-stock/"""
        report = self._service.low_stock_report()
        return Response(LowStockReportSerializer(report).data)

    @action(detail=False, methods=["get"])
    def alerts(self, request: Request) -> Response:
        """GET /api/v1/inventory/alerts/?shop=

        Low-stock alerts for an installed shop; 403 otherwise.
        """
        query = ShopQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        shop = query.validated_data["shop"]

        InstallationService(ShopInstallationDjangoRepository()).require_access_token(shop)
        alerts = self._service.low_stock_alerts()
        return Response(LowStockAlertSerializer({"shop": shop, "alerts": alerts}).data)

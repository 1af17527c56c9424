"""Purchase order API views.

Exposes ``PurchaseOrderService`` via HTTP.  ``ShopNotInstalled``,
``InvalidInput``, ``PersistenceFailure`` and ``StorageUnavailable`` are
translated by the project exception handler.
"""

from __future__ import annotations

from contextlib import closing
from typing import Optional

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.throttling import ShopRateThrottle
from modules.purchasing.dtos import PurchaseOrderItemDTO
from modules.purchasing.exceptions import PurchaseOrderNotFound
from modules.purchasing.filters import PurchaseOrderFilter
from modules.purchasing.models import PurchaseOrder
from modules.purchasing.repositories.django_repository import PurchaseOrderDjangoRepository
from modules.purchasing.serializers import (
    CreatePurchaseOrderSerializer,
    PurchaseOrderSerializer,
    SetPurchaseOrderStatusSerializer,
)
from modules.purchasing.services import PurchaseOrderService
from modules.shops.client import ShopifyClient
from modules.shops.repositories.django_repository import ShopInstallationDjangoRepository
from modules.shops.services import InstallationService


class PurchaseOrderViewSet(GenericViewSet):
    """ViewSet for purchase orders, addressed by ``po_number``."""

    queryset = PurchaseOrder.objects.all()
    serializer_class = PurchaseOrderSerializer
    throttle_classes = [ShopRateThrottle]
    lookup_field = "po_number"
    lookup_value_regex = "[^/]+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = self._purchase_order_service()

    def _purchase_order_service(
        self, client: Optional[ShopifyClient] = None
    ) -> PurchaseOrderService:
        return PurchaseOrderService(
            repository=PurchaseOrderDjangoRepository(),
            installation_service=InstallationService(ShopInstallationDjangoRepository()),
            client=client,
        )

    def create(self, request: Request) -> Response:
        """POST /api/v1/purchase-orders/"""
        serializer = CreatePurchaseOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data
        with closing(ShopifyClient.from_settings()) as client:
            purchase_order = self._purchase_order_service(client).create_purchase_order(
                data["order_id"],
                data["shop"],
                [PurchaseOrderItemDTO(**item) for item in data["items"]],
            )
        return Response(
            {
                "success": True,
                "purchase_order": PurchaseOrderSerializer(purchase_order).data,
                "message": f"Purchase order {purchase_order.po_number} created successfully",
            },
            status=status.HTTP_201_CREATED,
        )

    def list(self, request: Request) -> Response:
        """GET /api/v1/purchase-orders/?status=&shop=

        Newest first, paginated.
        """
        filterset = PurchaseOrderFilter(request.query_params)
        if not filterset.is_valid():
            raise ValidationError(filterset.errors)

        purchase_orders = self._service.list_purchase_orders(filterset.form.cleaned_data)
        page = self.paginate_queryset(purchase_orders)
        if page is not None:
            return self.get_paginated_response(
                PurchaseOrderSerializer(page, many=True).data
            )
        return Response(PurchaseOrderSerializer(purchase_orders, many=True).data)

    def retrieve(self, request: Request, po_number: str | None = None) -> Response:
        """GET /api/v1/purchase-orders/{po_number}/"""
        try:
            purchase_order = self._service.get_purchase_order(po_number or "")
        except PurchaseOrderNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        return Response(PurchaseOrderSerializer(purchase_order).data)

    @action(detail=True, methods=["post"], url_path="status")
    def set_status(self, request: Request, po_number: str | None = None) -> Response:
        """POST /api/v1/purchase-orders/{po_number}/status/"""
        serializer = SetPurchaseOrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        new_status = serializer.validated_data["status"]
        try:
            purchase_order = self._service.set_status(po_number or "", new_status)
        except PurchaseOrderNotFound as exc:
            return Response(
                {"success": False, "detail": str(exc)},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(
            {
                "success": True,
                "data": PurchaseOrderSerializer(purchase_order).data,
                "message": f"Purchase order status updated to {new_status}",
            }
        )

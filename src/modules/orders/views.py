"""Order status API views.

Exposes ``StatusChangeService`` and ``OrderStatusService`` via HTTP.
``ShopNotInstalled``, ``InvalidInput`` and ``StorageUnavailable`` are
translated by the project exception handler; the view only maps
not-found lookups itself.
"""

from __future__ import annotations

from contextlib import closing

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.throttling import ShopRateThrottle
from modules.orders.dtos import StatusChangeDTO
from modules.orders.exceptions import OrderStatusNotFound
from modules.orders.filters import OrderStatusFilter
from modules.orders.models import OrderStatusRecord
from modules.orders.repositories.django_repository import OrderStatusDjangoRepository
from modules.orders.serializers import (
    OrderStatusListSerializer,
    OrderStatusRecordSerializer,
    StatusChangeSerializer,
)
from modules.orders.services import OrderStatusService, StatusChangeService
from modules.purchasing.repositories.django_repository import PurchaseOrderDjangoRepository
from modules.purchasing.serializers import PurchaseOrderSerializer
from modules.purchasing.services import PurchaseOrderService
from modules.shops.client import ShopifyClient
from modules.shops.repositories.django_repository import ShopInstallationDjangoRepository
from modules.shops.services import InstallationService


class OrderStatusViewSet(GenericViewSet):
    """ViewSet for order fulfillment status.

    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    queryset = OrderStatusRecord.objects.all()
    serializer_class = OrderStatusRecordSerializer
    throttle_classes = [ShopRateThrottle]
    lookup_field = "order_id"
    # Platform order ids are GraphQL gids such as gid://shopify/Order/1001.
    lookup_value_regex = ".+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._status_service = OrderStatusService(OrderStatusDjangoRepository())

    def _status_change_service(self, client: ShopifyClient) -> StatusChangeService:
        installations = InstallationService(ShopInstallationDjangoRepository())
        return StatusChangeService(
            installation_service=installations,
            status_service=self._status_service,
            purchase_order_service=PurchaseOrderService(
                repository=PurchaseOrderDjangoRepository(),
                installation_service=installations,
                client=client,
            ),
        )

    # ------------------------------------------------------------------
    # Status change
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/order-status/

        Records the change, then creates a purchase order when the new
        status is ``out_of_stock`` and line items were supplied.  A failed
        purchase order is reported alongside the committed change.
        """
        serializer = StatusChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data
        dto = StatusChangeDTO(
            order_id=data["order_id"],
            shop=data["shop"],
            status=data["status"],
            notes=data.get("notes") or "",
            purchase_order_items=data.get("purchase_order_items") or [],
        )

        with closing(ShopifyClient.from_settings()) as client:
            result = self._status_change_service(client).handle_status_change(dto)
        return Response(
            {
                "success": True,
                "data": OrderStatusRecordSerializer(result.record).data,
                "purchase_order_created": result.purchase_order_created,
                "purchase_order": (
                    PurchaseOrderSerializer(result.purchase_order).data
                    if result.purchase_order is not None
                    else None
                ),
                "purchase_order_error": result.purchase_order_error,
            },
            status=status.HTTP_200_OK,
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/order-status/?status=&shop=

        Query parameters are validated by ``OrderStatusFilter``; results
        are paginated and most recently updated first.
        """
        filterset = OrderStatusFilter(request.query_params)
        if not filterset.is_valid():
            raise ValidationError(filterset.errors)

        records = self._status_service.list_statuses(filterset.form.cleaned_data)
        page = self.paginate_queryset(records)
        if page is not None:
            return self.get_paginated_response(
                OrderStatusListSerializer(page, many=True).data
            )
        return Response(OrderStatusListSerializer(records, many=True).data)

    def retrieve(self, request: Request, order_id: str | None = None) -> Response:
        """GET /api/v1/order-status/{order_id}/"""
        try:
            record = self._status_service.get_status(order_id or "")
        except OrderStatusNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        return Response(OrderStatusRecordSerializer(record).data)

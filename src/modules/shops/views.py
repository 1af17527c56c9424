"""Shop API views.

Read-only views over a tenant's storefront: its orders (joined with the
fulfillment status tracked here), its products, a connection probe and a
debug summary of installed shops.  ``ShopNotInstalled`` and
``RemoteCallFailure`` are translated by the project exception handler.
"""

from __future__ import annotations

from contextlib import closing

from django.conf import settings
from django.http import Http404
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.throttling import ShopRateThrottle
from modules.orders.repositories.django_repository import OrderStatusDjangoRepository
from modules.orders.services import OrderStatusService
from modules.shops.client import ShopifyClient
from modules.shops.repositories.django_repository import ShopInstallationDjangoRepository
from modules.shops.serializers import ConnectionReportSerializer, ShopQuerySerializer
from modules.shops.services import InstallationService, StorefrontService


class ShopViewSet(ViewSet):
    """Tenant-scoped storefront reads, all addressed by ``?shop=``."""

    throttle_classes = [ShopRateThrottle]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._installations = InstallationService(ShopInstallationDjangoRepository())

    def _shop(self, request: Request) -> str:
        serializer = ShopQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data["shop"]

    @action(detail=False, methods=["get"])
    def orders(self, request: Request) -> Response:
        """GET /api/v1/shop/orders/?shop=

        Platform orders, newest first, each carrying the fulfillment
        status recorded here (``None`` when the order is not tracked yet).
        """
        shop = self._shop(request)
        with closing(ShopifyClient.from_settings()) as client:
            orders = StorefrontService(self._installations, client).list_orders(shop)

        statuses = OrderStatusService(OrderStatusDjangoRepository()).statuses_by_order(shop)
        results = [
            {**order, "fulfillment_status": statuses.get(order.get("id"))} for order in orders
        ]
        return Response({"count": len(results), "results": results})

    @action(detail=False, methods=["get"])
    def products(self, request: Request) -> Response:
        """GET /api/v1/shop/products/?shop="""
        shop = self._shop(request)
        with closing(ShopifyClient.from_settings()) as client:
            products = StorefrontService(self._installations, client).list_products(shop)
        return Response({"count": len(products), "results": products})

    @action(detail=False, methods=["get"], url_path="test-connection")
    def test_connection(self, request: Request) -> Response:
        """GET /api/v1/shop/test-connection/?shop="""
        shop = self._shop(request)
        with closing(ShopifyClient.from_settings()) as client:
            report = StorefrontService(self._installations, client).test_connection(shop)
        return Response({"success": True, **ConnectionReportSerializer(report).data})

    @action(detail=False, methods=["get"], url_path="debug-info")
    def debug_info(self, request: Request) -> Response:
        """GET /api/v1/shop/debug-info/?shop=

        Only served when ``DEBUG`` is on.
        """
        if not settings.DEBUG:
            raise Http404
        shops = self._installations.list_installed_shops()
        current_shop = request.query_params.get("shop") or None
        return Response(
            {
                "installed_shops": shops,
                "total_installations": len(shops),
                "current_shop": current_shop,
                "has_token_for_current_shop": self._installations.is_installed(
                    current_shop or ""
                ),
                "required_scopes": settings.SHOPIFY_SCOPES,
            }
        )

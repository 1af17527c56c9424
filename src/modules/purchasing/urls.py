"""Purchasing URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.purchasing.views import PurchaseOrderViewSet

router = DefaultRouter(trailing_slash=True)
router.register("purchase-orders", PurchaseOrderViewSet, basename="purchase-order")

urlpatterns = router.urls

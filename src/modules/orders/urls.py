"""Order status URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.orders.views import OrderStatusViewSet

router = DefaultRouter(trailing_slash=True)
router.register("order-status", OrderStatusViewSet, basename="order-status")

urlpatterns = router.urls

"""Shop URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.shops.views import ShopViewSet

router = DefaultRouter(trailing_slash=True)
router.register("shop", ShopViewSet, basename="shop")

urlpatterns = router.urls

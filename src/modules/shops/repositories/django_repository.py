"""Django ORM implementation of the shop installation repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.utils import timezone

from modules.shops.models import ShopInstallation
from modules.shops.repositories.interfaces import IShopInstallationRepository
from shared.infrastructure.storage import translate_storage_errors

logger = structlog.get_logger(__name__)


class ShopInstallationDjangoRepository(IShopInstallationRepository):
    """Concrete credential store backed by Django ORM."""

    @translate_storage_errors
    def get_access_token(self, shop: str) -> Optional[str]:
        return (
            ShopInstallation.objects.filter(shop=shop)
            .values_list("access_token", flat=True)
            .first()
        )

    @translate_storage_errors
    def save(self, shop: str, access_token: str, scopes: str = "") -> ShopInstallation:
        installation, created = ShopInstallation.objects.update_or_create(
            shop=shop,
            defaults={
                "access_token": access_token,
                "scopes": scopes,
                "installed_at": timezone.now(),
            },
        )
        logger.info("shop.installation_saved", shop=shop, created=created)
        return installation

    @translate_storage_errors
    def delete(self, shop: str) -> bool:
        deleted, _ = ShopInstallation.objects.filter(shop=shop).delete()
        if deleted:
            logger.info("shop.installation_removed", shop=shop)
        return bool(deleted)

    @translate_storage_errors
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[ShopInstallation]:
        queryset = ShopInstallation.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

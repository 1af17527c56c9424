"""Shop installation repositories package."""

from modules.shops.repositories.django_repository import ShopInstallationDjangoRepository
from modules.shops.repositories.interfaces import IShopInstallationRepository

__all__ = ["IShopInstallationRepository", "ShopInstallationDjangoRepository"]

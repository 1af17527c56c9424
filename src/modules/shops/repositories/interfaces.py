"""Shop installation (credential store) repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.shops.models import ShopInstallation


class IShopInstallationRepository(IRepository["ShopInstallation"]):
    """Repository contract for per-tenant access credentials."""

    @abstractmethod
    def get_access_token(self, shop: str) -> Optional[str]:
        """Return the stored token for *shop*, or ``None`` if not installed."""

    @abstractmethod
    def save(self, shop: str, access_token: str, scopes: str = "") -> ShopInstallation:
        """Create or replace the credential for *shop*."""

    @abstractmethod
    def delete(self, shop: str) -> bool:
        """Remove the credential for *shop*.  Returns ``False`` if absent."""

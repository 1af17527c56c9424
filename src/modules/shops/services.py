"""Shop installation and storefront services.

``InstallationService`` answers the one question every write path asks
first: is this tenant installed, and with which access token?
``StorefrontService`` reads the tenant's orders and products from the
commerce platform on its behalf.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog

from modules.shops.exceptions import ShopNotInstalled
from shared.infrastructure.remote import RemoteCallFailure

if TYPE_CHECKING:
    from modules.shops.client import ShopifyClient
    from modules.shops.models import ShopInstallation
    from modules.shops.repositories.interfaces import IShopInstallationRepository

logger = structlog.get_logger(__name__)


class InstallationService:
    def __init__(self, repository: IShopInstallationRepository) -> None:
        self._repo = repository

    def require_access_token(self, shop: str) -> str:
        """Return the access token for *shop*.

        Raises:
            ShopNotInstalled: no credential is stored for the shop.
        """
        token = self._repo.get_access_token(shop) if shop else None
        if not token:
            logger.warning("shop.not_installed", shop=shop)
            raise ShopNotInstalled(f"App not installed for shop {shop!r}.")
        return token

    def is_installed(self, shop: str) -> bool:
        return bool(shop) and self._repo.get_access_token(shop) is not None

    def register(self, shop: str, access_token: str, scopes: str = "") -> ShopInstallation:
        """Store the credential obtained by the install flow."""
        return self._repo.save(shop, access_token, scopes)

    def list_installed_shops(self) -> List[str]:
        return [installation.shop for installation in self._repo.list()]


@dataclass(frozen=True)
class ConnectionReport:
    """Result of probing the platform with a shop's stored credential.

    The shop query and the orders probe fail independently; a failure is
    carried as its message instead of aborting the report.
    """

    shop: str
    token_length: int
    shop_info: Optional[Dict[str, Any]] = None
    shop_error: Optional[str] = None
    orders_count: int = 0
    orders_error: Optional[str] = None

    @property
    def has_token(self) -> bool:
        return self.token_length > 0


class StorefrontService:
    def __init__(self, installation_service: InstallationService, client: ShopifyClient) -> None:
        self._installations = installation_service
        self._client = client

    def list_orders(self, shop: str) -> List[Dict[str, Any]]:
        """Raises:
        ShopNotInstalled: no credential is stored for the shop.
        RemoteCallFailure: the platform could not be reached.
        """
        token = self._installations.require_access_token(shop)
        return self._client.fetch_orders(shop, token)

    def list_products(self, shop: str) -> List[Dict[str, Any]]:
        """Raises:
        ShopNotInstalled: no credential is stored for the shop.
        RemoteCallFailure: the platform could not be reached.
        """
        token = self._installations.require_access_token(shop)
        return self._client.fetch_products(shop, token)

    def test_connection(self, shop: str) -> ConnectionReport:
        """Probe the shop query and a one-order listing with the stored token.

        Raises:
            ShopNotInstalled: no credential is stored for the shop.
        """
        token = self._installations.require_access_token(shop)
        log = logger.bind(shop=shop)

        shop_info: Optional[Dict[str, Any]] = None
        shop_error: Optional[str] = None
        try:
            shop_info = self._client.fetch_shop(shop, token)
        except RemoteCallFailure as exc:
            shop_error = str(exc)

        orders_count = 0
        orders_error: Optional[str] = None
        try:
            orders_count = len(self._client.fetch_orders(shop, token, first=1))
        except RemoteCallFailure as exc:
            orders_error = str(exc)

        log.info(
            "shop.connection_tested",
            shop_ok=shop_error is None,
            orders_ok=orders_error is None,
        )
        return ConnectionReport(
            shop=shop,
            token_length=len(token),
            shop_info=shop_info,
            shop_error=shop_error,
            orders_count=orders_count,
            orders_error=orders_error,
        )

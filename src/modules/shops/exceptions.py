"""Shop installation exceptions."""

from __future__ import annotations


class ShopNotInstalled(Exception):
    """No access credential is stored for the shop.

    User-recoverable: the merchant has to (re)install the app.
    """

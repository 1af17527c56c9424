"""Per-shop API rate limiting.

Requests are keyed by the ``shop`` they act on (query string first, then
JSON body) and fall back to the client IP, so one busy tenant cannot
exhaust the budget of another.
"""

from __future__ import annotations

from rest_framework.throttling import SimpleRateThrottle


class ShopRateThrottle(SimpleRateThrottle):
    scope = "shop"

    def get_cache_key(self, request, view):
        shop = request.query_params.get("shop")
        if not shop and isinstance(request.data, dict):
            shop = request.data.get("shop")
        ident = shop or self.get_ident(request)
        return self.cache_format % {"scope": self.scope, "ident": ident}

"""Commerce platform (Shopify Admin GraphQL) client.

Thin wrapper over ``RemoteCaller``: builds the per-shop GraphQL endpoint,
authenticates with the shop's access token and pulls the few fields this
service needs out of the response.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog

from shared.infrastructure.remote import RemoteCaller, RemoteCallFailure

logger = structlog.get_logger(__name__)

ORDER_NAME_QUERY = """
query ($id: ID!) {
  order(id: $id) {
    id
    name
  }
}
"""

ORDERS_QUERY = """
query ($first: Int!) {
  orders(first: $first, sortKey: CREATED_AT, reverse: true) {
    edges {
      node {
        id
        name
        email
        createdAt
        displayFinancialStatus
        displayFulfillmentStatus
        totalPriceSet {
          shopMoney {
            amount
            currencyCode
          }
        }
        lineItems(first: 5) {
          edges {
            node {
              title
              quantity
              variant {
                sku
                title
              }
            }
          }
        }
      }
    }
  }
}
"""

PRODUCTS_QUERY = """
query ($first: Int!) {
  products(first: $first) {
    edges {
      node {
        id
        title
        handle
        description
        featuredImage {
          url
        }
        variants(first: 5) {
          edges {
            node {
              id
              sku
              title
              price
              inventoryItem {
                tracked
              }
            }
          }
        }
      }
    }
  }
}
"""

SHOP_QUERY = """
query {
  shop {
    id
    name
    email
  }
}
"""


class ShopifyClient:
    def __init__(self, caller: RemoteCaller, api_version: str = "2024-01") -> None:
        self._caller = caller
        self._api_version = api_version

    @classmethod
    def from_settings(cls) -> ShopifyClient:
        from django.conf import settings

        from shared.infrastructure.remote import RetryPolicy

        caller = RemoteCaller(
            policy=RetryPolicy.from_settings(),
            timeout=settings.REMOTE_CALL_TIMEOUT_SECONDS,
        )
        return cls(caller, api_version=settings.SHOPIFY_API_VERSION)

    def close(self) -> None:
        self._caller.close()

    def endpoint(self, shop: str) -> str:
        return f"https://{shop}/admin/api/{self._api_version}/graphql.json"

    def query(
        self,
        shop: str,
        token: str,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Run a GraphQL query for *shop*.

        Raises:
            RemoteCallFailure: the retry budget was exhausted.
        """
        return self._caller.call(
            self.endpoint(shop),
            {"query": query, "variables": variables or {}},
            headers={"X-Shopify-Access-Token": token},
        )

    def fetch_order_name(self, shop: str, token: str, order_id: str) -> Optional[str]:
        """Return the display name (e.g. ``#1001``) of *order_id*.

        Returns ``None`` when the platform knows no such order.

        Raises:
            RemoteCallFailure: the call failed or the payload is malformed.
        """
        data = _data(self.query(shop, token, ORDER_NAME_QUERY, {"id": order_id}))

        order = data.get("order")
        if order is None:
            logger.info("shopify.order_not_found", shop=shop, order_id=order_id)
            return None

        name = order.get("name") if isinstance(order, dict) else None
        if not isinstance(name, str) or not name:
            raise RemoteCallFailure("Order payload has no usable 'name'.")
        return name

    def fetch_orders(self, shop: str, token: str, first: int = 50) -> List[Dict[str, Any]]:
        """Most recent orders first, as plain GraphQL nodes."""
        data = _data(self.query(shop, token, ORDERS_QUERY, {"first": first}))
        orders = _nodes(data, "orders")
        logger.info("shopify.orders_fetched", shop=shop, count=len(orders))
        return orders

    def fetch_products(self, shop: str, token: str, first: int = 50) -> List[Dict[str, Any]]:
        data = _data(self.query(shop, token, PRODUCTS_QUERY, {"first": first}))
        products = _nodes(data, "products")
        logger.info("shopify.products_fetched", shop=shop, count=len(products))
        return products

    def fetch_shop(self, shop: str, token: str) -> Dict[str, Any]:
        data = _data(self.query(shop, token, SHOP_QUERY))
        info = data.get("shop")
        if not isinstance(info, dict):
            raise RemoteCallFailure("Response is missing the 'shop' object.")
        return info


def _data(payload: Dict[str, Any]) -> Dict[str, Any]:
    data = payload.get("data")
    if not isinstance(data, dict):
        raise RemoteCallFailure("Response is missing the 'data' object.")
    return data


def _nodes(data: Dict[str, Any], connection: str) -> List[Dict[str, Any]]:
    page = data.get(connection)
    edges = page.get("edges") if isinstance(page, dict) else None
    if not isinstance(edges, list):
        raise RemoteCallFailure(f"Response has no '{connection}' connection.")
    return [edge["node"] for edge in edges if isinstance(edge, dict) and "node" in edge]

"""Unit tests for ShopifyClient."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from modules.shops.client import (
    ORDER_NAME_QUERY,
    ORDERS_QUERY,
    PRODUCTS_QUERY,
    SHOP_QUERY,
    ShopifyClient,
)
from shared.infrastructure.remote import RemoteCallFailure

pytestmark = pytest.mark.unit

SHOP = "demo.myshop"
TOKEN = "shpat_abc"
ORDER_ID = "gid://shopify/Order/1001"


@pytest.fixture()
def caller():
    return MagicMock()


@pytest.fixture()
def client(caller):
    return ShopifyClient(caller, api_version="2024-01")


class TestEndpoint:
    def test_endpoint_per_shop(self, client):
        assert client.endpoint(SHOP) == "https://demo.myshop/admin/api/2024-01/graphql.json"

    def test_from_settings_uses_configured_version(self, settings):
        settings.SHOPIFY_API_VERSION = "2025-04"
        client = ShopifyClient.from_settings()
        assert client.endpoint(SHOP).endswith("/admin/api/2025-04/graphql.json")


class TestFetchOrderName:
    def test_returns_name(self, client, caller):
        caller.call.return_value = {"data": {"order": {"id": ORDER_ID, "name": "#1001"}}}

        assert client.fetch_order_name(SHOP, TOKEN, ORDER_ID) == "#1001"

        endpoint, payload = caller.call.call_args.args
        assert endpoint == client.endpoint(SHOP)
        assert payload == {"query": ORDER_NAME_QUERY, "variables": {"id": ORDER_ID}}
        assert caller.call.call_args.kwargs["headers"] == {"X-Shopify-Access-Token": TOKEN}

    def test_unknown_order_returns_none(self, client, caller):
        caller.call.return_value = {"data": {"order": None}}
        assert client.fetch_order_name(SHOP, TOKEN, ORDER_ID) is None

    def test_missing_data_object_raises(self, client, caller):
        caller.call.return_value = {"extensions": {}}
        with pytest.raises(RemoteCallFailure):
            client.fetch_order_name(SHOP, TOKEN, ORDER_ID)

    def test_blank_name_raises(self, client, caller):
        caller.call.return_value = {"data": {"order": {"id": ORDER_ID, "name": ""}}}
        with pytest.raises(RemoteCallFailure):
            client.fetch_order_name(SHOP, TOKEN, ORDER_ID)

    def test_caller_failure_propagates(self, client, caller):
        caller.call.side_effect = RemoteCallFailure("exhausted", attempts=3)
        with pytest.raises(RemoteCallFailure):
            client.fetch_order_name(SHOP, TOKEN, ORDER_ID)


class TestFetchOrders:
    def test_flattens_edges(self, client, caller):
        caller.call.return_value = {
            "data": {
                "orders": {
                    "edges": [
                        {"node": {"id": ORDER_ID, "name": "#1001"}},
                        {"node": {"id": "gid://shopify/Order/1002", "name": "#1002"}},
                    ]
                }
            }
        }

        orders = client.fetch_orders(SHOP, TOKEN)

        assert [o["name"] for o in orders] == ["#1001", "#1002"]
        _, payload = caller.call.call_args.args
        assert payload == {"query": ORDERS_QUERY, "variables": {"first": 50}}

    def test_empty_shop(self, client, caller):
        caller.call.return_value = {"data": {"orders": {"edges": []}}}
        assert client.fetch_orders(SHOP, TOKEN, first=1) == []

    def test_missing_connection_raises(self, client, caller):
        caller.call.return_value = {"data": {"orders": None}}
        with pytest.raises(RemoteCallFailure):
            client.fetch_orders(SHOP, TOKEN)


class TestFetchProducts:
    def test_flattens_edges(self, client, caller):
        caller.call.return_value = {
            "data": {
                "products": {
                    "edges": [{"node": {"id": "gid://shopify/Product/1", "title": "Widget"}}]
                }
            }
        }

        products = client.fetch_products(SHOP, TOKEN)

        assert products == [{"id": "gid://shopify/Product/1", "title": "Widget"}]
        _, payload = caller.call.call_args.args
        assert payload["query"] == PRODUCTS_QUERY


class TestFetchShop:
    def test_returns_shop_object(self, client, caller):
        caller.call.return_value = {
            "data": {"shop": {"id": "gid://shopify/Shop/1", "name": "Demo"}}
        }

        assert client.fetch_shop(SHOP, TOKEN)["name"] == "Demo"
        _, payload = caller.call.call_args.args
        assert payload == {"query": SHOP_QUERY, "variables": {}}

    def test_missing_shop_raises(self, client, caller):
        caller.call.return_value = {"data": {}}
        with pytest.raises(RemoteCallFailure):
            client.fetch_shop(SHOP, TOKEN)


class TestClose:
    def test_close_releases_caller(self, client, caller):
        client.close()
        caller.close.assert_called_once_with()

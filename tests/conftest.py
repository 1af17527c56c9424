from unittest.mock import MagicMock, patch

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

DEMO_SHOP = "demo.myshop"
DEMO_TOKEN = "shpat_0123456789abcdef"


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _clear_cache():
    """Throttle counters live in the cache; start every test from zero."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def installed_shop():
    """A shop with a stored access token."""
    from modules.shops.models import ShopInstallation

    return ShopInstallation.objects.create(
        shop=DEMO_SHOP, access_token=DEMO_TOKEN, scopes="read_orders"
    )


@pytest.fixture()
def shopify_client():
    """Platform client used by the API views; unreachable unless a test says otherwise."""
    from shared.infrastructure.remote import RemoteCallFailure

    client = MagicMock()
    client.fetch_order_name.side_effect = RemoteCallFailure(
        "Remote call failed after 3 attempts: HTTP error! status: 503",
        status_code=503,
        attempts=3,
    )
    with patch("modules.shops.client.ShopifyClient.from_settings", return_value=client):
        yield client

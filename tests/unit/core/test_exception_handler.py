"""Unit tests for the domain exception handler."""

from __future__ import annotations

import pytest
from pydantic import BaseModel, ValidationError
from rest_framework.exceptions import NotFound

from modules.core.exception_handler import domain_exception_handler
from modules.orders.exceptions import InvalidOrderStatus
from modules.shops.exceptions import ShopNotInstalled
from shared.domain.exceptions import InvalidInput, PersistenceFailure, StorageUnavailable
from shared.infrastructure.remote import RemoteCallFailure

pytestmark = pytest.mark.unit


class _Quantity(BaseModel):
    quantity: int


def _pydantic_error() -> ValidationError:
    try:
        _Quantity(quantity="many")
    except ValidationError as exc:
        return exc
    raise AssertionError("validation should have failed")


class TestDomainExceptionHandler:
    @pytest.mark.parametrize(
        ("error", "status_code", "code"),
        [
            (InvalidInput("bad"), 400, "invalid_input"),
            (InvalidOrderStatus("unknown status"), 400, "invalid_input"),
            (ShopNotInstalled("nope"), 403, "not_installed"),
            (PersistenceFailure("rejected"), 500, "persistence_failure"),
            (RemoteCallFailure("exhausted"), 502, "remote_call_failure"),
            (StorageUnavailable("down"), 503, "storage_unavailable"),
        ],
    )
    def test_maps_domain_errors(self, error, status_code, code):
        response = domain_exception_handler(error, {"view": None})

        assert response.status_code == status_code
        assert response.data == {"success": False, "code": code, "detail": str(error)}

    def test_maps_pydantic_validation_error(self):
        response = domain_exception_handler(_pydantic_error(), {"view": None})
        assert response.status_code == 400

    def test_drf_errors_use_default_handler(self):
        response = domain_exception_handler(NotFound(), {"view": None})
        assert response.status_code == 404
        assert "detail" in response.data

    def test_unknown_errors_are_not_handled(self):
        assert domain_exception_handler(RuntimeError("bug"), {"view": None}) is None

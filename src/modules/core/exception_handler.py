"""DRF exception handler for cross-module domain errors.

Module-specific errors (not found, invalid transition) are translated by
each view.  The errors below can surface from any service, so they are
mapped once here:

- ``InvalidInput`` and pydantic ``ValidationError`` -> 400
- ``ShopNotInstalled``    -> 403
- ``PersistenceFailure``  -> 500
- ``RemoteCallFailure``   -> 502
- ``StorageUnavailable``  -> 503
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from modules.shops.exceptions import ShopNotInstalled
from shared.domain.exceptions import InvalidInput, PersistenceFailure, StorageUnavailable
from shared.infrastructure.remote import RemoteCallFailure

logger = structlog.get_logger(__name__)

_STATUS_BY_ERROR = (
    (InvalidInput, status.HTTP_400_BAD_REQUEST, "invalid_input"),
    (PydanticValidationError, status.HTTP_400_BAD_REQUEST, "invalid_input"),
    (ShopNotInstalled, status.HTTP_403_FORBIDDEN, "not_installed"),
    (PersistenceFailure, status.HTTP_500_INTERNAL_SERVER_ERROR, "persistence_failure"),
    (RemoteCallFailure, status.HTTP_502_BAD_GATEWAY, "remote_call_failure"),
    (StorageUnavailable, status.HTTP_503_SERVICE_UNAVAILABLE, "storage_unavailable"),
)


def domain_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    for error_class, status_code, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_class):
            view = context.get("view")
            logger.warning(
                "api.domain_error",
                code=code,
                view=type(view).__name__ if view else None,
                error=str(exc),
            )
            return Response(
                {"success": False, "code": code, "detail": str(exc)},
                status=status_code,
            )
    return exception_handler(exc, context)

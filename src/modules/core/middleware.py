import uuid
from contextvars import ContextVar
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

logger = structlog.get_logger()


class CorrelationIdMiddleware:
    """Middleware that binds request-scoped context into every log line.

    Reads the X-Request-ID header from the incoming request, or generates a
    new UUID4 when absent, and returns it via the X-Request-ID response
    header.  The ``shop`` query parameter, when present, is bound as well so
    tenant activity can be traced without threading it through each call.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = request.META.get("HTTP_X_REQUEST_ID") or str(uuid.uuid4())
        correlation_id_var.set(cid)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=cid)
        shop = request.GET.get("shop")
        if shop:
            structlog.contextvars.bind_contextvars(shop=shop)

        logger.info(
            "request_started",
            method=request.method,
            path=request.path,
        )

        response = self.get_response(request)

        logger.info(
            "request_finished",
            method=request.method,
            path=request.path,
            status_code=response.status_code,
        )

        response["X-Request-ID"] = cid
        return response

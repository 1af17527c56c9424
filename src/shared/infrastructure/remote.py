"""Resilient remote caller.

Executes JSON POST requests against a third-party API with a bounded,
linearly backed-off retry budget.  Every attempt carries a timeout so a
hung endpoint cannot hold a request thread indefinitely.

A call is considered failed (and retried) when:

- the transport raises (connection error, timeout, TLS failure),
- the response status is not 2xx,
- the body is not a JSON object,
- the body carries an application-level ``errors`` envelope.

After the last attempt the failure is raised as ``RemoteCallFailure``
with the last status code and response body attached.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import requests
import structlog

logger = structlog.get_logger(__name__)


class RemoteCallFailure(Exception):
    """The remote API kept failing after the whole retry budget was spent."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        attempts: int = 0,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.attempts = attempts


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry with linear backoff (``attempt * backoff_seconds``)."""

    max_attempts: int = 3
    backoff_seconds: float = 1.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        if self.backoff_seconds < 0:
            raise ValueError("backoff_seconds cannot be negative.")

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait after the 1-based *attempt* failed."""
        return attempt * self.backoff_seconds

    @classmethod
    def from_settings(cls) -> RetryPolicy:
        from django.conf import settings

        return cls(
            max_attempts=settings.REMOTE_CALL_MAX_ATTEMPTS,
            backoff_seconds=settings.REMOTE_CALL_BACKOFF_SECONDS,
        )


class RemoteCaller:
    """Stateless JSON-over-HTTP caller composed with a ``RetryPolicy``.

    ``session`` and ``sleep`` are injectable so tests can drive failures
    without a network or real delays.
    """

    def __init__(
        self,
        policy: Optional[RetryPolicy] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._policy = policy or RetryPolicy()
        self._timeout = timeout
        self._owns_session = session is None
        self._session = session or requests.Session()
        self._sleep = sleep

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    def call(
        self,
        endpoint: str,
        payload: Dict[str, Any],
        headers: Optional[Dict[str, str]] = None,
        max_attempts: Optional[int] = None,
    ) -> Dict[str, Any]:
        """POST *payload* to *endpoint* and return the decoded JSON object.

        Raises:
            RemoteCallFailure: every attempt failed.
        """
        attempts = max_attempts or self._policy.max_attempts
        request_headers = {"Content-Type": "application/json", **(headers or {})}
        log = logger.bind(endpoint=endpoint, max_attempts=attempts)

        attempt = 1
        while True:
            try:
                data = self._attempt(endpoint, payload, request_headers, attempt)
            except RemoteCallFailure as exc:
                log.warning(
                    "remote_call.attempt_failed",
                    attempt=attempt,
                    status_code=exc.status_code,
                    error=str(exc),
                )
                if attempt >= attempts:
                    log.error(
                        "remote_call.exhausted",
                        status_code=exc.status_code,
                        error=str(exc),
                    )
                    raise RemoteCallFailure(
                        f"Remote call to {endpoint} failed after {attempts} attempts: {exc}",
                        status_code=exc.status_code,
                        body=exc.body,
                        attempts=attempts,
                    ) from exc
                self._sleep(self._policy.delay_for(attempt))
                attempt += 1
                continue

            if attempt > 1:
                log.info("remote_call.recovered", attempt=attempt)
            return data

    def close(self) -> None:
        """Release the HTTP session if this caller created it."""
        if self._owns_session:
            self._session.close()

    def _attempt(
        self,
        endpoint: str,
        payload: Dict[str, Any],
        headers: Dict[str, str],
        attempt: int,
    ) -> Dict[str, Any]:
        try:
            response = self._session.post(
                endpoint, json=payload, headers=headers, timeout=self._timeout
            )
        except requests.RequestException as exc:
            raise RemoteCallFailure(
                f"Transport error: {exc}", attempts=attempt
            ) from exc

        if not 200 <= response.status_code < 300:
            raise RemoteCallFailure(
                f"HTTP error! status: {response.status_code}",
                status_code=response.status_code,
                body=response.text,
                attempts=attempt,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise RemoteCallFailure(
                "Response body is not valid JSON.",
                status_code=response.status_code,
                body=response.text,
                attempts=attempt,
            ) from exc

        if not isinstance(data, dict):
            raise RemoteCallFailure(
                "Response body is not a JSON object.",
                status_code=response.status_code,
                body=response.text,
                attempts=attempt,
            )

        if data.get("errors"):
            raise RemoteCallFailure(
                f"Application errors: {data['errors']}",
                status_code=response.status_code,
                body=response.text,
                attempts=attempt,
            )

        return data

"""Order status domain exceptions.

Raised by the Service Layer.  The API layer (Views) catches these and
translates them into appropriate HTTP responses.
"""

from __future__ import annotations

from shared.domain.exceptions import InvalidInput


class OrderStatusNotFound(Exception):
    """No status record exists for the requested order."""


class InvalidOrderStatus(InvalidInput):
    """The order id is missing or the requested status is not a known
    fulfillment status."""

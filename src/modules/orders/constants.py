"""Order fulfillment status constants.

The workflow is permissive: any status may follow any other.  The previous
status is always preserved in the audit history instead of being validated
against a transition graph.
"""

from django.db import models


class FulfillmentStatus(models.TextChoices):
    FRESH = "fresh", "Fresh"
    CONFIRMED = "confirmed", "Confirmed"
    IN_STOCK = "in_stock", "In stock"
    OUT_OF_STOCK = "out_of_stock", "Out of stock"
    DISPATCHED = "dispatched", "Dispatched"
    RETURNED = "returned", "Returned"
    DAMAGED = "damaged", "Damaged"
    DELIVERED = "delivered", "Delivered"
    CANCELED = "canceled", "Canceled"


# "from" value of the first history entry of an order nobody has touched yet.
INITIAL_STATUS = FulfillmentStatus.FRESH

# No further business action is defined for these; transitions out of them
# are still allowed.
TERMINAL_STATES: frozenset[str] = frozenset(
    status.value
    for status in (
        FulfillmentStatus.DELIVERED,
        FulfillmentStatus.RETURNED,
        FulfillmentStatus.DAMAGED,
        FulfillmentStatus.CANCELED,
    )
)

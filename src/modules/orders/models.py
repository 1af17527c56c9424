"""OrderStatusRecord and OrderStatusHistory models.

Business rules implemented:
- One status record per ``order_id``; the id never changes once created.
- Every status change appends exactly one history row; rows are never
  edited or removed.
- History rows are numbered per record (``sequence``), so the audit trail
  keeps its insertion order independent of clock resolution.
- The last history row's ``to_status`` always equals the record's
  ``status``.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel
from modules.orders.constants import INITIAL_STATUS, TERMINAL_STATES, FulfillmentStatus


class OrderStatusRecord(BaseModel):
    """Current fulfillment status of one platform order.

    Created lazily (status ``fresh``) by the first status change and
    mutated by every later one.  ``updated_at`` moves on each mutation.
    """

    order_id: models.CharField = models.CharField(
        max_length=255, unique=True, editable=False
    )
    shop: models.CharField = models.CharField(max_length=255)
    status: models.CharField = models.CharField(
        max_length=20,
        choices=FulfillmentStatus.choices,
        default=INITIAL_STATUS,
    )
    notes: models.TextField = models.TextField(blank=True, default="")

    class Meta:
        db_table = "order_statuses"
        ordering = ["-updated_at"]
        indexes = [
            models.Index(fields=["shop", "status"], name="order_status_shop_idx"),
            models.Index(fields=["status"], name="order_status_status_idx"),
        ]

    # ------------------------------------------------------------------
    # State Machine helpers
    # ------------------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        """Return ``True`` if no further business action is defined."""
        return str(self.status) in TERMINAL_STATES

    def transition_to(self, new_status: str, notes: str = "") -> str:
        """Apply *new_status* in memory and return the previous status."""
        previous_status = self.status
        self.status = new_status
        self.notes = notes
        return previous_status

    def __str__(self) -> str:
        return f"{self.order_id} ({self.status})"


class OrderStatusHistory(BaseModel):
    """Append-only audit trail entry for one status transition.

    ``created_at`` is the transition timestamp.
    """

    record: models.ForeignKey = models.ForeignKey(
        "orders.OrderStatusRecord",
        on_delete=models.CASCADE,
        related_name="history",
    )
    sequence: models.PositiveIntegerField = models.PositiveIntegerField()
    from_status: models.CharField = models.CharField(
        max_length=20, choices=FulfillmentStatus.choices
    )
    to_status: models.CharField = models.CharField(
        max_length=20, choices=FulfillmentStatus.choices
    )
    notes: models.TextField = models.TextField(blank=True, default="")

    class Meta:
        db_table = "order_status_history"
        ordering = ["record", "sequence"]
        constraints = [
            models.UniqueConstraint(
                fields=["record", "sequence"],
                name="order_status_history_sequence_unique",
            ),
        ]

    @property
    def timestamp(self):
        return self.created_at

    def __str__(self) -> str:
        return f"{self.record.order_id} #{self.sequence}: {self.from_status} -> {self.to_status}"

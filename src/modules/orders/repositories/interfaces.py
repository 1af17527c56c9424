"""Order status repository interface.

Extends ``IRepository[OrderStatusRecord]`` with the one write the state
machine needs: an upsert that runs a caller-supplied mutator against the
record while holding a per-``order_id`` lock, then appends the history
entry the mutator describes.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import OrderStatusRecord


@dataclass(frozen=True)
class TransitionEntry:
    """History entry produced by a mutator, persisted by the repository."""

    from_status: str
    to_status: str
    notes: str = ""


StatusMutator = Callable[["OrderStatusRecord"], TransitionEntry]


class IOrderStatusRepository(IRepository["OrderStatusRecord"]):
    """Repository contract for the OrderStatusRecord aggregate.

    The record and its history rows form one aggregate; ``upsert`` must
    persist both atomically.
    """

    @abstractmethod
    def get_by_order_id(self, order_id: str) -> Optional[OrderStatusRecord]:
        """Retrieve a record with its history prefetched."""

    @abstractmethod
    def upsert(self, order_id: str, shop: str, mutator: StatusMutator) -> OrderStatusRecord:
        """Atomically create-or-lock the record for *order_id*, apply
        *mutator*, save it and append the returned ``TransitionEntry``.

        A record that does not exist yet is handed to the mutator in the
        initial ``fresh`` state.  Concurrent calls for the same
        *order_id* are serialised, so history ``from`` values chain.
        """

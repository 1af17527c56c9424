"""Order status repositories package."""

from modules.orders.repositories.django_repository import OrderStatusDjangoRepository
from modules.orders.repositories.interfaces import IOrderStatusRepository, TransitionEntry

__all__ = ["IOrderStatusRepository", "OrderStatusDjangoRepository", "TransitionEntry"]

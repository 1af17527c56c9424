"""Purchasing repositories package."""

from modules.purchasing.repositories.django_repository import PurchaseOrderDjangoRepository
from modules.purchasing.repositories.interfaces import IPurchaseOrderRepository

__all__ = ["IPurchaseOrderRepository", "PurchaseOrderDjangoRepository"]

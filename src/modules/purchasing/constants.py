from django.db import models


class PurchaseOrderStatus(models.TextChoices):
    ORDERED = "ordered", "Ordered"
    RECEIVED = "received", "Received"
    CANCELLED = "cancelled", "Cancelled"


INITIAL_PURCHASE_ORDER_STATUS = PurchaseOrderStatus.ORDERED

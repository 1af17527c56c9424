"""Shop installation credential.

One row per tenant.  The presence of a row is what "installed" means;
every write path checks it before touching tenant data.
"""

from __future__ import annotations

from django.db import models
from django.utils import timezone

from modules.core.models import BaseModel


class ShopInstallation(BaseModel):
    shop: models.CharField = models.CharField(max_length=255, unique=True)
    access_token: models.CharField = models.CharField(max_length=255)
    scopes: models.TextField = models.TextField(blank=True, default="")
    installed_at: models.DateTimeField = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "shop_installations"
        ordering = ["shop"]

    def __str__(self) -> str:
        return self.shop

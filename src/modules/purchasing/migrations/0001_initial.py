import django.core.validators
import django.db.models.deletion
import uuid6
from django.db import migrations, models

import modules.purchasing.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="PurchaseOrder",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "po_number",
                    models.CharField(
                        default=modules.purchasing.models.generate_po_number,
                        editable=False,
                        max_length=40,
                        unique=True,
                    ),
                ),
                ("shop", models.CharField(max_length=255)),
                ("original_order_id", models.CharField(max_length=255)),
                ("original_order_name", models.CharField(max_length=255)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("ordered", "Ordered"),
                            ("received", "Received"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="ordered",
                        max_length=20,
                    ),
                ),
                ("notes", models.TextField(blank=True, default="")),
            ],
            options={
                "db_table": "purchase_orders",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["shop", "status"], name="purchase_order_shop_idx"),
                    models.Index(
                        fields=["original_order_id"], name="purchase_order_origin_idx"
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="PurchaseOrderItem",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("position", models.PositiveIntegerField()),
                ("product_name", models.CharField(max_length=255)),
                ("sku", models.CharField(blank=True, default="", max_length=100)),
                (
                    "variant_title",
                    models.CharField(blank=True, default="", max_length=255),
                ),
                (
                    "quantity",
                    models.PositiveIntegerField(
                        validators=[django.core.validators.MinValueValidator(1)]
                    ),
                ),
                (
                    "purchase_order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="purchasing.purchaseorder",
                    ),
                ),
            ],
            options={
                "db_table": "purchase_order_items",
                "ordering": ["purchase_order", "position"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(quantity__gte=1),
                        name="purchase_order_items_quantity_positive",
                    ),
                ],
            },
        ),
    ]

import django.db.models.deletion
import uuid6
from django.db import migrations, models

FULFILLMENT_STATUS_CHOICES = [
    ("fresh", "Fresh"),
    ("confirmed", "Confirmed"),
    ("in_stock", "In stock"),
    ("out_of_stock", "Out of stock"),
    ("dispatched", "Dispatched"),
    ("returned", "Returned"),
    ("damaged", "Damaged"),
    ("delivered", "Delivered"),
    ("canceled", "Canceled"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="OrderStatusRecord",
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
                    "order_id",
                    models.CharField(editable=False, max_length=255, unique=True),
                ),
                ("shop", models.CharField(max_length=255)),
                (
                    "status",
                    models.CharField(
                        choices=FULFILLMENT_STATUS_CHOICES,
                        default="fresh",
                        max_length=20,
                    ),
                ),
                ("notes", models.TextField(blank=True, default="")),
            ],
            options={
                "db_table": "order_statuses",
                "ordering": ["-updated_at"],
                "indexes": [
                    models.Index(fields=["shop", "status"], name="order_status_shop_idx"),
                    models.Index(fields=["status"], name="order_status_status_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderStatusHistory",
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
                ("sequence", models.PositiveIntegerField()),
                (
                    "from_status",
                    models.CharField(choices=FULFILLMENT_STATUS_CHOICES, max_length=20),
                ),
                (
                    "to_status",
                    models.CharField(choices=FULFILLMENT_STATUS_CHOICES, max_length=20),
                ),
                ("notes", models.TextField(blank=True, default="")),
                (
                    "record",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="history",
                        to="orders.orderstatusrecord",
                    ),
                ),
            ],
            options={
                "db_table": "order_status_history",
                "ordering": ["record", "sequence"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("record", "sequence"),
                        name="order_status_history_sequence_unique",
                    ),
                ],
            },
        ),
    ]

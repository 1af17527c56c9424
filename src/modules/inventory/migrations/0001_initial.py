import uuid6
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="InventoryEntry",
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
                ("sku", models.CharField(max_length=100, unique=True)),
                ("initial_inventory", models.IntegerField()),
                ("reorder_point", models.PositiveIntegerField(default=5)),
            ],
            options={
                "db_table": "inventory_entries",
                "ordering": ["sku"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(initial_inventory__gte=0),
                        name="inventory_entries_non_negative",
                    ),
                ],
            },
        ),
    ]

import uuid

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("accounts", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ProcurementOrder",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("order_id", models.CharField(max_length=50)),
                ("asset_name", models.CharField(max_length=255)),
                ("quantity", models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ("supplier", models.CharField(max_length=255)),
                ("order_date", models.DateField(default=django.utils.timezone.localdate)),
                ("estimated_delivery", models.DateField()),
                ("current_location", models.CharField(max_length=255)),
                ("status", models.CharField(choices=[("Ordered", "Ordered"), ("Processing", "Processing"), ("Shipped", "Shipped"), ("InTransit", "In Transit"), ("OutForDelivery", "Out for Delivery"), ("Delivered", "Delivered")], db_index=True, default="Ordered", max_length=20)),
                ("tracking_history", models.JSONField(blank=True, default=list)),
                ("notes", models.TextField(blank=True)),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="procurement_orders", to=settings.AUTH_USER_MODEL)),
                ("org", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="%(app_label)s_%(class)s_set", to="accounts.organization")),
            ],
            options={
                "ordering": ["-created_at"],
                "constraints": [models.UniqueConstraint(fields=("org", "order_id"), name="unique_order_id_per_org")],
            },
        ),
    ]

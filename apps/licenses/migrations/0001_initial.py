import uuid

import django.core.validators
import django.db.models.deletion
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
            name="License",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=255)),
                ("vendor", models.CharField(blank=True, max_length=255)),
                ("license_key", models.CharField(blank=True, max_length=500)),
                ("seats_total", models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ("seats_assigned", models.PositiveIntegerField(default=0)),
                ("renewal_date", models.DateField()),
                ("cost", models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(0)])),
                ("status", models.CharField(choices=[("Active", "Active"), ("ExpiringSoon", "Expiring Soon"), ("Expired", "Expired")], db_index=True, default="Active", max_length=20)),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL)),
                ("org", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="%(app_label)s_%(class)s_set", to="accounts.organization")),
            ],
            options={
                "ordering": ["renewal_date"],
                "indexes": [models.Index(fields=["org", "renewal_date"], name="license_org_renewal_idx")],
            },
        ),
    ]

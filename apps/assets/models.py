from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from apps.utils.models import OrgScopedModel


class AssetStatus(models.TextChoices):
    AVAILABLE = "Available", "Available"
    ASSIGNED = "Assigned", "Assigned"
    MAINTENANCE = "Maintenance", "Maintenance"
    RETIRED = "Retired", "Retired"


class Asset(OrgScopedModel):
    """
    A tracked piece of hardware.

    Status follows the assignee: having one means Assigned, losing it while
    Assigned means Available again.
    """
    asset_tag = models.CharField(max_length=100)
    name = models.CharField(max_length=255, blank=True)
    category = models.ForeignKey(
        "catalog.Category", on_delete=models.SET_NULL, null=True, blank=True, related_name="assets"
    )
    status = models.CharField(
        max_length=20, choices=AssetStatus.choices, default=AssetStatus.AVAILABLE, db_index=True
    )
    manufacturer = models.CharField(max_length=120, blank=True)
    model = models.CharField(max_length=120, blank=True)
    serial_number = models.CharField(max_length=120, blank=True)

    purchase_date = models.DateField(null=True, blank=True)
    warranty_expiry = models.DateField(null=True, blank=True)
    end_of_life_date = models.DateField(null=True, blank=True)

    location = models.ForeignKey(
        "catalog.Location", on_delete=models.SET_NULL, null=True, blank=True, related_name="assets"
    )
    assigned_to = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="assigned_assets"
    )
    assigned_at = models.DateTimeField(null=True, blank=True)

    cost = models.DecimalField(max_digits=12, decimal_places=2, default=0, validators=[MinValueValidator(0)])
    notes = models.TextField(blank=True)
    image = models.ImageField(upload_to="assets/", null=True, blank=True)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["org", "asset_tag"], name="unique_asset_tag_per_org"),
            models.UniqueConstraint(
                fields=["org", "serial_number"],
                condition=~models.Q(serial_number=""),
                name="unique_asset_serial_per_org",
            ),
        ]
        indexes = [
            models.Index(fields=["org", "status"], name="asset_org_status_idx"),
        ]

    def __str__(self):
        return f"{self.asset_tag} - {self.name}"

    def save(self, *args, **kwargs):
        if not self.name:
            derived = " ".join(p for p in (self.manufacturer, self.model) if p)
            self.name = derived or self.asset_tag or "Asset"

        if self.assigned_to_id:
            self.status = AssetStatus.ASSIGNED
            if self.assigned_at is None:
                self.assigned_at = timezone.now()
        else:
            if self.status == AssetStatus.ASSIGNED:
                self.status = AssetStatus.AVAILABLE
            self.assigned_at = None
        super().save(*args, **kwargs)


class AssetAssignmentHistory(models.Model):
    """
    Append-only log of assignee changes.
    """
    org = models.ForeignKey("accounts.Organization", on_delete=models.CASCADE, related_name="+")
    asset = models.ForeignKey(Asset, on_delete=models.CASCADE, related_name="history")
    from_user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    to_user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    changed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, related_name="+"
    )
    changed_at = models.DateTimeField(default=timezone.now)
    note = models.CharField(max_length=255, blank=True)

    class Meta:
        ordering = ["-changed_at"]
        verbose_name_plural = "Asset assignment history"

    def __str__(self):
        return f"{self.asset_id}: {self.from_user_id} -> {self.to_user_id}"

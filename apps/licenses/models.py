import datetime

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from apps.utils.models import OrgScopedModel


class LicenseStatus(models.TextChoices):
    ACTIVE = "Active", "Active"
    EXPIRING_SOON = "ExpiringSoon", "Expiring Soon"
    EXPIRED = "Expired", "Expired"


def compute_license_status(renewal_date, today=None):
    """
    Past renewal -> Expired, inside the expiry window -> ExpiringSoon, else Active.
    """
    today = today or timezone.localdate()
    window = datetime.timedelta(days=settings.LICENSE_EXPIRY_WINDOW_DAYS)
    if renewal_date < today:
        return LicenseStatus.EXPIRED
    if renewal_date <= today + window:
        return LicenseStatus.EXPIRING_SOON
    return LicenseStatus.ACTIVE


class License(OrgScopedModel):
    name = models.CharField(max_length=255)
    vendor = models.CharField(max_length=255, blank=True)
    license_key = models.CharField(max_length=500, blank=True)
    seats_total = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    seats_assigned = models.PositiveIntegerField(default=0)
    renewal_date = models.DateField()
    cost = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(0)])
    status = models.CharField(
        max_length=20, choices=LicenseStatus.choices, default=LicenseStatus.ACTIVE, db_index=True
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )

    class Meta:
        ordering = ["renewal_date"]
        indexes = [
            models.Index(fields=["org", "renewal_date"], name="license_org_renewal_idx"),
        ]

    def __str__(self):
        return self.name

    @property
    def seats_available(self):
        return max(self.seats_total - self.seats_assigned, 0)

    def clean(self):
        if self.seats_assigned > self.seats_total:
            raise ValidationError({"seats_assigned": "Assigned seats cannot exceed total seats"})

    def save(self, *args, **kwargs):
        # Status is always derived, never trusted from input
        self.status = compute_license_status(self.renewal_date)
        super().save(*args, **kwargs)

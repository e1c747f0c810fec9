from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from apps.utils.models import OrgScopedModel


class Category(OrgScopedModel):
    name = models.CharField(max_length=120)
    description = models.TextField(blank=True)
    icon_key = models.CharField(max_length=50, default="Package")
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )

    class Meta:
        verbose_name_plural = "Categories"
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(fields=["org", "name"], name="unique_category_name_per_org"),
        ]

    def __str__(self):
        return self.name


class LocationType(models.TextChoices):
    OFFICE = "Office", "Office"
    WAREHOUSE = "Warehouse", "Warehouse"


class LocationStatus(models.TextChoices):
    ACTIVE = "Active", "Active"
    INACTIVE = "Inactive", "Inactive"


class Location(OrgScopedModel):
    """
    Office or warehouse where assets, stock and employees live.
    """
    name = models.CharField(max_length=150)
    type = models.CharField(max_length=20, choices=LocationType.choices, default=LocationType.OFFICE)
    address = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    country = models.CharField(max_length=100, blank=True)
    capacity = models.PositiveIntegerField(default=0, validators=[MinValueValidator(0)])
    status = models.CharField(max_length=20, choices=LocationStatus.choices, default=LocationStatus.ACTIVE)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )

    class Meta:
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(fields=["org", "name"], name="unique_location_name_per_org"),
        ]

    def __str__(self):
        return self.name

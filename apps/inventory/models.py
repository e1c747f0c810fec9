from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from apps.utils.models import OrgScopedModel


class InventoryItem(OrgScopedModel):
    """
    Consumable stock (cables, toner, peripherals) counted by quantity
    rather than tracked one by one like assets.
    """
    name = models.CharField(max_length=255)
    sku = models.CharField(max_length=100, blank=True)
    category = models.ForeignKey(
        "catalog.Category", on_delete=models.SET_NULL, null=True, blank=True, related_name="inventory_items"
    )
    location = models.ForeignKey(
        "catalog.Location", on_delete=models.SET_NULL, null=True, blank=True, related_name="inventory_items"
    )
    quantity_on_hand = models.PositiveIntegerField(default=0)
    quantity_minimum = models.PositiveIntegerField(default=0)
    cost_per_item = models.DecimalField(
        max_digits=12, decimal_places=2, default=0, validators=[MinValueValidator(0)]
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["org", "name"], name="inventory_org_name_idx"),
        ]

    def __str__(self):
        return self.name

    @property
    def total_value(self) -> Decimal:
        return Decimal(self.quantity_on_hand) * (self.cost_per_item or Decimal("0"))

    @property
    def is_low_stock(self) -> bool:
        return self.quantity_on_hand <= self.quantity_minimum

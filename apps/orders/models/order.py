from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from apps.utils.models import OrgScopedModel

__all__ = ["OrderStatus", "ProcurementOrder"]


class OrderStatus(models.TextChoices):
    ORDERED = "Ordered", "Ordered"
    PROCESSING = "Processing", "Processing"
    SHIPPED = "Shipped", "Shipped"
    IN_TRANSIT = "InTransit", "In Transit"
    OUT_FOR_DELIVERY = "OutForDelivery", "Out for Delivery"
    DELIVERED = "Delivered", "Delivered"


class ProcurementOrder(OrgScopedModel):
    """
    An incoming purchase from a supplier, tracked stage by stage until delivery.

    `tracking_history` is an append-only list of {"stage", "date"} entries;
    its last stage always equals `status`.
    """
    order_id = models.CharField(max_length=50)
    asset_name = models.CharField(max_length=255)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    supplier = models.CharField(max_length=255)
    order_date = models.DateField(default=timezone.localdate)
    estimated_delivery = models.DateField()
    current_location = models.CharField(max_length=255)
    status = models.CharField(
        max_length=20, choices=OrderStatus.choices, default=OrderStatus.ORDERED, db_index=True
    )
    tracking_history = models.JSONField(default=list, blank=True)
    notes = models.TextField(blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="procurement_orders"
    )

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["org", "order_id"], name="unique_order_id_per_org"),
        ]

    def __str__(self):
        return f"{self.order_id} [{self.status}]"

    def append_tracking(self, stage, when=None):
        # Reassign instead of mutating in place so JSONField change detection stays reliable
        entry = {"stage": stage, "date": (when or timezone.now()).isoformat()}
        self.tracking_history = [*(self.tracking_history or []), entry]
        return entry

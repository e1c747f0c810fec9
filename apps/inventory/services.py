import logging

from django.db import transaction
from django.db.models import F

from apps.utils.exceptions import BusinessLogicException
from .models import InventoryItem

logger = logging.getLogger(__name__)


class InventoryService:
    """
    Stock quantity changes outside plain edits go through here.
    """

    @staticmethod
    def low_stock(queryset):
        return queryset.filter(quantity_on_hand__lte=F("quantity_minimum"))

    @staticmethod
    @transaction.atomic
    def adjust_stock(item: InventoryItem, delta: int, actor, reason: str = "") -> InventoryItem:
        """
        Adds (or removes, for a negative delta) units under a row lock.
        """
        locked = InventoryItem.objects.select_for_update().get(pk=item.pk)
        if locked.quantity_on_hand + delta < 0:
            raise BusinessLogicException(
                f"Insufficient stock for {locked.name}. "
                f"Requested: {-delta}, Available: {locked.quantity_on_hand}",
                code="insufficient_stock",
            )

        locked.quantity_on_hand = F("quantity_on_hand") + delta
        locked.save(update_fields=["quantity_on_hand", "updated_at"])
        locked.refresh_from_db()

        logger.info(
            "Stock adjusted for %s by %s (%s)", locked.name, delta, reason or "manual",
            extra={"user_id": actor.pk, "org_id": locked.org_id},
        )
        return locked

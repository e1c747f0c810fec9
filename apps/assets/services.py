import logging

from django.db import transaction
from django.utils import timezone

from apps.notifications.models import NotificationType
from apps.notifications.services import notify_user
from .models import AssetAssignmentHistory

logger = logging.getLogger(__name__)


class AssetService:

    @staticmethod
    @transaction.atomic
    def save_asset(serializer, actor, **extra):
        """
        Saves a create/update serializer and records a history row when the
        assignee changes. `assigned_at` is re-stamped on every new assignee.
        """
        instance = serializer.instance
        previous_id = instance.assigned_to_id if instance is not None else None

        if "assigned_to" in serializer.validated_data:
            new_assignee = serializer.validated_data["assigned_to"]
            new_id = new_assignee.pk if new_assignee else None
            if new_id != previous_id:
                extra["assigned_at"] = timezone.now() if new_assignee else None

        asset = serializer.save(**extra)

        if asset.assigned_to_id != previous_id:
            AssetService.record_assignment(asset, previous_id, actor)
        return asset

    @staticmethod
    def record_assignment(asset, previous_user_id, actor, note=""):
        AssetAssignmentHistory.objects.create(
            org_id=asset.org_id,
            asset=asset,
            from_user_id=previous_user_id,
            to_user=asset.assigned_to,
            changed_by=actor,
            note=note,
        )
        logger.info(
            "Asset %s reassigned %s -> %s",
            asset.asset_tag, previous_user_id, asset.assigned_to_id,
            extra={"asset_id": asset.id, "user_id": actor.pk},
        )

        if asset.assigned_to is not None:
            notify_user(
                asset.assigned_to,
                "Asset assigned",
                f"{asset.name} ({asset.asset_tag}) has been assigned to you",
                type=NotificationType.ASSET_ASSIGNED,
                data={"asset_id": str(asset.id), "asset_tag": asset.asset_tag},
            )

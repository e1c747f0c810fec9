import logging
from collections import defaultdict

from django.db import transaction

from apps.accounts.models import Role, UserStatus
from apps.notifications.models import NotificationType
from apps.notifications.services import notify_users
from .models import License, LicenseStatus, compute_license_status

logger = logging.getLogger(__name__)


class LicenseService:

    @staticmethod
    def expiring(queryset):
        return queryset.filter(status__in=[LicenseStatus.EXPIRING_SOON, LicenseStatus.EXPIRED])

    @staticmethod
    @transaction.atomic
    def refresh_statuses(today=None) -> dict:
        """
        Recomputes every license status and notifies each org's admins about
        licenses that moved into ExpiringSoon or Expired.
        """
        changed = defaultdict(list)
        updated = 0

        for lic in License.objects.select_for_update().select_related("org"):
            new_status = compute_license_status(lic.renewal_date, today)
            if new_status == lic.status:
                continue
            License.objects.filter(pk=lic.pk).update(status=new_status)
            updated += 1
            if new_status in (LicenseStatus.EXPIRING_SOON, LicenseStatus.EXPIRED):
                changed[lic.org].append((lic, new_status))

        for org, items in changed.items():
            admins = org.users.filter(role=Role.ADMIN, status=UserStatus.ACTIVE)
            for lic, new_status in items:
                label = LicenseStatus(new_status).label.lower()
                notify_users(
                    admins,
                    f"License {label}",
                    f"{lic.name} ({lic.vendor or 'unknown vendor'}) renews on {lic.renewal_date.isoformat()}",
                    type=NotificationType.LICENSE_EXPIRY,
                    data={"license_id": str(lic.id), "status": new_status},
                )

        logger.info("License status refresh: %s updated, %s orgs notified", updated, len(changed))
        return {"updated": updated, "orgs_notified": len(changed)}

import logging
from celery import shared_task

from .services import LicenseService

logger = logging.getLogger(__name__)


@shared_task
def refresh_license_statuses():
    """
    Daily beat job. Status is otherwise only recomputed when a license is saved.
    """
    result = LicenseService.refresh_statuses()
    return f"Updated {result['updated']} licenses, notified {result['orgs_notified']} orgs"

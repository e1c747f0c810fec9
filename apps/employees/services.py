import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from apps.accounts.models import Role
from apps.assets.services import AssetService
from apps.utils.utils import generate_temp_password

logger = logging.getLogger(__name__)
User = get_user_model()


class EmployeeService:

    @staticmethod
    @transaction.atomic
    def create_employee(org, validated_data: dict, actor):
        """
        Creates an EMPLOYEE account with a one-off password the admin hands over.
        """
        temp_password = generate_temp_password()
        user = User.objects.create_user(
            password=temp_password,
            org=org,
            role=Role.EMPLOYEE,
            **validated_data,
        )
        logger.info(
            "Employee account created", extra={"user_id": actor.pk, "org_id": org.pk}
        )
        return user, temp_password

    @staticmethod
    @transaction.atomic
    def offboard(employee, actor):
        """
        Returns every asset held by the employee before the account is deleted.
        """
        for asset in employee.assigned_assets.select_for_update():
            previous_id = asset.assigned_to_id
            asset.assigned_to = None
            asset.updated_by = actor
            asset.save()
            AssetService.record_assignment(asset, previous_id, actor, note="Employee offboarded")
        employee.delete()

from django.contrib.auth import get_user_model
from django.db.models import Count, Q
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.models import Role
from apps.accounts.permissions import HasOrganization, IsAdmin
from apps.assets.models import AssetStatus
from apps.utils.views import OrgScopedModelViewSet, CsvExportMixin
from .serializers import EmployeeSerializer
from .services import EmployeeService

User = get_user_model()


class EmployeeViewSet(CsvExportMixin, OrgScopedModelViewSet):
    """
    Admin-only management of the org's employee accounts.
    """
    queryset = (
        User.objects.filter(role=Role.EMPLOYEE)
        .select_related("location")
        .annotate(assigned_asset_count=Count("assigned_assets", filter=Q(assigned_assets__status=AssetStatus.ASSIGNED)))
        .order_by("first_name", "last_name")
    )
    serializer_class = EmployeeSerializer
    permission_classes = [IsAuthenticated, HasOrganization, IsAdmin]
    filterset_fields = ["status"]
    search_fields = ["first_name", "last_name", "email", "department"]
    entity_label = "Employee"

    export_filename = "employees"
    export_columns = (
        "first_name", "last_name", "email", "phone", "department", "location", "assigned_assets", "status",
    )

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user, temp_password = EmployeeService.create_employee(
            request.user.org, serializer.validated_data, request.user
        )
        user = self.get_queryset().get(pk=user.pk)
        return Response(
            {"data": self.get_serializer(user).data, "temp_password": temp_password},
            status=status.HTTP_201_CREATED,
        )

    def perform_destroy(self, instance):
        EmployeeService.offboard(instance, self.request.user)

    def get_export_rows(self, queryset):
        for employee in queryset:
            yield {
                "first_name": employee.first_name,
                "last_name": employee.last_name,
                "email": employee.email,
                "phone": employee.phone,
                "department": employee.department,
                "location": employee.location.name if employee.location else "",
                "assigned_assets": employee.assigned_asset_count,
                "status": employee.status,
            }

# apps/reports/views.py
from django.utils import timezone
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.permissions import HasOrganization, IsAdmin
from apps.assets.serializers import AssetSerializer
from apps.employees.serializers import EmployeeSerializer
from apps.inventory.serializers import InventoryItemSerializer
from apps.licenses.serializers import LicenseSerializer
from apps.orders.serializers import ProcurementOrderSerializer
from . import services

REPORTS = {
    "assets": (services.asset_report, AssetSerializer),
    "licenses": (services.license_report, LicenseSerializer),
    "inventory": (services.inventory_report, InventoryItemSerializer),
    "employees": (services.employee_report, EmployeeSerializer),
    "tracking": (services.tracking_report, ProcurementOrderSerializer),
}


class ReportView(APIView):
    """
    GET /api/reports/<assets|licenses|inventory|employees|tracking>/
    """
    permission_classes = [IsAuthenticated, HasOrganization, IsAdmin]

    def get(self, request, report):
        if report not in REPORTS:
            raise NotFound("Report not found")

        build, serializer_class = REPORTS[report]
        summary, rows = build(request.user.org)

        return Response({
            "report_id": request.query_params.get("report_id") or f"{report}-master",
            "generated_at": timezone.now(),
            "summary": summary,
            "data": serializer_class(rows, many=True, context={"request": request}).data,
        })

from rest_framework.decorators import action

from apps.utils.views import OrgScopedModelViewSet, CsvExportMixin
from .models import License
from .serializers import LicenseSerializer
from .services import LicenseService


class LicenseViewSet(CsvExportMixin, OrgScopedModelViewSet):
    queryset = License.objects.all()
    serializer_class = LicenseSerializer
    filterset_fields = ["status"]
    search_fields = ["name", "vendor", "license_key"]
    entity_label = "License"

    export_filename = "licenses"
    export_columns = ("name", "vendor", "seats_total", "seats_assigned", "renewal_date", "cost", "status")

    @action(detail=False, methods=["get"])
    def expiring(self, request):
        queryset = LicenseService.expiring(self.filter_queryset(self.get_queryset()))
        page = self.paginate_queryset(queryset)
        serializer = self.get_serializer(page, many=True)
        return self.get_paginated_response(serializer.data)

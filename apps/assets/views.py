from rest_framework.decorators import action
from rest_framework.response import Response

from apps.utils.views import OrgScopedModelViewSet, CsvExportMixin
from .models import Asset
from .serializers import AssetSerializer, AssetAssignmentHistorySerializer
from .services import AssetService


class AssetViewSet(CsvExportMixin, OrgScopedModelViewSet):
    """
    CRUD over the org's assets.
    GET /api/assets/mine/ lists what is assigned to the caller.
    """
    queryset = Asset.objects.select_related("category", "location", "assigned_to")
    serializer_class = AssetSerializer
    filterset_fields = ["status", "category", "location", "assigned_to"]
    search_fields = ["name", "asset_tag", "manufacturer", "model", "serial_number"]
    entity_label = "Asset"

    export_filename = "assets"
    export_columns = (
        "asset_tag", "name", "category", "status", "manufacturer", "model", "serial_number",
        "location", "assigned_to", "purchase_date", "warranty_expiry", "cost",
    )

    def perform_create(self, serializer):
        user = self.request.user
        AssetService.save_asset(serializer, user, org=user.org, created_by=user, updated_by=user)

    def perform_update(self, serializer):
        AssetService.save_asset(serializer, self.request.user, updated_by=self.request.user)

    @action(detail=False, methods=["get"])
    def mine(self, request):
        queryset = self.filter_queryset(self.get_queryset().filter(assigned_to=request.user))
        page = self.paginate_queryset(queryset)
        serializer = self.get_serializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    @action(detail=True, methods=["get"])
    def history(self, request, pk=None):
        asset = self.get_object()
        entries = asset.history.select_related("from_user", "to_user", "changed_by").order_by("-changed_at", "-id")
        return Response(AssetAssignmentHistorySerializer(entries, many=True).data)

from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.permissions import HasOrganization, IsAdmin
from apps.utils.views import OrgScopedModelViewSet, CsvExportMixin
from .models import InventoryItem
from .serializers import InventoryItemSerializer, StockAdjustmentSerializer
from .services import InventoryService


class InventoryItemViewSet(CsvExportMixin, OrgScopedModelViewSet):
    queryset = InventoryItem.objects.select_related("category", "location")
    serializer_class = InventoryItemSerializer
    filterset_fields = ["location", "category"]
    search_fields = ["name", "sku"]
    entity_label = "Inventory item"

    export_filename = "inventory"
    export_columns = (
        "name", "sku", "location", "quantity_on_hand", "quantity_minimum", "cost_per_item", "total_value",
    )

    @action(detail=False, methods=["get"], url_path="low-stock")
    def low_stock(self, request):
        stocks = InventoryService.low_stock(self.filter_queryset(self.get_queryset()))
        page = self.paginate_queryset(stocks)
        serializer = self.get_serializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    @action(
        detail=True,
        methods=["post"],
        permission_classes=[IsAuthenticated, HasOrganization, IsAdmin],
    )
    def adjust(self, request, pk=None):
        """
        Manual stock correction: {"delta": -3, "reason": "issued to helpdesk"}
        """
        serializer = StockAdjustmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = InventoryService.adjust_stock(
            self.get_object(),
            serializer.validated_data["delta"],
            request.user,
            serializer.validated_data["reason"],
        )
        return Response(self.get_serializer(item).data)

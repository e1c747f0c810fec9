from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.permissions import HasOrganization, IsAdmin, IsAdminOrReadOnly
from apps.utils.csv_export import csv_response
from .serializers import ProcurementOrderSerializer, OrderStatusSerializer
from .services import OrderService


class OrderViewSet(viewsets.GenericViewSet):
    """
    Procurement orders. Storage goes through the configured order repository,
    so this is a plain GenericViewSet rather than a ModelViewSet.
    """
    serializer_class = ProcurementOrderSerializer
    permission_classes = [IsAuthenticated, HasOrganization, IsAdminOrReadOnly]
    export_columns = (
        "order_id", "asset_name", "quantity", "supplier", "order_date",
        "estimated_delivery", "current_location", "status",
    )

    def get_service(self):
        return OrderService()

    def _filtered_orders(self, request):
        return self.get_service().list_orders(
            request.user.org,
            search=request.query_params.get("search"),
            status=request.query_params.get("status"),
        )

    def list(self, request):
        page = self.paginate_queryset(self._filtered_orders(request))
        serializer = self.get_serializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def create(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = self.get_service().create_order(request.user.org, request.user, serializer.validated_data)
        return Response(self.get_serializer(order).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        order = self.get_service().get_order(request.user.org, pk)
        return Response(self.get_serializer(order).data)

    def update(self, request, pk=None):
        service = self.get_service()
        order = service.get_order(request.user.org, pk)
        serializer = self.get_serializer(order, data=request.data)
        serializer.is_valid(raise_exception=True)
        order = service.update_order(request.user.org, pk, request.user, serializer.validated_data)
        return Response(self.get_serializer(order).data)

    def destroy(self, request, pk=None):
        self.get_service().delete_order(request.user.org, pk)
        return Response({"message": "Order deleted successfully"})

    @action(detail=True, methods=["patch"], url_path="status")
    def set_status(self, request, pk=None):
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = self.get_service().update_status(
            request.user.org, pk, serializer.validated_data["status"], request.user
        )
        return Response(self.get_serializer(order).data)

    @action(
        detail=False,
        methods=["get"],
        url_path="export/download",
        permission_classes=[IsAuthenticated, HasOrganization, IsAdmin],
    )
    def export(self, request):
        return csv_response("orders-export", self.export_columns, self._filtered_orders(request))

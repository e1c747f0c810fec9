from django.db import transaction
from django.http import Http404
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.permissions import HasOrganization, IsAdminOrReadOnly
from .csv_export import csv_response


class RootView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        return Response({"ok": True, "app": "ITraX API"})


class OrgScopedModelViewSet(viewsets.ModelViewSet):
    """
    ModelViewSet restricted to the caller's organization.

    Reads are open to every member, writes need ADMIN. Objects that live in
    another org are reported as missing. Subclasses set `entity_label` for
    not-found and delete messages.
    """
    permission_classes = [IsAuthenticated, HasOrganization, IsAdminOrReadOnly]
    entity_label = "Record"

    def get_queryset(self):
        return super().get_queryset().filter(org=self.request.user.org)

    def get_object(self):
        try:
            return super().get_object()
        except Http404:
            raise NotFound(f"{self.entity_label} not found")

    def _model_has_field(self, name):
        model = self.get_queryset().model
        return any(f.name == name for f in model._meta.get_fields())

    def perform_create(self, serializer):
        extra = {"org": self.request.user.org}
        if self._model_has_field("created_by"):
            extra["created_by"] = self.request.user
        with transaction.atomic():
            serializer.save(**extra)

    def perform_update(self, serializer):
        extra = {}
        if self._model_has_field("updated_by"):
            extra["updated_by"] = self.request.user
        with transaction.atomic():
            serializer.save(**extra)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        self.perform_destroy(instance)
        return Response({"message": f"{self.entity_label} deleted successfully"})


class CsvExportMixin:
    """
    Adds `GET <resource>/export/download/` honouring the list's search and filters.
    """
    export_filename = None
    export_columns = ()

    def get_export_rows(self, queryset):
        return queryset

    @action(detail=False, methods=["get"], url_path="export/download")
    def export(self, request):
        queryset = self.filter_queryset(self.get_queryset())
        return csv_response(self.export_filename, self.export_columns, self.get_export_rows(queryset))

from django.db.models import Count

from apps.utils.views import OrgScopedModelViewSet
from .models import Category, Location
from .serializers import CategorySerializer, LocationSerializer


class CategoryViewSet(OrgScopedModelViewSet):
    queryset = Category.objects.annotate(asset_count=Count("assets"))
    serializer_class = CategorySerializer
    search_fields = ["name", "description"]
    entity_label = "Category"


class LocationViewSet(OrgScopedModelViewSet):
    queryset = Location.objects.all()
    serializer_class = LocationSerializer
    filterset_fields = ["status", "type"]
    search_fields = ["name", "address", "city", "state"]
    entity_label = "Location"

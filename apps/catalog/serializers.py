from rest_framework import serializers

from apps.utils.serializers import OrgScopedSerializer
from .models import Category, Location


class CategorySerializer(OrgScopedSerializer):
    asset_count = serializers.SerializerMethodField()
    unique_in_org = {"name": "Category already exists"}

    class Meta:
        model = Category
        fields = ["id", "name", "description", "icon_key", "asset_count", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]

    def get_asset_count(self, obj):
        if hasattr(obj, "asset_count"):
            return obj.asset_count
        return obj.assets.count()


class LocationSerializer(OrgScopedSerializer):
    unique_in_org = {"name": "Location already exists"}

    class Meta:
        model = Location
        fields = [
            "id", "name", "type", "address", "city", "state", "country",
            "capacity", "status", "created_at", "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

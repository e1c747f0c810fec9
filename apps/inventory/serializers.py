from rest_framework import serializers

from apps.utils.serializers import OrgScopedSerializer
from .models import InventoryItem


class InventoryItemSerializer(OrgScopedSerializer):
    category_name = serializers.CharField(source="category.name", read_only=True, default=None)
    location_name = serializers.CharField(source="location.name", read_only=True, default=None)
    total_value = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)
    is_low_stock = serializers.BooleanField(read_only=True)

    org_scoped_fields = ("category", "location")

    class Meta:
        model = InventoryItem
        fields = [
            "id", "name", "sku", "category", "category_name", "location", "location_name",
            "quantity_on_hand", "quantity_minimum", "cost_per_item",
            "total_value", "is_low_stock", "created_at", "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]


class StockAdjustmentSerializer(serializers.Serializer):
    delta = serializers.IntegerField()
    reason = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")

    def validate_delta(self, value):
        if value == 0:
            raise serializers.ValidationError("Delta must not be zero.")
        return value

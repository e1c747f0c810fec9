from rest_framework import serializers

from .models import OrderStatus, ProcurementOrder


class TrackingEntrySerializer(serializers.Serializer):
    stage = serializers.CharField()
    date = serializers.CharField()


class ProcurementOrderSerializer(serializers.ModelSerializer):
    """
    Works for both stores: in-memory orders are unsaved model instances.
    """
    order_id = serializers.CharField(max_length=50, required=False, allow_blank=True)
    quantity = serializers.IntegerField(min_value=1)
    status = serializers.ChoiceField(choices=OrderStatus.choices, required=False)
    tracking_history = TrackingEntrySerializer(many=True, read_only=True)
    created_by_email = serializers.EmailField(source="created_by.email", read_only=True, default=None)

    class Meta:
        model = ProcurementOrder
        fields = [
            "id", "order_id", "asset_name", "quantity", "supplier", "order_date",
            "estimated_delivery", "current_location", "status", "tracking_history",
            "notes", "created_by", "created_by_email", "created_at", "updated_at",
        ]
        read_only_fields = ["id", "tracking_history", "created_by", "created_at", "updated_at"]
        extra_kwargs = {
            "order_date": {"required": False},
            "notes": {"required": False},
        }

    def validate_asset_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Asset name is required")
        return value.strip()

    def validate_supplier(self, value):
        if not value.strip():
            raise serializers.ValidationError("Supplier is required")
        return value.strip()

    def validate_current_location(self, value):
        if not value.strip():
            raise serializers.ValidationError("Current location is required")
        return value.strip()


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.CharField()

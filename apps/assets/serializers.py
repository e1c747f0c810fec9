from django.contrib.auth import get_user_model
from rest_framework import serializers

from apps.utils.serializers import OrgScopedSerializer
from .models import Asset, AssetAssignmentHistory

User = get_user_model()


class AssetSerializer(OrgScopedSerializer):
    category_name = serializers.CharField(source="category.name", read_only=True, default=None)
    location_name = serializers.CharField(source="location.name", read_only=True, default=None)
    assigned_to_name = serializers.SerializerMethodField()
    assigned_to = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.all(), required=False, allow_null=True
    )

    org_scoped_fields = ("category", "location", "assigned_to")
    unique_in_org = {
        "asset_tag": "Asset tag already exists",
        "serial_number": "Serial number already exists",
    }

    class Meta:
        model = Asset
        fields = [
            "id", "asset_tag", "name", "category", "category_name", "status",
            "manufacturer", "model", "serial_number",
            "purchase_date", "warranty_expiry", "end_of_life_date",
            "location", "location_name", "assigned_to", "assigned_to_name", "assigned_at",
            "cost", "notes", "image", "created_at", "updated_at",
        ]
        read_only_fields = ["id", "assigned_at", "created_at", "updated_at"]
        extra_kwargs = {"name": {"required": False}}

    def get_assigned_to_name(self, obj):
        if obj.assigned_to is None:
            return None
        return obj.assigned_to.full_name or obj.assigned_to.email

    def validate_asset_tag(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Asset tag is required")
        return value

    def validate(self, attrs):
        attrs = super().validate(attrs)
        purchase = attrs.get("purchase_date", getattr(self.instance, "purchase_date", None))
        warranty = attrs.get("warranty_expiry", getattr(self.instance, "warranty_expiry", None))
        if purchase and warranty and warranty < purchase:
            raise serializers.ValidationError({"warranty_expiry": ["Warranty cannot expire before purchase"]})
        return attrs


class AssetAssignmentHistorySerializer(serializers.ModelSerializer):
    from_user_email = serializers.EmailField(source="from_user.email", read_only=True, default=None)
    to_user_email = serializers.EmailField(source="to_user.email", read_only=True, default=None)
    changed_by_email = serializers.EmailField(source="changed_by.email", read_only=True, default=None)

    class Meta:
        model = AssetAssignmentHistory
        fields = [
            "id", "from_user", "from_user_email", "to_user", "to_user_email",
            "changed_by", "changed_by_email", "changed_at", "note",
        ]
        read_only_fields = fields

from rest_framework import serializers

from apps.utils.serializers import OrgScopedSerializer
from .models import License


class LicenseSerializer(OrgScopedSerializer):
    seats_available = serializers.IntegerField(read_only=True)

    class Meta:
        model = License
        fields = [
            "id", "name", "vendor", "license_key", "seats_total", "seats_assigned",
            "seats_available", "renewal_date", "cost", "status", "created_at", "updated_at",
        ]
        read_only_fields = ["id", "status", "created_at", "updated_at"]

    def validate(self, attrs):
        attrs = super().validate(attrs)
        total = attrs.get("seats_total", getattr(self.instance, "seats_total", None))
        assigned = attrs.get("seats_assigned", getattr(self.instance, "seats_assigned", 0))
        if total is not None and assigned > total:
            raise serializers.ValidationError({"seats_assigned": ["Assigned seats cannot exceed total seats"]})
        return attrs

from django.contrib.auth import get_user_model
from rest_framework import serializers

from apps.utils.serializers import OrgScopedSerializer
from apps.utils.validators import validate_phone, validate_not_blank

User = get_user_model()


class EmployeeSerializer(OrgScopedSerializer):
    full_name = serializers.CharField(read_only=True)
    location_name = serializers.CharField(source="location.name", read_only=True, default=None)
    assigned_assets = serializers.IntegerField(source="assigned_asset_count", read_only=True, default=0)
    first_name = serializers.CharField(max_length=150, validators=[validate_not_blank])
    last_name = serializers.CharField(max_length=150, validators=[validate_not_blank])
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True, validators=[validate_phone])

    org_scoped_fields = ("location",)
    unique_in_org = {"email": "Email already exists"}

    class Meta:
        model = User
        fields = [
            "id", "first_name", "last_name", "full_name", "email", "phone", "department",
            "location", "location_name", "status", "timezone", "assigned_assets",
            "last_login", "date_joined",
        ]
        read_only_fields = ["id", "last_login", "date_joined"]

    def validate_email(self, value):
        return value.strip().lower()

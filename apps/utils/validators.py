import re
from rest_framework import serializers


def validate_phone(value):
    if not value:
        return value
    pattern = r"^\+?[\d\s\-()]{7,20}$"
    if not re.match(pattern, str(value)):
        raise serializers.ValidationError("Invalid phone number format.")
    return value


def validate_not_blank(value):
    if value is None or not str(value).strip():
        raise serializers.ValidationError("This field may not be blank.")
    return str(value).strip()

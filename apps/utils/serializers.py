from rest_framework import serializers


class OrgScopedSerializer(serializers.ModelSerializer):
    """
    ModelSerializer for org-owned rows.

    `org_scoped_fields` names relation fields whose choices are limited to the
    caller's organization. `unique_in_org` maps a field to the message raised
    when another row of the same org already uses the value (case-insensitive).
    """
    org_scoped_fields = ()
    unique_in_org = {}

    def _get_org(self):
        request = self.context.get("request")
        user = getattr(request, "user", None)
        return getattr(user, "org", None)

    def get_fields(self):
        fields = super().get_fields()
        org = self._get_org()
        if org is None:
            return fields
        for name in self.org_scoped_fields:
            field = fields.get(name)
            if field is not None and not field.read_only and field.queryset is not None:
                field.queryset = field.queryset.filter(org=org)
        return fields

    def validate(self, attrs):
        attrs = super().validate(attrs)
        org = self._get_org()
        if org is None:
            return attrs

        for field, message in self.unique_in_org.items():
            value = attrs.get(field)
            if value in (None, ""):
                continue
            qs = self.Meta.model.objects.filter(org=org, **{f"{field}__iexact": value})
            if self.instance is not None:
                qs = qs.exclude(pk=self.instance.pk)
            if qs.exists():
                raise serializers.ValidationError({field: [message]})
        return attrs

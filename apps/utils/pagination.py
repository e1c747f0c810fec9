import math

from rest_framework.pagination import BasePagination
from rest_framework.response import Response


def _positive_int(raw, default):
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return max(1, value)


class StandardResultsSetPagination(BasePagination):
    """
    `?page=&limit=` pagination. A page past the end yields an empty
    `data` list instead of a 404.
    """
    default_limit = 10
    max_limit = 100

    def paginate_queryset(self, queryset, request, view=None):
        self.page = _positive_int(request.query_params.get("page"), 1)
        self.limit = min(self.max_limit, _positive_int(request.query_params.get("limit"), self.default_limit))

        if isinstance(queryset, (list, tuple)):
            self.total = len(queryset)
        else:
            self.total = queryset.count()

        start = (self.page - 1) * self.limit
        return list(queryset[start:start + self.limit])

    def get_paginated_response(self, data):
        return Response({
            "data": data,
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "total_pages": math.ceil(self.total / self.limit),
        })

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "properties": {
                "data": schema,
                "total": {"type": "integer"},
                "page": {"type": "integer"},
                "limit": {"type": "integer"},
                "total_pages": {"type": "integer"},
            },
        }

    def get_schema_operation_parameters(self, view):
        return [
            {"name": "page", "required": False, "in": "query", "schema": {"type": "integer"}},
            {"name": "limit", "required": False, "in": "query", "schema": {"type": "integer"}},
        ]

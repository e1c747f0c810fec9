import logging

from django.http import JsonResponse
from django.db import connection, DatabaseError

from apps.orders.repositories import get_order_repository

logger = logging.getLogger(__name__)


def health_check(request):
    status = {"db": "unknown", "order_store": "unknown"}
    try:
        status["order_store"] = get_order_repository().backend_name

        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        status["db"] = "ok"

        return JsonResponse({"status": "ok", "components": status}, status=200)
    except DatabaseError as e:
        logger.warning("Health check failed: %s", e)
        status["db"] = "unreachable"
        # The in-memory order store keeps working without a database
        http_status = 200 if status["order_store"] == "memory" else 503
        return JsonResponse(
            {"status": "degraded" if http_status == 200 else "error", "detail": str(e), "components": status},
            status=http_status
        )

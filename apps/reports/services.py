# apps/reports/services.py
import logging
from collections import Counter
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db.models import Count, DecimalField, F, Q, Sum

from apps.accounts.models import Role, UserStatus
from apps.assets.models import Asset, AssetStatus
from apps.inventory.models import InventoryItem
from apps.licenses.models import License, LicenseStatus
from apps.orders.models import OrderStatus
from apps.orders.services import OrderService

logger = logging.getLogger(__name__)
User = get_user_model()


def _counts_by_status(queryset, choices) -> dict:
    """
    {status: count} with every known status present, zero when absent.
    """
    counts = {value: 0 for value in choices.values}
    rows = queryset.order_by().values("status").annotate(n=Count("pk"))
    for row in rows:
        counts[row["status"]] = row["n"]
    return counts


def asset_report(org):
    qs = Asset.objects.filter(org=org).select_related("category", "location", "assigned_to")
    summary = {
        "total": qs.count(),
        "by_status": _counts_by_status(qs, AssetStatus),
        "total_cost": qs.aggregate(s=Sum("cost"))["s"] or Decimal("0.00"),
    }
    return summary, qs


def license_report(org):
    qs = License.objects.filter(org=org)
    totals = qs.aggregate(cost=Sum("cost"), seats=Sum("seats_total"), used=Sum("seats_assigned"))
    summary = {
        "total": qs.count(),
        "by_status": _counts_by_status(qs, LicenseStatus),
        "total_cost": totals["cost"] or Decimal("0.00"),
        "seats_total": totals["seats"] or 0,
        "seats_assigned": totals["used"] or 0,
    }
    return summary, qs


def inventory_report(org):
    qs = InventoryItem.objects.filter(org=org).select_related("category", "location")
    total_value = qs.aggregate(
        v=Sum(F("quantity_on_hand") * F("cost_per_item"), output_field=DecimalField(max_digits=16, decimal_places=2))
    )["v"]
    summary = {
        "total": qs.count(),
        "low_stock": qs.filter(quantity_on_hand__lte=F("quantity_minimum")).count(),
        "total_units": qs.aggregate(u=Sum("quantity_on_hand"))["u"] or 0,
        "total_value": Decimal(total_value or 0).quantize(Decimal("0.01")),
    }
    return summary, qs


def employee_report(org):
    employees = User.objects.filter(org=org, role=Role.EMPLOYEE)
    qs = (
        employees
        .select_related("location")
        .annotate(assigned_asset_count=Count("assigned_assets", filter=Q(assigned_assets__status=AssetStatus.ASSIGNED)))
        .order_by("first_name", "last_name")
    )
    summary = {
        "total": qs.count(),
        "by_status": _counts_by_status(employees, UserStatus),
    }
    return summary, qs


def tracking_report(org):
    orders = list(OrderService().list_orders(org))
    by_status = {value: 0 for value in OrderStatus.values}
    by_status.update(Counter(o.status for o in orders))
    summary = {
        "total": len(orders),
        "by_status": by_status,
        "in_flight": sum(n for s, n in by_status.items() if s != OrderStatus.DELIVERED),
    }
    return summary, orders

import datetime
from decimal import Decimal

from django.test import TestCase, override_settings
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from apps.accounts.models import Organization, Role, User
from apps.assets.models import Asset, AssetStatus
from apps.inventory.models import InventoryItem
from apps.licenses.models import License
from apps.orders.repositories import get_order_repository
from apps.orders.services import OrderService


@override_settings(ORDER_STORE_BACKEND="database", LICENSE_EXPIRY_WINDOW_DAYS=30)
class ReportAPITests(TestCase):

    def setUp(self):
        get_order_repository.cache_clear()
        self.addCleanup(get_order_repository.cache_clear)

        self.org = Organization.objects.create(name="Acme")
        self.admin = User.objects.create_user(email="admin@acme.test", password="x" * 8, org=self.org, role=Role.ADMIN)
        self.employee = User.objects.create_user(email="dev@acme.test", password="x" * 8, org=self.org)

        Asset.objects.create(org=self.org, asset_tag="AST-1", cost=Decimal("1000.00"), assigned_to=self.employee)
        Asset.objects.create(org=self.org, asset_tag="AST-2", cost=Decimal("250.50"))
        License.objects.create(
            org=self.org, name="Slack", seats_total=10, seats_assigned=4, cost=Decimal("80.00"),
            renewal_date=timezone.localdate() + datetime.timedelta(days=5),
        )
        InventoryItem.objects.create(
            org=self.org, name="Toner", quantity_on_hand=4, quantity_minimum=5, cost_per_item=Decimal("12.50")
        )
        OrderService().create_order(self.org, self.admin, {
            "order_id": "ORD-1", "asset_name": "Laptop", "quantity": 1, "supplier": "Dell",
            "estimated_delivery": datetime.date(2024, 2, 1), "current_location": "Dock",
        })

        self.client = APIClient()
        self.client.force_authenticate(self.admin)

    def test_assets_report(self):
        response = self.client.get("/api/reports/assets/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["report_id"], "assets-master")
        self.assertIn("generated_at", response.data)
        summary = response.data["summary"]
        self.assertEqual(summary["total"], 2)
        self.assertEqual(summary["by_status"][AssetStatus.ASSIGNED], 1)
        self.assertEqual(summary["by_status"][AssetStatus.RETIRED], 0)
        self.assertEqual(summary["total_cost"], Decimal("1250.50"))
        self.assertEqual(len(response.data["data"]), 2)

    def test_report_id_passthrough(self):
        response = self.client.get("/api/reports/licenses/", {"report_id": "q3-audit"})
        self.assertEqual(response.data["report_id"], "q3-audit")
        self.assertEqual(response.data["summary"]["by_status"]["ExpiringSoon"], 1)
        self.assertEqual(response.data["summary"]["seats_assigned"], 4)

    def test_inventory_report(self):
        summary = self.client.get("/api/reports/inventory/").data["summary"]
        self.assertEqual(summary["low_stock"], 1)
        self.assertEqual(summary["total_value"], Decimal("50.00"))

    def test_employees_report(self):
        response = self.client.get("/api/reports/employees/")
        self.assertEqual(response.data["summary"]["total"], 1)
        self.assertEqual(response.data["data"][0]["assigned_assets"], 1)

    def test_tracking_report(self):
        response = self.client.get("/api/reports/tracking/")
        summary = response.data["summary"]
        self.assertEqual(summary["total"], 1)
        self.assertEqual(summary["by_status"]["Ordered"], 1)
        self.assertEqual(summary["in_flight"], 1)
        self.assertEqual(response.data["data"][0]["order_id"], "ORD-1")

    def test_unknown_report(self):
        response = self.client.get("/api/reports/payroll/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["message"], "Report not found")

    def test_admin_only(self):
        client = APIClient()
        client.force_authenticate(self.employee)
        self.assertEqual(client.get("/api/reports/assets/").status_code, status.HTTP_403_FORBIDDEN)

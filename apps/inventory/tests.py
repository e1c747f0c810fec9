from decimal import Decimal

from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from apps.accounts.models import Organization, Role, User
from apps.catalog.models import Location
from .models import InventoryItem


class InventoryModelTests(TestCase):

    def test_total_value_and_low_stock(self):
        org = Organization.objects.create(name="Acme")
        item = InventoryItem.objects.create(
            org=org, name="HDMI cable", quantity_on_hand=3, quantity_minimum=5, cost_per_item=Decimal("2.50")
        )
        self.assertEqual(item.total_value, Decimal("7.50"))
        self.assertTrue(item.is_low_stock)


class InventoryAPITests(TestCase):

    def setUp(self):
        self.org = Organization.objects.create(name="Acme")
        self.admin = User.objects.create_user(email="admin@acme.test", password="x" * 8, org=self.org, role=Role.ADMIN)
        self.employee = User.objects.create_user(email="dev@acme.test", password="x" * 8, org=self.org)
        self.location = Location.objects.create(org=self.org, name="Store room")
        self.item = InventoryItem.objects.create(
            org=self.org, name="Toner", sku="TN-1", location=self.location,
            quantity_on_hand=10, quantity_minimum=2, cost_per_item=Decimal("40.00"),
        )
        self.client = APIClient()
        self.client.force_authenticate(self.admin)

    def test_create_returns_computed_fields(self):
        response = self.client.post(
            "/api/inventory/",
            {"name": "Mouse", "quantity_on_hand": 4, "quantity_minimum": 1, "cost_per_item": "12.25"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["total_value"], "49.00")
        self.assertFalse(response.data["is_low_stock"])

    def test_low_stock(self):
        InventoryItem.objects.create(org=self.org, name="Keyboard", quantity_on_hand=1, quantity_minimum=1)
        response = self.client.get("/api/inventory/low-stock/")
        self.assertEqual([i["name"] for i in response.data["data"]], ["Keyboard"])

    def test_adjust_stock(self):
        url = f"/api/inventory/{self.item.id}/adjust/"

        response = self.client.post(url, {"delta": -4, "reason": "helpdesk"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["quantity_on_hand"], 6)

        response = self.client.post(url, {"delta": -7}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "insufficient_stock")

        response = self.client.post(url, {"delta": 0}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        self.item.refresh_from_db()
        self.assertEqual(self.item.quantity_on_hand, 6)

    def test_employee_cannot_adjust(self):
        client = APIClient()
        client.force_authenticate(self.employee)
        response = client.post(f"/api/inventory/{self.item.id}/adjust/", {"delta": 1}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        response = client.get("/api/inventory/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_export(self):
        response = self.client.get("/api/inventory/export/download/")
        self.assertEqual(response["Content-Disposition"], "attachment; filename=inventory.csv")
        lines = response.content.decode().splitlines()
        self.assertEqual(
            lines[0], "name,sku,location,quantity_on_hand,quantity_minimum,cost_per_item,total_value"
        )
        self.assertEqual(lines[1], "Toner,TN-1,Store room,10,2,40.00,400.00")

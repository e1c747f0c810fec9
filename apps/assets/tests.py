from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from apps.accounts.models import Organization, Role, User
from apps.assets.models import Asset, AssetAssignmentHistory, AssetStatus
from apps.catalog.models import Category, Location
from apps.notifications.models import Notification


class AssetModelTests(TestCase):

    def setUp(self):
        self.org = Organization.objects.create(name="Acme")
        self.user = User.objects.create_user(email="dev@acme.test", password="x" * 8, org=self.org)

    def test_name_is_derived(self):
        a = Asset.objects.create(org=self.org, asset_tag="AST-1", manufacturer="Dell", model="XPS 13")
        b = Asset.objects.create(org=self.org, asset_tag="AST-2")
        self.assertEqual(a.name, "Dell XPS 13")
        self.assertEqual(b.name, "AST-2")

    def test_assignee_drives_status(self):
        asset = Asset.objects.create(org=self.org, asset_tag="AST-1", assigned_to=self.user)
        self.assertEqual(asset.status, AssetStatus.ASSIGNED)
        self.assertIsNotNone(asset.assigned_at)

        asset.assigned_to = None
        asset.save()
        self.assertEqual(asset.status, AssetStatus.AVAILABLE)
        self.assertIsNone(asset.assigned_at)

    def test_unassigning_keeps_maintenance(self):
        asset = Asset.objects.create(org=self.org, asset_tag="AST-1", status=AssetStatus.MAINTENANCE)
        asset.save()
        self.assertEqual(asset.status, AssetStatus.MAINTENANCE)


class AssetAPITests(TestCase):

    def setUp(self):
        self.org = Organization.objects.create(name="Acme")
        self.other_org = Organization.objects.create(name="Globex")
        self.admin = User.objects.create_user(email="admin@acme.test", password="x" * 8, org=self.org, role=Role.ADMIN)
        self.employee = User.objects.create_user(email="dev@acme.test", password="x" * 8, org=self.org)
        self.outsider = User.objects.create_user(email="dev@globex.test", password="x" * 8, org=self.other_org)
        self.category = Category.objects.create(org=self.org, name="Laptops")
        self.location = Location.objects.create(org=self.org, name="HQ")

        self.client = APIClient()
        self.client.force_authenticate(self.admin)

    def _create(self, **overrides):
        payload = {
            "asset_tag": "AST-0001",
            "manufacturer": "Lenovo",
            "model": "T14",
            "serial_number": "SN-1",
            "category": str(self.category.id),
            "location": str(self.location.id),
            "cost": "1200.00",
        }
        payload.update(overrides)
        return self.client.post("/api/assets/", payload, format="json")

    def test_create_asset(self):
        response = self._create()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["name"], "Lenovo T14")
        self.assertEqual(response.data["status"], AssetStatus.AVAILABLE)
        self.assertEqual(response.data["category_name"], "Laptops")
        asset = Asset.objects.get(pk=response.data["id"])
        self.assertEqual(asset.created_by, self.admin)

    def test_duplicate_tag_and_serial(self):
        self._create()
        response = self._create(serial_number="SN-2")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("asset_tag", response.data["errors"])

        response = self._create(asset_tag="AST-0002")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("serial_number", response.data["errors"])

    def test_cannot_reference_other_org_rows(self):
        foreign_category = Category.objects.create(org=self.other_org, name="Laptops")
        response = self._create(category=str(foreign_category.id))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self._create(assigned_to=str(self.outsider.id))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_assign_records_history_and_notifies(self):
        asset_id = self._create().data["id"]

        response = self.client.patch(
            f"/api/assets/{asset_id}/", {"assigned_to": str(self.employee.id), "status": "Available"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], AssetStatus.ASSIGNED)
        self.assertIsNotNone(response.data["assigned_at"])

        history = AssetAssignmentHistory.objects.get(asset_id=asset_id)
        self.assertIsNone(history.from_user)
        self.assertEqual(history.to_user, self.employee)
        self.assertEqual(history.changed_by, self.admin)
        self.assertTrue(Notification.objects.filter(user=self.employee, type="asset_assigned").exists())

        # Unassign
        response = self.client.patch(f"/api/assets/{asset_id}/", {"assigned_to": None}, format="json")
        self.assertEqual(response.data["status"], AssetStatus.AVAILABLE)
        self.assertEqual(AssetAssignmentHistory.objects.filter(asset_id=asset_id).count(), 2)

        response = self.client.get(f"/api/assets/{asset_id}/history/")
        self.assertEqual(len(response.data), 2)
        self.assertIsNone(response.data[0]["to_user"])

    def test_editing_other_fields_does_not_touch_history(self):
        asset_id = self._create(assigned_to=str(self.employee.id)).data["id"]
        self.client.patch(f"/api/assets/{asset_id}/", {"notes": "New battery"}, format="json")
        self.assertEqual(AssetAssignmentHistory.objects.filter(asset_id=asset_id).count(), 1)

    def test_mine_lists_only_callers_assets(self):
        Asset.objects.create(org=self.org, asset_tag="AST-1", assigned_to=self.employee)
        Asset.objects.create(org=self.org, asset_tag="AST-2")

        client = APIClient()
        client.force_authenticate(self.employee)
        response = client.get("/api/assets/mine/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total"], 1)
        self.assertEqual(response.data["data"][0]["asset_tag"], "AST-1")

    def test_filters_and_search(self):
        Asset.objects.create(org=self.org, asset_tag="AST-1", manufacturer="Apple", status=AssetStatus.RETIRED)
        Asset.objects.create(org=self.org, asset_tag="AST-2", manufacturer="Dell")

        response = self.client.get("/api/assets/", {"status": "Retired"})
        self.assertEqual([a["asset_tag"] for a in response.data["data"]], ["AST-1"])

        response = self.client.get("/api/assets/", {"search": "dell"})
        self.assertEqual([a["asset_tag"] for a in response.data["data"]], ["AST-2"])

    def test_employee_cannot_create(self):
        client = APIClient()
        client.force_authenticate(self.employee)
        response = client.post("/api/assets/", {"asset_tag": "AST-9"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_export_has_header_plus_rows(self):
        for i in range(3):
            Asset.objects.create(org=self.org, asset_tag=f"AST-{i}", category=self.category)
        Asset.objects.create(org=self.other_org, asset_tag="AST-X")

        response = self.client.get("/api/assets/export/download/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response["Content-Type"], "text/csv")

        lines = response.content.decode().splitlines()
        self.assertEqual(len(lines), 4)
        self.assertTrue(lines[0].startswith("asset_tag,name,category,status"))
        self.assertIn("Laptops", lines[1])

    def test_delete(self):
        asset = Asset.objects.create(org=self.org, asset_tag="AST-1")
        response = self.client.delete(f"/api/assets/{asset.id}/")
        self.assertEqual(response.data["message"], "Asset deleted successfully")
        self.assertFalse(Asset.objects.filter(pk=asset.pk).exists())

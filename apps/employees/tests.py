from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from apps.accounts.models import Organization, Role, User
from apps.assets.models import Asset, AssetAssignmentHistory, AssetStatus


class EmployeeAPITests(TestCase):

    def setUp(self):
        self.org = Organization.objects.create(name="Acme")
        self.other_org = Organization.objects.create(name="Globex")
        self.admin = User.objects.create_user(email="admin@acme.test", password="x" * 8, org=self.org, role=Role.ADMIN)
        self.employee = User.objects.create_user(
            email="dev@acme.test", password="x" * 8, org=self.org, first_name="Dana", last_name="Dev"
        )
        User.objects.create_user(email="dev@globex.test", password="x" * 8, org=self.other_org)

        self.client = APIClient()
        self.client.force_authenticate(self.admin)

    def test_create_returns_temp_password_that_works(self):
        response = self.client.post(
            "/api/admin/employees/",
            {"first_name": "Sam", "last_name": "Lee", "email": " Sam@Acme.test ", "department": "IT"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["data"]["email"], "sam@acme.test")
        self.assertEqual(response.data["data"]["assigned_assets"], 0)

        user = User.objects.get(email="sam@acme.test")
        self.assertEqual(user.role, Role.EMPLOYEE)
        self.assertEqual(user.org, self.org)
        self.assertTrue(user.check_password(response.data["temp_password"]))

    def test_duplicate_email_in_org(self):
        response = self.client.post(
            "/api/admin/employees/",
            {"first_name": "Dup", "last_name": "Dev", "email": "DEV@acme.test"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["errors"]["email"], ["Email already exists"])

    def test_blank_names_rejected(self):
        response = self.client.post(
            "/api/admin/employees/",
            {"first_name": "  ", "last_name": "Lee", "email": "x@acme.test"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("first_name", response.data["errors"])

    def test_list_is_org_scoped_with_asset_counts(self):
        Asset.objects.create(org=self.org, asset_tag="AST-1", assigned_to=self.employee)
        Asset.objects.create(org=self.org, asset_tag="AST-2", assigned_to=self.employee)

        response = self.client.get("/api/admin/employees/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total"], 1)
        row = response.data["data"][0]
        self.assertEqual(row["email"], "dev@acme.test")
        self.assertEqual(row["assigned_assets"], 2)

    def test_delete_offboards_assets(self):
        asset = Asset.objects.create(org=self.org, asset_tag="AST-1", assigned_to=self.employee)

        response = self.client.delete(f"/api/admin/employees/{self.employee.id}/")
        self.assertEqual(response.data["message"], "Employee deleted successfully")
        self.assertFalse(User.objects.filter(pk=self.employee.pk).exists())

        asset.refresh_from_db()
        self.assertIsNone(asset.assigned_to)
        self.assertEqual(asset.status, AssetStatus.AVAILABLE)
        self.assertTrue(
            AssetAssignmentHistory.objects.filter(asset=asset, note="Employee offboarded").exists()
        )

    def test_admin_is_not_listed_or_deletable(self):
        response = self.client.delete(f"/api/admin/employees/{self.admin.id}/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["message"], "Employee not found")

    def test_export_always_has_header(self):
        response = self.client.get("/api/admin/employees/export/download/", {"search": "nobody"})
        lines = response.content.decode().splitlines()
        self.assertEqual(
            lines, ["first_name,last_name,email,phone,department,location,assigned_assets,status"]
        )

        response = self.client.get("/api/admin/employees/export/download/")
        lines = response.content.decode().splitlines()
        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[1].startswith("Dana,Dev,dev@acme.test"))

    def test_employee_forbidden(self):
        client = APIClient()
        client.force_authenticate(self.employee)
        response = client.get("/api/admin/employees/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["message"], "Forbidden")

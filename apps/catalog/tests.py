from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from apps.accounts.models import Organization, Role, User
from apps.catalog.models import Category, Location


class CatalogAPITests(TestCase):

    def setUp(self):
        self.org = Organization.objects.create(name="Acme")
        self.other_org = Organization.objects.create(name="Globex")
        self.admin = User.objects.create_user(email="admin@acme.test", password="x" * 8, org=self.org, role=Role.ADMIN)
        self.employee = User.objects.create_user(email="dev@acme.test", password="x" * 8, org=self.org)

        self.client = APIClient()
        self.client.force_authenticate(self.admin)

    def test_create_category_defaults_icon(self):
        response = self.client.post("/api/categories/", {"name": "Laptops"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["icon_key"], "Package")
        category = Category.objects.get(pk=response.data["id"])
        self.assertEqual(category.org, self.org)
        self.assertEqual(category.created_by, self.admin)

    def test_category_name_unique_per_org(self):
        Category.objects.create(org=self.org, name="Laptops")
        Category.objects.create(org=self.other_org, name="Monitors")

        dup = self.client.post("/api/categories/", {"name": "laptops"}, format="json")
        self.assertEqual(dup.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("name", dup.data["errors"])

        # Same name in a different org is fine
        ok = self.client.post("/api/categories/", {"name": "Monitors"}, format="json")
        self.assertEqual(ok.status_code, status.HTTP_201_CREATED)

    def test_list_is_scoped_and_paginated(self):
        for i in range(12):
            Location.objects.create(org=self.org, name=f"Office {i:02d}", city="Pune")
        Location.objects.create(org=self.other_org, name="Foreign Office")

        response = self.client.get("/api/locations/", {"limit": 5, "page": 3})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total"], 12)
        self.assertEqual(response.data["total_pages"], 3)
        self.assertEqual(len(response.data["data"]), 2)

    def test_location_search_and_filter(self):
        Location.objects.create(org=self.org, name="HQ", city="Bengaluru", type="Office")
        Location.objects.create(org=self.org, name="Depot", city="Pune", type="Warehouse")

        response = self.client.get("/api/locations/", {"search": "bengal"})
        self.assertEqual([l["name"] for l in response.data["data"]], ["HQ"])

        response = self.client.get("/api/locations/", {"type": "Warehouse"})
        self.assertEqual([l["name"] for l in response.data["data"]], ["Depot"])

    def test_other_org_object_is_404(self):
        foreign = Location.objects.create(org=self.other_org, name="Foreign")

        response = self.client.get(f"/api/locations/{foreign.id}/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["message"], "Location not found")

    def test_update_and_delete(self):
        location = Location.objects.create(org=self.org, name="HQ")

        response = self.client.patch(f"/api/locations/{location.id}/", {"capacity": 120}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["capacity"], 120)

        response = self.client.delete(f"/api/locations/{location.id}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], "Location deleted successfully")
        self.assertFalse(Location.objects.filter(pk=location.pk).exists())

    def test_negative_capacity_rejected(self):
        response = self.client.post("/api/locations/", {"name": "HQ", "capacity": -1}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_employee_can_read_but_not_write(self):
        Category.objects.create(org=self.org, name="Laptops")
        client = APIClient()
        client.force_authenticate(self.employee)

        self.assertEqual(client.get("/api/categories/").status_code, status.HTTP_200_OK)
        self.assertEqual(
            client.post("/api/locations/", {"name": "HQ"}, format="json").status_code,
            status.HTTP_403_FORBIDDEN,
        )

import datetime

from django.test import TestCase, override_settings
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from apps.accounts.models import Organization, Role, User, UserStatus
from apps.notifications.models import Notification, NotificationType
from .models import License, LicenseStatus, compute_license_status
from .services import LicenseService
from .tasks import refresh_license_statuses


def days_from_today(n):
    return timezone.localdate() + datetime.timedelta(days=n)


@override_settings(LICENSE_EXPIRY_WINDOW_DAYS=30)
class LicenseStatusTests(TestCase):

    def test_compute_status_boundaries(self):
        today = datetime.date(2024, 1, 1)
        self.assertEqual(compute_license_status(datetime.date(2023, 12, 31), today), LicenseStatus.EXPIRED)
        self.assertEqual(compute_license_status(today, today), LicenseStatus.EXPIRING_SOON)
        self.assertEqual(compute_license_status(datetime.date(2024, 1, 31), today), LicenseStatus.EXPIRING_SOON)
        self.assertEqual(compute_license_status(datetime.date(2024, 2, 1), today), LicenseStatus.ACTIVE)

    def test_save_derives_status(self):
        org = Organization.objects.create(name="Acme")
        lic = License.objects.create(
            org=org, name="Office", seats_total=10, renewal_date=days_from_today(-1), cost=100,
            status=LicenseStatus.ACTIVE,
        )
        self.assertEqual(lic.status, LicenseStatus.EXPIRED)
        self.assertEqual(lic.seats_available, 10)


@override_settings(LICENSE_EXPIRY_WINDOW_DAYS=30)
class LicenseAPITests(TestCase):

    def setUp(self):
        self.org = Organization.objects.create(name="Acme")
        self.admin = User.objects.create_user(email="admin@acme.test", password="x" * 8, org=self.org, role=Role.ADMIN)
        self.client = APIClient()
        self.client.force_authenticate(self.admin)

    def _payload(self, **overrides):
        payload = {
            "name": "JetBrains",
            "vendor": "JetBrains s.r.o.",
            "license_key": "KEY-123",
            "seats_total": 5,
            "seats_assigned": 2,
            "renewal_date": days_from_today(200).isoformat(),
            "cost": "499.00",
        }
        payload.update(overrides)
        return payload

    def test_create_ignores_client_status(self):
        response = self.client.post(
            "/api/licenses/", self._payload(renewal_date=days_from_today(10).isoformat(), status="Active"),
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["status"], LicenseStatus.EXPIRING_SOON)
        self.assertEqual(response.data["seats_available"], 3)

    def test_seats_assigned_cannot_exceed_total(self):
        response = self.client.post("/api/licenses/", self._payload(seats_assigned=6), format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("seats_assigned", response.data["errors"])

        response = self.client.post("/api/licenses/", self._payload(seats_total=0), format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_partial_update_checks_stored_total(self):
        lic_id = self.client.post("/api/licenses/", self._payload(), format="json").data["id"]
        response = self.client.patch(f"/api/licenses/{lic_id}/", {"seats_assigned": 9}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_expiring_lists_soon_and_expired(self):
        License.objects.create(org=self.org, name="A", seats_total=1, renewal_date=days_from_today(200), cost=1)
        License.objects.create(org=self.org, name="B", seats_total=1, renewal_date=days_from_today(5), cost=1)
        License.objects.create(org=self.org, name="C", seats_total=1, renewal_date=days_from_today(-5), cost=1)

        response = self.client.get("/api/licenses/expiring/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(sorted(l["name"] for l in response.data["data"]), ["B", "C"])

        response = self.client.get("/api/licenses/", {"status": "Expired"})
        self.assertEqual([l["name"] for l in response.data["data"]], ["C"])

    def test_export(self):
        License.objects.create(org=self.org, name="A", seats_total=1, renewal_date=days_from_today(200), cost=1)
        response = self.client.get("/api/licenses/export/download/")
        lines = response.content.decode().splitlines()
        self.assertEqual(lines[0], "name,vendor,seats_total,seats_assigned,renewal_date,cost,status")
        self.assertEqual(len(lines), 2)


@override_settings(LICENSE_EXPIRY_WINDOW_DAYS=30)
class LicenseRefreshTests(TestCase):

    def setUp(self):
        self.org = Organization.objects.create(name="Acme")
        self.admin = User.objects.create_user(email="admin@acme.test", password="x" * 8, org=self.org, role=Role.ADMIN)
        self.disabled_admin = User.objects.create_user(
            email="old@acme.test", password="x" * 8, org=self.org, role=Role.ADMIN, status=UserStatus.DISABLED
        )
        self.employee = User.objects.create_user(email="dev@acme.test", password="x" * 8, org=self.org)
        self.lic = License.objects.create(
            org=self.org, name="Slack", seats_total=10, renewal_date=days_from_today(60), cost=10
        )

    def test_refresh_moves_status_and_notifies_active_admins(self):
        result = LicenseService.refresh_statuses(today=days_from_today(40))

        self.lic.refresh_from_db()
        self.assertEqual(self.lic.status, LicenseStatus.EXPIRING_SOON)
        self.assertEqual(result, {"updated": 1, "orgs_notified": 1})

        notes = Notification.objects.filter(type=NotificationType.LICENSE_EXPIRY)
        self.assertEqual([n.user for n in notes], [self.admin])

    def test_refresh_is_idempotent(self):
        LicenseService.refresh_statuses(today=days_from_today(40))
        result = LicenseService.refresh_statuses(today=days_from_today(40))
        self.assertEqual(result["updated"], 0)
        self.assertEqual(Notification.objects.count(), 1)

    def test_task_wrapper(self):
        self.assertIn("Updated 0 licenses", refresh_license_statuses())

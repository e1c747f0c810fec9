# apps/notifications/tests.py
import uuid

from django.test import TestCase, override_settings
from rest_framework import status
from rest_framework.test import APIClient

from apps.accounts.models import Organization, User
from .models import Notification, NotificationType
from .services import notify_user, notify_users


class NotificationServiceTests(TestCase):
    def setUp(self):
        org = Organization.objects.create(name="Acme")
        self.user = User.objects.create_user(email="dev@acme.test", password="x" * 8, org=org)

    def test_notify_user_creates_notification(self):
        notif = notify_user(
            self.user,
            "Order shipped",
            "Order ORD-1 is now Shipped",
            type=NotificationType.ORDER_STATUS,
            data={"order_id": "ORD-1"},
        )

        self.assertIsNotNone(notif)
        self.assertEqual(notif.type, NotificationType.ORDER_STATUS)
        self.assertFalse(notif.is_read)
        self.assertEqual(notif.data, {"order_id": "ORD-1"})

    def test_notify_without_user_is_noop(self):
        self.assertIsNone(notify_user(None, "t", "m"))
        self.assertEqual(notify_users([None, self.user], "t", "m")[0].user, self.user)
        self.assertEqual(Notification.objects.count(), 1)


class NotificationAPITests(TestCase):
    def setUp(self):
        org = Organization.objects.create(name="Acme")
        self.user = User.objects.create_user(email="dev@acme.test", password="x" * 8, org=org)
        self.other = User.objects.create_user(email="ops@acme.test", password="x" * 8, org=org)
        self.client = APIClient()
        self.client.force_authenticate(self.user)

    @override_settings(NOTIFICATION_LIST_LIMIT=3)
    def test_list_is_capped_and_own_only(self):
        for i in range(5):
            notify_user(self.user, f"n{i}", "m")
        notify_user(self.other, "theirs", "m")

        response = self.client.get("/api/notifications/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 3)
        self.assertNotIn("theirs", [n["title"] for n in response.data])

    def test_mark_read(self):
        notif = notify_user(self.user, "t", "m")
        response = self.client.patch(f"/api/notifications/{notif.id}/read/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["is_read"])
        self.assertIsNotNone(response.data["read_at"])

    def test_cannot_mark_someone_elses(self):
        notif = notify_user(self.other, "t", "m")
        response = self.client.patch(f"/api/notifications/{notif.id}/read/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["message"], "Notification not found")

        response = self.client.patch(f"/api/notifications/{uuid.uuid4()}/read/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_read_all(self):
        notify_user(self.user, "a", "m")
        notify_user(self.user, "b", "m")
        notify_user(self.other, "c", "m")

        response = self.client.post("/api/notifications/read-all/")
        self.assertEqual(response.data["updated"], 2)
        self.assertEqual(Notification.objects.filter(is_read=False).count(), 1)

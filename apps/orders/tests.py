import datetime
from unittest import mock

from django.core.exceptions import ImproperlyConfigured
from django.db import OperationalError
from django.test import TestCase, override_settings
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from apps.accounts.models import Organization, Role, User
from apps.notifications.models import Notification, NotificationType
from apps.utils.exceptions import BusinessLogicException
from .models import OrderStatus, ProcurementOrder
from .services import OrderService
from .repositories import (
    DatabaseOrderRepository,
    InMemoryOrderRepository,
    build_order_repository,
    get_order_repository,
)

ORDERS_URL = "/api/orders/"


def order_payload(**overrides):
    payload = {
        "order_id": "ORD-1001",
        "asset_name": "MacBook Pro",
        "quantity": 5,
        "supplier": "Apple Store",
        "order_date": "2024-01-15",
        "estimated_delivery": "2024-01-25",
        "current_location": "Supplier Warehouse",
    }
    payload.update(overrides)
    return payload


class OrderAPIBehaviour:
    """
    Shared cases run against every order store.
    """

    def setUp(self):
        get_order_repository.cache_clear()
        self.addCleanup(get_order_repository.cache_clear)

        self.org = Organization.objects.create(name="Acme")
        self.other_org = Organization.objects.create(name="Globex")
        self.admin = User.objects.create_user(email="admin@acme.test", password="x" * 8, org=self.org, role=Role.ADMIN)
        self.employee = User.objects.create_user(email="dev@acme.test", password="x" * 8, org=self.org)
        self.outsider = User.objects.create_user(
            email="admin@globex.test", password="x" * 8, org=self.other_org, role=Role.ADMIN
        )

        self.client = APIClient()
        self.client.force_authenticate(self.admin)

    def _create(self, **overrides):
        return self.client.post(ORDERS_URL, order_payload(**overrides), format="json")

    def _total(self):
        return self.client.get(ORDERS_URL).data["total"]

    def test_create_starts_tracking(self):
        response = self._create()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["order_id"], "ORD-1001")
        self.assertEqual(response.data["status"], OrderStatus.ORDERED)
        self.assertEqual(len(response.data["tracking_history"]), 1)
        self.assertEqual(response.data["tracking_history"][0]["stage"], OrderStatus.ORDERED)
        self.assertEqual(response.data["created_by_email"], "admin@acme.test")

    def test_blank_order_id_is_generated(self):
        response = self._create(order_id="")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data["order_id"].startswith("ORD-"))

    def test_duplicate_order_id_rejected(self):
        self._create()
        response = self._create(asset_name="Dell XPS")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Order ID already exists")
        self.assertEqual(self._total(), 1)

    def test_same_order_id_allowed_in_other_org(self):
        self._create()
        client = APIClient()
        client.force_authenticate(self.outsider)
        response = client.post(ORDERS_URL, order_payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_missing_fields_rejected(self):
        response = self.client.post(ORDERS_URL, {"order_id": "ORD-2"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("asset_name", response.data["errors"])

        response = self._create(quantity=0)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self._total(), 0)

    def test_every_status_appends_one_entry(self):
        order_id = self._create().data["id"]

        for expected_len, stage in enumerate(OrderStatus.values[1:], start=2):
            response = self.client.patch(f"{ORDERS_URL}{order_id}/status/", {"status": stage}, format="json")
            self.assertEqual(response.status_code, status.HTTP_200_OK)
            self.assertEqual(response.data["status"], stage)
            self.assertEqual(len(response.data["tracking_history"]), expected_len)
            self.assertEqual(response.data["tracking_history"][-1]["stage"], stage)

    def test_status_may_move_backwards(self):
        order_id = self._create().data["id"]
        self.client.patch(f"{ORDERS_URL}{order_id}/status/", {"status": "Delivered"}, format="json")
        response = self.client.patch(f"{ORDERS_URL}{order_id}/status/", {"status": "Processing"}, format="json")

        self.assertEqual(response.data["status"], "Processing")
        self.assertEqual([e["stage"] for e in response.data["tracking_history"]], ["Ordered", "Delivered", "Processing"])

    def test_invalid_status_changes_nothing(self):
        order_id = self._create().data["id"]
        response = self.client.patch(f"{ORDERS_URL}{order_id}/status/", {"status": "Lost"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Invalid status")

        order = self.client.get(f"{ORDERS_URL}{order_id}/").data
        self.assertEqual(order["status"], OrderStatus.ORDERED)
        self.assertEqual(len(order["tracking_history"]), 1)

    def test_missing_or_blank_status_changes_nothing(self):
        order_id = self._create().data["id"]

        for payload in ({}, {"status": ""}):
            response = self.client.patch(f"{ORDERS_URL}{order_id}/status/", payload, format="json")
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertEqual(response.data["message"], "Validation error")
            self.assertIn("status", response.data["errors"])

        order = self.client.get(f"{ORDERS_URL}{order_id}/").data
        self.assertEqual(order["status"], OrderStatus.ORDERED)
        self.assertEqual(len(order["tracking_history"]), 1)

    def test_status_change_notifies_creator(self):
        order_id = self._create().data["id"]
        self.client.patch(f"{ORDERS_URL}{order_id}/status/", {"status": "Shipped"}, format="json")

        note = Notification.objects.get(user=self.admin, type=NotificationType.ORDER_STATUS)
        self.assertEqual(note.data, {"order_id": "ORD-1001", "status": "Shipped"})

    def test_put_with_new_status_appends_tracking(self):
        order_id = self._create().data["id"]
        response = self.client.put(
            f"{ORDERS_URL}{order_id}/",
            order_payload(status="InTransit", current_location="Mumbai hub", quantity=6),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["current_location"], "Mumbai hub")
        self.assertEqual(response.data["quantity"], 6)
        self.assertEqual([e["stage"] for e in response.data["tracking_history"]], ["Ordered", "InTransit"])

        # Same status again: no new entry
        response = self.client.put(f"{ORDERS_URL}{order_id}/", order_payload(status="InTransit"), format="json")
        self.assertEqual(len(response.data["tracking_history"]), 2)

    def test_put_cannot_steal_existing_order_id(self):
        self._create()
        second = self._create(order_id="ORD-1002").data["id"]
        response = self.client.put(f"{ORDERS_URL}{second}/", order_payload(order_id="ORD-1001"), format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Order ID already exists")

    def test_search_and_status_filter(self):
        self._create()
        other = self._create(order_id="ORD-1002", asset_name="Dell Monitor", supplier="Dell").data["id"]
        self.client.patch(f"{ORDERS_URL}{other}/status/", {"status": "Shipped"}, format="json")

        response = self.client.get(ORDERS_URL, {"search": "dell"})
        self.assertEqual([o["order_id"] for o in response.data["data"]], ["ORD-1002"])

        response = self.client.get(ORDERS_URL, {"status": "Ordered"})
        self.assertEqual([o["order_id"] for o in response.data["data"]], ["ORD-1001"])

    def test_pagination_envelope(self):
        for i in range(3):
            self._create(order_id=f"ORD-{i}")
        response = self.client.get(ORDERS_URL, {"page": 2, "limit": 2})

        self.assertEqual(response.data["total"], 3)
        self.assertEqual(response.data["total_pages"], 2)
        self.assertEqual(len(response.data["data"]), 1)

    def test_other_org_cannot_see_order(self):
        order_id = self._create().data["id"]
        client = APIClient()
        client.force_authenticate(self.outsider)

        response = client.get(f"{ORDERS_URL}{order_id}/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["message"], "Order not found")
        self.assertEqual(client.get(ORDERS_URL).data["total"], 0)

    def test_malformed_id_is_not_found(self):
        response = self.client.get(f"{ORDERS_URL}not-a-uuid/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete(self):
        order_id = self._create().data["id"]
        response = self.client.delete(f"{ORDERS_URL}{order_id}/")

        self.assertEqual(response.data["message"], "Order deleted successfully")
        self.assertEqual(self.client.get(f"{ORDERS_URL}{order_id}/").status_code, status.HTTP_404_NOT_FOUND)

    def test_employee_is_read_only(self):
        order_id = self._create().data["id"]
        client = APIClient()
        client.force_authenticate(self.employee)

        self.assertEqual(client.get(ORDERS_URL).status_code, status.HTTP_200_OK)
        response = client.post(ORDERS_URL, order_payload(order_id="ORD-9"), format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        response = client.patch(f"{ORDERS_URL}{order_id}/status/", {"status": "Shipped"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        response = client.get(f"{ORDERS_URL}export/download/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_export_csv(self):
        self._create()
        self._create(order_id="ORD-1002")

        response = self.client.get(f"{ORDERS_URL}export/download/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response["Content-Disposition"], "attachment; filename=orders-export.csv")

        lines = response.content.decode().splitlines()
        self.assertEqual(len(lines), 3)
        self.assertEqual(
            lines[0],
            "order_id,asset_name,quantity,supplier,order_date,estimated_delivery,current_location,status",
        )
        self.assertIn("ORD-1001,MacBook Pro,5,Apple Store,2024-01-15,2024-01-25,Supplier Warehouse,Ordered", lines)


@override_settings(ORDER_STORE_BACKEND="database")
class DatabaseOrderAPITests(OrderAPIBehaviour, TestCase):

    def test_uses_database_store(self):
        self.assertIsInstance(get_order_repository(), DatabaseOrderRepository)


@override_settings(ORDER_STORE_BACKEND="memory")
class InMemoryOrderAPITests(OrderAPIBehaviour, TestCase):

    def test_uses_memory_store(self):
        self.assertIsInstance(get_order_repository(), InMemoryOrderRepository)

    def test_nothing_written_to_database(self):
        self._create()
        self.assertEqual(ProcurementOrder.objects.count(), 0)


class OrderRepositorySelectionTests(TestCase):

    def test_auto_falls_back_when_database_is_down(self):
        with mock.patch("apps.orders.repositories.connection") as conn:
            conn.ensure_connection.side_effect = OperationalError("connection refused")
            with self.assertLogs("apps.orders.repositories", level="WARNING"):
                repo = build_order_repository("auto")
        self.assertIsInstance(repo, InMemoryOrderRepository)

    def test_auto_prefers_database(self):
        self.assertIsInstance(build_order_repository("auto"), DatabaseOrderRepository)

    def test_unknown_backend(self):
        with self.assertRaises(ImproperlyConfigured):
            build_order_repository("redis")


class InMemoryOrderRepositoryTests(TestCase):

    def setUp(self):
        self.org = Organization.objects.create(name="Acme")
        self.repo = InMemoryOrderRepository()

    def _order(self, order_id):
        return ProcurementOrder(
            org=self.org, order_id=order_id, asset_name="x", quantity=1, supplier="s",
            estimated_delivery=datetime.date(2024, 1, 1), current_location="c",
        )

    def test_orders_newest_first(self):
        now = timezone.now()
        with mock.patch("apps.orders.repositories.timezone") as tz:
            tz.now.side_effect = [now - datetime.timedelta(minutes=1), now]
            older = self.repo.add(self._order("A"))
            self.repo.add(self._order("B"))

        self.assertEqual([o.order_id for o in self.repo.list(self.org)], ["B", "A"])
        self.assertTrue(self.repo.order_id_exists(self.org, "A"))
        self.assertFalse(self.repo.order_id_exists(self.org, "A", exclude_pk=older.pk))

    def test_edits_stay_local_until_saved(self):
        order = self.repo.add(self._order("A"))

        fetched = self.repo.get(self.org, order.pk)
        fetched.asset_name = "Edited"
        self.assertEqual(self.repo.get(self.org, order.pk).asset_name, "x")

        self.repo.save(fetched)
        self.assertEqual(self.repo.get(self.org, order.pk).asset_name, "Edited")

    def test_rejected_rename_leaves_stored_order_untouched(self):
        order = self.repo.add(self._order("A"))
        fetched = self.repo.get(self.org, order.pk)

        # Another writer takes the id between read and save
        self.repo.add(self._order("B"))
        fetched.order_id = "B"
        with self.assertRaises(BusinessLogicException):
            self.repo.save(fetched)

        self.assertEqual(self.repo.get(self.org, order.pk).order_id, "A")
        self.assertEqual(sorted(o.order_id for o in self.repo.list(self.org)), ["A", "B"])

    def test_service_update_with_taken_id_changes_nothing(self):
        actor = User.objects.create_user(email="admin@acme.test", password="x" * 8, org=self.org, role=Role.ADMIN)
        service = OrderService(repository=self.repo)
        first = service.create_order(self.org, actor, {
            "order_id": "A", "asset_name": "x", "quantity": 1, "supplier": "s",
            "estimated_delivery": datetime.date(2024, 1, 1), "current_location": "c",
        })
        service.create_order(self.org, actor, {
            "order_id": "B", "asset_name": "y", "quantity": 1, "supplier": "s",
            "estimated_delivery": datetime.date(2024, 1, 1), "current_location": "c",
        })

        with self.assertRaises(BusinessLogicException):
            service.update_order(self.org, first.pk, actor, {"order_id": "B", "asset_name": "changed"})

        stored = service.get_order(self.org, first.pk)
        self.assertEqual((stored.order_id, stored.asset_name), ("A", "x"))

# apps/utils/tests.py
import json
from io import StringIO
import logging

from django.core.management import call_command
from django.test import TestCase, RequestFactory, override_settings
from rest_framework.exceptions import ValidationError
from rest_framework.request import Request

from .csv_export import csv_response
from .logging import JSONFormatter
from .pagination import StandardResultsSetPagination
from .validators import validate_phone, validate_not_blank


class ValidatorTests(TestCase):
    def test_phone_validator(self):
        self.assertEqual(validate_phone("+91 98765 43210"), "+91 98765 43210")
        self.assertEqual(validate_phone(""), "")
        with self.assertRaises(ValidationError):
            validate_phone("123")  # Invalid

    def test_not_blank_strips(self):
        self.assertEqual(validate_not_blank("  Asha "), "Asha")
        with self.assertRaises(ValidationError):
            validate_not_blank("   ")


class PaginationTests(TestCase):
    def setUp(self):
        self.factory = RequestFactory()
        self.items = list(range(25))

    def _paginate(self, query):
        paginator = StandardResultsSetPagination()
        request = Request(self.factory.get("/api/things/", query))
        page = paginator.paginate_queryset(self.items, request)
        return page, paginator.get_paginated_response(page).data

    def test_defaults(self):
        page, data = self._paginate({})
        self.assertEqual(page, list(range(10)))
        self.assertEqual(data["total"], 25)
        self.assertEqual(data["page"], 1)
        self.assertEqual(data["limit"], 10)
        self.assertEqual(data["total_pages"], 3)

    def test_limit_is_clamped(self):
        _, data = self._paginate({"limit": 1000})
        self.assertEqual(data["limit"], 100)
        _, data = self._paginate({"limit": 0})
        self.assertEqual(data["limit"], 1)

    def test_garbage_falls_back_to_defaults(self):
        _, data = self._paginate({"page": "abc", "limit": "x"})
        self.assertEqual((data["page"], data["limit"]), (1, 10))

    def test_page_past_end_is_empty(self):
        page, data = self._paginate({"page": 9})
        self.assertEqual(page, [])
        self.assertEqual(data["total"], 25)


class JSONFormatterTests(TestCase):
    def test_sensitive_keys_are_redacted(self):
        record = logging.LogRecord(
            "apps.accounts", logging.INFO, __file__, 1,
            {"email": "a@b.test", "password": "hunter2", "nested": {"token": "abc"}}, None, None,
        )
        record.user_id = 7
        out = json.loads(JSONFormatter().format(record))

        self.assertNotIn("hunter2", out["msg"])
        self.assertNotIn("abc", out["msg"])
        self.assertIn("a@b.test", out["msg"])
        self.assertEqual(out["user_id"], "7")
        self.assertEqual(out["lvl"], "INFO")


class CsvResponseTests(TestCase):
    def test_header_row_always_written(self):
        response = csv_response("things", ("name", "qty"), [])
        self.assertEqual(response["Content-Type"], "text/csv")
        self.assertEqual(response["Content-Disposition"], "attachment; filename=things.csv")
        self.assertEqual(response.content.decode().splitlines(), ["name,qty"])

    def test_rows_from_dicts(self):
        response = csv_response("things", ("name", "qty"), [{"name": "Cable", "qty": 3}, {"name": None, "qty": 0}])
        self.assertEqual(response.content.decode().splitlines(), ["name,qty", "Cable,3", ",0"])


class PublicEndpointTests(TestCase):
    def test_root_banner(self):
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"ok": True, "app": "ITraX API"})

    def test_health_check(self):
        response = self.client.get("/api/health/")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["components"]["db"], "ok")
        self.assertIn(body["components"]["order_store"], ("database", "memory"))

    def test_unauthenticated_api_call_is_401(self):
        response = self.client.get("/api/assets/")
        self.assertEqual(response.status_code, 401)
        self.assertIn("message", response.json())


@override_settings(ORDER_STORE_BACKEND="database")
class SeedDemoCommandTests(TestCase):
    def setUp(self):
        from apps.orders.repositories import get_order_repository

        get_order_repository.cache_clear()
        self.addCleanup(get_order_repository.cache_clear)

    def test_seed_is_idempotent(self):
        from apps.accounts.models import Organization, Role
        from apps.assets.models import Asset
        from apps.orders.models import ProcurementOrder

        out = StringIO()
        call_command("seed_demo", "--org", "Seed Co", "--password", "secret123", stdout=out)
        call_command("seed_demo", "--org", "Seed Co", "--password", "secret123", stdout=out)

        org = Organization.objects.get(name="Seed Co")
        self.assertEqual(org.users.filter(role=Role.ADMIN).count(), 1)
        self.assertEqual(Asset.objects.filter(org=org).count(), 8)
        self.assertEqual(ProcurementOrder.objects.filter(org=org).count(), 3)

        delivered = ProcurementOrder.objects.get(org=org, order_id="ORD-DEMO-3")
        self.assertEqual(len(delivered.tracking_history), 6)
        self.assertIn("0 new orders", out.getvalue())


class MigrationStateTests(TestCase):
    def test_models_match_migrations(self):
        out = StringIO()
        try:
            call_command("makemigrations", "--check", "--dry-run", stdout=out, stderr=out)
        except SystemExit:
            self.fail(f"Models have changes without a migration:\n{out.getvalue()}")

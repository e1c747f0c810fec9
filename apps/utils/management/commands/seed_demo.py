import datetime
from decimal import Decimal

from decouple import config
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import Organization, Role
from apps.assets.models import Asset
from apps.catalog.models import Category, Location, LocationType
from apps.inventory.models import InventoryItem
from apps.licenses.models import License
from apps.orders.models import OrderStatus
from apps.orders.services import OrderService

User = get_user_model()

CATEGORIES = [
    ("Laptops", "Laptop"),
    ("Monitors", "Monitor"),
    ("Phones", "Smartphone"),
    ("Networking", "Router"),
]

LOCATIONS = [
    ("HQ Office", LocationType.OFFICE, "Bengaluru"),
    ("Central Warehouse", LocationType.WAREHOUSE, "Pune"),
]

EMPLOYEES = [
    ("Asha", "Rao", "Engineering"),
    ("Vikram", "Singh", "Finance"),
    ("Meera", "Iyer", "Support"),
]

# order_id -> stages the order has moved through
ORDERS = {
    "ORD-DEMO-1": [OrderStatus.ORDERED],
    "ORD-DEMO-2": [OrderStatus.ORDERED, OrderStatus.PROCESSING, OrderStatus.SHIPPED],
    "ORD-DEMO-3": [OrderStatus.ORDERED, OrderStatus.PROCESSING, OrderStatus.SHIPPED,
                   OrderStatus.IN_TRANSIT, OrderStatus.OUT_FOR_DELIVERY, OrderStatus.DELIVERED],
}


class Command(BaseCommand):
    help = "Seed an idempotent demo organization with assets, licenses, stock and orders"

    def add_arguments(self, parser):
        parser.add_argument('--org', type=str, default="ITraX Demo", help='Organization name')
        parser.add_argument('--password', type=str, default=None, help='Password for every demo account')

    def handle(self, *args, **options):
        password = options['password'] or config("DEMO_PASSWORD", default="demo1234")
        today = timezone.localdate()

        with transaction.atomic():
            org, _ = Organization.objects.get_or_create(name=options['org'])
            domain = org.name.lower().replace(" ", "") + ".test"

            admin = self._user(org, f"admin@{domain}", password, "Demo", "Admin", Role.ADMIN, "IT")
            employees = [
                self._user(org, f"{first.lower()}@{domain}", password, first, last, Role.EMPLOYEE, dept)
                for first, last, dept in EMPLOYEES
            ]

            categories = {}
            for name, icon in CATEGORIES:
                categories[name], _ = Category.objects.get_or_create(
                    org=org, name=name, defaults={"icon_key": icon, "created_by": admin}
                )

            locations = {}
            for name, loc_type, city in LOCATIONS:
                locations[name], _ = Location.objects.get_or_create(
                    org=org, name=name,
                    defaults={"type": loc_type, "city": city, "country": "India", "capacity": 200, "created_by": admin},
                )

            for i in range(1, 9):
                assignee = employees[i % len(employees)] if i % 2 else None
                Asset.objects.get_or_create(
                    org=org,
                    asset_tag=f"AST-{i:04d}",
                    defaults={
                        "manufacturer": "Dell" if i % 3 else "Apple",
                        "model": f"Model {i}",
                        "serial_number": f"SN-DEMO-{i:04d}",
                        "category": categories["Laptops" if i < 5 else "Monitors"],
                        "location": locations["HQ Office"],
                        "assigned_to": assignee,
                        "purchase_date": today - datetime.timedelta(days=30 * i),
                        "warranty_expiry": today + datetime.timedelta(days=365 - 30 * i),
                        "cost": Decimal("850.00") + i * 25,
                        "created_by": admin,
                    },
                )

            for name, vendor, days in [("Office Suite", "Microsoft", 200), ("IDE", "JetBrains", 20), ("VPN", "Acme", -5)]:
                if not License.objects.filter(org=org, name=name).exists():
                    License.objects.create(
                        org=org, name=name, vendor=vendor, seats_total=25, seats_assigned=10,
                        renewal_date=today + datetime.timedelta(days=days), cost=Decimal("1200.00"),
                        created_by=admin,
                    )

            for name, sku, on_hand, minimum in [("USB-C Cable", "CAB-USBC", 40, 10), ("Toner", "TON-01", 2, 5)]:
                InventoryItem.objects.get_or_create(
                    org=org, sku=sku,
                    defaults={
                        "name": name, "quantity_on_hand": on_hand, "quantity_minimum": minimum,
                        "cost_per_item": Decimal("9.50"), "location": locations["Central Warehouse"],
                        "created_by": admin,
                    },
                )

        service = OrderService()
        created_orders = 0
        for order_id, stages in ORDERS.items():
            if service.repository.order_id_exists(org, order_id):
                continue
            order = service.create_order(org, admin, {
                "order_id": order_id,
                "asset_name": "Laptop batch",
                "quantity": 5,
                "supplier": "Acme Supplies",
                "estimated_delivery": today + datetime.timedelta(days=14),
                "current_location": "Supplier warehouse",
            })
            for stage in stages[1:]:
                service.update_status(org, order.pk, stage, admin)
            created_orders += 1

        self.stdout.write(self.style.SUCCESS(
            f"Demo org '{org.name}' ready: admin@{domain} / {password} ({created_orders} new orders)"
        ))

    def _user(self, org, email, password, first, last, role, department):
        user = User.objects.filter(org=org, email=email).first()
        if user:
            return user
        return User.objects.create_user(
            email=email, password=password, org=org, first_name=first,
            last_name=last, role=role, department=department,
        )

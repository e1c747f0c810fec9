"""
Storage for procurement orders.

Two interchangeable implementations share one contract: the same search
fields, newest-first ordering and uniqueness rule for `order_id`. The active
one is chosen once per process by `get_order_repository()` and handed to
`OrderService`.
"""
import copy
import logging
import threading
import uuid
from abc import ABC, abstractmethod
from functools import lru_cache

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.db import DatabaseError, IntegrityError, connection, transaction
from django.db.models import Q
from django.utils import timezone

from apps.utils.exceptions import BusinessLogicException
from .models import ProcurementOrder

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("order_id", "asset_name", "supplier")


def _duplicate_order_id():
    return BusinessLogicException("Order ID already exists", code="duplicate_order_id")


class OrderRepository(ABC):
    backend_name = None

    @abstractmethod
    def list(self, org, search=None, status=None):
        """Orders of `org`, newest first. Returns a sliceable sequence."""

    @abstractmethod
    def get(self, org, pk):
        """The order or None."""

    @abstractmethod
    def count(self, org) -> int:
        ...

    @abstractmethod
    def order_id_exists(self, org, order_id, exclude_pk=None) -> bool:
        ...

    @abstractmethod
    def add(self, order):
        ...

    @abstractmethod
    def save(self, order):
        ...

    @abstractmethod
    def delete(self, order):
        ...


class DatabaseOrderRepository(OrderRepository):
    backend_name = "database"

    def _for_org(self, org):
        return ProcurementOrder.objects.filter(org=org).select_related("created_by")

    def list(self, org, search=None, status=None):
        qs = self._for_org(org)
        if search:
            query = Q()
            for field in SEARCH_FIELDS:
                query |= Q(**{f"{field}__icontains": search})
            qs = qs.filter(query)
        if status:
            qs = qs.filter(status=status)
        return qs.order_by("-created_at")

    def get(self, org, pk):
        return self._for_org(org).filter(pk=pk).first()

    def count(self, org):
        return self._for_org(org).count()

    def order_id_exists(self, org, order_id, exclude_pk=None):
        qs = ProcurementOrder.objects.filter(org=org, order_id=order_id)
        if exclude_pk is not None:
            qs = qs.exclude(pk=exclude_pk)
        return qs.exists()

    def add(self, order):
        try:
            with transaction.atomic():
                order.save(force_insert=True)
        except IntegrityError:
            # Lost a race against a concurrent insert of the same order_id
            raise _duplicate_order_id()
        return order

    def save(self, order):
        try:
            with transaction.atomic():
                order.save()
        except IntegrityError:
            raise _duplicate_order_id()
        return order

    def delete(self, order):
        order.delete()


class InMemoryOrderRepository(OrderRepository):
    """
    Process-local store of unsaved `ProcurementOrder` instances.
    Nothing survives a restart and nothing is shared between workers.
    """
    backend_name = "memory"

    def __init__(self):
        self._orders = {}
        self._lock = threading.Lock()

    def _for_org(self, org):
        return [o for o in self._orders.values() if o.org_id == org.pk]

    def list(self, org, search=None, status=None):
        with self._lock:
            orders = self._for_org(org)

        if search:
            needle = search.lower()
            orders = [
                o for o in orders
                if any(needle in (getattr(o, field) or "").lower() for field in SEARCH_FIELDS)
            ]
        if status:
            orders = [o for o in orders if o.status == status]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def get(self, org, pk):
        with self._lock:
            order = self._orders.get(uuid.UUID(str(pk)))
        if order is None or order.org_id != org.pk:
            return None
        # Callers edit a copy; the stored order only changes through save()
        return copy.copy(order)

    def count(self, org):
        with self._lock:
            return len(self._for_org(org))

    def order_id_exists(self, org, order_id, exclude_pk=None):
        with self._lock:
            return any(
                o.order_id == order_id and o.pk != exclude_pk
                for o in self._for_org(org)
            )

    def add(self, order):
        with self._lock:
            if any(o.order_id == order.order_id for o in self._for_org(order.org)):
                raise _duplicate_order_id()
            order.created_at = order.updated_at = timezone.now()
            self._orders[order.pk] = copy.copy(order)
        return order

    def save(self, order):
        with self._lock:
            clash = any(
                o.order_id == order.order_id and o.pk != order.pk
                for o in self._for_org(order.org)
            )
            if clash:
                raise _duplicate_order_id()
            order.updated_at = timezone.now()
            self._orders[order.pk] = copy.copy(order)
        return order

    def delete(self, order):
        with self._lock:
            self._orders.pop(order.pk, None)

    def clear(self):
        with self._lock:
            self._orders.clear()


def build_order_repository(backend: str) -> OrderRepository:
    backend = (backend or "database").lower()

    if backend == "memory":
        return InMemoryOrderRepository()

    if backend == "auto":
        try:
            connection.ensure_connection()
        except DatabaseError as exc:
            logger.warning("Database unreachable (%s); procurement orders fall back to in-memory storage", exc)
            return InMemoryOrderRepository()
        return DatabaseOrderRepository()

    if backend == "database":
        return DatabaseOrderRepository()

    raise ImproperlyConfigured(
        f"ORDER_STORE_BACKEND must be 'database', 'memory' or 'auto', got {backend!r}"
    )


@lru_cache(maxsize=1)
def get_order_repository() -> OrderRepository:
    """
    Process-wide repository, resolved on first use. Tests call
    `get_order_repository.cache_clear()` after overriding the setting.
    """
    repository = build_order_repository(settings.ORDER_STORE_BACKEND)
    logger.info("Procurement order store: %s", repository.backend_name)
    return repository

import logging
import uuid

from django.db import DatabaseError
from rest_framework.exceptions import NotFound

from apps.notifications.models import NotificationType
from apps.notifications.services import notify_user
from apps.utils.exceptions import BusinessLogicException
from apps.utils.utils import generate_order_id
from .models import OrderStatus, ProcurementOrder
from .repositories import get_order_repository

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "asset_name", "quantity", "supplier", "order_date",
    "estimated_delivery", "current_location", "notes",
)


class OrderService:
    """
    Procurement order workflow on top of an `OrderRepository`.

    Status may move to any of the six stages in any order; every change
    appends exactly one tracking entry.
    """

    def __init__(self, repository=None):
        self.repository = repository or get_order_repository()

    def list_orders(self, org, search=None, status=None):
        return self.repository.list(org, search=search or None, status=status or None)

    def get_order(self, org, pk):
        try:
            uuid.UUID(str(pk))
        except ValueError:
            raise NotFound("Order not found")

        order = self.repository.get(org, pk)
        if order is None:
            raise NotFound("Order not found")
        return order

    def create_order(self, org, actor, data: dict):
        order_id = (data.get("order_id") or "").strip()
        if not order_id:
            order_id = generate_order_id(self.repository.count(org) + 1)

        if self.repository.order_id_exists(org, order_id):
            raise BusinessLogicException("Order ID already exists", code="duplicate_order_id")

        status = data.get("status") or OrderStatus.ORDERED
        order = ProcurementOrder(
            org=org,
            created_by=actor,
            order_id=order_id,
            status=status,
            tracking_history=[],
            **{field: data[field] for field in EDITABLE_FIELDS if field in data},
        )
        order.append_tracking(status)
        order = self.repository.add(order)

        logger.info(
            "Procurement order %s created", order.order_id,
            extra={"order_id": order.order_id, "user_id": actor.pk, "org_id": org.pk},
        )
        return order

    def update_order(self, org, pk, actor, data: dict):
        order = self.get_order(org, pk)

        new_order_id = (data.get("order_id") or "").strip()
        if new_order_id and new_order_id != order.order_id:
            if self.repository.order_id_exists(org, new_order_id, exclude_pk=order.pk):
                raise BusinessLogicException("Order ID already exists", code="duplicate_order_id")
            order.order_id = new_order_id

        for field in EDITABLE_FIELDS:
            if field in data:
                setattr(order, field, data[field])

        new_status = data.get("status")
        status_changed = bool(new_status) and new_status != order.status
        if status_changed:
            order.status = new_status
            order.append_tracking(new_status)

        order = self.repository.save(order)
        if status_changed:
            self._notify_creator(order)
        return order

    def update_status(self, org, pk, status, actor):
        if status not in OrderStatus.values:
            raise BusinessLogicException("Invalid status", code="invalid_status")

        order = self.get_order(org, pk)
        previous = order.status
        order.status = status
        order.append_tracking(status)
        order = self.repository.save(order)

        logger.info(
            "Order %s status %s -> %s", order.order_id, previous, status,
            extra={"order_id": order.order_id, "user_id": actor.pk, "org_id": org.pk},
        )
        self._notify_creator(order)
        return order

    def delete_order(self, org, pk):
        order = self.get_order(org, pk)
        self.repository.delete(order)
        logger.info("Order %s deleted", order.order_id, extra={"order_id": order.order_id, "org_id": org.pk})

    def _notify_creator(self, order):
        if not order.created_by_id:
            return
        try:
            notify_user(
                order.created_by,
                "Order status updated",
                f"Order {order.order_id} ({order.asset_name}) is now {OrderStatus(order.status).label}",
                type=NotificationType.ORDER_STATUS,
                data={"order_id": order.order_id, "status": order.status},
            )
        except DatabaseError:
            # The in-memory order store keeps working while the database is down
            logger.warning("Could not notify creator of order %s", order.order_id, exc_info=True)

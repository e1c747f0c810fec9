# apps/notifications/services.py
import logging

from django.utils import timezone

from .models import Notification, NotificationType

logger = logging.getLogger(__name__)


def notify_user(
    user,
    title: str,
    message: str,
    *,
    type: str = NotificationType.INFO,
    data: dict | None = None,
) -> Notification | None:
    """
    Main entry point for other apps.

    Example usage:
        notify_user(
            order.created_by,
            "Order shipped",
            f"Order {order.order_id} is now Shipped",
            type=NotificationType.ORDER_STATUS,
            data={"order_id": order.order_id},
        )
    """
    if not user:
        return None

    notification = Notification.objects.create(
        user=user,
        type=type,
        title=title,
        message=message,
        data=data or {},
    )
    logger.info(
        "Notification created for user=%s type=%s",
        user.pk,
        type,
    )
    return notification


def notify_users(users, title: str, message: str, **kwargs) -> list[Notification]:
    return [n for n in (notify_user(u, title, message, **kwargs) for u in users) if n]


def mark_all_read(user) -> int:
    return Notification.objects.filter(user=user, is_read=False).update(
        is_read=True,
        read_at=timezone.now(),
    )

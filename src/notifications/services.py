"""Service functions for the notifications app."""
import logging

from django.db.models import Q
from django.utils import timezone

from notifications.models import Notification

logger = logging.getLogger("spadesk")


def create_notification(business, notification_type, title, message, user=None, data=None):
    """Create and return a new Notification.

    Parameters
    ----------
    business : stores.models.Business
        The tenant the notification belongs to.
    notification_type : str
        One of ``Notification.Type`` values.
    title, message : str
        Human-readable content.
    user : accounts.models.User, optional
        Recipient; ``None`` addresses the whole business.
    data : dict, optional
        Extra JSON-serialisable data.
    """
    notification = Notification.objects.create(
        business=business,
        user=user,
        notification_type=notification_type,
        title=title,
        message=message,
        data=data or {},
    )
    logger.info(
        "Notification created: [%s] %s for business %s (user=%s)",
        notification_type, title, business.pk, getattr(user, "pk", None),
    )
    return notification


def notifications_for(user, business):
    """Notifications visible to *user*: personal ones and business-wide ones."""
    return Notification.objects.filter(business=business).filter(
        Q(user=user) | Q(user__isnull=True)
    )


def mark_all_read(user, business) -> int:
    return notifications_for(user, business).filter(is_read=False).update(
        is_read=True,
        read_at=timezone.now(),
    )

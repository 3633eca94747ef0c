import logging

from .models import Notification

logger = logging.getLogger(__name__)


def notify(
    *,
    recipient,
    title: str,
    message: str,
    type: str = Notification.INFO,
    sender=None,
    link: str = "",
    metadata: dict | None = None,
) -> Notification:
    """Store a notification in `recipient`'s inbox."""

    notification = Notification.objects.create(
        recipient=recipient,
        sender=sender,
        title=title,
        message=message,
        type=type,
        link=link,
        metadata=metadata or {},
    )
    logger.debug("Notification %s stored for user %s", notification.pk, recipient.pk)
    return notification


def unread_count(user) -> int:
    return Notification.objects.filter(recipient=user, read=False).count()


def mark_all_read(user) -> int:
    return Notification.objects.filter(recipient=user, read=False).update(read=True)


def clear_inbox(user) -> int:
    deleted, _ = Notification.objects.filter(recipient=user).delete()
    return deleted

"""
Celery tasks for notification delivery.

Tasks:
    deliver_event: Push one event to the Channels group of each recipient

Usage:
    # Normally scheduled by Notifier.emit() after commit
    deliver_event.delay("refetch-chat-list", ["12", "31"], None)
"""

from __future__ import annotations

import logging

from asgiref.sync import async_to_sync
from celery import shared_task
from channels.layers import get_channel_layer

from notifications.events import user_group_name

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    autoretry_for=(ConnectionError, OSError),
    retry_backoff=True,
    retry_kwargs={"max_retries": 3},
    ignore_result=True,
)
def deliver_event(self, event: str, recipient_ids: list[str], payload: dict | None = None) -> int:
    """
    Broadcast an event to every recipient's channel group.

    Users without an open socket simply have an empty group; nothing is
    stored for later delivery.

    Returns:
        Number of groups the event was sent to
    """
    channel_layer = get_channel_layer()
    if channel_layer is None:
        logger.warning(f"No channel layer configured; dropping '{event}'")
        return 0

    message = {
        "type": "notification.event",
        "event": event,
        "payload": payload,
    }
    for user_id in recipient_ids:
        async_to_sync(channel_layer.group_send)(user_group_name(user_id), message)

    logger.info(f"Delivered '{event}' to {len(recipient_ids)} users")
    return len(recipient_ids)

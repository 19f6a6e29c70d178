"""
Notifier: fire-and-forget event emission.

Usage:
    from notifications.events import NotificationEvent
    from notifications.services import Notifier

    Notifier.emit(
        NotificationEvent.REFETCH_CHAT_LIST,
        recipient_ids=[alice.id, bob.id],
    )

Delivery is deferred until the current transaction commits, so a rolled
back mutation never notifies anyone. Failing to enqueue is logged and never
raised to the caller: a notification is not worth failing a request over.
"""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING

from django.db import transaction

from core.services import BaseService
from notifications import tasks

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import Any


class Notifier(BaseService):
    """Emit domain events to users' WebSocket connections."""

    @classmethod
    def emit(
        cls,
        event: str,
        recipient_ids: Iterable[Any],
        payload: dict[str, Any] | None = None,
    ) -> None:
        """
        Queue an event for the given users.

        Args:
            event: A NotificationEvent value
            recipient_ids: User ids; duplicates are delivered once
            payload: JSON-serializable data sent with the event
        """
        recipients = [str(user_id) for user_id in dict.fromkeys(recipient_ids)]
        if not recipients:
            return

        transaction.on_commit(
            partial(cls._dispatch, str(event), recipients, payload)
        )

    @classmethod
    def _dispatch(
        cls,
        event: str,
        recipients: list[str],
        payload: dict[str, Any] | None,
    ) -> None:
        try:
            tasks.deliver_event.delay(event, recipients, payload)
        except Exception:
            cls.get_logger().exception(
                f"Could not enqueue '{event}' for {len(recipients)} recipients"
            )
            return

        cls.get_logger().debug(f"Queued '{event}' for users {', '.join(recipients)}")

"""
WebSocket consumer streaming notification events to a user.

Authentication:
    JWTAuthMiddleware attaches the user to scope["user"] from the ?token=
    query parameter. Anonymous connections are closed with code 4001.

Channel Groups:
    Every socket of a user joins "user_<id>"; notifications.tasks sends to
    that group.

Message Types (from client):
    - ping: answered with {"event": "pong"}

Message Types (to client):
    - {"event": "<kind>", "payload": ...} for each NotificationEvent
"""

from __future__ import annotations

import logging

from channels.generic.websocket import AsyncJsonWebsocketConsumer
from django.contrib.auth.models import AnonymousUser

from notifications.events import user_group_name

logger = logging.getLogger(__name__)


class NotificationConsumer(AsyncJsonWebsocketConsumer):
    """Joins the user's group and relays events to the socket."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.group_name: str | None = None

    async def connect(self):
        user = self.scope.get("user")

        if not user or isinstance(user, AnonymousUser) or not user.is_authenticated:
            logger.warning("Rejected unauthenticated notification socket")
            await self.close(code=4001)
            return

        self.group_name = user_group_name(user.id)
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()
        logger.info(f"User {user.id} connected to notifications")

    async def disconnect(self, close_code):
        if self.group_name:
            await self.channel_layer.group_discard(self.group_name, self.channel_name)
            logger.info(f"Notification socket for {self.group_name} closed ({close_code})")

    async def receive_json(self, content, **kwargs):
        if content.get("type") == "ping":
            await self.send_json({"event": "pong"})
        else:
            await self.send_json(
                {
                    "event": "error",
                    "payload": {"message": f"Unknown message type: {content.get('type')}"},
                }
            )

    async def notification_event(self, message):
        """Handler for group messages of type "notification.event"."""
        await self.send_json(
            {
                "event": message["event"],
                "payload": message.get("payload"),
            }
        )

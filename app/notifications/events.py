"""
Event kinds pushed to clients and the Channels group naming scheme.

Clients receive frames shaped as:
    {"event": "<kind>", "payload": {...} | null}
"""

from django.db import models


class NotificationEvent(models.TextChoices):
    """
    Event kinds emitted by the chat services.

    NEW_FRIEND_REQUEST: A user received a friend request
    ALERT: Human-readable group notice ("X has left the group")
    REFETCH_CHAT_LIST: The recipient's chat list changed; reload it
    NEW_MESSAGE_ALERT: Unread marker for a chat (payload carries chat_id)
    NEW_ATTACHMENT: A message with attachments was appended
    NEW_MESSAGE: A text-only message was appended
    """

    NEW_FRIEND_REQUEST = "new-friend-request", "New friend request"
    ALERT = "alert", "Alert"
    REFETCH_CHAT_LIST = "refetch-chat-list", "Refetch chat list"
    NEW_MESSAGE_ALERT = "new-message-alert", "New message alert"
    NEW_ATTACHMENT = "new-attachment", "New attachment"
    NEW_MESSAGE = "new-message", "New message"


def user_group_name(user_id) -> str:
    """Channels group every socket of one user joins."""
    return f"user_{user_id}"

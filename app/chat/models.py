"""
Chat system models.

Models:
    Chat: A direct (two-person) or group conversation
    ChatMember: Membership of a user in a chat
    DirectChatPair: Canonical user pair owning a direct chat
    Message: A message appended to a chat
    Attachment: A blob-store object attached to a message

Design Decisions:
    - Direct chats have exactly two members, no creator and never change
      membership; they exist only through an accepted friend request
    - Group size stays within [2, 30]; services check it on the locked row
    - Deleting a chat is a hard delete; messages and attachments cascade
      after their remote blobs have been removed
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.db.models import F, Q

from core.models import BaseModel


class Chat(BaseModel):
    """
    A conversation between members.

    Fields:
        is_group: Group chats allow membership changes; direct chats do not
        name: Group name, or "Sender-Receiver" for direct chats
        creator: Group administrator; null for direct chats and for groups
            whose last creator left with nobody to succeed them
        members: Users in the chat, through ChatMember
    """

    is_group = models.BooleanField(default=False, db_index=True)
    name = models.CharField(max_length=100)
    creator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_chats",
        help_text="Group administrator (null for direct chats)",
    )
    members = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through="ChatMember",
        related_name="chats",
    )

    class Meta:
        db_table = "chat_chat"
        ordering = ["-updated_at"]
        constraints = [
            models.CheckConstraint(
                condition=Q(is_group=True) | Q(creator__isnull=True),
                name="direct_chat_has_no_creator",
            ),
        ]

    def __str__(self) -> str:
        kind = "group" if self.is_group else "direct"
        return f"Chat {self.pk} ({kind}: {self.name})"

    def member_ids(self) -> list[int]:
        return list(self.memberships.values_list("user_id", flat=True))

    def is_member(self, user) -> bool:
        return self.memberships.filter(user_id=user.pk).exists()


class ChatMember(models.Model):
    """A user's membership in a chat."""

    chat = models.ForeignKey(Chat, on_delete=models.CASCADE, related_name="memberships")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="chat_memberships",
    )
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "chat_member"
        ordering = ["joined_at", "id"]
        constraints = [
            models.UniqueConstraint(fields=["chat", "user"], name="unique_chat_member"),
        ]
        indexes = [
            models.Index(fields=["user", "chat"], name="chat_member_user_idx"),
        ]

    def __str__(self) -> str:
        return f"ChatMember(chat={self.chat_id}, user={self.user_id})"


class DirectChatPair(models.Model):
    """
    One direct chat per unordered pair of users.

    Pairs are stored in canonical order (lower user id first) so the unique
    constraint holds regardless of who sent the friend request.
    """

    chat = models.OneToOneField(
        Chat,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="direct_pair",
    )
    user_lower = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
    )
    user_higher = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
    )

    class Meta:
        db_table = "chat_direct_pair"
        constraints = [
            models.UniqueConstraint(
                fields=["user_lower", "user_higher"],
                name="unique_direct_chat_pair",
            ),
            models.CheckConstraint(
                condition=Q(user_lower_id__lt=F("user_higher_id")),
                name="direct_pair_canonical_order",
            ),
        ]

    def __str__(self) -> str:
        return f"DirectChatPair({self.user_lower_id}, {self.user_higher_id})"


class Message(models.Model):
    """
    A message in a chat.

    Content may be empty when the message carries attachments. Messages are
    immutable; they disappear only when their chat is deleted.
    """

    chat = models.ForeignKey(Chat, on_delete=models.CASCADE, related_name="messages")
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="sent_messages",
    )
    content = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = "chat_message"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["chat", "-created_at"], name="chat_message_page_idx"),
        ]

    def __str__(self) -> str:
        return f"Message {self.pk} in chat {self.chat_id}"


class AttachmentKind(models.TextChoices):
    IMAGE = "image", "Image"
    VIDEO = "video", "Video"
    AUDIO = "audio", "Audio"
    FILE = "file", "File"


class Attachment(models.Model):
    """
    A blob-store object attached to a message.

    remote_id is what the blob store needs to delete the object; url is
    what clients render.
    """

    message = models.ForeignKey(Message, on_delete=models.CASCADE, related_name="attachments")
    remote_id = models.CharField(max_length=255, db_index=True)
    url = models.CharField(max_length=500)
    kind = models.CharField(
        max_length=10,
        choices=AttachmentKind.choices,
        default=AttachmentKind.FILE,
    )
    position = models.PositiveSmallIntegerField(default=0)

    class Meta:
        db_table = "chat_attachment"
        ordering = ["position", "id"]

    def __str__(self) -> str:
        return f"Attachment {self.remote_id} ({self.kind})"

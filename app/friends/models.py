"""
Friend request model.

A request lives only while it is pending: accepting it creates the direct
chat and removes the row, rejecting it removes the row. The accepted and
rejected statuses exist for rows caught between those steps.
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.db.models import F, Q

from core.helpers import canonical_pair
from core.models import BaseModel


class FriendRequestStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    ACCEPTED = "accepted", "Accepted"
    REJECTED = "rejected", "Rejected"


class FriendRequest(BaseModel):
    """
    A proposal from sender to receiver to open a direct chat.

    Fields:
        sender: User who sent the request
        receiver: User who may accept or reject it
        status: pending until answered
        user_lower / user_higher: The pair in canonical order, filled on
            save; backs the one-pending-request-per-pair constraint
    """

    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_friend_requests",
    )
    receiver = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="received_friend_requests",
    )
    status = models.CharField(
        max_length=10,
        choices=FriendRequestStatus.choices,
        default=FriendRequestStatus.PENDING,
        db_index=True,
    )
    user_lower = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
        editable=False,
    )
    user_higher = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
        editable=False,
    )

    class Meta:
        db_table = "friends_friend_request"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user_lower", "user_higher"],
                condition=Q(status="pending"),
                name="unique_pending_friend_request",
            ),
            models.CheckConstraint(
                condition=~Q(sender=F("receiver")),
                name="friend_request_not_to_self",
            ),
        ]

    def __str__(self) -> str:
        return f"FriendRequest {self.pk}: {self.sender_id} -> {self.receiver_id} ({self.status})"

    def save(self, *args, **kwargs):
        self.user_lower_id, self.user_higher_id = canonical_pair(self.sender_id, self.receiver_id)
        super().save(*args, **kwargs)

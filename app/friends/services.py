"""
Relationship ledger: friend requests and the friend list.

Services:
    FriendRequestService
        - send_request: Create a pending request and notify the receiver
        - respond_to_request: Accept (opens the direct chat) or reject
        - list_incoming: Pending requests addressed to a user
        - list_friends: Users sharing a direct chat with a user

Accepting runs in one transaction: the direct chat is get-or-created and
the request row deleted together. Chat creation is idempotent per user
pair, so a retried acceptance never yields a second chat.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db import IntegrityError

from authentication.models import User
from authentication.services import UserService
from chat.models import Chat, DirectChatPair
from chat.services import ChatService
from core.exceptions import ConflictError, NotFoundError, PermissionDeniedError, ValidationError
from core.helpers import canonical_pair
from core.services import BaseService
from friends.models import FriendRequest, FriendRequestStatus
from notifications.events import NotificationEvent
from notifications.services import Notifier

if TYPE_CHECKING:
    from django.db.models import QuerySet


class FriendRequestService(BaseService):
    """Friend request handshake between two users."""

    @classmethod
    def send_request(cls, sender: User, receiver_id: int) -> FriendRequest:
        """
        Send a friend request.

        Error codes:
            SELF_REQUEST: Sender and receiver are the same user
            USER_NOT_FOUND: Receiver does not exist
            REQUEST_PENDING: A pending request exists in either direction
            ALREADY_FRIENDS: The two users already share a direct chat
        """
        if sender.id == receiver_id:
            raise ValidationError(
                "You cannot send a friend request to yourself",
                error_code="SELF_REQUEST",
            )

        receiver = User.objects.filter(pk=receiver_id, is_active=True).first()
        if receiver is None:
            raise NotFoundError(
                "User not found",
                error_code="USER_NOT_FOUND",
                details={"user_id": receiver_id},
            )

        lower_id, higher_id = canonical_pair(sender.id, receiver.id)
        if FriendRequest.objects.filter(
            user_lower_id=lower_id,
            user_higher_id=higher_id,
            status=FriendRequestStatus.PENDING,
        ).exists():
            raise ConflictError(
                "A friend request between you is already pending",
                error_code="REQUEST_PENDING",
            )
        if DirectChatPair.objects.filter(user_lower_id=lower_id, user_higher_id=higher_id).exists():
            raise ConflictError("You are already friends", error_code="ALREADY_FRIENDS")

        try:
            with cls.atomic():
                friend_request = FriendRequest.objects.create(sender=sender, receiver=receiver)
        except IntegrityError:
            # A concurrent request for the same pair committed first
            raise ConflictError(
                "A friend request between you is already pending",
                error_code="REQUEST_PENDING",
            )

        Notifier.emit(
            NotificationEvent.NEW_FRIEND_REQUEST,
            [receiver.id],
            {
                "request_id": friend_request.id,
                "sender": {
                    "id": sender.id,
                    "name": sender.name,
                    "avatar_url": sender.avatar_url,
                },
            },
        )

        cls.get_logger().info(
            f"User {sender.id} sent friend request {friend_request.id} to user {receiver.id}"
        )
        return friend_request

    @classmethod
    def respond_to_request(cls, user: User, request_id: int, accept: bool) -> Chat | None:
        """
        Accept or reject a friend request addressed to the caller.

        Returns:
            The direct chat when accepted, None when rejected

        Error codes:
            REQUEST_NOT_FOUND: No such request (or already answered)
            NOT_RECEIVER: Caller is not the receiver
        """
        with cls.atomic():
            friend_request = (
                FriendRequest.objects.select_for_update()
                .select_related("sender", "receiver")
                .filter(pk=request_id)
                .first()
            )
            if friend_request is None:
                raise NotFoundError(
                    "Friend request not found",
                    error_code="REQUEST_NOT_FOUND",
                    details={"request_id": request_id},
                )
            if friend_request.receiver_id != user.id:
                raise PermissionDeniedError(
                    "Only the receiver can respond to this request",
                    error_code="NOT_RECEIVER",
                )

            sender = friend_request.sender
            if not accept:
                friend_request.delete()
                cls.get_logger().info(f"User {user.id} rejected friend request {request_id}")
                return None

            chat, created = ChatService.create_direct(sender, friend_request.receiver)
            friend_request.delete()

        Notifier.emit(NotificationEvent.REFETCH_CHAT_LIST, [sender.id, user.id])

        cls.get_logger().info(
            f"User {user.id} accepted friend request {request_id}; "
            f"direct chat {chat.id} {'created' if created else 'reused'}"
        )
        return chat

    @classmethod
    def list_incoming(cls, user: User) -> QuerySet[FriendRequest]:
        """Pending requests addressed to the user, newest first."""
        return (
            FriendRequest.objects.filter(receiver=user, status=FriendRequestStatus.PENDING)
            .select_related("sender")
            .order_by("-created_at", "-id")
        )

    @classmethod
    def list_friends(cls, user: User, chat_id: int | None = None) -> QuerySet[User]:
        """
        Users sharing a direct chat with the caller, by name.

        Args:
            chat_id: When given, friends already in that chat are left out
                (used when picking members to add to a group)

        Error codes:
            CHAT_NOT_FOUND: chat_id does not exist
            NOT_MEMBER: Caller is not in that chat
        """
        queryset = User.objects.filter(id__in=UserService.friend_ids(user), is_active=True)

        if chat_id is not None:
            chat = Chat.objects.filter(pk=chat_id).first()
            if chat is None:
                raise NotFoundError(
                    "Chat not found",
                    error_code="CHAT_NOT_FOUND",
                    details={"chat_id": chat_id},
                )
            if not chat.is_member(user):
                raise PermissionDeniedError(
                    "You are not a member of this chat",
                    error_code="NOT_MEMBER",
                )
            queryset = queryset.exclude(id__in=chat.member_ids())

        return queryset.order_by("name", "id")

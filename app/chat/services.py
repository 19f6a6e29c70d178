"""
Chat service layer: membership rules, messages and chat deletion.

Services:
    ChatService: Group and direct chat lifecycle
        - create_direct: Get or create the direct chat of a user pair
        - create_group: Create a group of 3 to 30 members
        - add_members / remove_member / leave / rename
        - delete_chat: Remove a chat, its messages and their blobs
        - list_for_user / list_my_groups / get_details
    MessageService: Append to and page through a chat, upload attachments
    AttachmentCleanupService: Cascade run by ChatService.delete_chat

Concurrency:
    Every membership mutation locks the chat row with select_for_update()
    inside a transaction and validates size limits against the membership
    read under that lock, so concurrent add/remove/leave calls on one chat
    are applied one after another.

Errors:
    Methods raise core.exceptions errors:
    - NotFoundError: chat or user does not exist
    - PermissionDeniedError: caller is not the creator or not a member
    - ValidationError: size limits, blank names, empty messages
    - ExternalServiceError: blob store could not delete attachments

Notifications are emitted through Notifier after commit.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import IntegrityError
from django.db.models import Prefetch

from chat.constants import GROUP_CONFIG, MESSAGE_CONFIG
from chat.models import Attachment, Chat, ChatMember, DirectChatPair, Message
from chat.serializers import MessageSerializer
from core.exceptions import (
    ExternalServiceError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from core.helpers import calculate_pagination, canonical_pair
from core.services import BaseService
from media.services import AttachmentDescriptor, get_blob_store
from notifications.events import NotificationEvent
from notifications.services import Notifier

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from typing import Any

    from authentication.models import User


# =============================================================================
# Shared lookups
# =============================================================================


def _get_chat(chat_id, lock: bool = False) -> Chat:
    queryset = Chat.objects.select_for_update() if lock else Chat.objects.all()
    try:
        return queryset.get(pk=chat_id)
    except Chat.DoesNotExist:
        raise NotFoundError(
            "Chat not found",
            error_code="CHAT_NOT_FOUND",
            details={"chat_id": chat_id},
        )


def _require_member(chat: Chat, user: User) -> None:
    if not chat.is_member(user):
        raise PermissionDeniedError(
            "You are not a member of this chat",
            error_code="NOT_MEMBER",
        )


def _load_users(user_ids: Iterable[int]) -> dict[int, User]:
    """Fetch users by id, raising NotFoundError if any id is unknown."""
    wanted = set(user_ids)
    users = get_user_model().objects.in_bulk(wanted)
    missing = wanted - set(users)
    if missing:
        raise NotFoundError(
            "One or more users do not exist",
            error_code="USER_NOT_FOUND",
            details={"user_ids": sorted(missing)},
        )
    return users


# =============================================================================
# ChatService
# =============================================================================


class ChatService(BaseService):
    """
    Chat registry: who is in which chat and who administers it.

    Direct chats are created only through accepted friend requests
    (friends.services.FriendRequestService) and never change membership.
    """

    @classmethod
    def _require_group(cls, chat: Chat) -> None:
        if not chat.is_group:
            raise ValidationError(
                "This operation is only allowed on group chats",
                error_code="NOT_GROUP",
            )

    @classmethod
    def _require_creator(cls, chat: Chat, user: User) -> None:
        if chat.creator_id != user.id:
            raise PermissionDeniedError(
                "Only the group admin can do this",
                error_code="NOT_CREATOR",
            )

    @classmethod
    def _clean_name(cls, name: str | None) -> str:
        cls.validate_required(name=name)
        name = name.strip()
        if len(name) > GROUP_CONFIG.MAX_NAME_LENGTH:
            raise ValidationError(
                f"Group name cannot exceed {GROUP_CONFIG.MAX_NAME_LENGTH} characters",
                error_code="NAME_TOO_LONG",
            )
        return name

    @classmethod
    def _touch(cls, chat: Chat) -> None:
        chat.save(update_fields=["updated_at"])

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    @classmethod
    def create_direct(
        cls,
        first: User,
        second: User,
        name: str | None = None,
    ) -> tuple[Chat, bool]:
        """
        Get or create the direct chat between two users.

        Safe to call repeatedly: an existing chat for the pair is returned
        unchanged, so a retried friend-request acceptance converges on one
        chat.

        Args:
            first: User named first in the chat name (the request sender)
            second: The other user
            name: Override for the "First-Second" chat name

        Returns:
            (chat, created)

        Error codes:
            SELF_CHAT: Both users are the same
        """
        if first.id == second.id:
            raise ValidationError(
                "Cannot create a direct chat with yourself",
                error_code="SELF_CHAT",
            )

        lower_id, higher_id = canonical_pair(first.id, second.id)

        existing = DirectChatPair.objects.select_related("chat").filter(
            user_lower_id=lower_id, user_higher_id=higher_id
        ).first()
        if existing:
            cls.get_logger().debug(
                f"Found existing direct chat {existing.chat_id} for users "
                f"{lower_id} and {higher_id}"
            )
            return existing.chat, False

        try:
            with cls.atomic():
                chat = Chat.objects.create(
                    is_group=False,
                    name=(name or f"{first.name}-{second.name}")[: GROUP_CONFIG.MAX_NAME_LENGTH],
                    creator=None,
                )
                DirectChatPair.objects.create(
                    chat=chat,
                    user_lower_id=lower_id,
                    user_higher_id=higher_id,
                )
                ChatMember.objects.bulk_create(
                    [
                        ChatMember(chat=chat, user=first),
                        ChatMember(chat=chat, user=second),
                    ]
                )
        except IntegrityError:
            # Lost a race with a concurrent creation for the same pair
            pair = DirectChatPair.objects.select_related("chat").get(
                user_lower_id=lower_id, user_higher_id=higher_id
            )
            return pair.chat, False

        cls.get_logger().info(
            f"Created direct chat {chat.id} between users {first.id} and {second.id}"
        )
        return chat, True

    @classmethod
    def create_group(cls, creator: User, name: str, member_ids: Iterable[int]) -> Chat:
        """
        Create a group chat administered by the caller.

        The caller is always added; the member count includes them.

        Error codes:
            NAME_REQUIRED: Blank name
            NOT_ENOUGH_MEMBERS: Fewer than 3 members including the creator
            TOO_MANY_MEMBERS: More than 30 members
            USER_NOT_FOUND: An id does not match a user
        """
        name = cls._clean_name(name)
        other_ids = [user_id for user_id in dict.fromkeys(member_ids) if user_id != creator.id]
        size = len(other_ids) + 1

        if size < GROUP_CONFIG.MIN_MEMBERS_ON_CREATE:
            raise ValidationError(
                f"A group needs at least {GROUP_CONFIG.MIN_MEMBERS_ON_CREATE} members",
                error_code="NOT_ENOUGH_MEMBERS",
                details={"member_count": size},
            )
        if size > GROUP_CONFIG.MAX_MEMBERS:
            raise ValidationError(
                f"A group cannot have more than {GROUP_CONFIG.MAX_MEMBERS} members",
                error_code="TOO_MANY_MEMBERS",
                details={"member_count": size},
            )

        users = _load_users(other_ids)

        with cls.atomic():
            chat = Chat.objects.create(is_group=True, name=name, creator=creator)
            ChatMember.objects.bulk_create(
                [ChatMember(chat=chat, user=creator)]
                + [ChatMember(chat=chat, user=users[user_id]) for user_id in other_ids]
            )

        all_ids = [creator.id, *other_ids]
        Notifier.emit(
            NotificationEvent.ALERT,
            all_ids,
            {"chat_id": chat.id, "message": f"Welcome to {name} group"},
        )
        Notifier.emit(NotificationEvent.REFETCH_CHAT_LIST, other_ids)

        cls.get_logger().info(
            f"User {creator.id} created group {chat.id} with {size} members"
        )
        return chat

    # -------------------------------------------------------------------------
    # Membership changes
    # -------------------------------------------------------------------------

    @classmethod
    def add_members(cls, user: User, chat_id, member_ids: Sequence[int]) -> Chat:
        """
        Add users to a group; ids already in the group are ignored.

        Error codes:
            CHAT_NOT_FOUND, NOT_GROUP, NOT_CREATOR
            NO_MEMBERS: Empty id list
            USER_NOT_FOUND: An id does not match a user
            TOO_MANY_MEMBERS: Result would exceed 30 (nothing is added)
        """
        with cls.atomic():
            chat = _get_chat(chat_id, lock=True)
            cls._require_group(chat)
            cls._require_creator(chat, user)

            if not member_ids:
                raise ValidationError("Please provide members to add", error_code="NO_MEMBERS")

            users = _load_users(member_ids)
            current_ids = set(chat.member_ids())
            new_ids = [user_id for user_id in dict.fromkeys(member_ids) if user_id not in current_ids]

            if len(current_ids) + len(new_ids) > GROUP_CONFIG.MAX_MEMBERS:
                raise ValidationError(
                    f"A group cannot have more than {GROUP_CONFIG.MAX_MEMBERS} members",
                    error_code="TOO_MANY_MEMBERS",
                    details={
                        "current": len(current_ids),
                        "adding": len(new_ids),
                    },
                )

            if new_ids:
                ChatMember.objects.bulk_create(
                    [ChatMember(chat=chat, user=users[user_id]) for user_id in new_ids]
                )
                cls._touch(chat)

        if new_ids:
            recipients = [*current_ids, *new_ids]
            names = ", ".join(users[user_id].name for user_id in new_ids)
            Notifier.emit(
                NotificationEvent.ALERT,
                recipients,
                {"chat_id": chat.id, "message": f"{names} has been added in the group"},
            )
            Notifier.emit(NotificationEvent.REFETCH_CHAT_LIST, recipients)
            cls.get_logger().info(
                f"User {user.id} added {len(new_ids)} members to group {chat.id}"
            )
        return chat

    @classmethod
    def remove_member(cls, user: User, chat_id, target_id: int) -> Chat:
        """
        Remove a member from a group.

        Error codes:
            CHAT_NOT_FOUND, NOT_GROUP, NOT_CREATOR
            GROUP_TOO_SMALL: Group has 3 or fewer members
            NOT_MEMBER: Target is not in the group
            CANNOT_REMOVE_SELF: Admin targeted themself (use leave)
        """
        with cls.atomic():
            chat = _get_chat(chat_id, lock=True)
            cls._require_group(chat)
            cls._require_creator(chat, user)

            current_ids = chat.member_ids()
            if len(current_ids) <= GROUP_CONFIG.MIN_MEMBERS_FOR_REMOVAL:
                raise ValidationError(
                    f"A group must keep at least {GROUP_CONFIG.MIN_MEMBERS_FOR_REMOVAL} members",
                    error_code="GROUP_TOO_SMALL",
                )
            if target_id not in current_ids:
                raise ValidationError(
                    "User is not a member of this group",
                    error_code="NOT_MEMBER",
                )
            if target_id == user.id:
                raise ValidationError(
                    "The admin cannot remove themself; leave the group instead",
                    error_code="CANNOT_REMOVE_SELF",
                )

            membership = ChatMember.objects.select_related("user").get(chat=chat, user_id=target_id)
            removed_name = membership.user.name
            membership.delete()
            cls._touch(chat)

        remaining = [user_id for user_id in current_ids if user_id != target_id]
        Notifier.emit(
            NotificationEvent.ALERT,
            remaining,
            {"chat_id": chat.id, "message": f"{removed_name} has been removed from the group"},
        )
        Notifier.emit(NotificationEvent.REFETCH_CHAT_LIST, [*remaining, target_id])

        cls.get_logger().info(f"User {user.id} removed user {target_id} from group {chat.id}")
        return chat

    @classmethod
    def leave(cls, user: User, chat_id) -> Chat:
        """
        Leave a group, handing the admin role to a random remaining member.

        The successor is drawn uniformly from the members left after the
        caller departs; with nobody left the creator becomes null.

        Error codes:
            CHAT_NOT_FOUND, NOT_GROUP
            NOT_MEMBER: Caller is not in the group
            GROUP_TOO_SMALL: Fewer than 2 members would remain
        """
        with cls.atomic():
            chat = _get_chat(chat_id, lock=True)
            cls._require_group(chat)

            current_ids = chat.member_ids()
            if user.id not in current_ids:
                raise PermissionDeniedError(
                    "You are not a member of this chat",
                    error_code="NOT_MEMBER",
                )

            remaining = [user_id for user_id in current_ids if user_id != user.id]
            if len(remaining) < GROUP_CONFIG.MIN_REMAINING_AFTER_LEAVE:
                raise ValidationError(
                    f"A group must keep at least {GROUP_CONFIG.MIN_REMAINING_AFTER_LEAVE} members",
                    error_code="GROUP_TOO_SMALL",
                )

            ChatMember.objects.filter(chat=chat, user=user).delete()

            if chat.creator_id == user.id:
                chat.creator_id = secrets.choice(remaining) if remaining else None
                chat.save(update_fields=["creator", "updated_at"])
                cls.get_logger().info(
                    f"Admin of group {chat.id} passed from user {user.id} to {chat.creator_id}"
                )
            else:
                cls._touch(chat)

        Notifier.emit(
            NotificationEvent.ALERT,
            remaining,
            {"chat_id": chat.id, "message": f"{user.name} has left the group"},
        )
        Notifier.emit(NotificationEvent.REFETCH_CHAT_LIST, remaining)

        cls.get_logger().info(f"User {user.id} left group {chat.id}")
        return chat

    @classmethod
    def rename(cls, user: User, chat_id, new_name: str) -> Chat:
        """
        Rename a group.

        Error codes:
            CHAT_NOT_FOUND, NOT_GROUP, NOT_CREATOR, NAME_REQUIRED
        """
        with cls.atomic():
            chat = _get_chat(chat_id, lock=True)
            cls._require_group(chat)
            cls._require_creator(chat, user)

            chat.name = cls._clean_name(new_name)
            chat.save(update_fields=["name", "updated_at"])
            member_ids = chat.member_ids()

        Notifier.emit(NotificationEvent.REFETCH_CHAT_LIST, member_ids)
        cls.get_logger().info(f"User {user.id} renamed group {chat.id}")
        return chat

    # -------------------------------------------------------------------------
    # Deletion
    # -------------------------------------------------------------------------

    @classmethod
    def delete_chat(cls, user: User, chat_id) -> None:
        """
        Delete a chat with its messages and their attachment blobs.

        Groups may only be deleted by their admin; either member may delete
        a direct chat. Deleting an already deleted chat raises NotFoundError
        without touching the blob store again.

        Error codes:
            CHAT_NOT_FOUND, NOT_CREATOR, NOT_MEMBER
            BLOB_DELETE_FAILED: Blob store failure; nothing was deleted
                from the database and the call can be retried
        """
        chat = _get_chat(chat_id)
        member_ids = chat.member_ids()

        if chat.is_group:
            cls._require_creator(chat, user)
        elif user.id not in member_ids:
            raise PermissionDeniedError(
                "You are not a member of this chat",
                error_code="NOT_MEMBER",
            )

        AttachmentCleanupService.run(chat)

        Notifier.emit(NotificationEvent.REFETCH_CHAT_LIST, member_ids)
        cls.get_logger().info(f"User {user.id} deleted chat {chat_id}")

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @classmethod
    def _memberships_prefetch(cls) -> Prefetch:
        return Prefetch(
            "memberships",
            queryset=ChatMember.objects.select_related("user").order_by("joined_at", "id"),
        )

    @classmethod
    def list_for_user(cls, user: User) -> list[dict[str, Any]]:
        """
        Chats the user belongs to, most recently active first.

        Each item carries a display name (group name, or the other member's
        name for direct chats), up to three member avatars for groups or the
        counterpart's avatar for direct chats, and the other members' ids.
        """
        chats = (
            Chat.objects.filter(memberships__user=user)
            .prefetch_related(cls._memberships_prefetch())
            .order_by("-updated_at", "-id")
        )

        items = []
        for chat in chats:
            members = [membership.user for membership in chat.memberships.all()]
            others = [member for member in members if member.id != user.id]

            if chat.is_group:
                name = chat.name
                avatars = [
                    member.avatar_url
                    for member in members[: GROUP_CONFIG.LIST_AVATAR_COUNT]
                ]
            else:
                counterpart = others[0] if others else None
                name = counterpart.name if counterpart else chat.name
                avatars = [counterpart.avatar_url] if counterpart else []

            items.append(
                {
                    "id": chat.id,
                    "is_group": chat.is_group,
                    "name": name,
                    "avatars": avatars,
                    "members": [member.id for member in others],
                    "creator_id": chat.creator_id,
                }
            )
        return items

    @classmethod
    def list_my_groups(cls, user: User) -> list[dict[str, Any]]:
        """Groups the user administers."""
        groups = (
            Chat.objects.filter(is_group=True, creator=user, memberships__user=user)
            .prefetch_related(cls._memberships_prefetch())
            .order_by("-updated_at", "-id")
        )
        return [
            {
                "id": group.id,
                "name": group.name,
                "avatars": [
                    membership.user.avatar_url
                    for membership in list(group.memberships.all())[: GROUP_CONFIG.LIST_AVATAR_COUNT]
                ],
            }
            for group in groups
        ]

    @classmethod
    def get_details(cls, user: User, chat_id, populate: bool = False) -> dict[str, Any]:
        """
        Chat details for a member.

        Args:
            populate: Return member summaries (id, name, avatar_url)
                instead of bare ids

        Error codes:
            CHAT_NOT_FOUND, NOT_MEMBER
        """
        chat = _get_chat(chat_id)
        _require_member(chat, user)

        memberships = chat.memberships.select_related("user").order_by("joined_at", "id")
        if populate:
            members = [
                {
                    "id": membership.user.id,
                    "name": membership.user.name,
                    "avatar_url": membership.user.avatar_url,
                }
                for membership in memberships
            ]
        else:
            members = [membership.user_id for membership in memberships]

        return {
            "id": chat.id,
            "name": chat.name,
            "is_group": chat.is_group,
            "creator_id": chat.creator_id,
            "members": members,
            "created_at": chat.created_at,
        }


# =============================================================================
# AttachmentCleanupService
# =============================================================================


class AttachmentCleanupService(BaseService):
    """
    Deletes a chat together with its messages and their remote blobs.

    Order:
        1. Collect the distinct remote ids of the chat's attachments
        2. Delete them from the blob store (skipped when there are none)
        3. Delete the messages and the chat in one transaction

    A blob store failure raises before step 3, leaving the chat intact;
    retrying recomputes the same id set and blob deletion is idempotent.
    """

    @classmethod
    def collect_remote_ids(cls, chat: Chat) -> list[str]:
        return list(
            Attachment.objects.filter(message__chat=chat)
            .order_by("remote_id")
            .values_list("remote_id", flat=True)
            .distinct()
        )

    @classmethod
    def run(cls, chat: Chat) -> int:
        """
        Run the cascade for a chat.

        Returns:
            Number of distinct blobs deleted

        Raises:
            ExternalServiceError: Blob store reported failures
            NotFoundError: The chat was deleted concurrently
        """
        remote_ids = cls.collect_remote_ids(chat)

        if remote_ids:
            result = get_blob_store().delete_many(remote_ids)
            if not result.ok:
                cls.get_logger().error(
                    f"Blob store failed to delete {len(result.failed)} of "
                    f"{len(remote_ids)} attachments for chat {chat.id}"
                )
                raise ExternalServiceError(
                    "Could not delete chat attachments, please retry",
                    error_code="BLOB_DELETE_FAILED",
                    details={"failed_count": len(result.failed)},
                )

        with cls.atomic():
            # Re-check under lock so only one concurrent delete wins
            _get_chat(chat.id, lock=True)
            message_count, _ = Message.objects.filter(chat_id=chat.id).delete()
            Chat.objects.filter(pk=chat.id).delete()

        cls.get_logger().info(
            f"Deleted chat {chat.id}: {len(remote_ids)} blobs, "
            f"{message_count} rows of messages and attachments"
        )
        return len(remote_ids)


# =============================================================================
# MessageService
# =============================================================================


@dataclass
class MessagePage:
    """One page of a chat's messages, oldest first."""

    messages: list[Message] = field(default_factory=list)
    page: int = 1
    total_pages: int = 0
    total: int = 0


class MessageService(BaseService):
    """Message store: append and paginate."""

    @classmethod
    def append(
        cls,
        sender: User,
        chat_id,
        content: str = "",
        attachments: Sequence[AttachmentDescriptor | dict[str, Any]] | None = None,
    ) -> Message:
        """
        Append a message to a chat.

        Emits the message (new-attachment when it carries attachments,
        new-message otherwise) and a new-message-alert with only the chat id
        to every member.

        Error codes:
            CHAT_NOT_FOUND, NOT_MEMBER
            EMPTY_MESSAGE: Neither content nor attachments
            TOO_MANY_ATTACHMENTS: More than 5 attachments
        """
        attachments = [
            item.to_dict() if isinstance(item, AttachmentDescriptor) else dict(item)
            for item in (attachments or [])
        ]
        content = content or ""

        chat = _get_chat(chat_id)
        _require_member(chat, sender)

        if not content.strip() and not attachments:
            raise ValidationError(
                "Please provide message content or attachments",
                error_code="EMPTY_MESSAGE",
            )
        if len(attachments) > MESSAGE_CONFIG.MAX_ATTACHMENTS:
            raise ValidationError(
                f"A message can have at most {MESSAGE_CONFIG.MAX_ATTACHMENTS} attachments",
                error_code="TOO_MANY_ATTACHMENTS",
                details={"attachment_count": len(attachments)},
            )

        with cls.atomic():
            message = Message.objects.create(chat=chat, sender=sender, content=content)
            Attachment.objects.bulk_create(
                [
                    Attachment(
                        message=message,
                        remote_id=item["remote_id"],
                        url=item["url"],
                        kind=item.get("kind") or "file",
                        position=position,
                    )
                    for position, item in enumerate(attachments)
                ]
            )
            chat.save(update_fields=["updated_at"])
            member_ids = chat.member_ids()

        payload = dict(MessageSerializer(message).data)
        event = NotificationEvent.NEW_ATTACHMENT if attachments else NotificationEvent.NEW_MESSAGE
        Notifier.emit(event, member_ids, {"chat_id": chat.id, "message": payload})
        Notifier.emit(NotificationEvent.NEW_MESSAGE_ALERT, member_ids, {"chat_id": chat.id})

        cls.get_logger().info(
            f"User {sender.id} sent message {message.id} to chat {chat.id} "
            f"with {len(attachments)} attachments"
        )
        return message

    @classmethod
    def page(
        cls,
        user: User,
        chat_id,
        page_number: int = 1,
        page_size: int = MESSAGE_CONFIG.PAGE_SIZE,
    ) -> MessagePage:
        """
        One page of a chat's messages.

        Page 1 holds the newest messages. Within a page messages are
        ordered oldest first. Pages below 1 read as page 1; pages past the
        end are empty.

        Error codes:
            CHAT_NOT_FOUND, NOT_MEMBER
        """
        chat = _get_chat(chat_id)
        _require_member(chat, user)

        total = chat.messages.count()
        meta = calculate_pagination(total, page_number, page_size)

        messages: list[Message] = []
        if meta["offset"] < total:
            messages = list(
                chat.messages.select_related("sender")
                .prefetch_related("attachments")
                .order_by("-created_at", "-id")[meta["offset"]: meta["offset"] + page_size]
            )
            messages.reverse()

        return MessagePage(
            messages=messages,
            page=meta["page"],
            total_pages=meta["total_pages"],
            total=total,
        )

    @classmethod
    def upload_attachments(cls, files: Sequence) -> list[AttachmentDescriptor]:
        """
        Upload files to the blob store for use as message attachments.

        If an upload fails, blobs already stored by this call are deleted
        before the error is re-raised.

        Error codes:
            TOO_MANY_ATTACHMENTS: More than 5 files
            BLOB_UPLOAD_FAILED: Blob store rejected a file
        """
        if len(files) > MESSAGE_CONFIG.MAX_ATTACHMENTS:
            raise ValidationError(
                f"A message can have at most {MESSAGE_CONFIG.MAX_ATTACHMENTS} attachments",
                error_code="TOO_MANY_ATTACHMENTS",
                details={"attachment_count": len(files)},
            )

        store = get_blob_store()
        uploaded: list[AttachmentDescriptor] = []
        try:
            for file in files:
                uploaded.append(store.upload(file, folder=settings.CHAT_ATTACHMENT_FOLDER))
        except ExternalServiceError:
            if uploaded:
                store.delete_many([descriptor.remote_id for descriptor in uploaded])
            raise

        return uploaded

    @classmethod
    def send_files(cls, sender: User, chat_id, content: str, files: Sequence) -> Message:
        """
        Upload files and append them to a chat as one message.

        Chat and membership are checked before anything reaches the blob
        store. If the append fails after upload, the uploaded blobs are
        deleted before the error is re-raised.

        Error codes:
            CHAT_NOT_FOUND, NOT_MEMBER
            TOO_MANY_ATTACHMENTS, BLOB_UPLOAD_FAILED
            EMPTY_MESSAGE: No files and blank content
        """
        chat = _get_chat(chat_id)
        _require_member(chat, sender)

        attachments = cls.upload_attachments(files)
        try:
            return cls.append(sender, chat.id, content=content, attachments=attachments)
        except Exception:
            if attachments:
                cls.get_logger().warning(
                    f"Message to chat {chat.id} failed, deleting "
                    f"{len(attachments)} uploaded blobs"
                )
                get_blob_store().delete_many([item.remote_id for item in attachments])
            raise

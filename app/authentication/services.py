"""
User Directory services.

Registration and the "find people" search. Everything else in the system
reads users directly by primary key.

Related files:
    - models.py: User model
    - views.py: Register, me and search endpoints
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db.models import Q

from authentication.models import User
from chat.models import DirectChatPair
from core.exceptions import ConflictError
from core.services import BaseService
from media.services import get_blob_store

if TYPE_CHECKING:
    from django.core.files.uploadedfile import UploadedFile
    from django.db.models import QuerySet


class UserService(BaseService):
    """Account creation and user lookup."""

    AVATAR_FOLDER = "avatars"
    SEARCH_LIMIT = 20

    @classmethod
    def register(
        cls,
        email: str,
        password: str,
        name: str,
        username: str,
        bio: str = "",
        avatar: UploadedFile | None = None,
    ) -> User:
        """
        Create an account, uploading the avatar when one is supplied.

        Error codes:
            EMAIL_EXISTS: Email already registered
            USERNAME_EXISTS: Handle taken (case-insensitive)
        """
        if User.objects.filter(email__iexact=email).exists():
            raise ConflictError("Email already registered", error_code="EMAIL_EXISTS")
        if User.objects.filter(username__iexact=username).exists():
            raise ConflictError("Username already taken", error_code="USERNAME_EXISTS")

        avatar_fields = {}
        if avatar is not None:
            descriptor = get_blob_store().upload(avatar, folder=cls.AVATAR_FOLDER)
            avatar_fields = {
                "avatar_url": descriptor.url,
                "avatar_remote_id": descriptor.remote_id,
            }

        with cls.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                name=name,
                username=username,
                bio=bio,
                **avatar_fields,
            )

        cls.get_logger().info(f"Registered user {user.id} ({user.username})")
        return user

    @classmethod
    def friend_ids(cls, user: User) -> set[int]:
        """Ids of users sharing a direct chat with the given user."""
        pairs = DirectChatPair.objects.filter(
            Q(user_lower=user) | Q(user_higher=user)
        ).values_list("user_lower_id", "user_higher_id")
        return {
            lower if higher == user.id else higher
            for lower, higher in pairs
        }

    @classmethod
    def search(cls, user: User, name: str = "") -> QuerySet[User]:
        """
        Find users by display name who are not yet friends with the caller.

        Matching is a case-insensitive substring on name. The caller and
        everyone already sharing a direct chat with them are excluded.
        """
        excluded = cls.friend_ids(user) | {user.id}
        queryset = User.objects.filter(is_active=True).exclude(id__in=excluded)
        if name:
            queryset = queryset.filter(name__icontains=name.strip())
        return queryset.order_by("name")[: cls.SEARCH_LIMIT]

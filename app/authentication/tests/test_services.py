"""
Tests for UserService.

Covers registration (including avatar upload through the blob store) and
user search, which hides the caller and existing friends.
"""

from unittest.mock import MagicMock, patch

import pytest

from authentication.models import User
from authentication.services import UserService
from authentication.tests.factories import UserFactory
from chat.services import ChatService
from core.exceptions import ConflictError
from media.services import AttachmentDescriptor


# =============================================================================
# Registration
# =============================================================================


class TestUserServiceRegister:
    """Tests for UserService.register()."""

    def test_creates_user_with_profile_fields(self, db):
        user = UserService.register(
            email="reg@example.com",
            password="Sup3rSecret!pass",
            name="Reg User",
            username="reg_user",
            bio="hello",
        )

        assert user.pk is not None
        assert user.name == "Reg User"
        assert user.bio == "hello"
        assert user.check_password("Sup3rSecret!pass")
        assert user.avatar_url == ""

    def test_duplicate_email_conflicts(self, user):
        with pytest.raises(ConflictError) as exc_info:
            UserService.register(
                email=user.email.upper(),
                password="Sup3rSecret!pass",
                name="Other",
                username="other_handle",
            )

        assert exc_info.value.error_code == "EMAIL_EXISTS"

    def test_duplicate_username_conflicts_ignoring_case(self, user):
        with pytest.raises(ConflictError) as exc_info:
            UserService.register(
                email="fresh@example.com",
                password="Sup3rSecret!pass",
                name="Other",
                username=user.username.upper(),
            )

        assert exc_info.value.error_code == "USERNAME_EXISTS"

    def test_avatar_is_uploaded_to_blob_store(self, db, avatar_file):
        store = MagicMock()
        store.upload.return_value = AttachmentDescriptor(
            remote_id="avatars/abc.png",
            url="https://cdn.example.com/avatars/abc.png",
            kind="image",
        )

        with patch("authentication.services.get_blob_store", return_value=store):
            user = UserService.register(
                email="pic@example.com",
                password="Sup3rSecret!pass",
                name="Pic",
                username="pic_user",
                avatar=avatar_file,
            )

        store.upload.assert_called_once_with(avatar_file, folder="avatars")
        assert user.avatar_url == "https://cdn.example.com/avatars/abc.png"
        assert user.avatar_remote_id == "avatars/abc.png"


# =============================================================================
# Search
# =============================================================================


class TestUserServiceSearch:
    """Tests for UserService.search()."""

    def test_excludes_caller(self, user):
        UserFactory(name="Sam Other")

        results = list(UserService.search(user, "sam"))

        assert user not in results
        assert [u.name for u in results] == ["Sam Other"]

    def test_excludes_existing_friends(self, user):
        friend = UserFactory(name="Friendly")
        stranger = UserFactory(name="Friendlier")
        ChatService.create_direct(user, friend)

        results = list(UserService.search(user, "friend"))

        assert results == [stranger]

    def test_blank_name_returns_everyone_else(self, user):
        others = UserFactory.create_batch(3)

        results = set(UserService.search(user))

        assert results == set(others)

    def test_inactive_users_hidden(self, user):
        UserFactory(name="Ghost", is_active=False)

        assert list(UserService.search(user, "ghost")) == []

    def test_friend_ids_lists_direct_chat_counterparts(self, user):
        first, second = UserFactory(), UserFactory()
        ChatService.create_direct(user, first)
        ChatService.create_direct(second, user)

        assert UserService.friend_ids(user) == {first.id, second.id}
        assert User.objects.filter(id__in=UserService.friend_ids(first)).get() == user

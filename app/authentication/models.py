"""
User Directory model.

The rest of the system treats users as read-only records: friend requests,
chats and messages only reference them by primary key and read their display
name and avatar.

Related files:
    - managers.py: Email-based user creation
    - services.py: Registration and search
"""

import re

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models.functions import Lower

from authentication.managers import UserManager


RESERVED_USERNAMES = frozenset([
    "admin", "administrator", "root", "system", "api", "support",
    "help", "auth", "login", "logout", "register", "me", "user", "users",
    "chat", "chats", "friends", "null", "undefined", "anonymous", "bot",
])


def validate_username_not_reserved(value):
    """Reject handles that collide with routes or system names."""
    if value.lower() in RESERVED_USERNAMES:
        raise ValidationError(
            f"The username '{value}' is reserved and cannot be used."
        )


def validate_username_format(value):
    """Handles are 3-30 characters of letters, digits, underscore or hyphen."""
    if not re.match(r"^[a-zA-Z0-9_-]{3,30}$", value):
        raise ValidationError(
            "Username must be 3-30 characters and contain only "
            "letters, numbers, underscores, and hyphens."
        )


class User(AbstractBaseUser, PermissionsMixin):
    """
    Account with email login, a display name and a unique handle.

    Fields:
        email: Login identifier, unique
        name: Display name shown in chat lists and alerts
        username: Public handle, unique regardless of case
        bio: Optional short description
        avatar_url: Public URL of the avatar image
        avatar_remote_id: Blob store id of the avatar, when uploaded here
        is_active: Whether the account may log in
        is_staff: Whether the user can access Django admin
        date_joined: When the account was created
    """

    email = models.EmailField(
        unique=True,
        max_length=254,
        help_text="User's email address (login identifier)",
    )
    name = models.CharField(
        max_length=100,
        help_text="Display name",
    )
    username = models.CharField(
        max_length=30,
        unique=True,
        validators=[validate_username_format, validate_username_not_reserved],
        help_text="Public handle (3-30 chars, letters, digits, _ and -)",
    )
    bio = models.CharField(max_length=280, blank=True, default="")
    avatar_url = models.CharField(
        max_length=500,
        blank=True,
        default="",
        help_text="Public URL of the user's avatar",
    )
    avatar_remote_id = models.CharField(
        max_length=255,
        blank=True,
        default="",
        help_text="Blob store id of the avatar object",
    )

    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )

    date_joined = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["name", "username"]

    objects = UserManager()

    class Meta:
        db_table = "authentication_user"
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-date_joined"]
        constraints = [
            models.UniqueConstraint(
                Lower("username"),
                name="unique_username_case_insensitive",
            ),
        ]

    def __str__(self):
        return f"{self.name} <{self.email}>"

    def get_full_name(self):
        return self.name or self.email

    def get_short_name(self):
        return self.username or self.email.split("@")[0]

"""
Serializers for the User Directory.

Related files:
    - models.py: User model
    - views.py: Views that use these serializers
"""

from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from authentication.models import (
    User,
    validate_username_format,
    validate_username_not_reserved,
)


class UserSerializer(serializers.ModelSerializer):
    """Public view of a user, embedded in chats and friend lists."""

    class Meta:
        model = User
        fields = ["id", "name", "username", "avatar_url"]
        read_only_fields = fields


class MeSerializer(serializers.ModelSerializer):
    """The authenticated user's own account."""

    class Meta:
        model = User
        fields = ["id", "email", "name", "username", "bio", "avatar_url", "date_joined"]
        read_only_fields = fields


class RegisterSerializer(serializers.Serializer):
    """
    Input for account registration.

    Accepts JSON or multipart; the optional avatar must be an image.
    """

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})
    name = serializers.CharField(max_length=100)
    username = serializers.CharField(
        max_length=30,
        validators=[validate_username_format, validate_username_not_reserved],
    )
    bio = serializers.CharField(max_length=280, required=False, allow_blank=True, default="")
    avatar = serializers.ImageField(required=False)

    def validate_password(self, value):
        validate_password(value)
        return value

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name cannot be blank.")
        return value


class UserSearchSerializer(serializers.Serializer):
    """Query parameters for user search."""

    name = serializers.CharField(required=False, allow_blank=True, default="")

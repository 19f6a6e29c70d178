"""
Serializers for friend endpoints.
"""

from rest_framework import serializers

from authentication.serializers import UserSerializer
from friends.models import FriendRequest


class FriendRequestSerializer(serializers.ModelSerializer):
    """Incoming request with the sender's public profile."""

    sender = UserSerializer(read_only=True)

    class Meta:
        model = FriendRequest
        fields = ["id", "sender", "status", "created_at"]
        read_only_fields = fields


class SendFriendRequestSerializer(serializers.Serializer):
    receiver_id = serializers.IntegerField(min_value=1)


class RespondFriendRequestSerializer(serializers.Serializer):
    request_id = serializers.IntegerField(min_value=1)
    accept = serializers.BooleanField()


class FriendListQuerySerializer(serializers.Serializer):
    chat_id = serializers.IntegerField(required=False, min_value=1)

"""
Serializers for chat API endpoints.

Output:
    MessageSerializer: Message with sender summary and attachments
    ChatListItemSerializer: Row of the caller's chat list
    ChatDetailSerializer: Chat details with members as ids or summaries
    MessagePageSerializer: One page of messages plus page count

Input:
    GroupCreateSerializer, ChatRenameSerializer, AddMembersSerializer,
    MessageCreateSerializer, MessagePageQuerySerializer
"""

from rest_framework import serializers

from authentication.serializers import UserSerializer
from chat.constants import GROUP_CONFIG, MESSAGE_CONFIG
from chat.models import Attachment, AttachmentKind, Message


# =============================================================================
# Messages
# =============================================================================


class AttachmentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Attachment
        fields = ["remote_id", "url", "kind"]


class MessageSerializer(serializers.ModelSerializer):
    """Message as delivered to clients and in notification payloads."""

    chat_id = serializers.IntegerField(read_only=True)
    sender = UserSerializer(read_only=True)
    attachments = AttachmentSerializer(many=True, read_only=True)

    class Meta:
        model = Message
        fields = ["id", "chat_id", "sender", "content", "attachments", "created_at"]
        read_only_fields = fields


class MessagePageSerializer(serializers.Serializer):
    messages = MessageSerializer(many=True)
    page = serializers.IntegerField()
    total_pages = serializers.IntegerField()
    total = serializers.IntegerField()


class AttachmentInputSerializer(serializers.Serializer):
    """Descriptor of an already uploaded blob."""

    remote_id = serializers.CharField(max_length=255)
    url = serializers.CharField(max_length=500)
    kind = serializers.ChoiceField(choices=AttachmentKind.choices, default=AttachmentKind.FILE)


class MessageCreateSerializer(serializers.Serializer):
    """
    Input for sending a message.

    JSON clients pass attachment descriptors; multipart clients send files
    under "files" and the view uploads them first.
    """

    content = serializers.CharField(
        required=False,
        allow_blank=True,
        default="",
        max_length=MESSAGE_CONFIG.MAX_CONTENT_LENGTH,
        trim_whitespace=False,
    )
    attachments = AttachmentInputSerializer(many=True, required=False, default=list)


class MessagePageQuerySerializer(serializers.Serializer):
    # Non-positive pages are read as page 1 by MessageService
    page = serializers.IntegerField(required=False, default=1)


# =============================================================================
# Chats
# =============================================================================


class ChatListItemSerializer(serializers.Serializer):
    """Row of GET /chats/; members excludes the caller."""

    id = serializers.IntegerField()
    is_group = serializers.BooleanField()
    name = serializers.CharField()
    avatars = serializers.ListField(child=serializers.CharField())
    members = serializers.ListField(child=serializers.IntegerField())
    creator_id = serializers.IntegerField(allow_null=True)


class GroupListItemSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    avatars = serializers.ListField(child=serializers.CharField())


class ChatDetailSerializer(serializers.Serializer):
    """
    Chat details.

    members holds user ids, or user summaries when populate=true.
    """

    id = serializers.IntegerField()
    name = serializers.CharField()
    is_group = serializers.BooleanField()
    creator_id = serializers.IntegerField(allow_null=True)
    members = serializers.ListField()
    created_at = serializers.DateTimeField()


class ChatDetailQuerySerializer(serializers.Serializer):
    populate = serializers.BooleanField(required=False, default=False)


class GroupCreateSerializer(serializers.Serializer):
    """Input for creating a group; the caller is always a member."""

    name = serializers.CharField(max_length=GROUP_CONFIG.MAX_NAME_LENGTH, allow_blank=True)
    members = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        allow_empty=True,
    )


class ChatRenameSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=GROUP_CONFIG.MAX_NAME_LENGTH, allow_blank=True)


class AddMembersSerializer(serializers.Serializer):
    members = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        allow_empty=True,
    )

"""
ViewSet for the chat API.

URL Structure:
    /api/v1/chat/chats/                             GET, POST
    /api/v1/chat/chats/groups/                      GET
    /api/v1/chat/chats/{id}/                        GET, PATCH, DELETE
    /api/v1/chat/chats/{id}/members/                POST
    /api/v1/chat/chats/{id}/members/{user_id}/      DELETE
    /api/v1/chat/chats/{id}/leave/                  POST
    /api/v1/chat/chats/{id}/messages/               GET, POST

Design Decisions:
    - Plain ViewSet: every operation goes through chat.services, which owns
      membership checks and raises core.exceptions errors
    - Sending a message accepts JSON with attachment descriptors or
      multipart with up to 5 files under "files"
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from chat.serializers import (
    AddMembersSerializer,
    ChatDetailQuerySerializer,
    ChatDetailSerializer,
    ChatListItemSerializer,
    ChatRenameSerializer,
    GroupCreateSerializer,
    GroupListItemSerializer,
    MessageCreateSerializer,
    MessagePageQuerySerializer,
    MessagePageSerializer,
    MessageSerializer,
)
from chat.services import ChatService, MessageService


@extend_schema_view(
    list=extend_schema(
        operation_id="list_chats",
        summary="List my chats",
        tags=["Chat"],
        responses={200: ChatListItemSerializer(many=True)},
    ),
    create=extend_schema(
        operation_id="create_group",
        summary="Create group chat",
        tags=["Chat"],
        request=GroupCreateSerializer,
        responses={201: ChatDetailSerializer},
    ),
    retrieve=extend_schema(
        operation_id="get_chat",
        summary="Get chat details",
        tags=["Chat"],
        parameters=[
            OpenApiParameter("populate", bool, description="Return member summaries instead of ids"),
        ],
        responses={200: ChatDetailSerializer},
    ),
    partial_update=extend_schema(
        operation_id="rename_group",
        summary="Rename group chat",
        tags=["Chat"],
        request=ChatRenameSerializer,
        responses={200: ChatDetailSerializer},
    ),
    destroy=extend_schema(
        operation_id="delete_chat",
        summary="Delete chat",
        tags=["Chat"],
        responses={204: None},
    ),
)
class ChatViewSet(viewsets.ViewSet):
    """
    Chats of the authenticated user.

    list:
        Chats the caller belongs to, most recently active first.

    create:
        Create a group with the caller as admin (3 to 30 members).

    retrieve:
        Chat details; members only.

    partial_update:
        Rename a group; admin only.

    destroy:
        Delete a chat with its messages and attachments. Admin only for
        groups, either member for direct chats.
    """

    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, MultiPartParser, FormParser]
    lookup_value_regex = r"\d+"

    def list(self, request):
        chats = ChatService.list_for_user(request.user)
        return Response(ChatListItemSerializer(chats, many=True).data)

    def create(self, request):
        serializer = GroupCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        chat = ChatService.create_group(
            creator=request.user,
            name=serializer.validated_data["name"],
            member_ids=serializer.validated_data["members"],
        )
        details = ChatService.get_details(request.user, chat.id)
        return Response(ChatDetailSerializer(details).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        params = ChatDetailQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)

        details = ChatService.get_details(
            request.user, int(pk), populate=params.validated_data["populate"]
        )
        return Response(ChatDetailSerializer(details).data)

    def partial_update(self, request, pk=None):
        serializer = ChatRenameSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        chat = ChatService.rename(request.user, int(pk), serializer.validated_data["name"])
        details = ChatService.get_details(request.user, chat.id)
        return Response(ChatDetailSerializer(details).data)

    def destroy(self, request, pk=None):
        ChatService.delete_chat(request.user, int(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="list_my_groups",
        summary="Groups I administer",
        tags=["Chat"],
        responses={200: GroupListItemSerializer(many=True)},
    )
    @action(detail=False, methods=["get"])
    def groups(self, request):
        groups = ChatService.list_my_groups(request.user)
        return Response(GroupListItemSerializer(groups, many=True).data)

    @extend_schema(
        operation_id="add_group_members",
        summary="Add group members",
        tags=["Chat"],
        request=AddMembersSerializer,
        responses={200: ChatDetailSerializer},
    )
    @action(detail=True, methods=["post"])
    def members(self, request, pk=None):
        serializer = AddMembersSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        chat = ChatService.add_members(request.user, int(pk), serializer.validated_data["members"])
        details = ChatService.get_details(request.user, chat.id)
        return Response(ChatDetailSerializer(details).data)

    @extend_schema(
        operation_id="remove_group_member",
        summary="Remove group member",
        tags=["Chat"],
        request=None,
        responses={200: ChatDetailSerializer},
    )
    @action(
        detail=True,
        methods=["delete"],
        url_path=r"members/(?P<user_id>\d+)",
        url_name="member-detail",
    )
    def remove_member(self, request, pk=None, user_id=None):
        chat = ChatService.remove_member(request.user, int(pk), int(user_id))
        details = ChatService.get_details(request.user, chat.id)
        return Response(ChatDetailSerializer(details).data)

    @extend_schema(
        operation_id="leave_group",
        summary="Leave group",
        tags=["Chat"],
        request=None,
        responses={204: None},
    )
    @action(detail=True, methods=["post"])
    def leave(self, request, pk=None):
        ChatService.leave(request.user, int(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        methods=["GET"],
        operation_id="list_messages",
        summary="Page through messages",
        tags=["Chat - Messages"],
        parameters=[OpenApiParameter("page", int, description="1 is the newest page")],
        responses={200: MessagePageSerializer},
    )
    @extend_schema(
        methods=["POST"],
        operation_id="send_message",
        summary="Send message",
        tags=["Chat - Messages"],
        request=MessageCreateSerializer,
        responses={201: MessageSerializer},
    )
    @action(detail=True, methods=["get", "post"])
    def messages(self, request, pk=None):
        if request.method == "GET":
            params = MessagePageQuerySerializer(data=request.query_params)
            params.is_valid(raise_exception=True)

            page = MessageService.page(request.user, int(pk), params.validated_data["page"])
            return Response(MessagePageSerializer(page).data)

        files = request.FILES.getlist("files")
        if files:
            serializer = MessageCreateSerializer(data={"content": request.data.get("content", "")})
        else:
            serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        if files:
            message = MessageService.send_files(
                request.user,
                int(pk),
                serializer.validated_data["content"],
                files,
            )
        else:
            message = MessageService.append(
                request.user,
                int(pk),
                content=serializer.validated_data["content"],
                attachments=serializer.validated_data["attachments"],
            )
        return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)

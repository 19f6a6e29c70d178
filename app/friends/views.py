"""
Views for the friend list and the friend request handshake.

Endpoints:
    GET  /api/v1/friends/                     Friends (?chat_id= leaves out its members)
    GET  /api/v1/friends/requests/            Incoming pending requests
    POST /api/v1/friends/requests/            Send a request
    POST /api/v1/friends/requests/respond/    Accept or reject a request
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema, inline_serializer
from rest_framework import serializers, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.serializers import UserSerializer
from friends.serializers import (
    FriendListQuerySerializer,
    FriendRequestSerializer,
    RespondFriendRequestSerializer,
    SendFriendRequestSerializer,
)
from friends.services import FriendRequestService


class FriendListView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="list_friends",
        summary="List friends",
        tags=["Friends"],
        parameters=[
            OpenApiParameter("chat_id", int, description="Leave out members of this chat"),
        ],
        responses={200: UserSerializer(many=True)},
    )
    def get(self, request):
        params = FriendListQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)

        friends = FriendRequestService.list_friends(
            request.user, chat_id=params.validated_data.get("chat_id")
        )
        return Response(UserSerializer(friends, many=True).data)


class FriendRequestView(APIView):
    """
    Incoming friend requests.

    GET lists requests waiting for the caller's answer; POST sends one.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="list_friend_requests",
        summary="List incoming friend requests",
        tags=["Friends"],
        responses={200: FriendRequestSerializer(many=True)},
    )
    def get(self, request):
        requests = FriendRequestService.list_incoming(request.user)
        return Response(FriendRequestSerializer(requests, many=True).data)

    @extend_schema(
        operation_id="send_friend_request",
        summary="Send friend request",
        tags=["Friends"],
        request=SendFriendRequestSerializer,
        responses={201: inline_serializer("FriendRequestSent", {"id": serializers.IntegerField()})},
    )
    def post(self, request):
        serializer = SendFriendRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        friend_request = FriendRequestService.send_request(
            request.user, serializer.validated_data["receiver_id"]
        )
        return Response({"id": friend_request.id}, status=status.HTTP_201_CREATED)


class RespondFriendRequestView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="respond_friend_request",
        summary="Accept or reject a friend request",
        tags=["Friends"],
        request=RespondFriendRequestSerializer,
        responses={
            200: inline_serializer(
                "FriendRequestAnswer",
                {
                    "accepted": serializers.BooleanField(),
                    "chat_id": serializers.IntegerField(allow_null=True),
                },
            )
        },
    )
    def post(self, request):
        serializer = RespondFriendRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        accept = serializer.validated_data["accept"]
        chat = FriendRequestService.respond_to_request(
            request.user, serializer.validated_data["request_id"], accept
        )
        return Response({"accepted": accept, "chat_id": chat.id if chat else None})

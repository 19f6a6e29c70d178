"""
Views for the User Directory.

Endpoints:
    POST /api/v1/auth/register/        Create an account
    POST /api/v1/auth/token/           Obtain access/refresh tokens
    POST /api/v1/auth/token/refresh/   Refresh the access token
    GET  /api/v1/auth/me/              Current user
    GET  /api/v1/auth/users/search/    Users not yet befriended, by name
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.serializers import (
    MeSerializer,
    RegisterSerializer,
    UserSearchSerializer,
    UserSerializer,
)
from authentication.services import UserService


class RegisterView(APIView):
    """
    Create an account.

    Returns the new user; clients then call the token endpoint to log in.
    """

    permission_classes = [AllowAny]
    authentication_classes = []
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    @extend_schema(
        operation_id="auth_register",
        summary="Register",
        tags=["Auth"],
        request=RegisterSerializer,
        responses={201: MeSerializer},
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = UserService.register(**serializer.validated_data)
        return Response(MeSerializer(user).data, status=status.HTTP_201_CREATED)


class MeView(APIView):
    """Return the authenticated user's account."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="auth_me",
        summary="Current user",
        tags=["Auth"],
        responses={200: MeSerializer},
    )
    def get(self, request):
        return Response(MeSerializer(request.user).data)


class UserSearchView(APIView):
    """
    Search users to befriend.

    Excludes the caller and users who already share a direct chat with them.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="auth_users_search",
        summary="Search users",
        tags=["Auth"],
        parameters=[OpenApiParameter("name", str, description="Substring of the display name")],
        responses={200: UserSerializer(many=True)},
    )
    def get(self, request):
        params = UserSearchSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        users = UserService.search(request.user, params.validated_data["name"])
        return Response(UserSerializer(users, many=True).data)

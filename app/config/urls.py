"""
URL configuration for the chat backend.

URL Structure:
    /                                  - ReDoc API documentation
    /admin/                            - Django admin interface
    /health/                           - Health check endpoint
    /schema/                           - OpenAPI schema (YAML)
    /api/v1/auth/                      - Accounts and tokens
        register/                      - Create an account
        token/                         - Obtain JWT pair
        token/refresh/                 - Refresh access token
        me/                            - Current user
        users/search/                  - Search users by name
    /api/v1/friends/                   - Friend list (?chat_id= excludes members)
        requests/                      - Incoming requests (GET), send (POST)
        requests/respond/              - Accept or reject a request
    /api/v1/chat/                      - Chat endpoints
        chats/                         - List my chats, create group
        chats/groups/                  - Groups I created
        chats/{id}/                    - Details, rename, delete
        chats/{id}/members/            - Add members
        chats/{id}/members/{user_id}/  - Remove a member
        chats/{id}/leave/              - Leave a group
        chats/{id}/messages/           - Page through or send messages
    ws/notifications/                  - WebSocket event stream (see asgi.py)
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
api_v1_patterns = [
    path("auth/", include("authentication.urls")),
    path("friends/", include("friends.urls")),
    path("chat/", include("chat.urls")),
]

urlpatterns = [
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("admin/", admin.site.urls),
    path("health/", health_check, name="health_check"),
    path("api/v1/", include(api_v1_patterns)),
]

admin.site.site_header = "Chat Admin"
admin.site.site_title = "Chat Admin Portal"
admin.site.index_title = "Users, friendships and chats"

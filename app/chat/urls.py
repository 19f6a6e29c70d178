"""
URL configuration for chat API.

URL Structure:
    /chats/                          GET, POST
    /chats/groups/                   GET
    /chats/{id}/                     GET, PATCH, DELETE
    /chats/{id}/members/             POST
    /chats/{id}/members/{user_id}/   DELETE
    /chats/{id}/leave/               POST
    /chats/{id}/messages/            GET, POST

All URLs are prefixed with /api/v1/chat/ in the main URL configuration.
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from chat.views import ChatViewSet

router = DefaultRouter()
router.register(r"chats", ChatViewSet, basename="chat")

app_name = "chat"

urlpatterns = [
    path("", include(router.urls)),
]

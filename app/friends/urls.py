"""
URL configuration for friends app.

Mounted at /api/v1/friends/.
"""

from django.urls import path

from friends.views import FriendListView, FriendRequestView, RespondFriendRequestView

app_name = "friends"

urlpatterns = [
    path("", FriendListView.as_view(), name="friend_list"),
    path("requests/", FriendRequestView.as_view(), name="friend_requests"),
    path("requests/respond/", RespondFriendRequestView.as_view(), name="friend_request_respond"),
]

"""
Friends application configuration.

Friend requests are the only way two users get a direct chat.
"""

from django.apps import AppConfig


class FriendsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "friends"
    verbose_name = "Friends"

"""
Chat application configuration.

This app provides the chat system with:
- Direct chats between friends and group chats with an admin
- Paged message history with attachments
"""

from django.apps import AppConfig


class ChatConfig(AppConfig):
    """Configuration for the chat application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "chat"
    verbose_name = "Chat"

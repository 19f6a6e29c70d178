"""
Django admin configuration for chat models.

Provides admin interfaces for:
- Chat browsing with members inline
- Message moderation with attachments inline
"""

from django.contrib import admin

from chat.models import Attachment, Chat, ChatMember, DirectChatPair, Message


class ChatMemberInline(admin.TabularInline):
    model = ChatMember
    extra = 0
    readonly_fields = ["joined_at"]
    raw_id_fields = ["user"]


class AttachmentInline(admin.TabularInline):
    model = Attachment
    extra = 0
    readonly_fields = ["remote_id", "url", "kind", "position"]


@admin.register(Chat)
class ChatAdmin(admin.ModelAdmin):
    """Admin interface for Chat model."""

    list_display = ["id", "name", "is_group", "creator", "created_at", "updated_at"]
    list_filter = ["is_group", "created_at"]
    search_fields = ["name", "id"]
    readonly_fields = ["created_at", "updated_at"]
    raw_id_fields = ["creator"]
    inlines = [ChatMemberInline]
    ordering = ["-updated_at"]


@admin.register(DirectChatPair)
class DirectChatPairAdmin(admin.ModelAdmin):
    list_display = ["chat", "user_lower", "user_higher"]
    raw_id_fields = ["chat", "user_lower", "user_higher"]


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    """Admin interface for Message model."""

    list_display = ["id", "chat", "sender", "created_at"]
    list_filter = ["created_at"]
    search_fields = ["content", "sender__email"]
    readonly_fields = ["created_at"]
    raw_id_fields = ["chat", "sender"]
    inlines = [AttachmentInline]
    ordering = ["-created_at"]

from django.contrib import admin

from friends.models import FriendRequest


@admin.register(FriendRequest)
class FriendRequestAdmin(admin.ModelAdmin):
    list_display = ["id", "sender", "receiver", "status", "created_at"]
    list_filter = ["status", "created_at"]
    search_fields = ["sender__email", "receiver__email"]
    readonly_fields = ["created_at", "updated_at"]
    raw_id_fields = ["sender", "receiver"]

"""
Chat app: chat registry and message store.

This app handles:
- Group chats (3 to 30 members on creation, admin succession on leave)
- Direct chats, opened by accepted friend requests
- Messages with up to 5 attachments, paged newest first
- Chat deletion with attachment blob cleanup

Related apps:
    - friends: Opens direct chats through ChatService.create_direct
    - media: Blob store for attachments
    - notifications: Real-time events for chat changes

Usage:
    from chat.services import ChatService, MessageService

    group = ChatService.create_group(creator=user, name="Hikers", member_ids=[2, 3])
    MessageService.append(user, group.id, content="Hello!")
"""

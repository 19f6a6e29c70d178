"""
Limits for chat membership, messages and attachments.

Import example:
    from chat.constants import GROUP_CONFIG, MESSAGE_CONFIG
"""

from typing import Final


# =============================================================================
# Group Membership
# =============================================================================


class GROUP_CONFIG:
    """Size limits for group chats, counted including the creator."""

    MAX_MEMBERS: Final[int] = 30
    MIN_MEMBERS_ON_CREATE: Final[int] = 3
    # remove_member refuses when the group is this small or smaller
    MIN_MEMBERS_FOR_REMOVAL: Final[int] = 3
    # leave refuses when fewer than this would remain
    MIN_REMAINING_AFTER_LEAVE: Final[int] = 2
    MAX_NAME_LENGTH: Final[int] = 100
    # Member avatars shown for a group in the chat list
    LIST_AVATAR_COUNT: Final[int] = 3


# =============================================================================
# Messages
# =============================================================================


class MESSAGE_CONFIG:
    """Message content, attachment and paging limits."""

    MAX_CONTENT_LENGTH: Final[int] = 10000
    MAX_ATTACHMENTS: Final[int] = 5
    PAGE_SIZE: Final[int] = 20

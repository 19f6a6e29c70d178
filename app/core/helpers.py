"""
Helper functions shared across apps.

These have no knowledge of chats or users beyond primary keys.

Usage:
    from core.helpers import calculate_pagination, canonical_pair

    meta = calculate_pagination(total=45, page=3, per_page=20)
    lower_id, higher_id = canonical_pair(user_a.id, user_b.id)
"""

from __future__ import annotations

import math


def calculate_pagination(total: int, page: int, per_page: int) -> dict:
    """
    Calculate pagination metadata without clamping to the last page.

    Page numbers below 1 are treated as 1. A page past the end keeps its
    number and reports an empty slice, so callers return no items rather
    than repeating the last page.

    Args:
        total: Total number of items
        page: Requested page number (1-indexed)
        per_page: Items per page

    Returns:
        Dict with page, per_page, total, total_pages, offset,
        has_next and has_previous

    Example:
        calculate_pagination(total=45, page=3, per_page=20)
        # {"page": 3, "per_page": 20, "total": 45, "total_pages": 3,
        #  "offset": 40, "has_next": False, "has_previous": True}
    """
    total_pages = math.ceil(total / per_page) if per_page > 0 else 0
    page = max(1, page)

    return {
        "page": page,
        "per_page": per_page,
        "total": total,
        "total_pages": total_pages,
        "offset": (page - 1) * per_page,
        "has_next": page < total_pages,
        "has_previous": page > 1,
    }


def canonical_pair(first_id: int, second_id: int) -> tuple[int, int]:
    """Order two ids so an unordered pair always has one representation."""
    if first_id < second_id:
        return first_id, second_id
    return second_id, first_id

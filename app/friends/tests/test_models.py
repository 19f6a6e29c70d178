"""
Tests for the FriendRequest model.
"""

import pytest
from django.db import IntegrityError

from friends.models import FriendRequestStatus
from friends.tests.factories import FriendRequestFactory


class TestFriendRequest:
    def test_save_fills_canonical_pair(self, alice, bob):
        friend_request = FriendRequestFactory(sender=bob, receiver=alice)

        assert friend_request.user_lower_id == min(alice.id, bob.id)
        assert friend_request.user_higher_id == max(alice.id, bob.id)

    def test_one_pending_request_per_pair(self, pending_request, alice, bob):
        with pytest.raises(IntegrityError):
            FriendRequestFactory(sender=bob, receiver=alice)

    def test_answered_requests_do_not_block_new_ones(self, alice, bob):
        FriendRequestFactory(sender=alice, receiver=bob, status=FriendRequestStatus.REJECTED)

        friend_request = FriendRequestFactory(sender=bob, receiver=alice)

        assert friend_request.status == FriendRequestStatus.PENDING

    def test_request_to_self_is_rejected_by_database(self, alice):
        with pytest.raises(IntegrityError):
            FriendRequestFactory(sender=alice, receiver=alice)

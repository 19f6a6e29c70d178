"""
Test configuration and fixtures for friends tests.
"""

from unittest.mock import patch

import pytest

from authentication.tests.factories import UserFactory
from friends.tests.factories import FriendRequestFactory


@pytest.fixture
def alice(db):
    return UserFactory(name="Alice")


@pytest.fixture
def bob(db):
    return UserFactory(name="Bob")


@pytest.fixture
def pending_request(alice, bob):
    """Pending request from alice to bob."""
    return FriendRequestFactory(sender=alice, receiver=bob)


@pytest.fixture
def emitted():
    """Capture Notifier.emit calls made by the friends service."""
    calls = []

    def record(event, recipient_ids, payload=None):
        calls.append((str(event), sorted(set(recipient_ids)), payload))

    with patch("friends.services.Notifier.emit", side_effect=record):
        yield calls

"""
Test configuration and fixtures for chat tests.

Usage:
    def test_example(group, creator_client):
        response = creator_client.get(f"/api/v1/chat/chats/{group.id}/")
        assert response.status_code == 200
"""

from unittest.mock import patch

import pytest
from django.core.files.storage import InMemoryStorage

from authentication.tests.factories import UserFactory
from chat.tests.factories import DirectChatFactory, GroupChatFactory
from media.services import BlobDeleteResult
from media.services.storage import StorageBlobStore


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def creator(db):
    """User who administers the group fixture."""
    return UserFactory(name="Ada")


@pytest.fixture
def member(db):
    return UserFactory(name="Ben")


@pytest.fixture
def second_member(db):
    return UserFactory(name="Cy")


@pytest.fixture
def outsider(db):
    """User who belongs to no test chat."""
    return UserFactory(name="Olive")


# =============================================================================
# Chat Fixtures
# =============================================================================


@pytest.fixture
def group(creator, member, second_member):
    """Three-member group administered by creator."""
    return GroupChatFactory(name="Hikers", creator=creator, members=[member, second_member])


@pytest.fixture
def direct_chat(creator, member):
    return DirectChatFactory(name="Ada-Ben", users=[creator, member])


# =============================================================================
# Collaborator Fixtures
# =============================================================================


@pytest.fixture
def emitted():
    """
    Capture Notifier.emit calls as (event, recipient ids, payload) tuples.

    Recipient ids are sorted so tests can compare them directly.
    """
    calls = []

    def record(event, recipient_ids, payload=None):
        calls.append((str(event), sorted(set(recipient_ids)), payload))

    with patch("chat.services.Notifier.emit", side_effect=record):
        yield calls


@pytest.fixture
def blob_store():
    """
    Replace the blob store used by chat services.

    delete_many reports every id as deleted unless a test changes
    blob_store.delete_many.side_effect or return_value.
    """
    with patch("chat.services.get_blob_store") as factory:
        store = factory.return_value
        store.delete_many.side_effect = lambda ids: BlobDeleteResult(deleted=list(dict.fromkeys(ids)))
        yield store


@pytest.fixture
def memory_storage():
    """
    Route chat uploads to an empty InMemoryStorage.

    Tests can list the storage to see exactly which blobs a request left.
    """
    storage = InMemoryStorage(base_url="/media/")
    with patch("chat.services.get_blob_store", return_value=StorageBlobStore(storage)):
        yield storage


@pytest.fixture
def creator_client(authenticated_client_factory, creator):
    return authenticated_client_factory(creator)


@pytest.fixture
def member_client(authenticated_client_factory, member):
    return authenticated_client_factory(member)


@pytest.fixture
def outsider_client(authenticated_client_factory, outsider):
    return authenticated_client_factory(outsider)

"""
Tests for the friends API endpoints.
"""

from rest_framework import status

from chat.services import ChatService
from friends.models import FriendRequest


FRIENDS_URL = "/api/v1/friends/"
REQUESTS_URL = "/api/v1/friends/requests/"
RESPOND_URL = "/api/v1/friends/requests/respond/"


class TestFriendRequestEndpoints:
    def test_send_then_accept(self, authenticated_client_factory, alice, bob, emitted):
        alice_client = authenticated_client_factory(alice)
        bob_client = authenticated_client_factory(bob)

        sent = alice_client.post(REQUESTS_URL, {"receiver_id": bob.id}, format="json")
        assert sent.status_code == status.HTTP_201_CREATED

        incoming = bob_client.get(REQUESTS_URL)
        assert incoming.status_code == status.HTTP_200_OK
        assert incoming.data[0]["sender"]["id"] == alice.id

        answer = bob_client.post(
            RESPOND_URL, {"request_id": sent.data["id"], "accept": True}, format="json"
        )
        assert answer.status_code == status.HTTP_200_OK
        assert answer.data["accepted"] is True
        assert answer.data["chat_id"] is not None

        friends = alice_client.get(FRIENDS_URL)
        assert [friend["id"] for friend in friends.data] == [bob.id]

    def test_duplicate_request_conflicts(self, authenticated_client_factory, pending_request, bob, alice):
        response = authenticated_client_factory(bob).post(
            REQUESTS_URL, {"receiver_id": alice.id}, format="json"
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data["error_code"] == "REQUEST_PENDING"

    def test_sender_cannot_respond(self, authenticated_client_factory, pending_request, alice):
        response = authenticated_client_factory(alice).post(
            RESPOND_URL, {"request_id": pending_request.id, "accept": True}, format="json"
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["error_code"] == "NOT_RECEIVER"
        assert FriendRequest.objects.exists()

    def test_reject(self, authenticated_client_factory, pending_request, bob, emitted):
        response = authenticated_client_factory(bob).post(
            RESPOND_URL, {"request_id": pending_request.id, "accept": False}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {"accepted": False, "chat_id": None}

    def test_missing_fields_are_a_validation_error(self, authenticated_client_factory, bob):
        response = authenticated_client_factory(bob).post(RESPOND_URL, {}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "VALIDATION_ERROR"
        assert "request_id" in response.data["details"]

    def test_requires_authentication(self, api_client, db):
        assert api_client.get(FRIENDS_URL).status_code == status.HTTP_401_UNAUTHORIZED


class TestFriendList:
    def test_unknown_chat_id(self, authenticated_client_factory, alice, bob):
        ChatService.create_direct(alice, bob)

        response = authenticated_client_factory(alice).get(FRIENDS_URL, {"chat_id": 999_999})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error_code"] == "CHAT_NOT_FOUND"

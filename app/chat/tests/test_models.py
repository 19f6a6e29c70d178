"""
Tests for chat models and their database constraints.
"""

import pytest
from django.db import IntegrityError, transaction

from authentication.tests.factories import UserFactory
from chat.models import Chat, ChatMember, DirectChatPair, Message
from chat.tests.factories import AttachmentFactory, DirectChatFactory, GroupChatFactory, MessageFactory


class TestChat:
    def test_member_ids_and_is_member(self, group, creator, member, second_member, outsider):
        assert set(group.member_ids()) == {creator.id, member.id, second_member.id}
        assert group.is_member(member)
        assert not group.is_member(outsider)

    def test_direct_chat_cannot_have_creator(self, db):
        user = UserFactory()

        with pytest.raises(IntegrityError):
            Chat.objects.create(is_group=False, name="Broken", creator=user)

    def test_str_shows_kind(self, group):
        assert "group" in str(group)
        assert group.name in str(group)


class TestChatMember:
    def test_user_cannot_join_twice(self, group, member):
        with pytest.raises(IntegrityError):
            ChatMember.objects.create(chat=group, user=member)


class TestDirectChatPair:
    def test_pair_is_unique(self, db):
        alice, bob = UserFactory.create_batch(2)
        DirectChatFactory(users=[alice, bob])

        with pytest.raises(IntegrityError), transaction.atomic():
            DirectChatFactory(users=[bob, alice])

    def test_pair_is_stored_in_canonical_order(self, db):
        alice, bob = UserFactory.create_batch(2)
        chat = DirectChatFactory(users=[bob, alice])

        pair = DirectChatPair.objects.get(chat=chat)
        assert pair.user_lower_id < pair.user_higher_id


class TestMessage:
    def test_messages_order_oldest_first(self, group):
        first = MessageFactory(chat=group)
        second = MessageFactory(chat=group)

        assert list(group.messages.all()) == [first, second]

    def test_deleting_chat_cascades_to_messages_and_attachments(self, group):
        attachment = AttachmentFactory(message=MessageFactory(chat=group))

        group.delete()

        assert not Message.objects.filter(pk=attachment.message_id).exists()
        assert not type(attachment).objects.filter(pk=attachment.pk).exists()

    def test_sender_deletion_keeps_message(self, group, member):
        message = MessageFactory(chat=group, sender=member)

        member.delete()
        message.refresh_from_db()

        assert message.sender is None


class TestGroupChatFactory:
    def test_creator_is_member(self, db):
        group = GroupChatFactory()

        assert group.is_member(group.creator)
        assert len(group.member_ids()) == 3

"""
Factory Boy factories for chat models.

Usage:
    from chat.tests.factories import (
        AttachmentFactory,
        DirectChatFactory,
        GroupChatFactory,
        MessageFactory,
    )

    # Group of the creator plus two generated members
    group = GroupChatFactory()

    # Group with chosen members (the creator is added automatically)
    group = GroupChatFactory(creator=alice, members=[bob, carol])

    # Direct chat between two users
    chat = DirectChatFactory(users=[alice, bob])

    message = MessageFactory(chat=group, sender=alice)
"""

import factory

from authentication.tests.factories import UserFactory
from chat.models import Attachment, AttachmentKind, Chat, ChatMember, DirectChatPair, Message
from core.helpers import canonical_pair


class GroupChatFactory(factory.django.DjangoModelFactory):
    """
    Group chat with its creator as a member.

    Examples:
        group = GroupChatFactory()                          # 3 members
        group = GroupChatFactory(members=[bob])             # creator + bob
        group = GroupChatFactory(members=UserFactory.create_batch(29))
    """

    class Meta:
        model = Chat
        skip_postgeneration_save = True

    is_group = True
    name = factory.Sequence(lambda n: f"Group {n}")
    creator = factory.SubFactory(UserFactory)

    @factory.post_generation
    def members(self, create, extracted, **kwargs):
        if not create:
            return
        users = extracted if extracted is not None else UserFactory.create_batch(2)
        ChatMember.objects.create(chat=self, user=self.creator)
        for user in users:
            if user.pk != self.creator_id:
                ChatMember.objects.create(chat=self, user=user)


class DirectChatFactory(factory.django.DjangoModelFactory):
    """Direct chat between two users, registered in DirectChatPair."""

    class Meta:
        model = Chat
        skip_postgeneration_save = True

    is_group = False
    name = factory.Sequence(lambda n: f"Direct {n}")
    creator = None

    @factory.post_generation
    def users(self, create, extracted, **kwargs):
        if not create:
            return
        first, second = extracted if extracted is not None else UserFactory.create_batch(2)
        lower_id, higher_id = canonical_pair(first.pk, second.pk)
        DirectChatPair.objects.create(chat=self, user_lower_id=lower_id, user_higher_id=higher_id)
        ChatMember.objects.create(chat=self, user=first)
        ChatMember.objects.create(chat=self, user=second)


class MessageFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Message

    chat = factory.SubFactory(GroupChatFactory)
    sender = factory.LazyAttribute(lambda o: o.chat.creator)
    content = factory.Faker("sentence")


class AttachmentFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Attachment

    message = factory.SubFactory(MessageFactory)
    remote_id = factory.Sequence(lambda n: f"chat-attachments/{n:04d}.png")
    url = factory.LazyAttribute(lambda o: f"https://cdn.example.com/{o.remote_id}")
    kind = AttachmentKind.IMAGE
    position = 0

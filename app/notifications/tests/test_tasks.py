"""
Tests for the deliver_event Celery task.
"""

from unittest.mock import MagicMock, patch

from notifications.tasks import deliver_event


class FakeChannelLayer:
    def __init__(self):
        self.sent = []

    async def group_send(self, group, message):
        self.sent.append((group, message))


class TestDeliverEvent:
    def test_sends_to_each_user_group(self):
        layer = FakeChannelLayer()

        with patch("notifications.tasks.get_channel_layer", return_value=layer):
            count = deliver_event("alert", ["1", "2"], {"message": "hi"})

        assert count == 2
        assert [group for group, _ in layer.sent] == ["user_1", "user_2"]
        assert layer.sent[0][1] == {
            "type": "notification.event",
            "event": "alert",
            "payload": {"message": "hi"},
        }

    def test_without_channel_layer_nothing_is_sent(self):
        with patch("notifications.tasks.get_channel_layer", return_value=None):
            assert deliver_event("alert", ["1"]) == 0

    def test_runs_through_celery_apply(self):
        layer = FakeChannelLayer()

        with patch("notifications.tasks.get_channel_layer", return_value=layer):
            result = deliver_event.apply(args=("refetch-chat-list", ["9"], None))

        assert result.successful()
        assert layer.sent[0][0] == "user_9"

    def test_layer_errors_fail_the_task(self):
        layer = MagicMock()

        async def broken_send(group, message):
            raise RuntimeError("layer unavailable")

        layer.group_send = broken_send

        with patch("notifications.tasks.get_channel_layer", return_value=layer):
            result = deliver_event.apply(args=("alert", ["1"], None))

        assert result.failed()

"""
Notifications app: real-time fan-out of chat events.

Services call Notifier.emit() with an event kind and recipient ids. After
the surrounding transaction commits, a Celery task pushes the event onto
each recipient's Channels group, and NotificationConsumer forwards it to
every WebSocket the user has open.
"""

"""
Celery application for background work.

Notification delivery (notifications.tasks.deliver_event) runs here so that
request handlers never wait on the channel layer. Redis is both broker and
result backend; all settings are read from Django settings under the CELERY_
namespace.

Usage:
    celery -A config worker -l info

https://docs.celeryq.dev/en/stable/django/first-steps-with-django.html
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("chat_backend")

app.config_from_object("django.conf:settings", namespace="CELERY")

# Picks up tasks.py from every installed app
app.autodiscover_tasks()

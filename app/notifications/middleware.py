"""
WebSocket authentication middleware.

Browsers cannot set an Authorization header on a WebSocket handshake, so
the access token travels in the query string:

    ws://host/ws/notifications/?token=<jwt access token>

Usage in config/asgi.py:
    application = ProtocolTypeRouter({
        "websocket": JWTAuthMiddleware(URLRouter(websocket_urlpatterns)),
    })
"""

from __future__ import annotations

import logging
from urllib.parse import parse_qs

from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

logger = logging.getLogger(__name__)


@database_sync_to_async
def get_user_for_token(raw_token: str):
    """
    Resolve an access token to an active user.

    Returns AnonymousUser for invalid or expired tokens and unknown or
    inactive users.
    """
    try:
        token = AccessToken(raw_token)
    except TokenError as e:
        logger.info(f"Rejected WebSocket token: {e}")
        return AnonymousUser()

    user_id = token.get(api_settings.USER_ID_CLAIM)
    User = get_user_model()
    try:
        return User.objects.get(**{api_settings.USER_ID_FIELD: user_id}, is_active=True)
    except User.DoesNotExist:
        return AnonymousUser()


def get_token_from_scope(scope) -> str | None:
    query = parse_qs(scope.get("query_string", b"").decode())
    tokens = query.get("token")
    return tokens[0] if tokens else None


class JWTAuthMiddleware(BaseMiddleware):
    """Attach the user identified by ?token= to scope["user"]."""

    async def __call__(self, scope, receive, send):
        scope = dict(scope)
        raw_token = get_token_from_scope(scope)
        scope["user"] = await get_user_for_token(raw_token) if raw_token else AnonymousUser()
        return await super().__call__(scope, receive, send)

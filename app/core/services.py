"""
Base service class for business logic encapsulation.

Services hold the rules; views handle HTTP and models hold data. Service
methods are classmethods on stateless classes. They return domain objects on
success and raise core.exceptions errors on failure.

Usage:
    from core.services import BaseService
    from core.exceptions import NotFoundError

    class ChatService(BaseService):
        @classmethod
        def rename(cls, user, chat_id, name):
            with cls.atomic():
                chat = cls._lock_chat(chat_id)
                ...
            cls.get_logger().info(f"Chat {chat.id} renamed by user {user.id}")
            return chat
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from django.db import transaction

from core.exceptions import ValidationError

if TYPE_CHECKING:
    from collections.abc import Generator


class BaseService:
    """
    Base class for service layer classes.

    Provides:
    - A logger per service class
    - Explicit transaction boundaries
    - Small shared validation helpers
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        The logger is named after the module and class (for example
        "chat.services.ChatService") for easy filtering.
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Run the enclosed block in a database transaction.

        Everything inside commits together or rolls back together. Row
        locks taken with select_for_update() are held until the block exits.
        """
        with transaction.atomic():
            yield

    @classmethod
    def validate_required(cls, **kwargs) -> None:
        """
        Raise ValidationError if any named value is None or blank.

        Example:
            cls.validate_required(name=name)
        """
        errors = {}
        for field_name, value in kwargs.items():
            if value is None or (isinstance(value, str) and not value.strip()):
                errors[field_name] = ["This field is required."]

        if errors:
            missing = ", ".join(errors)
            raise ValidationError(
                f"Required fields missing: {missing}",
                error_code=f"{next(iter(errors)).upper()}_REQUIRED",
                details=errors,
            )

"""
Test configuration and fixtures for authentication tests.
"""

import io

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image

from authentication.tests.factories import UserFactory


@pytest.fixture
def user(db):
    """Create a basic active user."""
    return UserFactory(name="Sam Carter")


@pytest.fixture
def valid_registration_data():
    """Registration payload that passes validation."""
    return {
        "email": "newuser@example.com",
        "password": "Sup3rSecret!pass",
        "name": "New User",
        "username": "new_user",
    }


@pytest.fixture
def avatar_file():
    """A small PNG upload."""
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), color="blue").save(buffer, format="PNG")
    return SimpleUploadedFile("avatar.png", buffer.getvalue(), content_type="image/png")

"""
Tests for chat app.

This package contains test modules for:
- test_models.py: Chat, membership and message model tests
- test_services.py: ChatService, MessageService and attachment cleanup
- test_views.py: REST API endpoint tests

Usage:
    pytest chat/tests/
    pytest chat/tests/test_services.py
"""

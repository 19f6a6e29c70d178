"""
Authentication application: the user directory.

Key components:
    - User model: Email login with a display name and a unique handle
    - UserService: Registration, friend ids and user search
    - JWT endpoints from djangorestframework-simplejwt

Usage:
    from authentication.models import User
    from authentication.services import UserService
"""

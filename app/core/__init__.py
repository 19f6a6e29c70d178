"""
Core application: infrastructure shared by the domain apps.

Models (import from core.models):
    - BaseModel: Abstract model with created_at/updated_at

Services (import from core.services):
    - BaseService: Logger and transaction helpers for service classes

Exceptions (import from core.exceptions):
    - BaseApplicationError and its ValidationError, NotFoundError,
      PermissionDeniedError, ConflictError, ExternalServiceError subclasses

Helpers (import from core.helpers):
    - calculate_pagination: Page metadata without clamping
    - canonical_pair: Stable ordering for unordered user pairs

Note:
    Models are not imported here to avoid AppRegistryNotReady errors.
"""

from .exceptions import (
    BaseApplicationError,
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from .helpers import calculate_pagination, canonical_pair
from .services import BaseService

__all__ = [
    "BaseService",
    "BaseApplicationError",
    "ValidationError",
    "NotFoundError",
    "PermissionDeniedError",
    "ConflictError",
    "ExternalServiceError",
    "calculate_pagination",
    "canonical_pair",
]

"""
Factory function for blob store backend selection.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.core.files.storage import default_storage

if TYPE_CHECKING:
    from media.services.base import BlobStore


def is_s3_storage() -> bool:
    """
    Check if the default storage backend is S3.

    S3Storage exposes a 'bucket' attribute that FileSystemStorage lacks.
    """
    return hasattr(default_storage, "bucket")


def get_blob_store() -> "BlobStore":
    """
    Get the blob store for the configured storage backend.

    Returns S3BlobStore for S3 storage and StorageBlobStore otherwise.
    """
    if is_s3_storage():
        from media.services.s3 import S3BlobStore

        return S3BlobStore()

    from media.services.storage import StorageBlobStore

    return StorageBlobStore()

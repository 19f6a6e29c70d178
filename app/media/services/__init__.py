"""
Blob store services.

Usage:
    from media.services import get_blob_store

    store = get_blob_store()
    descriptor = store.upload(uploaded_file, folder="chat-attachments")
    result = store.delete_many([descriptor.remote_id])
"""

from media.services.base import (
    AttachmentDescriptor,
    BlobDeleteResult,
    BlobStore,
    attachment_kind,
)
from media.services.factory import get_blob_store, is_s3_storage

__all__ = [
    "AttachmentDescriptor",
    "BlobDeleteResult",
    "BlobStore",
    "attachment_kind",
    "get_blob_store",
    "is_s3_storage",
]

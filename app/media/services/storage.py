"""
Blob store on top of Django's default storage.

Works with any storage backend (FileSystemStorage locally, S3Storage in
deployment). Deletes are issued one object at a time; S3BlobStore overrides
that with batched requests.
"""

from __future__ import annotations

import logging
import os
import uuid
from typing import TYPE_CHECKING

from django.core.files.storage import default_storage

from core.exceptions import ExternalServiceError
from media.services.base import AttachmentDescriptor, BlobDeleteResult, BlobStore, attachment_kind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from django.core.files import File

logger = logging.getLogger(__name__)


class StorageBlobStore(BlobStore):
    """Blob store writing through django.core.files.storage.default_storage."""

    def __init__(self, storage=None) -> None:
        self.storage = storage or default_storage

    def _generate_name(self, folder: str, filename: str) -> str:
        # Random names keep two uploads of "photo.jpg" apart
        _, ext = os.path.splitext(filename or "")
        return f"{folder.strip('/')}/{uuid.uuid4().hex}{ext.lower()}"

    def upload(self, file: "File", folder: str) -> AttachmentDescriptor:
        name = self._generate_name(folder, getattr(file, "name", ""))
        try:
            saved_name = self.storage.save(name, file)
            url = self.storage.url(saved_name)
        except OSError as e:
            logger.error(f"Blob upload failed for {name}: {e}", exc_info=True)
            raise ExternalServiceError(
                "File upload failed",
                error_code="BLOB_UPLOAD_FAILED",
            ) from e

        kind = attachment_kind(getattr(file, "content_type", None))
        logger.info(f"Uploaded blob {saved_name} ({kind})")
        return AttachmentDescriptor(remote_id=saved_name, url=url, kind=kind)

    def delete_many(self, remote_ids: "Iterable[str]") -> BlobDeleteResult:
        result = BlobDeleteResult()
        for remote_id in dict.fromkeys(remote_ids):
            try:
                # Storage.delete() is a no-op for missing files
                self.storage.delete(remote_id)
            except OSError as e:
                logger.warning(f"Failed to delete blob {remote_id}: {e}")
                result.failed.append(remote_id)
            else:
                result.deleted.append(remote_id)

        logger.info(
            f"Blob delete finished: {len(result.deleted)} deleted, "
            f"{len(result.failed)} failed"
        )
        return result

"""
S3 blob store.

Uploads go through django-storages like any other backend. Deletes use the
DeleteObjects API directly, 1000 keys per request (the S3 limit), which
turns a chat with hundreds of attachments into a handful of calls.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from django.core.files.storage import default_storage

from core.exceptions import ExternalServiceError
from media.services.base import AttachmentDescriptor, BlobDeleteResult
from media.services.storage import StorageBlobStore

if TYPE_CHECKING:
    from collections.abc import Iterable

    from django.core.files import File

logger = logging.getLogger(__name__)

# S3 DeleteObjects accepts at most 1000 keys per request
DELETE_BATCH_SIZE = 1000


class S3BlobStore(StorageBlobStore):
    """Blob store for S3-backed default storage with batched deletes."""

    def __init__(self, storage=None, bucket_name: str | None = None) -> None:
        super().__init__(storage or default_storage)
        self.bucket_name = bucket_name or getattr(
            self.storage, "bucket_name", "default-bucket"
        )
        self._s3_client = None

    @property
    def s3_client(self):
        """Get or create S3 client."""
        if self._s3_client is None:
            self._s3_client = boto3.client(
                "s3",
                region_name=getattr(self.storage, "region_name", None),
                endpoint_url=getattr(self.storage, "endpoint_url", None),
            )
        return self._s3_client

    def upload(self, file: "File", folder: str) -> AttachmentDescriptor:
        # django-storages surfaces S3 write failures as botocore errors
        try:
            return super().upload(file, folder)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"S3 upload to {self.bucket_name} failed: {e}", exc_info=True)
            raise ExternalServiceError(
                "File upload failed",
                error_code="BLOB_UPLOAD_FAILED",
            ) from e

    def _key_for(self, remote_id: str) -> str:
        location = (getattr(self.storage, "location", "") or "").strip("/")
        return f"{location}/{remote_id}" if location else remote_id

    def delete_many(self, remote_ids: "Iterable[str]") -> BlobDeleteResult:
        result = BlobDeleteResult()
        unique_ids = list(dict.fromkeys(remote_ids))
        if not unique_ids:
            return result

        for start in range(0, len(unique_ids), DELETE_BATCH_SIZE):
            batch = unique_ids[start:start + DELETE_BATCH_SIZE]
            keys = {self._key_for(remote_id): remote_id for remote_id in batch}

            try:
                response = self.s3_client.delete_objects(
                    Bucket=self.bucket_name,
                    Delete={
                        "Objects": [{"Key": key} for key in keys],
                        "Quiet": True,
                    },
                )
            except (BotoCoreError, ClientError) as e:
                logger.error(
                    f"S3 delete_objects failed for {len(batch)} keys: {e}",
                    exc_info=True,
                )
                result.failed.extend(batch)
                continue

            # Quiet mode only reports errors; missing keys are not errors
            failed_keys = {error["Key"] for error in response.get("Errors", [])}
            for key, remote_id in keys.items():
                if key in failed_keys:
                    result.failed.append(remote_id)
                else:
                    result.deleted.append(remote_id)

        if result.failed:
            logger.warning(
                f"S3 delete left {len(result.failed)} of {len(unique_ids)} objects "
                f"in bucket {self.bucket_name}"
            )
        else:
            logger.info(f"S3 deleted {len(result.deleted)} objects from {self.bucket_name}")
        return result

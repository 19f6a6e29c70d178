"""
Tests for the blob store backends.

StorageBlobStore runs against Django's InMemoryStorage; S3BlobStore gets a
mocked boto3 client so no network calls are made.
"""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError
from django.core.files.storage import InMemoryStorage
from django.core.files.uploadedfile import SimpleUploadedFile

from core.exceptions import ExternalServiceError
from media.services import attachment_kind, get_blob_store
from media.services.s3 import S3BlobStore
from media.services.storage import StorageBlobStore


@pytest.fixture
def storage():
    return InMemoryStorage(base_url="/media/")


class TestAttachmentKind:
    @pytest.mark.parametrize(
        "content_type,expected",
        [
            ("image/png", "image"),
            ("video/mp4", "video"),
            ("audio/mpeg", "audio"),
            ("application/pdf", "file"),
            (None, "file"),
        ],
    )
    def test_maps_mime_type(self, content_type, expected):
        assert attachment_kind(content_type) == expected


class TestStorageBlobStore:
    def test_upload_stores_file_under_folder(self, storage):
        store = StorageBlobStore(storage)
        upload = SimpleUploadedFile("Photo.PNG", b"png-bytes", content_type="image/png")

        descriptor = store.upload(upload, folder="chat-attachments")

        assert descriptor.remote_id.startswith("chat-attachments/")
        assert descriptor.remote_id.endswith(".png")
        assert descriptor.url == f"/media/{descriptor.remote_id}"
        assert descriptor.kind == "image"
        assert storage.exists(descriptor.remote_id)

    def test_same_filename_gets_distinct_ids(self, storage):
        store = StorageBlobStore(storage)

        first = store.upload(SimpleUploadedFile("a.txt", b"1"), folder="f")
        second = store.upload(SimpleUploadedFile("a.txt", b"2"), folder="f")

        assert first.remote_id != second.remote_id

    def test_upload_failure_raises_external_service_error(self):
        broken = MagicMock()
        broken.save.side_effect = OSError("disk full")

        with pytest.raises(ExternalServiceError) as exc_info:
            StorageBlobStore(broken).upload(SimpleUploadedFile("a.txt", b"1"), folder="f")

        assert exc_info.value.error_code == "BLOB_UPLOAD_FAILED"

    def test_delete_many_is_idempotent_and_dedupes(self, storage):
        store = StorageBlobStore(storage)
        descriptor = store.upload(SimpleUploadedFile("a.txt", b"1"), folder="f")

        result = store.delete_many([descriptor.remote_id, descriptor.remote_id, "f/missing.txt"])

        assert result.ok
        assert result.deleted == [descriptor.remote_id, "f/missing.txt"]
        assert not storage.exists(descriptor.remote_id)

    def test_delete_failure_is_reported_per_id(self):
        flaky = MagicMock()
        flaky.delete.side_effect = [None, OSError("permission denied")]

        result = StorageBlobStore(flaky).delete_many(["a", "b"])

        assert result.deleted == ["a"]
        assert result.failed == ["b"]
        assert not result.ok


class TestS3BlobStore:
    @pytest.fixture
    def s3_storage(self):
        storage = MagicMock()
        storage.bucket_name = "chat-bucket"
        storage.location = "uploads"
        return storage

    def test_deletes_in_batches_of_one_thousand(self, s3_storage):
        store = S3BlobStore(s3_storage)
        store._s3_client = MagicMock()
        store._s3_client.delete_objects.return_value = {}
        ids = [f"chat-attachments/{i}.png" for i in range(1500)]

        result = store.delete_many(ids)

        assert store._s3_client.delete_objects.call_count == 2
        first_call = store._s3_client.delete_objects.call_args_list[0].kwargs
        assert first_call["Bucket"] == "chat-bucket"
        assert len(first_call["Delete"]["Objects"]) == 1000
        assert first_call["Delete"]["Objects"][0] == {"Key": "uploads/chat-attachments/0.png"}
        assert len(result.deleted) == 1500
        assert result.ok

    def test_reported_errors_become_failed_ids(self, s3_storage):
        store = S3BlobStore(s3_storage)
        store._s3_client = MagicMock()
        store._s3_client.delete_objects.return_value = {
            "Errors": [{"Key": "uploads/b", "Code": "AccessDenied"}],
        }

        result = store.delete_many(["a", "b", "a"])

        assert result.deleted == ["a"]
        assert result.failed == ["b"]

    def test_client_error_fails_whole_batch(self, s3_storage):
        store = S3BlobStore(s3_storage)
        store._s3_client = MagicMock()
        store._s3_client.delete_objects.side_effect = ClientError(
            {"Error": {"Code": "InternalError", "Message": "boom"}}, "DeleteObjects"
        )

        result = store.delete_many(["a", "b"])

        assert result.failed == ["a", "b"]
        assert result.deleted == []

    @pytest.mark.parametrize(
        "error",
        [
            ClientError({"Error": {"Code": "AccessDenied", "Message": "no"}}, "PutObject"),
            EndpointConnectionError(endpoint_url="https://s3.example.com"),
        ],
    )
    def test_upload_botocore_error_raises_external_service_error(self, s3_storage, error):
        s3_storage.save.side_effect = error

        with pytest.raises(ExternalServiceError) as exc_info:
            S3BlobStore(s3_storage).upload(SimpleUploadedFile("a.txt", b"1"), folder="f")

        assert exc_info.value.error_code == "BLOB_UPLOAD_FAILED"

    def test_upload_goes_through_storage(self, s3_storage):
        s3_storage.save.return_value = "f/abc.png"
        s3_storage.url.return_value = "https://cdn.example.com/uploads/f/abc.png"

        descriptor = S3BlobStore(s3_storage).upload(
            SimpleUploadedFile("a.png", b"1", content_type="image/png"), folder="f"
        )

        assert descriptor.remote_id == "f/abc.png"
        assert descriptor.url == "https://cdn.example.com/uploads/f/abc.png"
        assert descriptor.kind == "image"

    def test_empty_input_makes_no_calls(self, s3_storage):
        store = S3BlobStore(s3_storage)
        store._s3_client = MagicMock()

        assert store.delete_many([]).ok
        store._s3_client.delete_objects.assert_not_called()


class TestGetBlobStore:
    def test_filesystem_storage_uses_storage_blob_store(self, settings):
        settings.STORAGES = {
            **settings.STORAGES,
            "default": {"BACKEND": "django.core.files.storage.InMemoryStorage"},
        }

        store = get_blob_store()

        assert type(store) is StorageBlobStore

    def test_s3_storage_uses_s3_blob_store(self, monkeypatch):
        monkeypatch.setattr("media.services.factory.is_s3_storage", lambda: True)

        assert isinstance(get_blob_store(), S3BlobStore)

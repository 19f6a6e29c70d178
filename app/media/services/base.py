"""
Base types and abstract base class for blob stores.

A blob store keeps uploaded objects addressed by an opaque remote id. Chat
messages keep the remote id and public URL of each attachment; deleting a
chat hands the collected ids back to delete_many().
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from django.core.files import File


# =============================================================================
# Result Types
# =============================================================================


@dataclass(frozen=True)
class AttachmentDescriptor:
    """
    Where an uploaded object lives.

    Attributes:
        remote_id: Blob store id, used for deletion
        url: Public URL handed to clients
        kind: image, video, audio or file
    """

    remote_id: str
    url: str
    kind: str = "file"

    def to_dict(self) -> dict[str, str]:
        return {"remote_id": self.remote_id, "url": self.url, "kind": self.kind}


@dataclass
class BlobDeleteResult:
    """
    Outcome of a bulk delete.

    Ids that did not exist count as deleted.

    Attributes:
        deleted: Ids removed (or already absent)
        failed: Ids the store could not remove
    """

    deleted: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def attachment_kind(content_type: str | None) -> str:
    """
    Map a MIME type to an attachment kind.

    Example:
        attachment_kind("image/png")  # "image"
        attachment_kind("application/pdf")  # "file"
    """
    major = (content_type or "").split("/", 1)[0].lower()
    if major in ("image", "video", "audio"):
        return major
    return "file"


# =============================================================================
# Abstract Base Class
# =============================================================================


class BlobStore(ABC):
    """
    Interface every storage backend implements.

    Implementations must make delete_many idempotent: deleting an id that is
    already gone is reported as deleted, never as failed.
    """

    @abstractmethod
    def upload(self, file: "File", folder: str) -> AttachmentDescriptor:
        """
        Store a file and return its descriptor.

        Args:
            file: Uploaded file (Django File or UploadedFile)
            folder: Prefix grouping related objects

        Raises:
            ExternalServiceError: If the backend rejects the write
        """

    @abstractmethod
    def delete_many(self, remote_ids: "Iterable[str]") -> BlobDeleteResult:
        """
        Delete objects by remote id.

        Args:
            remote_ids: Ids to delete; duplicates are ignored

        Returns:
            BlobDeleteResult listing deleted and failed ids
        """

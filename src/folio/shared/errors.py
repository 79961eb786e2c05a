"""Exception taxonomy for folio.

Classification and normalization never raise; only persistence writes and
the image crop pipeline surface errors, and both are caught at the editing
session boundary.
"""

from __future__ import annotations


class FolioError(Exception):
    """Base class for all folio errors."""


class StorageError(FolioError):
    """Raised when the content store cannot be accessed."""


class StorageWriteError(StorageError):
    """Raised when a document could not be persisted (quota, permissions, disk)."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Could not save {key}: {reason}")
        self.key = key
        self.reason = reason


class CropError(FolioError):
    """Raised when an image could not be cropped or encoded."""


class ImageUploadError(FolioError):
    """Raised when an uploaded file is not an acceptable image."""

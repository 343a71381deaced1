"""Abstract interface for uploaded file storage."""

from abc import ABC, abstractmethod

from speech_transcriber.domain.models import UploadedFile


class BlobStore(ABC):
    """Abstract base class for blob storage backends."""

    @abstractmethod
    def store(self, field_name: str, original_name: str, content: bytes) -> UploadedFile:
        """
        Persists an uploaded payload under a freshly generated name.

        Args:
            field_name: The multipart form field the file arrived in.
            original_name: The file name supplied by the client.
            content: Raw file bytes.

        Returns:
            The stored file with its generated name and paths.

        Raises:
            BlobStoreError: If the write fails.
        """

    @abstractmethod
    def ensure_directory(self) -> None:
        """Creates the storage location if it does not exist yet."""

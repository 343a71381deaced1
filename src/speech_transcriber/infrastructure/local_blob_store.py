"""Local filesystem implementation of the BlobStore interface."""

import os
import time
import uuid
from pathlib import Path

from speech_transcriber.domain.models import UploadedFile
from speech_transcriber.exceptions import BlobStoreError
from speech_transcriber.logging import setup_logging

from .interfaces import BlobStore

logger = setup_logging()


class LocalBlobStore(BlobStore):
    """Writes uploaded files into a directory served under a URL prefix."""

    def __init__(self, directory: Path, url_prefix: str = "/uploads"):
        self._directory = Path(directory)
        self._url_prefix = url_prefix.rstrip("/")

    @property
    def directory(self) -> Path:
        return self._directory

    def ensure_directory(self) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)

    def store(self, field_name: str, original_name: str, content: bytes) -> UploadedFile:
        stored_name = self._generate_name(field_name, original_name)
        storage_path = self._directory / stored_name

        try:
            self.ensure_directory()
            storage_path.write_bytes(content)
        except OSError as e:
            logger.exception(
                "Blob write failed",
                extra={"stored_name": stored_name, "directory": str(self._directory)},
            )
            raise BlobStoreError(stored_name, e) from e

        logger.info(
            "File written to blob store",
            extra={
                "original_name": original_name,
                "stored_name": stored_name,
                "size": len(content),
            },
        )
        return UploadedFile(
            original_name=original_name,
            stored_name=stored_name,
            storage_path=storage_path,
            public_path=f"{self._url_prefix}/{stored_name}",
            content=content,
        )

    def _generate_name(self, field_name: str, original_name: str) -> str:
        """Builds `<field>-<timestamp_ms>-<random hex><ext>`."""
        extension = os.path.splitext(original_name)[1]
        timestamp = int(time.time() * 1000)
        return f"{field_name}-{timestamp}-{uuid.uuid4().hex}{extension}"

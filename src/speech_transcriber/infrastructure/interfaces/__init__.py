"""Infrastructure interface exports."""

from .blob_store import BlobStore
from .result_store import ResultStore
from .transcription_service import TranscriptionService

__all__ = ["BlobStore", "ResultStore", "TranscriptionService"]

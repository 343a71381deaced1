"""Domain layer exports."""

from .models import (
    RequestState,
    TranscriptionJob,
    TranscriptionRecord,
    TranscriptionResult,
    UploadedFile,
)

__all__ = [
    "RequestState",
    "TranscriptionJob",
    "TranscriptionRecord",
    "TranscriptionResult",
    "UploadedFile",
]

"""Abstract interface for transcription record persistence."""

from abc import ABC, abstractmethod

from speech_transcriber.domain.models import TranscriptionRecord


class ResultStore(ABC):
    """Abstract base class for transcription record storage."""

    @abstractmethod
    def save(self, filename: str, filepath: str, transcription: str) -> TranscriptionRecord:
        """
        Inserts one transcription record.

        Raises:
            PersistenceError: If the insert fails.
        """

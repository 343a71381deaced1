"""Repository for transcription record persistence."""

from speech_transcriber.domain.models import TranscriptionRecord
from speech_transcriber.exceptions import PersistenceError
from speech_transcriber.infrastructure.interfaces import ResultStore
from speech_transcriber.logging import setup_logging

logger = setup_logging()


class TranscriptionRepository(ResultStore):
    """
    Writes completed transcriptions to the `transcriptions` table.

    Insert only. Nothing written here is ever updated or read back by the
    upload flow.
    """

    def __init__(self, session_factory):
        """
        Initializes the repository.

        Args:
            session_factory: Callable that returns a SQLModel Session context manager.
        """
        self._session_factory = session_factory

    def save(self, filename: str, filepath: str, transcription: str) -> TranscriptionRecord:
        """
        Persists one transcription record.

        Raises:
            PersistenceError: If the insert fails.
        """
        record = TranscriptionRecord(
            filename=filename,
            filepath=filepath,
            transcription=transcription,
        )
        try:
            with self._session_factory() as db_session:
                db_session.add(record)
                db_session.commit()
                db_session.refresh(record)
        except Exception as e:
            logger.exception(
                "Failed to insert transcription record",
                extra={"original_name": filename, "filepath": filepath},
            )
            raise PersistenceError(filename, cause=e) from e

        logger.info(
            "Transcription record saved",
            extra={"record_id": record.id, "original_name": filename},
        )
        return record

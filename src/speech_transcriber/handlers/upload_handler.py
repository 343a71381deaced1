"""Handler orchestrating a single upload-and-transcribe request."""

from fastapi.concurrency import run_in_threadpool

from speech_transcriber.domain import RequestState, TranscriptionResult
from speech_transcriber.exceptions import (
    NoFileError,
    TranscriptionError,
    TranscriptionTimeoutError,
)
from speech_transcriber.infrastructure.interfaces import (
    BlobStore,
    ResultStore,
    TranscriptionService,
)
from speech_transcriber.logging import setup_logging

logger = setup_logging()


class UploadHandler:
    """Stores an upload, transcribes it and records the result."""

    def __init__(
        self,
        blob_store: BlobStore,
        transcription_service: TranscriptionService,
        result_store: ResultStore,
        field_name: str = "audio",
    ):
        self._blob_store = blob_store
        self._transcription_service = transcription_service
        self._result_store = result_store
        self._field_name = field_name

    async def process(
        self, original_name: str | None, content: bytes | None
    ) -> TranscriptionResult:
        """
        Runs the full pipeline for one uploaded file.

        The stored blob is never removed, even when a later step fails.

        Args:
            original_name: Client-supplied file name, None when no file was sent.
            content: Uploaded bytes, None when no file was sent.

        Returns:
            TranscriptionResult with the transcript and the saved record.

        Raises:
            NoFileError: If the request carried no file.
            BlobStoreError: If the upload cannot be written.
            UpstreamError: If uploading audio or creating the job fails.
            ProviderReportedError: If the provider marks the job as failed.
            TranscriptionTimeoutError: If the job does not finish in time.
            PersistenceError: If the record cannot be inserted.
        """
        self._log_state(RequestState.received, original_name=original_name)
        if not original_name or content is None:
            raise NoFileError(self._field_name)

        uploaded = await run_in_threadpool(
            self._blob_store.store, self._field_name, original_name, content
        )
        self._log_state(RequestState.stored, stored_name=uploaded.stored_name)

        try:
            async with self._transcription_service:
                audio_url = await self._transcription_service.submit_audio(
                    uploaded.content
                )
                self._log_state(RequestState.submitted, stored_name=uploaded.stored_name)

                job = await self._transcription_service.create_job(audio_url)
                self._log_state(RequestState.job_created, job_id=job.job_id)

                self._log_state(RequestState.polling, job_id=job.job_id)
                completed = await self._transcription_service.wait_for_completion(
                    job.job_id
                )
        except TranscriptionTimeoutError as e:
            self._log_state(RequestState.timed_out, job_id=e.job_id)
            raise
        except TranscriptionError:
            self._log_state(RequestState.failed, stored_name=uploaded.stored_name)
            raise

        transcription = completed.text or ""
        self._log_state(RequestState.completed, job_id=completed.job_id)

        record = await run_in_threadpool(
            self._result_store.save,
            uploaded.original_name,
            uploaded.public_path,
            transcription,
        )

        return TranscriptionResult(
            transcription=transcription,
            filename=uploaded.original_name,
            filepath=uploaded.public_path,
            record_id=record.id,
        )

    def _log_state(self, state: RequestState, **context) -> None:
        logger.info("Upload request state", extra={"state": state.value, **context})

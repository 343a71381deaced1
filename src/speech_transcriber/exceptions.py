"""Custom exceptions for the speech transcriber service."""


class NoFileError(Exception):
    """Raised when an upload request carries no file part."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"No file uploaded in field '{field_name}'")


class BlobStoreError(Exception):
    """Raised when writing an uploaded file to the blob store fails."""

    def __init__(self, stored_name: str, cause: Exception | None = None):
        self.stored_name = stored_name
        self.cause = cause
        super().__init__(f"Failed to write '{stored_name}' to the blob store")


class TranscriptionError(Exception):
    """Base class for failures talking to the transcription provider."""


class UpstreamError(TranscriptionError):
    """Raised when a provider call fails at the network level or returns non-2xx."""

    def __init__(
        self,
        step: str,
        status_code: int | None = None,
        cause: Exception | None = None,
    ):
        self.step = step
        self.status_code = status_code
        self.cause = cause
        detail = f" (HTTP {status_code})" if status_code is not None else ""
        super().__init__(f"Transcription provider call '{step}' failed{detail}")


class ProviderReportedError(TranscriptionError):
    """Raised when the provider reports that a transcription job failed."""

    def __init__(self, job_id: str, detail: str):
        self.job_id = job_id
        self.detail = detail
        super().__init__(f"Transcription job '{job_id}' failed: {detail}")


class TranscriptionTimeoutError(TranscriptionError):
    """Raised when a job does not reach a terminal status within the poll ceiling."""

    def __init__(self, job_id: str, attempts: int):
        self.job_id = job_id
        self.attempts = attempts
        super().__init__(
            f"Transcription job '{job_id}' not finished after {attempts} polls"
        )


class PersistenceError(Exception):
    """Raised when saving a transcription record to the database fails."""

    def __init__(self, filename: str, cause: Exception | None = None):
        self.filename = filename
        self.cause = cause
        super().__init__(f"Failed to persist transcription for '{filename}'")

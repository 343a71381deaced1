"""Abstract interface for transcription provider operations."""

from abc import ABC, abstractmethod

from speech_transcriber.domain.models import TranscriptionJob


class TranscriptionService(ABC):
    """Abstract base class for asynchronous job-based transcription backends."""

    @abstractmethod
    async def submit_audio(self, audio_data: bytes) -> str:
        """
        Uploads raw audio to the provider.

        Returns:
            The provider's reference URL for the uploaded audio.

        Raises:
            UpstreamError: If the upload fails.
        """

    @abstractmethod
    async def create_job(self, audio_url: str) -> TranscriptionJob:
        """
        Starts a transcription job for previously uploaded audio.

        Raises:
            UpstreamError: If the job cannot be created.
        """

    @abstractmethod
    async def wait_for_completion(self, job_id: str) -> TranscriptionJob:
        """
        Polls a job until it completes.

        Returns:
            The completed job.

        Raises:
            ProviderReportedError: If the provider reports the job as failed.
            TranscriptionTimeoutError: If the poll ceiling is reached.
            UpstreamError: If a status request fails.
        """

    async def __aenter__(self) -> "TranscriptionService":
        """Starts a run whose calls may share provider resources."""
        return self

    async def __aexit__(self, *exc_info) -> None:
        """Releases whatever `__aenter__` acquired."""

    async def transcribe(self, audio_data: bytes) -> str:
        """Runs submit, create and poll in sequence and returns the transcript text."""
        async with self:
            audio_url = await self.submit_audio(audio_data)
            job = await self.create_job(audio_url)
            completed = await self.wait_for_completion(job.job_id)
        return completed.text or ""

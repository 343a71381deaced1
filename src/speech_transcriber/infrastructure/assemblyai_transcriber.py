"""AssemblyAI implementation of the TranscriptionService interface."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import assemblyai as aai
import httpx

from speech_transcriber.config import AssemblyAIConfig
from speech_transcriber.domain.models import TranscriptionJob
from speech_transcriber.exceptions import (
    ProviderReportedError,
    TranscriptionTimeoutError,
    UpstreamError,
)
from speech_transcriber.logging import setup_logging

from .interfaces import TranscriptionService

logger = setup_logging()

Sleep = Callable[[float], Awaitable[None]]


class AssemblyAITranscriber(TranscriptionService):
    """
    Talks to the AssemblyAI v2 REST API.

    Uploads raw audio, starts a transcript job and polls it at a fixed interval
    up to a fixed number of attempts. Upload and job creation are not retried.
    """

    def __init__(
        self,
        config: AssemblyAIConfig,
        sleep: Sleep = asyncio.sleep,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config
        self._sleep = sleep
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._depth = 0

    async def __aenter__(self) -> "AssemblyAITranscriber":
        """Opens one HTTP client shared by every call until the outermost exit."""
        if self._depth == 0:
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url,
                headers={"authorization": self._config.api_key},
                timeout=self._config.request_timeout_seconds,
                transport=self._transport,
            )
        self._depth += 1
        return self

    async def __aexit__(self, *exc_info) -> None:
        self._depth -= 1
        if self._depth == 0:
            client, self._client = self._client, None
            await client.aclose()

    async def _request(self, step: str, method: str, url: str, **kwargs) -> dict[str, Any]:
        """Sends one request and returns its JSON object body, wrapping any failure."""
        try:
            async with self:
                response = await self._client.request(method, url, **kwargs)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "AssemblyAI request rejected",
                extra={
                    "step": step,
                    "status_code": e.response.status_code,
                    "body": e.response.text,
                },
            )
            raise UpstreamError(step, e.response.status_code, e) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.exception("AssemblyAI request failed", extra={"step": step})
            raise UpstreamError(step, cause=e) from e

        if not isinstance(data, dict):
            logger.error(
                "AssemblyAI response is not a JSON object",
                extra={"step": step, "body_type": type(data).__name__},
            )
            raise UpstreamError(step, cause=TypeError("Expected a JSON object"))
        return data

    async def submit_audio(self, audio_data: bytes) -> str:
        data = await self._request(
            "upload",
            "POST",
            "/upload",
            content=audio_data,
            headers={"content-type": "application/octet-stream"},
        )
        upload_url = data.get("upload_url")
        if not upload_url:
            raise UpstreamError("upload", cause=ValueError("Response has no upload_url"))

        logger.info("Audio uploaded to AssemblyAI", extra={"size": len(audio_data)})
        return upload_url

    async def create_job(self, audio_url: str) -> TranscriptionJob:
        data = await self._request(
            "create_job",
            "POST",
            "/transcript",
            json={"audio_url": audio_url},
        )
        job = self._parse_job("create_job", data)

        logger.info(
            "Transcription job created",
            extra={"job_id": job.job_id, "status": job.status.value},
        )
        return job

    async def get_job(self, job_id: str) -> TranscriptionJob:
        """Fetches the current status of a job once."""
        data = await self._request("poll", "GET", f"/transcript/{job_id}")
        return self._parse_job("poll", data)

    async def wait_for_completion(self, job_id: str) -> TranscriptionJob:
        max_attempts = self._config.max_poll_attempts
        interval = self._config.poll_interval_seconds

        async with self:
            for attempt in range(1, max_attempts + 1):
                job = await self.get_job(job_id)

                if job.status == aai.TranscriptStatus.completed:
                    logger.info(
                        "Transcription completed",
                        extra={"job_id": job_id, "attempt": attempt},
                    )
                    return job

                if job.status == aai.TranscriptStatus.error:
                    detail = job.error or "Transcription failed"
                    logger.error(
                        "Transcription job reported an error",
                        extra={"job_id": job_id, "attempt": attempt, "error": detail},
                    )
                    raise ProviderReportedError(job_id, detail)

                logger.info(
                    "Transcription pending",
                    extra={
                        "job_id": job_id,
                        "status": job.status.value,
                        "attempt": attempt,
                        "max_attempts": max_attempts,
                    },
                )
                if attempt < max_attempts:
                    await self._sleep(interval)

        logger.error(
            "Transcription polling exhausted",
            extra={"job_id": job_id, "attempts": max_attempts},
        )
        raise TranscriptionTimeoutError(job_id, max_attempts)

    def _parse_job(self, step: str, data: dict[str, Any]) -> TranscriptionJob:
        try:
            return TranscriptionJob(
                job_id=data["id"],
                status=data["status"],
                text=data.get("text"),
                error=data.get("error"),
            )
        except (KeyError, ValueError) as e:
            logger.exception("Unexpected AssemblyAI response", extra={"step": step})
            raise UpstreamError(step, cause=e) from e

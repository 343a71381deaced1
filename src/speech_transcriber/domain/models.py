"""Domain models for the speech transcriber service."""

from enum import Enum
from pathlib import Path

import assemblyai as aai
from pydantic import BaseModel
from sqlmodel import Field, SQLModel


class RequestState(str, Enum):
    """Progress of a single upload request through the pipeline."""

    received = "received"
    stored = "stored"
    submitted = "submitted"
    job_created = "job_created"
    polling = "polling"
    completed = "completed"
    failed = "failed"
    timed_out = "timed_out"


class UploadedFile(BaseModel, frozen=True):
    """An uploaded payload after it has been written to the blob store."""

    original_name: str
    stored_name: str
    storage_path: Path
    public_path: str
    content: bytes


class TranscriptionJob(BaseModel, frozen=True):
    """Snapshot of a remote transcription job as last reported by the provider."""

    job_id: str
    status: aai.TranscriptStatus
    text: str | None = None
    error: str | None = None


class TranscriptionRecord(SQLModel, table=True):
    __tablename__ = "transcriptions"

    id: int | None = Field(default=None, primary_key=True)
    filename: str
    filepath: str
    transcription: str


class TranscriptionResult(BaseModel, frozen=True):
    """Outcome of a successful upload request."""

    transcription: str
    filename: str
    filepath: str
    record_id: int | None = None

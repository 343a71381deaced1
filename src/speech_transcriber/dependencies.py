"""FastAPI dependency injection configuration."""

from contextlib import contextmanager
from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from speech_transcriber.config import AppConfig, load_config
from speech_transcriber.handlers import UploadHandler
from speech_transcriber.infrastructure import AssemblyAITranscriber, LocalBlobStore
from speech_transcriber.infrastructure.interfaces import (
    BlobStore,
    ResultStore,
    TranscriptionService,
)
from speech_transcriber.logging import setup_logging
from speech_transcriber.repositories import TranscriptionRepository

logger = setup_logging()


@lru_cache
def get_config() -> AppConfig:
    """Returns the process configuration, loaded once."""
    return load_config()


ConfigDep = Annotated[AppConfig, Depends(get_config)]


@lru_cache
def _build_engine(url: str) -> Engine:
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    engine = create_engine(url, connect_args=connect_args)
    SQLModel.metadata.create_all(engine)
    logger.info("Database initialized", extra={"dialect": engine.dialect.name})
    return engine


def get_engine(config: ConfigDep) -> Engine:
    """Returns the shared database engine for the configured URL."""
    return _build_engine(config.database.url)


def get_blob_store(config: ConfigDep) -> BlobStore:
    """Returns the configured blob store."""
    return LocalBlobStore(config.storage.upload_dir, config.storage.url_prefix)


def get_transcription_service(config: ConfigDep) -> TranscriptionService:
    """Returns the configured transcription service."""
    return AssemblyAITranscriber(config.assemblyai)


def get_result_store(engine: Annotated[Engine, Depends(get_engine)]) -> ResultStore:
    """Returns a repository bound to the shared engine."""

    @contextmanager
    def _session_factory():
        with Session(engine) as session:
            yield session

    return TranscriptionRepository(_session_factory)


def get_upload_handler(
    blob_store: Annotated[BlobStore, Depends(get_blob_store)],
    transcription_service: Annotated[
        TranscriptionService, Depends(get_transcription_service)
    ],
    result_store: Annotated[ResultStore, Depends(get_result_store)],
) -> UploadHandler:
    """Returns the upload handler wired to the configured collaborators."""
    return UploadHandler(blob_store, transcription_service, result_store)

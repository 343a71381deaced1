import json
from contextlib import contextmanager
from pathlib import Path

import httpx
import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine, select

from speech_transcriber.config import (
    AppConfig,
    AssemblyAIConfig,
    DatabaseConfig,
    ServerConfig,
    StorageConfig,
)
from speech_transcriber.domain import TranscriptionRecord

BASE_URL = "https://api.assemblyai.test/v2"


class FakeAssemblyAI:
    """Serves the three AssemblyAI endpoints from canned responses."""

    def __init__(
        self,
        poll_responses=None,
        job_id="J1",
        upload_status=200,
        create_status=200,
        poll_status=200,
    ):
        self.poll_responses = list(poll_responses or [{"status": "completed", "text": ""}])
        self.job_id = job_id
        self.upload_status = upload_status
        self.create_status = create_status
        self.poll_status = poll_status
        self.requests: list[httpx.Request] = []
        self.poll_count = 0

    def requests_to(self, method, path):
        return [
            r for r in self.requests if r.method == method and r.url.path == path
        ]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.method == "POST" and path == "/v2/upload":
            if self.upload_status != 200:
                return httpx.Response(self.upload_status, json={"error": "upload rejected"})
            return httpx.Response(200, json={"upload_url": "https://cdn.test/audio/abc"})

        if request.method == "POST" and path == "/v2/transcript":
            if self.create_status != 200:
                return httpx.Response(self.create_status, json={"error": "bad request"})
            return httpx.Response(200, json={"id": self.job_id, "status": "queued"})

        if request.method == "GET" and path == f"/v2/transcript/{self.job_id}":
            self.poll_count += 1
            if self.poll_status != 200:
                return httpx.Response(self.poll_status, json={"error": "unavailable"})
            index = min(self.poll_count, len(self.poll_responses)) - 1
            body = {"id": self.job_id, "text": None, "error": None}
            body.update(self.poll_responses[index])
            return httpx.Response(200, content=json.dumps(body).encode())

        return httpx.Response(404, json={"error": "not found"})


class RecordingSleep:
    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def assemblyai_config() -> AssemblyAIConfig:
    return AssemblyAIConfig(api_key="test-key", base_url=BASE_URL)


@pytest.fixture
def app_config(tmp_path: Path, assemblyai_config) -> AppConfig:
    return AppConfig(
        server=ServerConfig(),
        database=DatabaseConfig(endpoint="sqlite://"),
        assemblyai=assemblyai_config,
        storage=StorageConfig(upload_dir=tmp_path / "uploads"),
    )


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    @contextmanager
    def _factory():
        with Session(engine) as session:
            yield session

    return _factory


@pytest.fixture
def stored_records(engine):
    def _records() -> list[TranscriptionRecord]:
        with Session(engine) as session:
            return list(session.exec(select(TranscriptionRecord)).all())

    return _records

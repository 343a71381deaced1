"""Application configuration loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, computed_field
from sqlalchemy.engine import make_url


class ServerConfig(BaseModel, frozen=True):
    """HTTP server configuration."""

    host: str = "0.0.0.0"
    port: int = 5000
    cors_allow_origins: tuple[str, ...] = ("*",)


class DatabaseConfig(BaseModel, frozen=True):
    """Database endpoint and access key for the transcriptions table."""

    endpoint: str
    access_key: str = ""

    @computed_field
    @property
    def url(self) -> str:
        """Returns the SQLAlchemy URL, with the access key as the password when set."""
        if not self.access_key:
            return self.endpoint
        return make_url(self.endpoint).set(password=self.access_key).render_as_string(
            hide_password=False
        )


class AssemblyAIConfig(BaseModel, frozen=True):
    """AssemblyAI API configuration."""

    api_key: str
    base_url: str = "https://api.assemblyai.com/v2"
    poll_interval_seconds: float = 3.0
    max_poll_attempts: int = 20
    request_timeout_seconds: float = 30.0


class StorageConfig(BaseModel, frozen=True):
    """Local blob storage configuration."""

    upload_dir: Path = Path("uploads")
    url_prefix: str = "/uploads"


class LoggingConfig(BaseModel, frozen=True):
    """Log level applied to the root and uvicorn loggers."""

    level: str = "INFO"


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    server: ServerConfig
    database: DatabaseConfig
    assemblyai: AssemblyAIConfig
    storage: StorageConfig
    logging: LoggingConfig = LoggingConfig()


def _split_origins(raw: str) -> tuple[str, ...]:
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


def load_config() -> AppConfig:
    """Loads configuration from environment variables and an optional .env file."""
    load_dotenv()
    return AppConfig(
        server=ServerConfig(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "5000")),
            cors_allow_origins=_split_origins(os.getenv("CORS_ALLOW_ORIGINS", "*")),
        ),
        database=DatabaseConfig(
            endpoint=os.getenv("DATABASE_URL", "sqlite:///./transcriptions.db"),
            access_key=os.getenv("DATABASE_KEY", ""),
        ),
        assemblyai=AssemblyAIConfig(
            api_key=os.getenv("ASSEMBLYAI_API_KEY", ""),
            base_url=os.getenv("ASSEMBLYAI_BASE_URL", "https://api.assemblyai.com/v2"),
            request_timeout_seconds=float(
                os.getenv("ASSEMBLYAI_TIMEOUT_SECONDS", "30.0")
            ),
        ),
        storage=StorageConfig(
            upload_dir=Path(os.getenv("UPLOAD_DIR", "uploads")),
        ),
        logging=LoggingConfig(level=os.getenv("LOG_LEVEL", "INFO").upper()),
    )

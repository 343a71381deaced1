"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from speech_transcriber.config import AppConfig
from speech_transcriber.dependencies import get_config
from speech_transcriber.logging import setup_logging
from speech_transcriber.routes import upload_router


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Builds the application; an explicit config also overrides `get_config`."""
    app = FastAPI(title="Speech Transcriber")

    if config is None:
        config = get_config()
    else:
        app.dependency_overrides[get_config] = lambda: config

    setup_logging(config.logging.level)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.server.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(upload_router)

    # StaticFiles refuses to mount a missing directory
    config.storage.upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount(
        config.storage.url_prefix,
        StaticFiles(directory=config.storage.upload_dir),
        name="uploads",
    )
    return app

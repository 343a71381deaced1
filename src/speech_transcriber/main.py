"""FastAPI application entry point."""

import uvicorn
from ddtrace import patch_all

from speech_transcriber.app import create_app
from speech_transcriber.dependencies import get_config

patch_all()

app = create_app()


def run():
    """Serves the application with uvicorn on the configured port."""
    config = get_config()
    uvicorn.run(app, host=config.server.host, port=config.server.port)


if __name__ == "__main__":
    run()

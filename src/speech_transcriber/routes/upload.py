"""Upload and liveness endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.datastructures import UploadFile as StarletteUploadFile

from speech_transcriber.dependencies import get_upload_handler
from speech_transcriber.exceptions import (
    NoFileError,
    PersistenceError,
    ProviderReportedError,
    TranscriptionTimeoutError,
)
from speech_transcriber.handlers import UploadHandler
from speech_transcriber.logging import setup_logging
from speech_transcriber.response_models import ErrorResponse, UploadResponse

logger = setup_logging()

router = APIRouter(tags=["transcriptions"])

UploadHandlerDep = Annotated[UploadHandler, Depends(get_upload_handler)]

AUDIO_FIELD = "audio"
SUCCESS_MESSAGE = "File uploaded, transcribed, and saved."


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    """Liveness check."""
    return "Speech-to-Text Backend is Running..."


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload_audio(request: Request, handler: UploadHandlerDep):
    """
    Stores an audio file, transcribes it and saves the transcript.

    The `audio` multipart field is read from the raw form so that a missing
    file part, or a plain text value in its place, is reported as 400.
    Provider-reported job errors are forwarded verbatim; every other failure
    is reported with a generic message.
    """
    try:
        form = await request.form()
        audio = form.get(AUDIO_FIELD)
        if isinstance(audio, StarletteUploadFile):
            original_name, content = audio.filename, await audio.read()
        else:
            original_name, content = None, None
        result = await handler.process(original_name, content)
    except NoFileError:
        logger.warning("Upload request without a file", extra={"field": AUDIO_FIELD})
        return _error(400, "No file uploaded")
    except ProviderReportedError as e:
        return _error(500, e.detail)
    except TranscriptionTimeoutError:
        return _error(500, "Transcription timed out")
    except PersistenceError:
        return _error(500, "Failed to insert transcription record")
    except Exception:
        logger.exception("Upload failed")
        return _error(500, "Internal Server Error")

    logger.info(
        "Upload processed",
        extra={"original_name": result.filename, "filepath": result.filepath},
    )
    return UploadResponse(message=SUCCESS_MESSAGE, transcription=result.transcription)

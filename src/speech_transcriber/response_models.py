"""Response models for the speech transcriber API."""

from pydantic import BaseModel


class UploadResponse(BaseModel):
    """Response returned after a file was transcribed and saved."""

    message: str
    transcription: str


class ErrorResponse(BaseModel):
    """Error body returned for every failed upload."""

    error: str

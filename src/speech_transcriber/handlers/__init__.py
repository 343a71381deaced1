"""Handler exports."""

from .upload_handler import UploadHandler

__all__ = ["UploadHandler"]

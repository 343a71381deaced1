"""Infrastructure layer exports."""

from .assemblyai_transcriber import AssemblyAITranscriber
from .local_blob_store import LocalBlobStore

__all__ = ["AssemblyAITranscriber", "LocalBlobStore"]

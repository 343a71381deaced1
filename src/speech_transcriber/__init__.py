"""Upload audio, transcribe it with AssemblyAI, and persist the transcript."""

from speech_transcriber.app import create_app
from speech_transcriber.config import AppConfig, load_config

__all__ = ["create_app", "AppConfig", "load_config"]

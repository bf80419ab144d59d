"""Ingestion package interfaces."""

from .models import Transcript
from .transcriber import Transcriber, TranscriptionError

__all__ = ["Transcriber", "Transcript", "TranscriptionError"]

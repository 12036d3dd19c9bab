"""API models package."""

from .base import ErrorResponse, HealthResponse
from .transcript import TranscriptLine, TranscriptResponse

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "TranscriptLine",
    "TranscriptResponse"
]

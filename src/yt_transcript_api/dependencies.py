"""FastAPI dependencies for service injection."""

from fastapi import Request

from yt_transcript.core import TranscriptService

from .config import APIConfig


def get_config(request: Request) -> APIConfig:
    """Configuration the running app was built with."""
    return request.app.state.config


def get_transcript_service(request: Request) -> TranscriptService:
    """Transcript service owned by the running app."""
    return request.app.state.transcript_service

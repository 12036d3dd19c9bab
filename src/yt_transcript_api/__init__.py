"""HTTP API exposing YouTube transcripts."""

__version__ = "0.1.0"

"""Data models for transcript retrieval."""

from .transcript import TranscriptSegment, Cue, TranscriptResult, TranscriptSource

__all__ = [
    "TranscriptSegment",
    "Cue",
    "TranscriptResult",
    "TranscriptSource",
]

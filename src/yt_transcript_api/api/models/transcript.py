"""Transcript response models."""

from typing import List
from pydantic import BaseModel, ConfigDict, Field

from yt_transcript.models import TranscriptSegment


class TranscriptLine(BaseModel):
    """One timed line of the transcript, in seconds."""

    text: str = Field(..., min_length=1)
    offset: float
    duration: float

    @classmethod
    def from_segment(cls, segment: TranscriptSegment) -> "TranscriptLine":
        return cls(**segment.to_dict())


class TranscriptResponse(BaseModel):
    """Successful transcript lookup."""

    model_config = ConfigDict(populate_by_name=True)

    video_title: str = Field(..., alias="videoTitle")
    transcript: List[TranscriptLine]

"""Data models for transcript segments and fetch results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Dict, Any


class TranscriptSource(Enum):
    """Where a transcript came from."""
    INNERTUBE = "innertube"
    YT_DLP = "yt_dlp"


@dataclass
class TranscriptSegment:
    """A single normalized transcript line with timing in seconds."""
    text: str
    offset: float
    duration: float

    @property
    def end(self) -> float:
        """Calculate end time."""
        return self.offset + self.duration

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire representation."""
        return {
            "text": self.text,
            "offset": self.offset,
            "duration": self.duration,
        }


@dataclass
class Cue:
    """A parsed subtitle-track cue."""
    text: str
    start: float
    end: float


@dataclass
class TranscriptResult:
    """
    Outcome of one fetch strategy.

    An empty ``segments`` list is the "nothing found" marker; ``error`` holds
    the exception the strategy caught, if any.
    """
    segments: List[TranscriptSegment] = field(default_factory=list)
    title: Optional[str] = None
    source: Optional[TranscriptSource] = None
    error: Optional[Exception] = None
    fetch_time_ms: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.segments

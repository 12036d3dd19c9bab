"""Exceptions raised while fetching transcripts."""

from typing import Optional


class TranscriptError(Exception):
    """Base class for transcript-related errors."""
    pass


class TranscriptUnavailableError(TranscriptError):
    """The source ran but produced no transcript."""
    pass


class InnertubeError(TranscriptError):
    """The innertube API returned something unusable."""
    pass


class SubtitleDownloadError(TranscriptError):
    """The subtitle downloader exited with an error."""
    pass


class StrategyTimeoutError(TranscriptError):
    """A fetch strategy did not finish in time."""
    pass


class TranscriptNotFoundError(TranscriptError):
    """No strategy produced a single transcript segment."""

    def __init__(self, video_id: str, message: str, title: Optional[str] = None):
        self.video_id = video_id
        self.title = title
        super().__init__(message)


class VideoAccessDeniedError(TranscriptError):
    """The video is private, live or restricted in the server's region."""

    def __init__(self, video_id: str, status_code: int, message: str, title: Optional[str] = None):
        self.video_id = video_id
        self.status_code = status_code
        self.title = title
        super().__init__(message)

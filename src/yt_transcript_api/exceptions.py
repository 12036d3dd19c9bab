"""Custom exceptions for the transcript API."""

from typing import Any, Dict, Optional


class APIError(Exception):
    """Base API exception class."""

    def __init__(
        self,
        detail: str,
        status_code: int = 500,
        error_code: str = "API_ERROR",
        video_id: Optional[str] = None,
        video_title: Optional[str] = None
    ):
        self.detail = detail
        self.message = detail  # Alias for compatibility
        self.status_code = status_code
        self.error_code = error_code
        self.video_id = video_id
        self.video_title = video_title
        super().__init__(detail)

    def to_dict(self) -> Dict[str, Any]:
        """Client-facing error body."""
        body: Dict[str, Any] = {"error": self.message}
        if self.video_title is not None:
            body["videoTitle"] = self.video_title
        if self.video_id is not None:
            body["videoId"] = self.video_id
        return body


class MissingInputError(APIError):
    """No video ID or URL supplied."""

    def __init__(self, detail: str = "Video ID or URL is required (query param: 'id')"):
        super().__init__(
            detail=detail,
            status_code=400,
            error_code="MISSING_INPUT"
        )


class InvalidFormatError(APIError):
    """Video ID or URL could not be parsed."""

    def __init__(self, detail: str = "Invalid YouTube Video ID or URL format"):
        super().__init__(
            detail=detail,
            status_code=400,
            error_code="INVALID_FORMAT"
        )


class UpstreamAccessDeniedError(APIError):
    """Video is private, live or region-restricted."""

    def __init__(self, detail: str, video_id: str, status_code: int = 403):
        super().__init__(
            detail=detail,
            status_code=status_code,
            error_code="UPSTREAM_ACCESS_DENIED",
            video_id=video_id
        )


class TranscriptUnavailableError(APIError):
    """No source produced a transcript."""

    def __init__(
        self,
        video_id: str,
        detail: str = "No transcript available for this video.",
        video_title: Optional[str] = None
    ):
        super().__init__(
            detail=detail,
            status_code=404,
            error_code="TRANSCRIPT_UNAVAILABLE",
            video_id=video_id,
            video_title=video_title
        )


class UpstreamFailureError(APIError):
    """Unclassified failure while fetching."""

    def __init__(self, video_id: Optional[str] = None, detail: str = "Failed to fetch transcript."):
        super().__init__(
            detail=detail,
            status_code=500,
            error_code="UPSTREAM_FAILURE",
            video_id=video_id
        )

"""Orchestration of transcript strategies into a fallback chain."""

import asyncio
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .constants import DEFAULT_TITLE
from .exceptions import (
    StrategyTimeoutError,
    TranscriptNotFoundError,
    TranscriptUnavailableError,
    VideoAccessDeniedError
)
from .transcript_fetcher import (
    InnertubeTranscriptFetcher,
    TranscriptStrategy,
    YtDlpTranscriptFetcher
)
from ..models import TranscriptResult
from ..utils.logging import get_logger

logger = get_logger("transcript_service")

NO_TRANSCRIPT_MESSAGE = "No transcript available for this video."
TRANSCRIPTS_DISABLED_MESSAGE = "Transcripts are not available for this video."

# Best effort: substring match on upstream error text, checked in order
ACCESS_DENIED_MARKERS = (
    (451, "Video is not available in your region.", (
        "not available in your country",
        "not made this video available in your country",
        "blocked it in your country",
        "region",
    )),
    (403, "Video is private or requires sign-in.", (
        "private video",
        "video is private",
        "members-only",
        "join this channel",
        "sign in to confirm your age",
        "login_required",
    )),
    (403, "Live streams have no transcript yet.", (
        "live event",
        "live stream",
        "live_stream_offline",
        "premieres in",
    )),
)


def classify_access_error(errors: Sequence[BaseException]):
    """
    Map upstream error messages to an access restriction.

    Returns:
        (status_code, message) for the first matching marker, or None
    """
    texts = [str(e).lower() for e in errors]
    for status_code, message, markers in ACCESS_DENIED_MARKERS:
        if any(marker in text for text in texts for marker in markers):
            return status_code, message
    return None


class TranscriptService:
    """
    Runs strategies in order until one returns segments.

    Strategies run strictly one after another; the next one starts only
    after the previous came back empty, failed or timed out.
    """

    def __init__(self, strategies: Sequence[TranscriptStrategy], timeout: Optional[float] = None):
        self.strategies = list(strategies)
        self.timeout = timeout

    async def get_transcript(self, video_id: str) -> TranscriptResult:
        """
        Fetch a transcript from the first strategy that produces one.

        The returned result's ``title`` is the first title any strategy
        reported, or ``DEFAULT_TITLE``. It is not entity-decoded.

        Raises:
            VideoAccessDeniedError: If every strategy failed and the errors
                point at a private, live or region-locked video
            TranscriptNotFoundError: If no strategy produced a segment
        """
        title = None
        errors: List[BaseException] = []

        for strategy in self.strategies:
            result = await self._run_strategy(strategy, video_id)
            if title is None and result.title:
                title = result.title
            if result.segments:
                result.title = title or DEFAULT_TITLE
                return result
            if result.error is not None:
                errors.append(result.error)
            logger.info(f"{strategy.source.value} returned no transcript for {video_id}, trying next source")

        denied = classify_access_error(errors)
        if denied:
            status_code, message = denied
            raise VideoAccessDeniedError(video_id, status_code, message, title=title)

        message = NO_TRANSCRIPT_MESSAGE
        if errors and isinstance(errors[-1], TranscriptUnavailableError):
            message = TRANSCRIPTS_DISABLED_MESSAGE
        raise TranscriptNotFoundError(video_id, message, title=title)

    async def _run_strategy(self, strategy: TranscriptStrategy, video_id: str) -> TranscriptResult:
        try:
            return await asyncio.wait_for(strategy.fetch(video_id), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"{strategy.source.value} timed out after {self.timeout}s for {video_id}")
            return TranscriptResult(
                source=strategy.source,
                error=StrategyTimeoutError(f"{strategy.source.value} timed out after {self.timeout}s")
            )


def build_transcript_service(
    scratch_dir: Union[str, Path] = "temp_transcripts",
    timeout: Optional[float] = None,
    ytdlp_binary: str = "yt-dlp",
    language: str = "en"
) -> TranscriptService:
    """Default chain: innertube first, yt-dlp subtitles second."""
    return TranscriptService(
        strategies=[
            InnertubeTranscriptFetcher(),
            YtDlpTranscriptFetcher(scratch_dir=scratch_dir, binary=ytdlp_binary, language=language),
        ],
        timeout=timeout
    )

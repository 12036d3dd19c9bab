"""Core modules for transcript retrieval."""

from .constants import DEFAULT_TITLE, USER_AGENTS
from .exceptions import (
    TranscriptError,
    TranscriptUnavailableError,
    InnertubeError,
    SubtitleDownloadError,
    StrategyTimeoutError,
    TranscriptNotFoundError,
    VideoAccessDeniedError
)
from .innertube import Innertube, VideoInfo, BasicInfo
from .segment_normalizer import normalize_segment, normalize_segments
from .transcript_fetcher import (
    TranscriptStrategy,
    InnertubeTranscriptFetcher,
    YtDlpTranscriptFetcher
)
from .transcript_service import TranscriptService, build_transcript_service

__all__ = [
    'DEFAULT_TITLE',
    'USER_AGENTS',
    'TranscriptError',
    'TranscriptUnavailableError',
    'InnertubeError',
    'SubtitleDownloadError',
    'StrategyTimeoutError',
    'TranscriptNotFoundError',
    'VideoAccessDeniedError',
    'Innertube',
    'VideoInfo',
    'BasicInfo',
    'normalize_segment',
    'normalize_segments',
    'TranscriptStrategy',
    'InnertubeTranscriptFetcher',
    'YtDlpTranscriptFetcher',
    'TranscriptService',
    'build_transcript_service'
]

"""
Transcript fetch strategies.

Two strategies share one contract: ``await strategy.fetch(video_id)`` returns
a ``TranscriptResult`` and never raises for upstream failures. An empty
``segments`` list means "nothing here, try the next source":

- ``InnertubeTranscriptFetcher``: metadata and transcript panel from innertube
- ``YtDlpTranscriptFetcher``: English subtitles downloaded by the yt-dlp CLI
"""

import asyncio
import random
import time
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence, Union

from .constants import DEFAULT_TITLE, USER_AGENTS
from .exceptions import SubtitleDownloadError, TranscriptUnavailableError
from .innertube import Innertube
from .segment_normalizer import normalize_segments
from ..models import TranscriptResult, TranscriptSegment, TranscriptSource
from ..utils.logging import get_logger
from ..utils.subtitle_utils import parse_vtt
from ..utils.youtube_utils import build_watch_url

logger = get_logger("transcript_fetcher")

# First page of transcript lines in a get_transcript response
INITIAL_SEGMENTS_PATH = (
    "actions", 0,
    "update_engagement_panel_action", "content",
    "transcript_renderer", "content",
    "transcript_search_panel_renderer", "body",
    "transcript_segment_list_renderer", "initial_segments",
)

SUBTITLE_EXTENSION = ".vtt"


def get_nested(data: Any, path: Sequence[Union[str, int]]) -> Optional[Any]:
    """Walk ``path`` through nested dicts/lists; None if any level is missing."""
    current = data
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or len(current) <= key:
                return None
            current = current[key]
        else:
            if not isinstance(current, dict) or current.get(key) is None:
                return None
            current = current[key]
    return current


class TranscriptStrategy(ABC):
    """One source of transcripts in the fallback chain."""

    source: TranscriptSource

    @abstractmethod
    async def fetch(self, video_id: str) -> TranscriptResult:
        """Fetch a transcript; failures come back as an empty result."""


class InnertubeTranscriptFetcher(TranscriptStrategy):
    """Primary source: innertube metadata + transcript panel."""

    source = TranscriptSource.INNERTUBE

    def __init__(self, client_factory: Callable[[], Innertube] = Innertube.create):
        self.client_factory = client_factory

    async def fetch(self, video_id: str) -> TranscriptResult:
        # requests is blocking, keep it off the event loop
        return await asyncio.to_thread(self._fetch_sync, video_id)

    def _fetch_sync(self, video_id: str) -> TranscriptResult:
        start_time = time.time()
        title = None
        try:
            youtube = self.client_factory()
            info = youtube.get_info(video_id)
            title = info.basic_info.title or DEFAULT_TITLE

            logger.info(f"Attempting to fetch transcript for {video_id} with innertube...")
            transcript_data = info.get_transcript()

            raw_segments = get_nested(transcript_data, INITIAL_SEGMENTS_PATH)
            if not isinstance(raw_segments, list):
                logger.info(f"Innertube returned no transcript segments for {video_id}")
                return TranscriptResult(
                    title=title,
                    source=self.source,
                    fetch_time_ms=int((time.time() - start_time) * 1000)
                )

            segments = normalize_segments(raw_segments)
            logger.info(f"Fetched {len(segments)} lines for {video_id} with innertube")
            return TranscriptResult(
                segments=segments,
                title=title,
                source=self.source,
                fetch_time_ms=int((time.time() - start_time) * 1000)
            )

        except Exception as e:
            logger.warning(f"Innertube failed for {video_id} (metadata or transcript): {e}")
            return TranscriptResult(
                title=title,
                source=self.source,
                error=e,
                fetch_time_ms=int((time.time() - start_time) * 1000)
            )


class YtDlpTranscriptFetcher(TranscriptStrategy):
    """
    Fallback source: run ``yt-dlp`` to write English subtitles into a scratch
    directory, parse the WebVTT file and delete it.

    Output files are named ``<video_id>_<random token>``, so concurrent
    requests for the same video never share a file.
    """

    source = TranscriptSource.YT_DLP

    def __init__(
        self,
        scratch_dir: Union[str, Path] = "temp_transcripts",
        binary: str = "yt-dlp",
        language: str = "en",
        user_agents: Optional[List[str]] = None
    ):
        self.scratch_dir = Path(scratch_dir)
        self.binary = binary
        self.language = language
        self.user_agents = user_agents or USER_AGENTS

    async def fetch(self, video_id: str) -> TranscriptResult:
        start_time = time.time()
        try:
            segments = await self._download_transcript(video_id)
            logger.info(f"Fetched {len(segments)} lines for {video_id} with yt-dlp")
            return TranscriptResult(
                segments=segments,
                source=self.source,
                fetch_time_ms=int((time.time() - start_time) * 1000)
            )
        except TranscriptUnavailableError as e:
            logger.warning(f"yt-dlp produced no transcript for {video_id}: {e}")
            error = e
        except Exception as e:
            logger.error(f"yt-dlp fallback failed for {video_id}: {e}")
            error = e
        return TranscriptResult(
            source=self.source,
            error=error,
            fetch_time_ms=int((time.time() - start_time) * 1000)
        )

    def build_command(self, output_path: Path, user_agent: str, video_id: str) -> List[str]:
        return [
            self.binary,
            "--write-auto-sub",
            "--write-sub",
            "--sub-lang", self.language,
            "--skip-download",
            "--output", str(output_path),
            "--no-warnings",
            "--user-agent", user_agent,
            build_watch_url(video_id),
        ]

    async def _download_transcript(self, video_id: str) -> List[TranscriptSegment]:
        self.scratch_dir.mkdir(parents=True, exist_ok=True)

        stem = f"{video_id}_{uuid.uuid4().hex[:12]}"
        user_agent = random.choice(self.user_agents)
        command = self.build_command(self.scratch_dir / stem, user_agent, video_id)

        logger.info(f"Executing yt-dlp for {video_id} with User-Agent: {user_agent}...")
        try:
            await self._run(command)

            vtt_file = self._find_subtitle_file(stem)
            if vtt_file is None:
                raise TranscriptUnavailableError("No transcript found (yt-dlp)")

            cues = parse_vtt(vtt_file.read_text(encoding="utf-8"))
        finally:
            self._cleanup(stem)

        return [
            TranscriptSegment(text=cue.text, offset=cue.start, duration=cue.end - cue.start)
            for cue in cues
            if cue.text
        ]

    async def _run(self, command: List[str]) -> None:
        process = await asyncio.create_subprocess_exec(
            *command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE
        )
        try:
            _, stderr = await process.communicate()
        except asyncio.CancelledError:
            process.kill()
            await process.wait()
            raise

        if process.returncode != 0:
            message = (stderr or b"").decode("utf-8", errors="replace").strip()
            raise SubtitleDownloadError(f"yt-dlp exited with code {process.returncode}: {message}")

    def _find_subtitle_file(self, stem: str) -> Optional[Path]:
        matches = sorted(
            p for p in self.scratch_dir.iterdir()
            if p.name.startswith(stem) and p.name.endswith(SUBTITLE_EXTENSION)
        )
        return matches[0] if matches else None

    def _cleanup(self, stem: str) -> None:
        """Remove every file written for ``stem``; failures are only logged."""
        try:
            leftovers = [p for p in self.scratch_dir.iterdir() if p.name.startswith(stem)]
        except OSError as e:
            logger.warning(f"Error listing scratch directory {self.scratch_dir}: {e}")
            return
        for path in leftovers:
            try:
                path.unlink()
            except OSError as e:
                logger.warning(f"Error deleting temp file {path}: {e}")

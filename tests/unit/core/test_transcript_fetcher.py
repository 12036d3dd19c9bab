"""Unit tests for the innertube and yt-dlp fetch strategies."""

import asyncio
import pytest
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

from conftest import SAMPLE_VTT, make_renderer_segment, make_transcript_payload
from yt_transcript.core.constants import USER_AGENTS
from yt_transcript.core.exceptions import (
    InnertubeError,
    SubtitleDownloadError,
    TranscriptUnavailableError
)
from yt_transcript.core.transcript_fetcher import (
    INITIAL_SEGMENTS_PATH,
    InnertubeTranscriptFetcher,
    YtDlpTranscriptFetcher,
    get_nested
)
from yt_transcript.models import TranscriptSegment, TranscriptSource

pytestmark = pytest.mark.unit


def make_client(title="Test Video", transcript=None, info_error=None, transcript_error=None):
    """Innertube stand-in returning canned metadata and transcript data."""
    info = MagicMock()
    info.basic_info.title = title
    if transcript_error:
        info.get_transcript.side_effect = transcript_error
    else:
        info.get_transcript.return_value = transcript

    client = MagicMock()
    if info_error:
        client.get_info.side_effect = info_error
    else:
        client.get_info.return_value = info
    return client


def make_fake_exec(vtt_content=SAMPLE_VTT, returncode=0, write_file=True, outputs=None, delay=0.0):
    """Replacement for asyncio.create_subprocess_exec that mimics yt-dlp."""
    async def fake_exec(*command, **kwargs):
        output = Path(command[command.index("--output") + 1])
        if outputs is not None:
            outputs.append((output, list(command)))
        if write_file:
            Path(f"{output}.en.vtt").write_text(vtt_content, encoding="utf-8")

        async def communicate():
            await asyncio.sleep(delay)
            return b"", (b"ERROR: [youtube] Private video" if returncode else b"")

        process = MagicMock()
        process.returncode = returncode
        process.communicate = communicate
        process.wait = AsyncMock(return_value=returncode)
        return process

    return fake_exec


class TestGetNested:

    def test_full_path(self):
        payload = make_transcript_payload([{"a": 1}])
        assert get_nested(payload, INITIAL_SEGMENTS_PATH) == [{"a": 1}]

    @pytest.mark.parametrize("payload", [
        None,
        {},
        {"actions": []},
        {"actions": [{"update_engagement_panel_action": None}]},
        {"actions": [{"update_engagement_panel_action": {"content": {"transcript_renderer": {}}}}]},
    ])
    def test_missing_levels(self, payload):
        assert get_nested(payload, INITIAL_SEGMENTS_PATH) is None


class TestInnertubeTranscriptFetcher:

    @pytest.mark.asyncio
    async def test_segments_normalized_in_order(self, video_id):
        payload = make_transcript_payload([
            make_renderer_segment("first", 0, 1000),
            make_renderer_segment("", 1000, 2000),
            make_renderer_segment("third &amp; last", 2000, 3500),
        ])
        fetcher = InnertubeTranscriptFetcher(client_factory=lambda: make_client(transcript=payload))

        result = await fetcher.fetch(video_id)

        assert result.source == TranscriptSource.INNERTUBE
        assert result.title == "Test Video"
        assert result.error is None
        assert result.segments == [
            TranscriptSegment(text="first", offset=0.0, duration=1.0),
            TranscriptSegment(text="third & last", offset=2.0, duration=1.5),
        ]

    @pytest.mark.asyncio
    async def test_title_is_not_decoded_here(self, video_id):
        payload = make_transcript_payload([make_renderer_segment("x", 0, 1)])
        fetcher = InnertubeTranscriptFetcher(client_factory=lambda: make_client(title="A &amp; B", transcript=payload))
        result = await fetcher.fetch(video_id)
        assert result.title == "A &amp; B"

    @pytest.mark.asyncio
    async def test_missing_title_defaults(self, video_id):
        payload = make_transcript_payload([make_renderer_segment("x", 0, 1)])
        fetcher = InnertubeTranscriptFetcher(client_factory=lambda: make_client(title=None, transcript=payload))
        result = await fetcher.fetch(video_id)
        assert result.title == "Untitled Video"

    @pytest.mark.asyncio
    async def test_absent_segment_list_is_empty_not_error(self, video_id):
        fetcher = InnertubeTranscriptFetcher(client_factory=lambda: make_client(transcript={"actions": []}))
        result = await fetcher.fetch(video_id)
        assert result.is_empty
        assert result.error is None
        assert result.title == "Test Video"

    @pytest.mark.asyncio
    async def test_transcript_error_keeps_title(self, video_id):
        error = InnertubeError("Transcript panel not found")
        fetcher = InnertubeTranscriptFetcher(client_factory=lambda: make_client(transcript_error=error))
        result = await fetcher.fetch(video_id)
        assert result.is_empty
        assert result.error is error
        assert result.title == "Test Video"

    @pytest.mark.asyncio
    async def test_metadata_error_is_caught(self, video_id):
        error = ConnectionError("network down")
        fetcher = InnertubeTranscriptFetcher(client_factory=lambda: make_client(info_error=error))
        result = await fetcher.fetch(video_id)
        assert result.is_empty
        assert result.error is error
        assert result.title is None

    @pytest.mark.asyncio
    async def test_client_factory_error_is_caught(self, video_id):
        def broken_factory():
            raise InnertubeError("Failed to extract API key/client version.")

        result = await InnertubeTranscriptFetcher(client_factory=broken_factory).fetch(video_id)
        assert result.is_empty
        assert isinstance(result.error, InnertubeError)


class TestYtDlpTranscriptFetcher:

    @pytest.mark.asyncio
    async def test_cues_mapped_and_file_removed(self, scratch_dir, video_id):
        outputs = []
        fetcher = YtDlpTranscriptFetcher(scratch_dir=scratch_dir)

        with patch("asyncio.create_subprocess_exec", new=make_fake_exec(outputs=outputs)):
            result = await fetcher.fetch(video_id)

        assert result.source == TranscriptSource.YT_DLP
        assert result.error is None
        assert result.segments == [
            TranscriptSegment(text="Never gonna give you up", offset=0.0, duration=2.5),
            TranscriptSegment(text="Never gonna let you down", offset=2.5, duration=2.5),
        ]
        assert list(scratch_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_command_line(self, scratch_dir, video_id):
        outputs = []
        fetcher = YtDlpTranscriptFetcher(scratch_dir=scratch_dir, binary="/usr/bin/yt-dlp")

        with patch("asyncio.create_subprocess_exec", new=make_fake_exec(outputs=outputs)):
            await fetcher.fetch(video_id)

        output, command = outputs[0]
        assert command[0] == "/usr/bin/yt-dlp"
        assert "--write-auto-sub" in command
        assert "--write-sub" in command
        assert "--skip-download" in command
        assert command[command.index("--sub-lang") + 1] == "en"
        assert command[command.index("--user-agent") + 1] in USER_AGENTS
        assert command[-1] == f"https://www.youtube.com/watch?v={video_id}"
        assert output.parent == scratch_dir
        assert output.name.startswith(f"{video_id}_")

    @pytest.mark.asyncio
    async def test_scratch_dir_created(self, tmp_path, video_id):
        scratch = tmp_path / "does" / "not" / "exist"
        fetcher = YtDlpTranscriptFetcher(scratch_dir=scratch)

        with patch("asyncio.create_subprocess_exec", new=make_fake_exec()):
            result = await fetcher.fetch(video_id)

        assert scratch.is_dir()
        assert len(result.segments) == 2

    @pytest.mark.asyncio
    async def test_no_subtitle_file(self, scratch_dir, video_id):
        fetcher = YtDlpTranscriptFetcher(scratch_dir=scratch_dir)

        with patch("asyncio.create_subprocess_exec", new=make_fake_exec(write_file=False)):
            result = await fetcher.fetch(video_id)

        assert result.is_empty
        assert isinstance(result.error, TranscriptUnavailableError)

    @pytest.mark.asyncio
    async def test_non_zero_exit(self, scratch_dir, video_id):
        fetcher = YtDlpTranscriptFetcher(scratch_dir=scratch_dir)

        with patch("asyncio.create_subprocess_exec", new=make_fake_exec(returncode=1)):
            result = await fetcher.fetch(video_id)

        assert result.is_empty
        assert isinstance(result.error, SubtitleDownloadError)
        assert "Private video" in str(result.error)
        assert list(scratch_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_missing_binary(self, scratch_dir, video_id):
        fetcher = YtDlpTranscriptFetcher(scratch_dir=scratch_dir)

        with patch("asyncio.create_subprocess_exec", new=AsyncMock(side_effect=FileNotFoundError("yt-dlp"))):
            result = await fetcher.fetch(video_id)

        assert result.is_empty
        assert isinstance(result.error, FileNotFoundError)

    @pytest.mark.asyncio
    async def test_unparseable_file_still_removed(self, scratch_dir, video_id):
        fetcher = YtDlpTranscriptFetcher(scratch_dir=scratch_dir)

        with patch("asyncio.create_subprocess_exec", new=make_fake_exec(vtt_content="garbage")):
            result = await fetcher.fetch(video_id)

        assert result.is_empty
        assert isinstance(result.error, ValueError)
        assert list(scratch_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_concurrent_calls_use_distinct_files(self, scratch_dir, video_id):
        outputs = []
        fetcher = YtDlpTranscriptFetcher(scratch_dir=scratch_dir)
        calls = 8

        with patch("asyncio.create_subprocess_exec", new=make_fake_exec(outputs=outputs, delay=0.01)):
            results = await asyncio.gather(*(fetcher.fetch(video_id) for _ in range(calls)))

        assert len({output for output, _ in outputs}) == calls
        assert all(len(result.segments) == 2 for result in results)
        assert list(scratch_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_cancellation_kills_process_and_cleans_up(self, scratch_dir, video_id):
        fetcher = YtDlpTranscriptFetcher(scratch_dir=scratch_dir)
        fake_exec = make_fake_exec(delay=10)

        with patch("asyncio.create_subprocess_exec", new=fake_exec):
            with pytest.raises(asyncio.TimeoutError):
                await asyncio.wait_for(fetcher.fetch(video_id), timeout=0.05)

        assert list(scratch_dir.iterdir()) == []

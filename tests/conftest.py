"""Pytest configuration and fixtures for the transcript API tests."""

import os
import sys
import pytest
from pathlib import Path
from typing import Any, Dict, List
from unittest.mock import AsyncMock, MagicMock

# Make the src/ packages importable without an editable install
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

# Set test environment variables before importing app
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("API_DEBUG", "true")

from fastapi.testclient import TestClient

from yt_transcript.core import TranscriptService
from yt_transcript.models import TranscriptResult, TranscriptSegment, TranscriptSource
from yt_transcript_api.app import create_app
from yt_transcript_api.config import APIConfig


VIDEO_ID = "dQw4w9WgXcQ"

SAMPLE_VTT = """WEBVTT
Kind: captions
Language: en

00:00:00.000 --> 00:00:02.500 align:start position:0%
Never gonna give you up

00:00:02.500 --> 00:00:05.000
Never gonna
let you down
"""


def make_renderer_segment(text: str, start_ms: int, end_ms: int) -> Dict[str, Any]:
    """Innertube transcript line in its snake_cased renderer shape."""
    return {
        "transcript_segment_renderer": {
            "start_ms": str(start_ms),
            "end_ms": str(end_ms),
            "snippet": {"runs": [{"text": text}]},
        }
    }


def make_transcript_payload(segments: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Wrap raw segments the way the get_transcript endpoint nests them."""
    return {
        "actions": [{
            "update_engagement_panel_action": {
                "content": {
                    "transcript_renderer": {
                        "content": {
                            "transcript_search_panel_renderer": {
                                "body": {
                                    "transcript_segment_list_renderer": {
                                        "initial_segments": segments
                                    }
                                }
                            }
                        }
                    }
                }
            }
        }]
    }


class StubStrategy:
    """Strategy returning a canned result and recording the IDs it was asked for."""

    def __init__(self, result: TranscriptResult, source: TranscriptSource = TranscriptSource.INNERTUBE):
        self.result = result
        self.source = source
        self.calls: List[str] = []

    async def fetch(self, video_id: str) -> TranscriptResult:
        self.calls.append(video_id)
        return self.result


@pytest.fixture
def video_id():
    return VIDEO_ID


@pytest.fixture
def sample_segments():
    """Normalized segments as a successful fetch returns them."""
    return [
        TranscriptSegment(text="Hello & welcome", offset=0.0, duration=1.5),
        TranscriptSegment(text="to the show", offset=1.5, duration=2.0),
    ]


@pytest.fixture
def api_config(tmp_path):
    """Test API configuration with an isolated scratch directory."""
    return APIConfig(
        port=3000,
        scratch_dir=str(tmp_path / "scratch"),
        request_timeout=5,
        log_level="WARNING",
        cors_origins=["*"]
    )


@pytest.fixture
def mock_transcript_service():
    """TranscriptService whose get_transcript is an AsyncMock."""
    service = MagicMock(spec=TranscriptService)
    service.get_transcript = AsyncMock()
    return service


@pytest.fixture
def app(api_config, mock_transcript_service):
    """Create FastAPI test application."""
    return create_app(api_config, transcript_service=mock_transcript_service)


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def scratch_dir(tmp_path) -> Path:
    path = tmp_path / "scratch"
    path.mkdir()
    return path

"""
Minimal anonymous client for YouTube's innertube API.

Only what transcript retrieval needs is covered:
- Session bootstrap (API key and web client version scraped from the home page)
- Video metadata via the ``player`` endpoint
- Transcript panel via the ``next`` and ``get_transcript`` endpoints

Response keys are converted to snake_case, so a transcript line reads as
``{"transcript_segment_renderer": {"start_ms": ..., "snippet": ...}}``.
"""

import json
import random
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.util import Retry

from .constants import YOUTUBE, USER_AGENTS
from .exceptions import InnertubeError
from ..utils.logging import get_logger

logger = get_logger("innertube")

DEFAULT_TIMEOUT = 25

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def new_session() -> requests.Session:
    """Anonymous session with retries and a random browser User-Agent."""
    s = requests.Session()
    retries = Retry(total=5, connect=3, read=3, backoff_factor=0.8,
                    status_forcelist=[429, 500, 502, 503, 504],
                    allowed_methods=["HEAD", "GET", "POST", "OPTIONS"],
                    raise_on_status=False)
    s.mount("https://", HTTPAdapter(max_retries=retries))
    s.mount("http://", HTTPAdapter(max_retries=retries))
    s.headers.update({
        "User-Agent": random.choice(USER_AGENTS),
        "Accept": "*/*",
        "Accept-Language": "en-US,en;q=0.8",
        "Origin": YOUTUBE, "Referer": f"{YOUTUBE}/", "Connection": "keep-alive",
    })
    s.cookies.set("CONSENT", "YES+1", domain=".youtube.com")
    s.cookies.set("PREF", "hl=en", domain=".youtube.com")
    return s


def to_snake_case(value: Any) -> Any:
    """Recursively convert camelCase dict keys to snake_case."""
    if isinstance(value, dict):
        return {_CAMEL_BOUNDARY.sub("_", k).lower(): to_snake_case(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_snake_case(v) for v in value]
    return value


def find_key(value: Any, key: str) -> Optional[Any]:
    """Depth-first search for the first occurrence of ``key`` in nested dicts/lists."""
    if isinstance(value, dict):
        if key in value:
            return value[key]
        children = value.values()
    elif isinstance(value, list):
        children = value
    else:
        return None
    for child in children:
        found = find_key(child, key)
        if found is not None:
            return found
    return None


def extract_innertube_from_html(html: str) -> Optional[Tuple[str, str]]:
    """Pull (api_key, client_version) out of a YouTube HTML page."""
    m_key = re.search(r'"INNERTUBE_API_KEY"\s*:\s*"([^"]+)"', html)
    m_ver = re.search(r'"INNERTUBE_CONTEXT_CLIENT_VERSION"\s*:\s*"([^"]+)"', html)
    if m_key and m_ver:
        return m_key.group(1), m_ver.group(1)
    for m in re.finditer(r'ytcfg\.set\(\s*(\{.*?\})\s*\)\s*;', html, flags=re.S):
        try:
            obj = json.loads(m.group(1))
        except ValueError:
            continue
        api = obj.get("INNERTUBE_API_KEY")
        ver = obj.get("INNERTUBE_CONTEXT_CLIENT_VERSION") or ((obj.get("INNERTUBE_CONTEXT") or {}).get("client") or {}).get("clientVersion")
        if api and ver:
            return api, ver
    return None


@dataclass
class BasicInfo:
    """Subset of ``videoDetails`` from the player response."""
    id: str
    title: Optional[str] = None
    author: Optional[str] = None
    channel_id: Optional[str] = None
    duration: Optional[int] = None
    is_live_content: bool = False


class Innertube:
    """Anonymous innertube session bound to one API key / client version."""

    def __init__(
        self,
        session: requests.Session,
        api_key: str,
        client_version: str,
        timeout: float = DEFAULT_TIMEOUT
    ):
        self.session = session
        self.api_key = api_key
        self.client_version = client_version
        self.timeout = timeout

    @classmethod
    def create(cls, session: Optional[requests.Session] = None, timeout: float = DEFAULT_TIMEOUT) -> "Innertube":
        """
        Bootstrap a client from the YouTube home page.

        Raises:
            requests.RequestException: On network errors
            InnertubeError: If the page carries no innertube configuration
        """
        s = session or new_session()
        page_url = f"{YOUTUBE}/?hl=en&persist_hl=1&persist_gl=1"
        r = s.get(page_url, timeout=timeout, allow_redirects=True)
        r.raise_for_status()
        html = r.text
        if "consent.youtube.com" in r.url or "consent.google.com" in html.lower():
            s.cookies.set("CONSENT", "YES+1", domain=".youtube.com")
            r = s.get(page_url, timeout=timeout, allow_redirects=True)
            r.raise_for_status()
            html = r.text

        pair = extract_innertube_from_html(html)
        if not pair:
            raise InnertubeError("Failed to extract API key/client version.")
        logger.debug(f"Innertube session ready (client version {pair[1]})")
        return cls(s, pair[0], pair[1], timeout=timeout)

    def _post(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        body = {
            "context": {"client": {"clientName": "WEB", "clientVersion": self.client_version, "hl": "en", "gl": "US"}},
            **payload,
        }
        headers = {
            "X-YouTube-Client-Name": "1",
            "X-YouTube-Client-Version": self.client_version,
            "Content-Type": "application/json",
        }
        r = self.session.post(
            f"{YOUTUBE}/youtubei/v1/{endpoint}",
            params={"key": self.api_key, "prettyPrint": "false"},
            json=body,
            headers=headers,
            timeout=self.timeout,
        )
        r.raise_for_status()
        return to_snake_case(r.json())

    def get_info(self, video_id: str) -> "VideoInfo":
        """
        Fetch player and watch-next data for a video.

        Raises:
            InnertubeError: If the video is not playable (private, live, region-locked...)
        """
        player = self._post("player", {"videoId": video_id})
        playability = player.get("playability_status") or {}
        status = playability.get("status", "OK")
        if status != "OK":
            reason = playability.get("reason", "unknown")
            raise InnertubeError(f"Player not OK: {status} ({reason})")

        watch_next = self._post("next", {"videoId": video_id})
        return VideoInfo(self, video_id, player, watch_next)


class VideoInfo:
    """Metadata for one video plus access to its transcript panel."""

    def __init__(self, client: Innertube, video_id: str, player: Dict[str, Any], watch_next: Dict[str, Any]):
        self._client = client
        self._watch_next = watch_next
        details = player.get("video_details") or {}
        length = details.get("length_seconds")
        self.basic_info = BasicInfo(
            id=video_id,
            title=details.get("title"),
            author=details.get("author"),
            channel_id=details.get("channel_id"),
            duration=int(length) if length and str(length).isdigit() else None,
            is_live_content=bool(details.get("is_live_content", False)),
        )

    def get_transcript(self) -> Dict[str, Any]:
        """
        Fetch the transcript panel for this video.

        Raises:
            InnertubeError: If the watch page offers no transcript panel
        """
        endpoint = find_key(self._watch_next, "get_transcript_endpoint") or {}
        params = endpoint.get("params") if isinstance(endpoint, dict) else None
        if not params:
            raise InnertubeError("Transcript panel not found")
        return self._client._post("get_transcript", {"params": params})

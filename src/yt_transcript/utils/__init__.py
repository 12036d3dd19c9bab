"""
Utility modules for transcript retrieval.
"""

from .logging import setup_logger, get_logger
from .youtube_utils import extract_video_id, build_watch_url
from .text_utils import decode_html_entities
from .subtitle_utils import parse_vtt

__all__ = [
    'setup_logger',
    'get_logger',
    'extract_video_id',
    'build_watch_url',
    'decode_html_entities',
    'parse_vtt'
]

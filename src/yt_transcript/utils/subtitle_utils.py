"""WebVTT parsing for subtitle files written by yt-dlp."""

import re
from typing import List

from ..models import Cue

TIMING_RE = re.compile(
    r"^\s*(?P<start>(?:\d+:)?\d{1,2}:\d{2}[.,]\d{1,3})\s+-->\s+"
    r"(?P<end>(?:\d+:)?\d{1,2}:\d{2}[.,]\d{1,3})"
)


def parse_timestamp(timestamp: str) -> float:
    """Parse a VTT timestamp (HH:MM:SS.mmm or MM:SS.mmm) into seconds."""
    parts = timestamp.strip().replace(",", ".").split(":")
    if len(parts) == 3:
        hours, minutes, seconds = parts
    elif len(parts) == 2:
        hours = "0"
        minutes, seconds = parts
    else:
        raise ValueError(f"Invalid timestamp format: {timestamp}")

    sec_parts = seconds.split(".")
    whole = sec_parts[0]
    milliseconds = sec_parts[1] if len(sec_parts) > 1 else "0"

    total_ms = (int(hours) * 3600 + int(minutes) * 60 + int(whole)) * 1000 + int(milliseconds.ljust(3, "0")[:3])
    return total_ms / 1000.0


def parse_vtt(vtt_content: str) -> List[Cue]:
    """
    Parse WebVTT content into cues, in file order.

    Header lines, NOTE/STYLE blocks and cue identifiers are skipped; cue
    settings after the end timestamp are ignored. Multi-line cue payloads
    are joined with a single space. Cues without text are dropped.

    Raises:
        ValueError: If the content does not start with a WEBVTT signature
    """
    content = vtt_content.lstrip("\ufeff")
    lines = content.replace("\r\n", "\n").replace("\r", "\n").split("\n")

    i = 0
    while i < len(lines) and not lines[i].strip():
        i += 1
    if i >= len(lines) or not lines[i].strip().startswith("WEBVTT"):
        raise ValueError("Missing WEBVTT signature")
    i += 1

    cues = []
    while i < len(lines):
        match = TIMING_RE.match(lines[i])
        i += 1
        if not match:
            continue

        text_lines = []
        while i < len(lines) and lines[i].strip():
            if TIMING_RE.match(lines[i]):
                break
            text_lines.append(lines[i].strip())
            i += 1

        text = " ".join(text_lines)
        if not text:
            continue

        cues.append(Cue(
            text=text,
            start=parse_timestamp(match.group("start")),
            end=parse_timestamp(match.group("end")),
        ))

    return cues

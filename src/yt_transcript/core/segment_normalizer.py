"""
Normalization of innertube transcript segments.

Innertube hands back transcript lines in one of three mutually exclusive
shapes. Each raw dict is first classified into a variant, then decoded by
that variant's own function:

- ``RendererSegment``: ``{"transcript_segment_renderer": {snippet, start_ms, end_ms}}``
- ``CueGroupSegment``: ``{"cue_group_renderer": {"cues": [{"cue_renderer": {...}}]}}``
- ``GenericSegment``: anything else carrying ``text``/``runs``/``snippet``
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from ..models import TranscriptSegment
from ..utils.text_utils import decode_html_entities


@dataclass(frozen=True)
class RendererSegment:
    renderer: Dict[str, Any]


@dataclass(frozen=True)
class CueGroupSegment:
    cue: Dict[str, Any]


@dataclass(frozen=True)
class GenericSegment:
    data: Dict[str, Any]


RawSegment = Union[RendererSegment, CueGroupSegment, GenericSegment]


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def classify_segment(raw: Any) -> RawSegment:
    """Pick the variant for a raw segment dict, in fixed priority order."""
    data = _as_dict(raw)

    renderer = data.get("transcript_segment_renderer")
    if renderer and isinstance(renderer, dict):
        return RendererSegment(renderer)

    cues = _as_dict(data.get("cue_group_renderer")).get("cues")
    if isinstance(cues, list) and cues:
        cue = _as_dict(cues[0]).get("cue_renderer")
        if cue and isinstance(cue, dict):
            return CueGroupSegment(cue)

    return GenericSegment(data)


def join_runs(runs: Any) -> str:
    """Concatenate the ``text`` of each run, in order, with no separator."""
    if not isinstance(runs, list):
        return ""
    return "".join(str(run.get("text") or "") for run in runs if isinstance(run, dict))


def _text_or_runs(node: Any) -> str:
    """``node.text`` if it is a non-empty string, else ``node.runs`` joined."""
    node = _as_dict(node)
    text = node.get("text")
    if text and isinstance(text, str):
        return text
    return join_runs(node.get("runs"))


def _ms(value: Any) -> float:
    """Millisecond field (usually a numeric string) to float; junk counts as 0."""
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _present(value: Any) -> bool:
    return value is not None and value != ""


def decode_renderer(segment: RendererSegment) -> Tuple[str, float, float]:
    """Duration is end minus start as given; a missing ``end_ms`` yields a negative duration, left unclamped."""
    tsr = segment.renderer
    text = (
        _text_or_runs(tsr.get("snippet"))
        or (tsr.get("text") if isinstance(tsr.get("text"), str) else "")
        or join_runs(tsr.get("runs"))
    )
    start_ms = _ms(tsr.get("start_ms"))
    end_ms = _ms(tsr.get("end_ms"))
    return text, start_ms / 1000, (end_ms - start_ms) / 1000


def decode_cue_group(segment: CueGroupSegment) -> Tuple[str, float, float]:
    cue = segment.cue
    text = _text_or_runs(cue.get("text"))
    return text, _ms(cue.get("start_offset_ms")) / 1000, _ms(cue.get("duration_ms")) / 1000


def decode_generic(segment: GenericSegment) -> Tuple[str, float, float]:
    data = segment.data
    raw_text = data.get("text")
    if raw_text and isinstance(raw_text, str):
        text = raw_text
    else:
        text = (
            _text_or_runs(raw_text)
            or join_runs(data.get("runs"))
            or _text_or_runs(data.get("snippet"))
        )

    start_ms = data.get("start_ms")
    end_ms = data.get("end_ms")
    duration_ms = data.get("duration_ms")

    offset = _ms(start_ms) / 1000 if _present(start_ms) else 0.0
    if _present(duration_ms):
        duration = _ms(duration_ms) / 1000
    elif _present(start_ms) and _present(end_ms):
        duration = (_ms(end_ms) - _ms(start_ms)) / 1000
    else:
        duration = 0.0
    return text, offset, duration


_DECODERS: Dict[type, Callable[[Any], Tuple[str, float, float]]] = {
    RendererSegment: decode_renderer,
    CueGroupSegment: decode_cue_group,
    GenericSegment: decode_generic,
}


def normalize_segment(raw: Any) -> Optional[TranscriptSegment]:
    """
    Normalize one raw innertube segment.

    Returns:
        The segment with entity-decoded text, or None if the text is empty
    """
    variant = classify_segment(raw)
    text, offset, duration = _DECODERS[type(variant)](variant)
    text = decode_html_entities(text)
    if not text:
        return None
    return TranscriptSegment(text=text, offset=offset, duration=duration)


def normalize_segments(raw_segments: Iterable[Any]) -> List[TranscriptSegment]:
    """Normalize raw segments, keeping source order and dropping empty ones."""
    segments = []
    for raw in raw_segments:
        segment = normalize_segment(raw)
        if segment is not None:
            segments.append(segment)
    return segments

"""Transcript router."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from yt_transcript.core import (
    TranscriptNotFoundError,
    TranscriptService,
    VideoAccessDeniedError
)
from yt_transcript.utils import decode_html_entities, extract_video_id

from ...dependencies import get_transcript_service
from ...exceptions import (
    InvalidFormatError,
    MissingInputError,
    TranscriptUnavailableError,
    UpstreamAccessDeniedError,
    UpstreamFailureError
)
from ..models.base import ErrorResponse
from ..models.transcript import TranscriptLine, TranscriptResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get(
    "/",
    response_model=TranscriptResponse,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        451: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def get_transcript(
    id: Optional[str] = Query(default=None, description="YouTube video ID or URL"),
    transcript_service: TranscriptService = Depends(get_transcript_service)
):
    """
    Fetch the title and timed transcript of a YouTube video.

    Args:
        id: Bare 11 character video ID, or a youtu.be / watch / embed / shorts URL
        transcript_service: Strategy chain doing the actual fetching

    Returns:
        Video title and transcript lines in source order

    Raises:
        APIError: Mapped to 400/403/404/451/500 by the app's exception handler
    """
    if not id:
        raise MissingInputError()

    video_id = extract_video_id(id)
    if not video_id:
        raise InvalidFormatError()

    try:
        logger.info(f"Fetching transcript for video ID: {video_id}")
        result = await transcript_service.get_transcript(video_id)

    except VideoAccessDeniedError as e:
        logger.warning(f"Video {video_id} is not accessible: {e}")
        raise UpstreamAccessDeniedError(str(e), video_id=video_id, status_code=e.status_code)
    except TranscriptNotFoundError as e:
        logger.warning(f"No transcript for {video_id}: {e}")
        title = decode_html_entities(e.title) if e.title else None
        raise TranscriptUnavailableError(video_id, detail=str(e), video_title=title)
    except Exception as e:
        logger.error(f"Error fetching transcript for {video_id}: {e}")
        raise UpstreamFailureError(video_id=video_id)

    source = result.source.value if result.source else "unknown"
    logger.info(f"Returning {len(result.segments)} lines for {video_id} from {source}")
    return TranscriptResponse(
        video_title=decode_html_entities(result.title),
        transcript=[TranscriptLine.from_segment(segment) for segment in result.segments]
    )

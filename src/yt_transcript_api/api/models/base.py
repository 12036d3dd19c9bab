"""Base response models for the API."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Error body returned for every non-200 transcript response."""

    model_config = ConfigDict(populate_by_name=True)

    error: str
    video_title: Optional[str] = Field(default=None, alias="videoTitle")
    video_id: Optional[str] = Field(default=None, alias="videoId")


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    timestamp: datetime = Field(default_factory=datetime.now)

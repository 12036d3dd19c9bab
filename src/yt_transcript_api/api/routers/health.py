"""Health check router."""

from fastapi import APIRouter, Depends

from ...config import APIConfig
from ...dependencies import get_config
from ..models.base import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(config: APIConfig = Depends(get_config)):
    """
    Liveness probe.

    Returns:
        Health status response
    """
    return HealthResponse(status="healthy", version=config.version)

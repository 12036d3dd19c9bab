"""Main FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from yt_transcript.core import TranscriptService, build_transcript_service

from .config import APIConfig, get_api_config
from .exceptions import APIError
from .middleware import setup_middleware


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Args:
        app: FastAPI application instance
    """
    config: APIConfig = app.state.config
    logger.info(f"Starting {config.title} v{config.version}...")
    logger.info(f"Scratch directory: {config.scratch_dir}")
    logger.info(f"Per-source timeout: {config.request_timeout}s")

    yield

    logger.info(f"Shutting down {config.title}...")


def create_app(
    config: Optional[APIConfig] = None,
    transcript_service: Optional[TranscriptService] = None
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        config: API configuration, read from the environment when omitted
        transcript_service: Transcript strategy chain, built from ``config`` when omitted

    Returns:
        Configured FastAPI application instance
    """
    if config is None:
        config = get_api_config()
    else:
        errors = config.validate()
        if errors:
            raise ValueError(f"Configuration errors: {', '.join(errors)}")

    logging.getLogger().setLevel(config.log_level.upper())

    if transcript_service is None:
        transcript_service = build_transcript_service(
            scratch_dir=config.scratch_dir,
            timeout=config.request_timeout,
            ytdlp_binary=config.ytdlp_binary,
            language=config.subtitle_language
        )

    app = FastAPI(
        title=config.title,
        description=config.description,
        version=config.version,
        debug=config.debug,
        lifespan=lifespan,
        docs_url="/docs" if config.debug else None,
        redoc_url=None
    )
    app.state.config = config
    app.state.transcript_service = transcript_service

    setup_middleware(app, config)

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        """Render API errors as ``{error, videoId?}``."""
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    from .api.routers import health, transcript

    app.include_router(health.router, tags=["Health"])
    app.include_router(transcript.router, tags=["Transcript"])

    logger.info("FastAPI application created successfully")
    return app


# Create app instance
app = create_app()


def main() -> None:
    """Run the API with uvicorn on the configured host and port."""
    import uvicorn

    config = get_api_config()
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower()
    )


if __name__ == "__main__":
    main()

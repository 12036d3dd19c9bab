"""Middleware for the FastAPI application."""

import time
import uuid
import logging
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from yt_transcript.utils import extract_video_id

from .config import APIConfig
from .exceptions import APIError, UpstreamFailureError


logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging HTTP requests and responses."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint
    ) -> Response:
        """
        Process request and log details.

        Args:
            request: FastAPI request object
            call_next: Next middleware/endpoint

        Returns:
            Response object
        """
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()
        client_ip = request.client.host if request.client else "unknown"

        logger.info(
            f"Request started - ID: {request_id}, "
            f"Method: {request.method}, "
            f"URL: {request.url}, "
            f"Client IP: {client_ip}"
        )

        try:
            response = await call_next(request)

            process_time = time.time() - start_time
            logger.info(
                f"Request completed - ID: {request_id}, "
                f"Status: {response.status_code}, "
                f"Duration: {process_time:.3f}s"
            )

            response.headers["X-Request-ID"] = request_id
            return response

        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"Request failed - ID: {request_id}, "
                f"Error: {str(e)}, "
                f"Duration: {process_time:.3f}s"
            )
            raise


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Turns anything that escapes the routes into a curated JSON error."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)

        except APIError as e:
            logger.warning(f"API Error: {e.message} (Code: {e.error_code})")
            return JSONResponse(status_code=e.status_code, content=e.to_dict())

        except Exception as e:
            request_id = getattr(request.state, "request_id", "unknown")
            logger.exception(f"Unexpected error in request {request_id}: {str(e)}")
            raw_id = request.query_params.get("id")
            error = UpstreamFailureError(video_id=extract_video_id(raw_id) or raw_id or None)
            return JSONResponse(status_code=error.status_code, content=error.to_dict())


def setup_cors_middleware(app: FastAPI, config: APIConfig) -> None:
    """
    Setup CORS middleware for the application.

    Args:
        app: FastAPI application instance
        config: API configuration
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"]
    )


def setup_middleware(app: FastAPI, config: APIConfig) -> None:
    """
    Setup all middleware for the application.

    Args:
        app: FastAPI application instance
        config: API configuration
    """
    # Last added runs first: errors outermost, CORS innermost
    setup_cors_middleware(app, config)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(ErrorHandlingMiddleware)

    logger.info("Middleware setup completed")

"""Configuration management for the transcript API."""

import os
from dataclasses import dataclass
from typing import List

from dotenv import find_dotenv, load_dotenv

# Field defaults below read the environment at import time
load_dotenv(find_dotenv(usecwd=True))


@dataclass
class APIConfig:
    """API configuration settings."""

    # Core API settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))
    debug: bool = os.getenv("API_DEBUG", "false").lower() == "true"

    # CORS settings
    cors_origins: List[str] = None

    # Application metadata
    title: str = os.getenv("API_TITLE", "YouTube Transcript API")
    description: str = "Fetch the title and timed transcript of a YouTube video"
    version: str = os.getenv("APP_VERSION", "0.1.0")

    # Transcript fetching
    scratch_dir: str = os.getenv("SCRATCH_DIR", "temp_transcripts")
    request_timeout: float = float(os.getenv("REQUEST_TIMEOUT", "60"))
    ytdlp_binary: str = os.getenv("YTDLP_BINARY", "yt-dlp")
    subtitle_language: str = os.getenv("SUBTITLE_LANGUAGE", "en")

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def __post_init__(self):
        """Post-initialization processing."""
        if self.cors_origins is None:
            origins_str = os.getenv("API_CORS_ORIGINS", "*")
            self.cors_origins = [origin.strip() for origin in origins_str.split(",") if origin.strip()]

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if self.port < 1 or self.port > 65535:
            errors.append("PORT must be between 1 and 65535")

        if self.request_timeout <= 0:
            errors.append("REQUEST_TIMEOUT must be positive")

        if not self.ytdlp_binary:
            errors.append("YTDLP_BINARY must not be empty")

        if not self.scratch_dir:
            errors.append("SCRATCH_DIR must not be empty")

        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append("LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")

        return errors


def get_api_config() -> APIConfig:
    """Build and validate API configuration from the environment."""
    config = APIConfig()

    errors = config.validate()
    if errors:
        raise ValueError(f"Configuration errors: {', '.join(errors)}")

    return config

"""Configuration management for SoulPaper.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the SOULPAPER_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (SOULPAPER_* prefix)
2. .env file in the project root
3. Default values defined in SoulpaperConfig

Example .env file:
    SOULPAPER_GEMINI_API_KEY=your-key-here
    SOULPAPER_IMAGE_SIZE=2K
    SOULPAPER_SERVER_PORT=8080

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
It is the single source of truth for the running process and is passed
explicitly into :class:`~soulpaper.core.orchestrator.WallpaperGenerator` and
the image clients it builds. Nothing downstream reads the environment again.

Usage Example
-------------
    from soulpaper.core.config import config

    print(config.model_id)
    print(config.batch_size)

Gemini Image Constraints
------------------------
- aspect_ratio is fixed at 9:16 for phone wallpapers
- image_size is the quality tier ("1K" keeps a batch of four fast)
- temperature 1.0 keeps four calls with the same prompt from repeating
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SoulpaperConfig(BaseSettings):
    """Main configuration for SoulPaper.

    Attributes
    ----------
    Remote Generation Settings:
        gemini_api_key : str | None
            API key for the Gemini API. When unset, the google-genai SDK
            falls back to its own GEMINI_API_KEY / GOOGLE_API_KEY lookup.
        image_client : str
            Registered image client name (see ``client_registry``)
        model_id : str
            Gemini image model identifier
        aspect_ratio : str
            Target aspect ratio sent with every request
        image_size : Literal["1K", "2K", "4K"]
            Quality tier sent with every request
        temperature : float
            Sampling temperature (0.0-2.0)
        request_timeout_seconds : float
            HTTP timeout for a single attempt

    Batch Settings:
        batch_size : int
            Number of concurrent attempts per submission (1-16)

    Paths:
        export_dir : Path | None
            Parent directory for temporary download files. Defaults to
            the system temp directory.

    Server Settings:
        server_host : str
            Bind address for uvicorn
        server_port : int
            Port for uvicorn (1024-65535)
        log_level : str
            Root logging level

    Examples
    --------
        >>> custom_config = SoulpaperConfig(
        ...     gemini_api_key="test-key",
        ...     batch_size=2,
        ... )
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SOULPAPER_",
        case_sensitive=False,
    )

    # Remote generation settings
    gemini_api_key: str | None = Field(
        default=None,
        description="API key for the Gemini API",
    )
    image_client: str = Field(
        default="gemini",
        description="Registered image client used for each attempt",
    )
    model_id: str = Field(
        default="gemini-3-pro-image-preview",
        description="Gemini image model identifier",
    )
    aspect_ratio: str = Field(
        default="9:16",
        description="Target aspect ratio (vertical phone wallpaper)",
    )
    image_size: Literal["1K", "2K", "4K"] = Field(
        default="1K",
        description="Quality tier; 1K is fastest for a batch of four",
    )
    temperature: float = Field(
        default=1.0,
        description="Sampling temperature; high values keep a batch varied",
        ge=0.0,
        le=2.0,
    )
    request_timeout_seconds: float = Field(
        default=120.0,
        description="HTTP timeout for a single generation attempt",
        gt=0.0,
    )

    # Batch settings
    batch_size: int = Field(
        default=4,
        description="Number of concurrent attempts per submission",
        ge=1,
        le=16,
    )

    # Paths
    export_dir: Path | None = Field(
        default=None,
        description="Parent directory for temporary download files",
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root logging level",
    )


# Global configuration instance, sourced once at process start.
config = SoulpaperConfig()

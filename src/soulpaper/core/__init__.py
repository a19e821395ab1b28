"""Core functionality for wallpaper generation.

This module provides the core components of SoulPaper:

- **SoulpaperConfig / config**: Configuration using Pydantic Settings
- **Image clients**: Replaceable single-call image generation (Gemini by default)
- **WallpaperGenerator**: Concurrent batch fan-out with partial-failure tolerance
- **export_temporary / discard_export**: Short-lived download files

Architecture Overview
---------------------
1. **Configuration Layer** (config.py):
   - Environment-based configuration, SOULPAPER_ prefix
   - Loaded once at process start and passed explicitly downstream

2. **Client Layer** (generation_client.py):
   - One remote call per attempt, response decoding
   - Registry pattern for swapping providers or injecting fakes

3. **Orchestration Layer** (orchestrator.py):
   - Prompt augmentation
   - Join-all-then-filter over N concurrent attempts

4. **Support Utilities**:
   - models.py: ImagePayload, GeneratedImage, Success/Failure outcomes
   - errors.py: NoImageData / RemoteCallFailed / BatchGenerationFailed
   - export.py: temporary soulpaper-<id>.png downloads and their cleanup

Usage Example
-------------
    from soulpaper.core import WallpaperGenerator, config

    images = await WallpaperGenerator(config).generate_wallpapers("misty forest")
"""

from soulpaper.core.config import SoulpaperConfig, config
from soulpaper.core.errors import (
    BatchGenerationFailedError,
    NoImageDataError,
    RemoteCallFailedError,
    SoulpaperError,
)
from soulpaper.core.export import (
    discard_all_exports,
    discard_export,
    export_image,
    export_temporary,
)
from soulpaper.core.generation_client import (
    GeminiImageClient,
    ImageClientBase,
    client_registry,
    decode_image_response,
)
from soulpaper.core.models import Failure, GeneratedImage, ImagePayload, Success
from soulpaper.core.orchestrator import (
    EFFECTIVE_PROMPT_PREFIX,
    WallpaperGenerator,
    build_effective_prompt,
    generate_wallpapers,
    settle_all,
)

__all__ = [
    "BatchGenerationFailedError",
    "EFFECTIVE_PROMPT_PREFIX",
    "Failure",
    "GeminiImageClient",
    "GeneratedImage",
    "ImageClientBase",
    "ImagePayload",
    "NoImageDataError",
    "RemoteCallFailedError",
    "SoulpaperConfig",
    "SoulpaperError",
    "Success",
    "WallpaperGenerator",
    "build_effective_prompt",
    "client_registry",
    "config",
    "decode_image_response",
    "discard_all_exports",
    "discard_export",
    "export_image",
    "export_temporary",
    "generate_wallpapers",
    "settle_all",
]

"""SoulPaper - mood-to-wallpaper generation with a mobile web front-end."""

__version__ = "0.1.0"

from soulpaper.core.config import SoulpaperConfig, config
from soulpaper.core.generation_client import ImageClientBase, client_registry
from soulpaper.core.orchestrator import WallpaperGenerator, generate_wallpapers

__all__ = [
    "ImageClientBase",
    "client_registry",
    "SoulpaperConfig",
    "config",
    "WallpaperGenerator",
    "generate_wallpapers",
]

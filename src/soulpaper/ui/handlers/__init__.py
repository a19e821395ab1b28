"""UI event handlers organized by feature area.

This package provides handlers for all Gradio UI events:
- generation: Prompt submission and batch rendering
- gallery: Detail viewer, remix and download
"""

from .gallery import (
    close_viewer,
    remix_wallpaper,
    select_wallpaper,
)
from .generation import (
    gallery_items,
    generate_wallpapers_handler,
    render_generation,
    status_markdown,
    update_generate_button,
)

__all__ = [
    # Generation handlers
    "gallery_items",
    "generate_wallpapers_handler",
    "render_generation",
    "status_markdown",
    "update_generate_button",
    # Gallery handlers
    "close_viewer",
    "remix_wallpaper",
    "select_wallpaper",
]

"""Reusable UI components for the SoulPaper Gradio interface."""

import gradio as gr

from .models import (
    APP_TAGLINE,
    APP_TITLE,
    DOWNLOAD_LABEL,
    REMIX_LABEL,
)


def create_header() -> gr.Markdown:
    """App title and tagline."""
    return gr.Markdown(
        f"<h1 class='sp-title'>{APP_TITLE}</h1>\n\n<p class='sp-tagline'>{APP_TAGLINE}</p>",
        elem_id="sp-header",
    )


class ImageViewerUI:
    """Full-screen detail viewer for a single wallpaper.

    Hidden until a gallery image is selected. Exposes:
    - The full image
    - Remix (reuse the image's prompt)
    - Download (soulpaper-<id>.png)
    - Close
    """

    def __init__(self) -> None:
        with gr.Group(visible=False, elem_id="sp-viewer") as self.group:
            with gr.Row():
                self.close_button = gr.Button("✕", size="sm", scale=0, elem_id="sp-viewer-close")

            self.image = gr.Image(
                type="pil",
                interactive=False,
                show_label=False,
                elem_id="sp-viewer-image",
            )

            with gr.Row():
                self.remix_button = gr.Button(REMIX_LABEL, variant="secondary")
                self.download_button = gr.DownloadButton(
                    DOWNLOAD_LABEL,
                    value=None,
                    variant="primary",
                )

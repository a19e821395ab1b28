"""Gradio UI for SoulPaper."""

import logging
from functools import partial

import gradio as gr

from soulpaper.core.config import SoulpaperConfig, config
from soulpaper.core.orchestrator import WallpaperGenerator

from .components import ImageViewerUI, create_header
from .handlers import (
    close_viewer,
    generate_wallpapers_handler,
    remix_wallpaper,
    select_wallpaper,
    update_generate_button,
)
from .models import EMPTY_HINT, PROMPT_INPUT_ELEM_ID, PROMPT_PLACEHOLDER, UIState

logger = logging.getLogger(__name__)

FOCUS_PROMPT_JS = f"() => {{ document.querySelector('#{PROMPT_INPUT_ELEM_ID} textarea')?.focus(); }}"

# Gradio keeps its own copy of every download; expire those after an hour.
GRADIO_CACHE_TTL = (3600, 3600)


def create_ui(
    app_config: SoulpaperConfig | None = None,
    generator: WallpaperGenerator | None = None,
) -> gr.Blocks:
    """Create the mobile-first Gradio UI.

    Every session generates with the same generator, so the UI follows the
    configuration of the app it is mounted in.

    Args:
        app_config: Configuration for the default generator. Defaults to the
            global instance.
        generator: Pre-built generator shared by all sessions. Defaults to a
            new generator built from ``app_config``.

    Returns:
        Gradio Blocks app
    """
    if generator is None:
        generator = WallpaperGenerator(app_config if app_config is not None else config)

    custom_css = """
    .gradio-container { max-width: 28rem !important; margin: 0 auto !important; }
    .sp-title { text-align: center; font-size: 1.875rem; font-weight: 700;
        background: linear-gradient(to right, #c084fc, #f9a8d4);
        -webkit-background-clip: text; color: transparent; }
    .sp-tagline { text-align: center; color: #94a3b8; font-size: 0.875rem; }
    #sp-status { text-align: center; }
    #sp-viewer { position: fixed; inset: 0; z-index: 50; background: rgba(0, 0, 0, 0.95); }
    """

    app = gr.Blocks(title="SoulPaper", css=custom_css, delete_cache=GRADIO_CACHE_TTL)

    with app:
        # Session state - one instance per user
        ui_state = gr.State(UIState())

        create_header()

        prompt_input = gr.Textbox(
            show_label=False,
            placeholder=PROMPT_PLACEHOLDER,
            lines=3,
            elem_id=PROMPT_INPUT_ELEM_ID,
        )
        generate_button = gr.Button("생성", variant="primary", interactive=False)

        status = gr.Markdown(value=EMPTY_HINT, elem_id="sp-status")

        gallery = gr.Gallery(
            show_label=False,
            columns=2,
            object_fit="cover",
            allow_preview=False,
            height="auto",
        )

        viewer = ImageViewerUI()

        # Prompt tracking / submit affordance
        prompt_input.change(
            fn=update_generate_button,
            inputs=[prompt_input, ui_state],
            outputs=[generate_button, ui_state],
        )

        generate_button.click(
            fn=partial(generate_wallpapers_handler, generator=generator),
            inputs=[prompt_input, ui_state],
            outputs=[gallery, status, generate_button, viewer.group, ui_state],
            concurrency_limit=None,
        )

        # Detail viewer
        gallery.select(
            fn=select_wallpaper,
            inputs=[ui_state],
            outputs=[viewer.group, viewer.image, viewer.download_button, ui_state],
        )
        viewer.close_button.click(
            fn=close_viewer,
            inputs=[ui_state],
            outputs=[viewer.group, ui_state],
        )
        viewer.remix_button.click(
            fn=remix_wallpaper,
            inputs=[ui_state],
            outputs=[prompt_input, viewer.group, generate_button, ui_state],
        ).then(fn=None, js=FOCUS_PROMPT_JS)

    logger.info("Gradio UI created")
    return app

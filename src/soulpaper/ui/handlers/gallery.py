"""Detail viewer, remix and download handlers."""

import logging

import gradio as gr

from soulpaper.core.export import export_temporary

from ..models import UIState
from ..state import (
    can_submit,
    close_detail,
    initialize_ui_state,
    remix,
    select_image,
    selected_image,
)
from ..validation import ValidationError

logger = logging.getLogger(__name__)


def select_wallpaper(evt: gr.SelectData, state: UIState) -> tuple:
    """Open the detail viewer for the clicked gallery image.

    The image is exported right away to a temporary ``soulpaper-<id>.png``
    so the download button already points at it. The previous selection's
    file is discarded first.

    Args:
        evt: Gradio SelectData event containing the selected index
        state: UI state

    Returns:
        Tuple of (viewer_group_update, viewer_image, download_button_update,
        updated_state)
    """
    state = initialize_ui_state(state)
    image = select_image(state, evt.index)
    if image is None:
        logger.warning(f"Gallery selection out of range: {evt.index}")
        return gr.update(visible=False), None, gr.update(value=None), state

    try:
        state.export_path = str(export_temporary(image, state.generator.config.export_dir))
    except OSError as e:
        logger.error(f"Failed to export {image.id}: {e}", exc_info=True)

    return (
        gr.update(visible=True),
        image.payload.to_pil(),
        gr.update(value=state.export_path),
        state,
    )


def close_viewer(state: UIState) -> tuple:
    """Close the detail viewer and discard its download file.

    Returns:
        Tuple of (viewer_group_update, updated_state)
    """
    state = close_detail(state)
    return gr.update(visible=False), state


def remix_wallpaper(state: UIState) -> tuple:
    """Put the selected image's original prompt back into the input.

    Returns:
        Tuple of (prompt_input_update, viewer_group_update,
        generate_button_update, updated_state)
    """
    image = selected_image(state)
    if image is None:
        return gr.update(), gr.update(visible=False), gr.update(), state

    try:
        new_prompt = remix(state, image.id)
    except ValidationError as e:
        logger.warning(f"Remix failed: {e}")
        return gr.update(), gr.update(visible=False), gr.update(), state

    return (
        gr.update(value=new_prompt),
        gr.update(visible=False),
        gr.update(interactive=can_submit(state)),
        state,
    )

"""Wallpaper generation handlers."""

import logging
from collections.abc import AsyncIterator
from typing import Any

import gradio as gr

from soulpaper.core.orchestrator import WallpaperGenerator

from ..models import (
    EMPTY_HINT,
    LOADING_SUBTITLE,
    LOADING_TITLE,
    GenerationPhase,
    UIState,
)
from ..state import (
    apply_batch_failure,
    apply_batch_result,
    begin_generation,
    can_submit,
    cancel_generation,
    initialize_ui_state,
)
from ..validation import ValidationError

logger = logging.getLogger(__name__)


def status_markdown(state: UIState) -> str:
    """Status text shown under the prompt input for the current phase."""
    if state.phase == GenerationPhase.GENERATING:
        return f"**{LOADING_TITLE}**\n\n{LOADING_SUBTITLE}"
    if state.phase == GenerationPhase.FAILED:
        return f"❌ {state.error}"
    if state.phase == GenerationPhase.POPULATED:
        return ""
    return EMPTY_HINT


def gallery_items(state: UIState) -> list[Any]:
    """Convert the current results into Gradio gallery values."""
    return [image.payload.to_pil() for image in state.images]


def render_generation(state: UIState, prompt: str | None) -> tuple:
    """Render the generation outputs for ``state``.

    Returns:
        Tuple of (gallery_items, status_markdown, generate_button_update,
        viewer_group_update, state)
    """
    return (
        gallery_items(state),
        status_markdown(state),
        gr.update(interactive=can_submit(state, prompt)),
        gr.update(visible=state.selected_image_id is not None),
        state,
    )


def update_generate_button(prompt: str, state: UIState) -> tuple:
    """Track the prompt input and enable the button only for a non-blank prompt while idle.

    Returns:
        Tuple of (generate_button_update, updated_state)
    """
    state.prompt = prompt or ""
    return gr.update(interactive=can_submit(state)), state


async def generate_wallpapers_handler(
    prompt: str, state: UIState, generator: WallpaperGenerator | None = None
) -> AsyncIterator[tuple]:
    """Generate a batch of wallpapers from the UI inputs.

    Yields twice: first the cleared GENERATING view (so stale images vanish
    right away), then the final POPULATED/EMPTY/FAILED view. If the handler
    is closed or cancelled before the batch settles, the session drops back
    to IDLE so the next submit is accepted.

    Args:
        prompt: Prompt input value
        state: UI state
        generator: Generator for sessions that do not have one yet

    Yields:
        Tuple of (gallery_items, status_markdown, generate_button_update,
        viewer_group_update, updated_state)
    """
    state = initialize_ui_state(state, generator)

    try:
        token = begin_generation(state, prompt)
    except ValidationError as e:
        logger.warning(f"Validation error: {e}")
        gallery, _, button, viewer, state = render_generation(state, prompt)
        yield gallery, f"❌ {e}", button, viewer, state
        return

    try:
        yield render_generation(state, prompt)

        try:
            images = await state.generator.generate_wallpapers(state.prompt.strip())
        except Exception as e:
            logger.error(f"Batch {token} failed: {e}", exc_info=True)
            apply_batch_failure(state, token, e)
        else:
            apply_batch_result(state, token, images)

        yield render_generation(state, prompt)
    finally:
        cancel_generation(state, token)

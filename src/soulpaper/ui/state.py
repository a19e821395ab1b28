"""State management utilities for the SoulPaper UI.

This module holds the generation state machine and the detail/remix
transitions. Handlers call these functions and then render the resulting
state; none of them touch Gradio directly.

A batch is identified by a monotonically increasing generation token. Results
are applied only if their token still matches the latest dispatched one, so a
late batch can never overwrite a newer submission.
"""

import logging

from soulpaper.core.config import config
from soulpaper.core.export import discard_export
from soulpaper.core.models import GeneratedImage
from soulpaper.core.orchestrator import WallpaperGenerator

from .models import FALLBACK_ERROR_MESSAGE, GenerationPhase, UIState
from .validation import ValidationError, validate_prompt

logger = logging.getLogger(__name__)


def initialize_ui_state(
    state: UIState | None = None, generator: WallpaperGenerator | None = None
) -> UIState:
    """Initialize or ensure UI state is ready.

    Args:
        state: Existing UIState or None
        generator: Generator to attach. Defaults to one built from the
            global configuration.

    Returns:
        UIState with a generator attached
    """
    if state is None:
        logger.info("Creating new UIState")
        state = UIState()

    if state.is_initialized():
        return state

    logger.info("Initializing WallpaperGenerator")
    state.generator = generator if generator is not None else WallpaperGenerator(config)
    return state


def is_generating(state: UIState) -> bool:
    return state.phase == GenerationPhase.GENERATING


def begin_generation(state: UIState, prompt: str | None) -> int:
    """Enter GENERATING for a new submission.

    Previous results, error and selection are cleared immediately, before
    any remote call resolves.

    Args:
        state: UI state
        prompt: Raw prompt input

    Returns:
        Generation token of the new batch

    Raises:
        ValidationError: If the prompt is blank or a batch is already in flight
    """
    if is_generating(state):
        raise ValidationError("이미 배경화면을 생성하고 있습니다.")

    trimmed = validate_prompt(prompt)

    state.generation_token += 1
    state.prompt = prompt or ""
    state.phase = GenerationPhase.GENERATING
    state.images = []
    state.error = None
    close_detail(state)

    logger.info(f"Batch {state.generation_token} started for prompt: {trimmed!r}")
    return state.generation_token


def _is_current(state: UIState, token: int) -> bool:
    if token != state.generation_token:
        logger.info(f"Discarding stale batch {token} (latest is {state.generation_token})")
        return False
    return True


def apply_batch_result(state: UIState, token: int, images: list[GeneratedImage]) -> bool:
    """Apply a finished batch.

    Returns:
        True if applied, False if the token was stale
    """
    if not _is_current(state, token):
        return False

    state.images = list(images)
    state.error = None
    state.phase = GenerationPhase.POPULATED if state.images else GenerationPhase.EMPTY
    logger.info(f"Batch {token} applied: {len(state.images)} images ({state.phase.value})")
    return True


def apply_batch_failure(state: UIState, token: int, error: BaseException) -> bool:
    """Apply a failed batch.

    The error's own message is shown, or a generic fallback if it has none.

    Returns:
        True if applied, False if the token was stale
    """
    if not _is_current(state, token):
        return False

    state.images = []
    state.error = str(error) or FALLBACK_ERROR_MESSAGE
    state.phase = GenerationPhase.FAILED
    logger.info(f"Batch {token} failed: {state.error}")
    return True


def cancel_generation(state: UIState, token: int) -> bool:
    """Leave GENERATING when a batch is abandoned before it settles.

    Does nothing if the batch already settled or a newer one started.

    Returns:
        True if the state was reset to IDLE
    """
    if token != state.generation_token or not is_generating(state):
        return False

    state.phase = GenerationPhase.IDLE
    logger.info(f"Batch {token} abandoned before completion")
    return True


def find_image(state: UIState, image_id: str | None) -> GeneratedImage | None:
    if image_id is None:
        return None
    return next((img for img in state.images if img.id == image_id), None)


def selected_image(state: UIState) -> GeneratedImage | None:
    return find_image(state, state.selected_image_id)


def select_image(state: UIState, index: int) -> GeneratedImage | None:
    """Open the detail view for the image at ``index``.

    Returns:
        The selected image, or None if the index is out of range
    """
    release_export(state)
    if index < 0 or index >= len(state.images):
        state.selected_image_id = None
        return None

    image = state.images[index]
    state.selected_image_id = image.id
    return image


def release_export(state: UIState) -> None:
    """Delete the selected image's temporary download file, if any."""
    if state.export_path is not None:
        discard_export(state.export_path)
        state.export_path = None


def close_detail(state: UIState) -> UIState:
    release_export(state)
    state.selected_image_id = None
    return state


def remix(state: UIState, image_id: str) -> str:
    """Re-seed the prompt input from an image's original prompt.

    Closes the detail view first. The result list is left untouched.

    Args:
        state: UI state
        image_id: Image whose prompt to reuse

    Returns:
        New prompt input value (original prompt plus one trailing space)

    Raises:
        ValidationError: If the image is not part of the current results
    """
    image = find_image(state, image_id)
    if image is None:
        raise ValidationError("선택한 이미지를 찾을 수 없습니다.")

    close_detail(state)
    state.prompt = f"{image.prompt} "
    return state.prompt


def can_submit(state: UIState, prompt: str | None = None) -> bool:
    """Whether the submit affordance should be enabled.

    Uses ``state.prompt`` when ``prompt`` is not given.
    """
    text = state.prompt if prompt is None else prompt
    return bool((text or "").strip()) and not is_generating(state)

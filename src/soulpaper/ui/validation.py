"""Validation utilities for SoulPaper UI inputs."""

import logging

logger = logging.getLogger(__name__)

MAX_PROMPT_LENGTH = 2000


class ValidationError(Exception):
    """User-friendly validation error.

    This exception is raised when user input fails validation.
    The message is intended to be displayed directly to the user.
    """

    pass


def validate_prompt(prompt: str | None) -> str:
    """Trim and validate a wallpaper prompt.

    Args:
        prompt: Raw text from the prompt input

    Returns:
        The trimmed prompt

    Raises:
        ValidationError: If the prompt is blank or too long
    """
    trimmed = (prompt or "").strip()

    if not trimmed:
        raise ValidationError("프롬프트를 입력해주세요.")

    if len(trimmed) > MAX_PROMPT_LENGTH:
        logger.warning(f"Prompt rejected: {len(trimmed)} characters")
        raise ValidationError(f"프롬프트는 {MAX_PROMPT_LENGTH}자 이하로 입력해주세요.")

    return trimmed

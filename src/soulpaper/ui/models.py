"""Data models for SoulPaper UI state."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from soulpaper.core.models import GeneratedImage


class GenerationPhase(str, Enum):
    """Phases of the generation state machine.

    IDLE -> GENERATING -> {POPULATED | EMPTY | FAILED}, and any terminal
    phase can go back to GENERATING on the next submit.
    """

    IDLE = "idle"
    GENERATING = "generating"
    POPULATED = "populated"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass
class UIState:
    """Session state for the Gradio UI.

    Each browser session gets its own UIState instance.

    Attributes
    ----------
    prompt : str
        Current content of the prompt input
    phase : GenerationPhase
        Current phase of the generation state machine
    images : list[GeneratedImage]
        Images of the latest applied batch
    error : str | None
        User-visible error message, if any
    selected_image_id : str | None
        Image shown in the detail viewer, if open
    export_path : str | None
        Temporary download file of the selected image, if any
    generation_token : int
        Token of the most recently dispatched batch; results carrying an
        older token are discarded
    generator : Any | None
        WallpaperGenerator instance (created lazily)
    """

    prompt: str = ""
    phase: GenerationPhase = GenerationPhase.IDLE
    images: list[GeneratedImage] = field(default_factory=list)
    error: str | None = None
    selected_image_id: str | None = None
    export_path: str | None = None
    generation_token: int = 0

    generator: Any | None = None  # WallpaperGenerator instance

    def is_initialized(self) -> bool:
        return self.generator is not None

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"UIState(phase={self.phase.value}, "
            f"images={len(self.images)}, "
            f"token={self.generation_token})"
        )


# UI copy
APP_TITLE = "SoulPaper"
APP_TAGLINE = "오늘의 기분을 배경화면으로 만들어보세요"
PROMPT_PLACEHOLDER = "예: 비 오는 서정적인 도시 풍경, 몽환적인 숲..."
EMPTY_HINT = "상상하는 풍경을 텍스트로 그려보세요"
LOADING_TITLE = "나만의 배경화면 생성 중..."
LOADING_SUBTITLE = "약 5~10초 정도 소요됩니다"
FALLBACK_ERROR_MESSAGE = "알 수 없는 오류가 발생했습니다."
DOWNLOAD_LABEL = "다운로드"
REMIX_LABEL = "Remix"

PROMPT_INPUT_ELEM_ID = "prompt-input"

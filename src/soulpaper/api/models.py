"""Pydantic request and response models for the SoulPaper API.

These models define the JSON schema for every API endpoint. FastAPI uses
them for automatic request validation, serialisation, and OpenAPI
documentation generation.

Models
------
GenerateRequest
    Payload for ``POST /api/generate`` and ``POST /api/prompt/compile``.
WallpaperResponse
    One generated wallpaper in a ``POST /api/generate`` response.
GenerateResponse
    Response body for ``POST /api/generate``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from soulpaper.core.models import GeneratedImage


class GenerateRequest(BaseModel):
    """Request body for the ``POST /api/generate`` endpoint.

    Attributes:
        prompt: Natural-language mood or scene description.  Surrounding
            whitespace is trimmed before use; a blank prompt is rejected.
    """

    prompt: str = Field(
        ...,
        description="Mood or scene description (e.g. 'rainy lyrical cityscape').",
    )


class WallpaperResponse(BaseModel):
    """A single generated wallpaper.

    Attributes:
        id: Unique identifier of the image.
        prompt: The original (non-augmented) prompt.
        mime_type: Declared MIME type of the image bytes.
        data_url: ``data:<mime>;base64,<payload>`` reference.
        download_filename: Suggested filename, ``soulpaper-<id>.png``.
    """

    id: str = Field(..., description="Unique identifier of the image.")
    prompt: str = Field(..., description="Original user prompt.")
    mime_type: str = Field(..., description="MIME type of the image bytes.")
    data_url: str = Field(..., description="Base64 data URL of the image.")
    download_filename: str = Field(..., description="Suggested download filename.")

    @classmethod
    def from_image(cls, image: GeneratedImage) -> WallpaperResponse:
        return cls(
            id=image.id,
            prompt=image.prompt,
            mime_type=image.mime_type,
            data_url=image.data_url,
            download_filename=image.download_filename,
        )


class GenerateResponse(BaseModel):
    """Response body for the ``POST /api/generate`` endpoint.

    Attributes:
        success: Always ``True`` (total failure is reported as HTTP 502).
        effective_prompt: The augmented prompt sent to the model.
        requested: Number of attempts dispatched.
        images: Successful wallpapers, between 1 and ``requested``.
    """

    success: bool = True
    effective_prompt: str
    requested: int
    images: list[WallpaperResponse]

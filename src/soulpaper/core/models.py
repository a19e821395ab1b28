"""Core data models for wallpaper generation."""

from __future__ import annotations

import base64
import io
import uuid
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, Union

from PIL import Image

T = TypeVar("T")

DEFAULT_MIME_TYPE = "image/png"
EXPORT_FILENAME_TEMPLATE = "soulpaper-{image_id}.png"


@dataclass(frozen=True)
class ImagePayload:
    """Decoded image bytes plus their declared MIME type.

    This is what a single successful remote call produces. It can be rendered
    as a self-describing ``data:`` URL for the browser or opened with Pillow
    for the gallery.
    """

    mime_type: str
    data: bytes = field(repr=False)

    @property
    def data_url(self) -> str:
        """Return ``data:<mime>;base64,<payload>`` for this image."""
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"

    def to_pil(self) -> Image.Image:
        """Open the payload with Pillow (fully loaded, detached from the buffer)."""
        image = Image.open(io.BytesIO(self.data))
        image.load()
        return image


@dataclass(frozen=True)
class GeneratedImage:
    """One wallpaper produced by a batch.

    Attributes:
        id: Unique identifier (uuid4 string)
        payload: Decoded image bytes and MIME type
        prompt: The user's original prompt, never the augmented one
    """

    id: str
    payload: ImagePayload
    prompt: str

    @classmethod
    def create(cls, payload: ImagePayload, prompt: str) -> GeneratedImage:
        """Wrap a decoded payload with a fresh identifier."""
        return cls(id=str(uuid.uuid4()), payload=payload, prompt=prompt)

    @property
    def data_url(self) -> str:
        return self.payload.data_url

    @property
    def mime_type(self) -> str:
        return self.payload.mime_type

    @property
    def download_filename(self) -> str:
        """Deterministic export filename derived from the image id."""
        return EXPORT_FILENAME_TEMPLATE.format(image_id=self.id)


@dataclass(frozen=True)
class Success(Generic[T]):
    """An attempt that settled with a value."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """An attempt that settled with an error."""

    error: BaseException

    @property
    def ok(self) -> bool:
        return False

    @property
    def reason(self) -> str:
        return str(self.error) or type(self.error).__name__


GenerationOutcome = Union[Success[Any], Failure]

"""Image clients: one remote call in, one decoded image out.

This module defines the replaceable capability that the batch orchestrator
depends on. Each attempt in a batch gets its own client instance, built from
the explicit :class:`SoulpaperConfig` that the caller holds.

Client Pattern
--------------
Clients implement a single coroutine::

    payload = await client.generate_one(effective_prompt, index)

and either return an :class:`~soulpaper.core.models.ImagePayload` or raise:

- :class:`~soulpaper.core.errors.NoImageDataError` when the response carried
  no image part
- :class:`~soulpaper.core.errors.RemoteCallFailedError` when the call itself
  failed

Neither error is retried here.

Registry
--------
Clients are registered by name so the configured client can be swapped
without touching the orchestrator:

    >>> from soulpaper.core.generation_client import client_registry
    >>> client = client_registry.instantiate("gemini", config)

See Also
--------
- WallpaperGenerator: Fans a prompt out across several clients
- SoulpaperConfig: Model id, aspect ratio, quality tier, temperature
"""

import base64
import logging
from abc import ABC, abstractmethod
from typing import Any

from google import genai
from google.genai import types

from .config import SoulpaperConfig
from .errors import NoImageDataError, RemoteCallFailedError
from .models import DEFAULT_MIME_TYPE, ImagePayload

logger = logging.getLogger(__name__)


class ImageClientBase(ABC):
    """Abstract base class for image clients.

    Attributes
    ----------
    name : str
        Registry name of the client
    config : SoulpaperConfig
        Configuration the client was constructed with
    """

    name: str = "base"

    def __init__(self, config: SoulpaperConfig) -> None:
        self.config = config

    @abstractmethod
    async def generate_one(self, effective_prompt: str, index: int = 0) -> ImagePayload:
        """Issue exactly one remote request and decode its image.

        Args:
            effective_prompt: Augmented prompt; must be non-empty
            index: Position of this attempt in its batch. Reserved for seed
                differentiation; remotes are not required to support it.

        Returns:
            Decoded image payload

        Raises:
            ValueError: If effective_prompt is empty
            NoImageDataError: If the response holds no image part
            RemoteCallFailedError: If the remote call fails
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


def _iter_response_parts(response: Any):
    """Yield the content parts of the first candidate, in order."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return
    content = getattr(candidates[0], "content", None)
    for part in getattr(content, "parts", None) or []:
        yield part


def decode_image_response(response: Any) -> ImagePayload:
    """Extract the first inline image from a ``generate_content`` response.

    Parts are scanned in order; text parts, parts without inline bytes and
    parts whose declared MIME type is not ``image/*`` are skipped. A part with
    no MIME type is treated as PNG. The SDK normally hands back raw bytes, but
    base64 text is accepted as well.

    Args:
        response: A ``GenerateContentResponse`` (or any object of the same shape)

    Returns:
        Payload built from the first image part's MIME type and bytes

    Raises:
        NoImageDataError: If no part carries image data
    """
    for part in _iter_response_parts(response):
        inline_data = getattr(part, "inline_data", None)
        data = getattr(inline_data, "data", None) if inline_data is not None else None
        if not data:
            continue
        mime_type = getattr(inline_data, "mime_type", None) or DEFAULT_MIME_TYPE
        if not mime_type.startswith("image/"):
            logger.debug(f"Skipping non-image part: {mime_type}")
            continue
        if isinstance(data, str):
            data = base64.b64decode(data)
        return ImagePayload(mime_type=mime_type, data=data)

    raise NoImageDataError()


class GeminiImageClient(ImageClientBase):
    """Image client backed by the Gemini ``generate_content`` API.

    The underlying ``genai.Client`` is constructed inside the attempt, so a
    missing or invalid key fails only that attempt, as a
    :class:`RemoteCallFailedError`.
    """

    name = "gemini"

    def _build_client(self) -> genai.Client:
        timeout_ms = int(self.config.request_timeout_seconds * 1000)
        return genai.Client(
            api_key=self.config.gemini_api_key,
            http_options=types.HttpOptions(timeout=timeout_ms),
        )

    def _build_request_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            temperature=self.config.temperature,
            response_modalities=["TEXT", "IMAGE"],
            image_config=types.ImageConfig(
                aspect_ratio=self.config.aspect_ratio,
                image_size=self.config.image_size,
            ),
        )

    async def generate_one(self, effective_prompt: str, index: int = 0) -> ImagePayload:
        if not effective_prompt:
            raise ValueError("effective_prompt must be non-empty")

        logger.debug(f"Attempt {index}: requesting {self.config.model_id}")
        try:
            client = self._build_client()
            response = await client.aio.models.generate_content(
                model=self.config.model_id,
                contents=effective_prompt,
                config=self._build_request_config(),
            )
        except Exception as e:
            raise RemoteCallFailedError(f"Image generation call failed: {e}") from e

        payload = decode_image_response(response)
        logger.debug(f"Attempt {index}: received {payload.mime_type}, {len(payload.data)} bytes")
        return payload


class ImageClientRegistry:
    """Registry for discovering and instantiating image clients."""

    def __init__(self) -> None:
        self._clients: dict[str, type[ImageClientBase]] = {}

    def register(self, client_class: type[ImageClientBase]) -> type[ImageClientBase]:
        """Register a client class under its ``name``.

        Returns the class so this can be used as a decorator.
        """
        name = client_class.name
        if name in self._clients:
            logger.warning(f"Overwriting existing image client registration: {name}")
        self._clients[name] = client_class
        logger.debug(f"Registered image client: {name}")
        return client_class

    def get_client_class(self, name: str) -> type[ImageClientBase]:
        """Return the registered class for ``name``.

        Raises:
            KeyError: If no client is registered under ``name``
        """
        if name not in self._clients:
            available = ", ".join(self.list_available())
            raise KeyError(f"Image client '{name}' not found. Available: {available}")
        return self._clients[name]

    def instantiate(self, name: str, config: SoulpaperConfig) -> ImageClientBase:
        return self.get_client_class(name)(config)

    def list_available(self) -> list[str]:
        return list(self._clients.keys())


client_registry = ImageClientRegistry()
client_registry.register(GeminiImageClient)

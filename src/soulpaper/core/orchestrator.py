"""Batch orchestration: one prompt, several concurrent attempts, keep the successes.

A submission becomes a *batch*: the user prompt is augmented once, the
configured number of attempts (four by default) are dispatched concurrently on
the running event loop, and the orchestrator waits until every attempt has
settled. Failed attempts are logged and dropped; the successes are wrapped as
:class:`~soulpaper.core.models.GeneratedImage` objects carrying the user's
original wording. Only a batch with zero successes raises.

Join Policy
-----------
:func:`settle_all` is a join-all combinator: it never fails fast on the first
error, and returns one outcome per task in settlement order. That order is not
deterministic, so callers (and tests) should rely on counts and membership
only.

Usage Example
-------------
    from soulpaper.core.config import config
    from soulpaper.core.orchestrator import WallpaperGenerator

    generator = WallpaperGenerator(config)
    images = await generator.generate_wallpapers("rainy lyrical cityscape")
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

from .config import SoulpaperConfig
from .errors import BatchGenerationFailedError
from .generation_client import ImageClientBase, client_registry
from .models import Failure, GeneratedImage, GenerationOutcome, ImagePayload, Success

logger = logging.getLogger(__name__)

T = TypeVar("T")

EFFECTIVE_PROMPT_PREFIX = "High quality, aesthetic mobile wallpaper, 9:16 vertical aspect ratio. "

ClientFactory = Callable[[], ImageClientBase]


def build_effective_prompt(user_prompt: str) -> str:
    """Prepend the fixed quality/aspect-ratio descriptor to the user's prompt."""
    return f"{EFFECTIVE_PROMPT_PREFIX}{user_prompt}"


async def _settle(awaitable: Awaitable[T]) -> GenerationOutcome:
    try:
        return Success(await awaitable)
    except Exception as e:
        return Failure(e)


async def settle_all(awaitables: Iterable[Awaitable[T]]) -> list[GenerationOutcome]:
    """Run all awaitables concurrently and wait for every one to settle.

    Args:
        awaitables: Any number of independent awaitables

    Returns:
        One ``Success`` or ``Failure`` per awaitable, in the order they settled
    """
    tasks = [asyncio.ensure_future(_settle(a)) for a in awaitables]
    outcomes: list[GenerationOutcome] = []
    try:
        for next_settled in asyncio.as_completed(tasks):
            outcomes.append(await next_settled)
    except asyncio.CancelledError:
        for task in tasks:
            task.cancel()
        raise
    return outcomes


class WallpaperGenerator:
    """Fan a prompt out to several image clients and collect the successes.

    Attributes:
        config: Configuration used for batch size and client construction
    """

    def __init__(
        self,
        config: SoulpaperConfig,
        client_factory: ClientFactory | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            config: Configuration passed to every client this generator builds
            client_factory: Zero-argument callable returning a fresh client
                for each attempt. Defaults to the registry entry named by
                ``config.image_client``.
        """
        self.config = config
        self._client_factory = client_factory or self._default_client_factory

    def _default_client_factory(self) -> ImageClientBase:
        return client_registry.instantiate(self.config.image_client, self.config)

    @property
    def batch_size(self) -> int:
        return self.config.batch_size

    async def _attempt(self, effective_prompt: str, index: int) -> ImagePayload:
        # Client construction belongs to the attempt so credential problems
        # fail only this attempt.
        client = self._client_factory()
        return await client.generate_one(effective_prompt, index)

    async def generate_wallpapers(self, user_prompt: str) -> list[GeneratedImage]:
        """Generate one batch of wallpapers for ``user_prompt``.

        Args:
            user_prompt: Non-blank user prompt (trimmed by the caller)

        Returns:
            Between 1 and ``batch_size`` images, in settlement order, each
            carrying ``user_prompt`` unchanged

        Raises:
            ValueError: If ``user_prompt`` is blank; no attempt is dispatched
            BatchGenerationFailedError: If every attempt failed
        """
        if not user_prompt or not user_prompt.strip():
            raise ValueError("user_prompt must not be blank")

        effective_prompt = build_effective_prompt(user_prompt)
        attempts = self.batch_size
        logger.info(f"Dispatching batch of {attempts} attempts")

        outcomes = await settle_all(
            self._attempt(effective_prompt, index) for index in range(attempts)
        )

        images: list[GeneratedImage] = []
        for outcome in outcomes:
            if outcome.ok:
                images.append(GeneratedImage.create(outcome.value, user_prompt))
            else:
                logger.warning(f"One generation failed: {outcome.reason}")

        if not images:
            logger.error(f"All {attempts} generation attempts failed")
            raise BatchGenerationFailedError(attempts)

        logger.info(f"Batch complete: {len(images)}/{attempts} images generated")
        return images


async def generate_wallpapers(
    user_prompt: str, config: SoulpaperConfig | None = None
) -> list[GeneratedImage]:
    """Convenience wrapper around :meth:`WallpaperGenerator.generate_wallpapers`.

    Uses the global configuration when ``config`` is not given.
    """
    if config is None:
        from .config import config as global_config

        config = global_config
    return await WallpaperGenerator(config).generate_wallpapers(user_prompt)

"""Unit tests for batch orchestration.

The remote model is replaced by the FakeRemote fixture from conftest, which
fails the attempt indices it is told to fail.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from soulpaper.core.errors import (
    BATCH_FAILURE_MESSAGE,
    BatchGenerationFailedError,
    NoImageDataError,
)
from soulpaper.core.generation_client import client_registry
from soulpaper.core.models import Failure, Success
from soulpaper.core.orchestrator import (
    EFFECTIVE_PROMPT_PREFIX,
    WallpaperGenerator,
    build_effective_prompt,
    generate_wallpapers,
    settle_all,
)


class TestBuildEffectivePrompt:
    """Tests for prompt augmentation."""

    def test_prefix_is_prepended(self):
        assert build_effective_prompt("rainy lyrical cityscape") == (
            "High quality, aesthetic mobile wallpaper, 9:16 vertical aspect ratio. "
            "rainy lyrical cityscape"
        )

    def test_prompt_kept_verbatim(self):
        prompt = "  몽환적인 숲  "
        assert build_effective_prompt(prompt) == EFFECTIVE_PROMPT_PREFIX + prompt


class TestSettleAll:
    """Tests for the join-all combinator."""

    @staticmethod
    async def _value(value, delay=0.0):
        await asyncio.sleep(delay)
        return value

    @staticmethod
    async def _boom(message, delay=0.0):
        await asyncio.sleep(delay)
        raise RuntimeError(message)

    def test_one_outcome_per_task(self):
        outcomes = asyncio.run(
            settle_all(
                [self._value(1), self._boom("a"), self._value(2), self._boom("b"), self._value(3)]
            )
        )
        assert len(outcomes) == 5
        assert sorted(o.value for o in outcomes if isinstance(o, Success)) == [1, 2, 3]
        assert sorted(o.reason for o in outcomes if isinstance(o, Failure)) == ["a", "b"]

    def test_empty_input(self):
        assert asyncio.run(settle_all([])) == []

    def test_does_not_fail_fast(self):
        """An early failure does not prevent later successes from being collected."""
        outcomes = asyncio.run(settle_all([self._boom("early"), self._value("late", delay=0.01)]))
        assert [o.ok for o in outcomes] == [False, True]

    def test_settlement_order(self):
        outcomes = asyncio.run(
            settle_all([self._value("slow", delay=0.02), self._value("fast", delay=0.0)])
        )
        assert [o.value for o in outcomes] == ["fast", "slow"]


class TestWallpaperGenerator:
    """Tests for WallpaperGenerator.generate_wallpapers."""

    def test_all_attempts_succeed(self, make_generator):
        generator, remote = make_generator()
        images = asyncio.run(generator.generate_wallpapers("misty forest"))
        assert len(images) == 4
        assert len(remote.calls) == 4

    def test_partial_failure_keeps_successes(self, make_generator, png_bytes):
        """Three of four attempts succeed: exactly three images come back."""
        generator, remote = make_generator(fail_indices=(2,))
        images = asyncio.run(generator.generate_wallpapers("rainy lyrical cityscape"))

        assert len(images) == 3
        assert all(image.prompt == "rainy lyrical cityscape" for image in images)
        assert all(image.payload.data == png_bytes for image in images)

        assert len(remote.calls) == 4
        expected = build_effective_prompt("rainy lyrical cityscape")
        assert all(prompt == expected for prompt, _ in remote.calls)
        assert sorted(index for _, index in remote.calls) == [0, 1, 2, 3]

    def test_single_success_is_enough(self, make_generator):
        generator, _ = make_generator(fail_indices=(0, 1, 3))
        images = asyncio.run(generator.generate_wallpapers("misty forest"))
        assert len(images) == 1

    def test_all_fail_raises_batch_error(self, make_generator):
        generator, remote = make_generator(fail_indices=(0, 1, 2, 3))

        with pytest.raises(BatchGenerationFailedError) as exc_info:
            asyncio.run(generator.generate_wallpapers("misty forest"))

        assert exc_info.value.attempts == 4
        assert str(exc_info.value) == BATCH_FAILURE_MESSAGE
        assert len(remote.calls) == 4

    def test_no_image_data_counts_as_failure(self, make_generator):
        generator, _ = make_generator(fail_indices=(1,), error=NoImageDataError())
        images = asyncio.run(generator.generate_wallpapers("misty forest"))
        assert len(images) == 3

    def test_ids_are_unique(self, make_generator):
        generator, _ = make_generator()
        images = asyncio.run(generator.generate_wallpapers("misty forest"))
        assert len({image.id for image in images}) == len(images)

    @pytest.mark.parametrize("prompt", ["", "   ", "\n\t"])
    def test_blank_prompt_rejected_without_calls(self, make_generator, prompt):
        generator, remote = make_generator()
        with pytest.raises(ValueError):
            asyncio.run(generator.generate_wallpapers(prompt))
        assert remote.calls == []

    def test_batch_size_from_config(self, make_generator, test_config):
        cfg = test_config.model_copy(update={"batch_size": 2})
        generator, remote = make_generator(config=cfg)

        images = asyncio.run(generator.generate_wallpapers("misty forest"))

        assert generator.batch_size == 2
        assert len(images) == 2
        assert len(remote.calls) == 2

    def test_client_construction_failure_counts_as_failure(self, test_config, png_payload):
        built = []

        def factory():
            built.append(None)
            if len(built) == 1:
                raise RuntimeError("missing credential")
            client = MagicMock()
            client.generate_one = AsyncMock(return_value=png_payload)
            return client

        generator = WallpaperGenerator(test_config, client_factory=factory)
        images = asyncio.run(generator.generate_wallpapers("misty forest"))

        assert len(built) == 4
        assert len(images) == 3

    def test_default_factory_uses_registry(self, test_config, png_payload):
        client = MagicMock()
        client.generate_one = AsyncMock(return_value=png_payload)

        with patch.object(client_registry, "instantiate", return_value=client) as instantiate:
            generator = WallpaperGenerator(test_config)
            images = asyncio.run(generator.generate_wallpapers("misty forest"))

        assert len(images) == 4
        instantiate.assert_called_with("gemini", test_config)


class TestGenerateWallpapersFunction:
    """Tests for the module-level convenience coroutine."""

    def test_uses_given_config(self, test_config, png_payload):
        client = MagicMock()
        client.generate_one = AsyncMock(return_value=png_payload)
        cfg = test_config.model_copy(update={"batch_size": 3})

        with patch.object(client_registry, "instantiate", return_value=client):
            images = asyncio.run(generate_wallpapers("misty forest", config=cfg))

        assert len(images) == 3
        assert client.generate_one.await_count == 3

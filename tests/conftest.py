"""Shared pytest fixtures for SoulPaper tests."""

import asyncio
import io
import shutil
import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest
from PIL import Image

from soulpaper.core.config import SoulpaperConfig
from soulpaper.core.errors import RemoteCallFailedError
from soulpaper.core.generation_client import ImageClientBase
from soulpaper.core.models import ImagePayload
from soulpaper.core.orchestrator import WallpaperGenerator
from soulpaper.ui.models import UIState


class FakeRemote:
    """Deterministic stand-in for the remote image model.

    Records every call and fails the attempts whose index is listed in
    ``fail_indices``.
    """

    def __init__(
        self,
        payload: ImagePayload,
        fail_indices: tuple[int, ...] = (),
        error: Exception | None = None,
    ) -> None:
        self.payload = payload
        self.fail_indices = set(fail_indices)
        self.error = error
        self.calls: list[tuple[str, int]] = []

    async def __call__(self, effective_prompt: str, index: int) -> ImagePayload:
        self.calls.append((effective_prompt, index))
        # Yield to the event loop so attempts interleave like real I/O.
        await asyncio.sleep(0)
        if index in self.fail_indices:
            raise self.error or RemoteCallFailedError(f"attempt {index} failed")
        return self.payload


class FakeImageClient(ImageClientBase):
    """Image client that delegates to a FakeRemote."""

    name = "fake"

    def __init__(self, config: SoulpaperConfig, remote: FakeRemote) -> None:
        super().__init__(config)
        self.remote = remote

    async def generate_one(self, effective_prompt: str, index: int = 0) -> ImagePayload:
        if not effective_prompt:
            raise ValueError("effective_prompt must be non-empty")
        return await self.remote(effective_prompt, index)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path) -> SoulpaperConfig:
    """Create a test configuration that never reads .env.

    Args:
        temp_dir: Temporary directory from fixture

    Returns:
        SoulpaperConfig instance for testing
    """
    return SoulpaperConfig(
        _env_file=None,
        gemini_api_key="test-key",
        export_dir=str(temp_dir / "exports"),
    )


@pytest.fixture
def png_bytes() -> bytes:
    """A tiny 9:16 PNG."""
    buffer = io.BytesIO()
    Image.new("RGB", (9, 16), color=(120, 80, 200)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_payload(png_bytes: bytes) -> ImagePayload:
    return ImagePayload(mime_type="image/png", data=png_bytes)


@pytest.fixture
def make_generator(
    test_config: SoulpaperConfig, png_payload: ImagePayload
) -> Callable[..., tuple[WallpaperGenerator, FakeRemote]]:
    """Factory for generators backed by a FakeRemote.

    Usage:
        generator, remote = make_generator(fail_indices=(0,))
    """

    def _make(
        fail_indices: tuple[int, ...] = (),
        error: Exception | None = None,
        config: SoulpaperConfig | None = None,
    ) -> tuple[WallpaperGenerator, FakeRemote]:
        cfg = config or test_config
        remote = FakeRemote(png_payload, fail_indices=fail_indices, error=error)
        generator = WallpaperGenerator(cfg, client_factory=lambda: FakeImageClient(cfg, remote))
        return generator, remote

    return _make


@pytest.fixture
def ui_state() -> UIState:
    """Create empty UI state for testing.

    Returns:
        UIState instance
    """
    return UIState()

"""SoulPaper — FastAPI Application.

This module is the single entry point for the web application.  It builds
the FastAPI ``app`` (via :func:`create_app`), the JSON API routes, mounts the
Gradio mobile UI, and provides the ``main()`` CLI function that launches the
uvicorn server.

Architecture
------------
- **Configuration** comes from :data:`~soulpaper.core.config.config`, loaded
  once at process start, and is passed explicitly into the
  :class:`~soulpaper.core.orchestrator.WallpaperGenerator` built by
  :func:`create_app`.  The JSON API and the UI share that one generator.
- **Image generation** is a batch of concurrent remote calls; nothing is
  persisted or cached between requests.  Temporary download files are
  removed on shutdown.
- **The UI** is the Gradio Blocks app from :mod:`soulpaper.ui.app`, mounted
  at ``/``.

Endpoints
---------
========  ==========================  ======================================
Method    Path                        Purpose
========  ==========================  ======================================
GET       ``/api/config``             Model, aspect ratio, batch size
POST      ``/api/generate``           Generate one batch of wallpapers
POST      ``/api/prompt/compile``     Preview the effective prompt
GET       ``/``                       Gradio mobile UI
========  ==========================  ======================================

Usage
-----
CLI (installed entry point)::

    soulpaper

Direct invocation::

    python -m soulpaper.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from soulpaper import __version__
from soulpaper.api.models import GenerateRequest, GenerateResponse, WallpaperResponse
from soulpaper.core.config import SoulpaperConfig, config
from soulpaper.core.errors import BatchGenerationFailedError
from soulpaper.core.export import discard_all_exports
from soulpaper.core.orchestrator import (
    EFFECTIVE_PROMPT_PREFIX,
    WallpaperGenerator,
    build_effective_prompt,
)
from soulpaper.ui.validation import ValidationError, validate_prompt

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def create_app(
    app_config: SoulpaperConfig | None = None,
    *,
    generator: WallpaperGenerator | None = None,
    mount_ui: bool = True,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        app_config: Configuration to use.  Defaults to the global instance.
        generator: Pre-built generator shared by the API and the UI (tests
            inject one backed by fake clients).  Defaults to a new generator
            built from ``app_config``.
        mount_ui: Whether to mount the Gradio UI at ``/``.

    Returns:
        The configured FastAPI application.
    """
    if app_config is None:
        app_config = config
    wallpaper_generator = generator if generator is not None else WallpaperGenerator(app_config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # --- Startup -------------------------------------------------------
        app.state.wallpaper_generator = wallpaper_generator
        logger.info(
            f"WallpaperGenerator ready (model={app_config.model_id}, "
            f"batch_size={app_config.batch_size})"
        )

        yield  # Application runs here.

        # --- Shutdown ------------------------------------------------------
        app.state.wallpaper_generator = None
        discard_all_exports()
        logger.info("WallpaperGenerator released on shutdown.")

    app = FastAPI(
        title="SoulPaper",
        description="Mood-to-wallpaper generation API.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = app_config

    # Allow cross-origin requests so a separately served frontend can call
    # the API during development.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -----------------------------------------------------------------------
    # Routes.
    # -----------------------------------------------------------------------

    @app.get("/api/config")
    async def get_config() -> dict:
        """Return the generation settings the frontend needs to know about."""
        return {
            "version": __version__,
            "model_id": app_config.model_id,
            "aspect_ratio": app_config.aspect_ratio,
            "image_size": app_config.image_size,
            "batch_size": app_config.batch_size,
            "prompt_prefix": EFFECTIVE_PROMPT_PREFIX,
        }

    @app.post("/api/generate", response_model=GenerateResponse)
    async def generate(req: GenerateRequest) -> GenerateResponse:
        """Generate one batch of wallpapers.

        Partial failures are invisible to the caller: the response simply
        holds fewer images than ``requested``.

        Raises:
            HTTPException: 400 for a blank or oversized prompt, 502 when
                every attempt in the batch failed.
        """
        try:
            prompt = validate_prompt(req.prompt)
        except ValidationError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        active_generator: WallpaperGenerator = app.state.wallpaper_generator
        try:
            images = await active_generator.generate_wallpapers(prompt)
        except BatchGenerationFailedError as e:
            logger.error(f"Batch failed after {e.attempts} attempts")
            raise HTTPException(status_code=502, detail=str(e)) from e

        return GenerateResponse(
            effective_prompt=build_effective_prompt(prompt),
            requested=active_generator.batch_size,
            images=[WallpaperResponse.from_image(image) for image in images],
        )

    @app.post("/api/prompt/compile")
    async def compile_prompt(req: GenerateRequest) -> dict:
        """Preview the effective prompt without generating anything."""
        return {"effective_prompt": build_effective_prompt(req.prompt.strip())}

    # -----------------------------------------------------------------------
    # Gradio UI — mounted last so the API routes above take precedence.
    # -----------------------------------------------------------------------
    if mount_ui:
        import gradio as gr

        from soulpaper.ui.app import create_ui

        ui = create_ui(app_config=app_config, generator=wallpaper_generator)
        app = gr.mount_gradio_app(app, ui, path="/")

    return app


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host, port and log level from :data:`~soulpaper.core.config.config`
    (``SOULPAPER_SERVER_HOST``, ``SOULPAPER_SERVER_PORT``,
    ``SOULPAPER_LOG_LEVEL``).  Defaults to ``0.0.0.0:7860``.

    This function is registered as the ``soulpaper`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(level=config.log_level, format=LOG_FORMAT)
    if not config.gemini_api_key:
        logger.warning("SOULPAPER_GEMINI_API_KEY is not set; relying on the SDK's own key lookup")

    uvicorn.run(
        "soulpaper.api.main:create_app",
        factory=True,
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()

"""Hero BG Studio — FastAPI Application.

This module defines the FastAPI ``app`` instance, the REST routes, and the
``main()`` CLI function that launches the uvicorn server.

Architecture
------------
- **Configuration** comes from :data:`herobg.core.config.config`
  (``HEROBG_*`` environment variables and ``.env``).
- **Generation** is delegated to a :class:`~herobg.core.studio.HeroStudio`
  created at startup and stored on ``app.state``.  The adapter it uses
  (Gemini or offline preview) is chosen by ``HEROBG_DEFAULT_GENERATOR``.
- **History** is the studio's in-memory, most-recent-first list.  It is
  lost when the server stops.
- **One generation at a time**: while a generation is in flight, further
  submissions are rejected with 409.

Endpoints
---------
========  ====================================  ==============================
Method    Path                                  Purpose
========  ====================================  ==============================
GET       ``/api/config``                       Enums, resolutions, presets
POST      ``/api/prompt/compile``               Preview the compiled prompt
POST      ``/api/generate``                     Generate a hero background
POST      ``/api/generate/vertical/{id}``       Vertical remix of a result
GET       ``/api/history``                      Session history
GET       ``/api/history/{id}``                 Single history entry
DELETE    ``/api/history``                      Clear the history
========  ====================================  ==============================

Error Mapping
-------------
==========================  ======
Error                       Status
==========================  ======
ValidationError             400
EncodingError               422
ConfigurationError          503
GenerationError             502
==========================  ======

Usage
-----
CLI (installed entry point)::

    herobg

Direct invocation::

    python -m herobg.api.main
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from herobg import __version__
from herobg.api.models import SettingsRequest
from herobg.core.config import config
from herobg.core.errors import (
    ConfigurationError,
    EncodingError,
    GenerationError,
    HeroBGError,
    ValidationError,
)
from herobg.core.generator_adapters import generator_registry
from herobg.core.presets import PRESETS
from herobg.core.settings import (
    MAX_ELEMENT_IMAGES,
    MAX_PEOPLE,
    RESOLUTIONS,
    AspectRatio,
    GenerationMode,
    GenerationResult,
    GenerationSettings,
    ImageQuality,
    LightingStyle,
    Placement,
)
from herobg.core.studio import HeroStudio, vertical_settings
from herobg.core.validation import can_generate

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Application lifecycle.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the session studio on startup and drop it on shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    app.state.studio = HeroStudio(config)
    app.state.generation_lock = asyncio.Lock()
    logger.info(f"HeroStudio initialised with '{app.state.studio.adapter.name}' generator.")

    yield

    app.state.studio.history.clear()
    logger.info("HeroStudio history cleared on shutdown.")


app = FastAPI(
    title="Hero BG Studio",
    description="Hero-section background generation API.",
    version=__version__,
    lifespan=lifespan,
)

# Allow cross-origin requests so a separately served frontend can call the
# API during development.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Helpers.
# ---------------------------------------------------------------------------


def _http_error(error: HeroBGError) -> HTTPException:
    """Translate a core error into the matching HTTP error."""
    if isinstance(error, ValidationError):
        status = 400
    elif isinstance(error, EncodingError):
        status = 422
    elif isinstance(error, ConfigurationError):
        status = 503
    elif isinstance(error, GenerationError):
        status = 502
    else:
        status = 500
    return HTTPException(status_code=status, detail=str(error))


def _settings_summary(settings: GenerationSettings) -> dict:
    """Describe a settings value without its image payloads."""
    return {
        "mode": settings.mode.value,
        "person_count": len(settings.person_images),
        "has_mockup_image": settings.mockup_image is not None,
        "element_count": len(settings.element_images),
        "elements_text": settings.elements_text,
        "visual_identity": settings.visual_identity,
        "negative_prompt": settings.negative_prompt,
        "person_position": settings.person_position.value,
        "safe_area": settings.safe_area.value,
        "aspect_ratio": settings.aspect_ratio.value,
        "resolution": settings.resolution,
        "quality": settings.quality.value,
        "style_strength": settings.style_strength,
        "depth_of_field": settings.depth_of_field,
        "lighting": settings.lighting.value,
        "grain": settings.grain,
        "is_transformation": settings.is_transformation,
    }


def _result_entry(result: GenerationResult) -> dict:
    return {
        "id": result.id,
        "image_url": result.image_url,
        "prompt": result.prompt,
        "generator": result.generator,
        "timestamp": result.timestamp,
        "settings": _settings_summary(result.settings),
    }


async def _decode_settings(req: SettingsRequest) -> GenerationSettings:
    """Decode the request's image payloads off the event loop."""
    try:
        return await run_in_threadpool(req.to_settings)
    except HeroBGError as e:
        raise _http_error(e) from e


def _get_result(studio: HeroStudio, result_id: str) -> GenerationResult:
    result = studio.history.get(result_id)
    if result is None:
        raise HTTPException(status_code=404, detail="Result not found")
    return result


async def _run_generation(settings: GenerationSettings) -> dict:
    """Run one generation off the event loop, rejecting overlapping calls."""
    studio: HeroStudio = app.state.studio
    lock: asyncio.Lock = app.state.generation_lock

    if lock.locked():
        logger.warning("Rejected submission: a generation is already in progress")
        raise HTTPException(status_code=409, detail="A generation is already in progress")

    async with lock:
        try:
            result = await run_in_threadpool(studio.generate, settings)
        except HeroBGError as e:
            logger.error(f"Generation failed: {e}")
            raise _http_error(e) from e

    return {"success": True, "result": _result_entry(result)}


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.get("/api/config")
async def get_config() -> dict:
    """Return everything a frontend needs to build the settings form.

    Returns:
        Dictionary with ``version``, the enum choices, the resolution
        table, presets, input limits, registered generators, and the
        active generator name.
    """
    studio: HeroStudio = app.state.studio
    return {
        "version": __version__,
        "modes": [m.value for m in GenerationMode],
        "placements": [p.value for p in Placement],
        "aspect_ratios": [a.value for a in AspectRatio],
        "resolutions": RESOLUTIONS,
        "qualities": [q.value for q in ImageQuality],
        "lighting_styles": [s.value for s in LightingStyle],
        "presets": [p.to_dict() for p in PRESETS],
        "limits": {"person_images": MAX_PEOPLE, "element_images": MAX_ELEMENT_IMAGES},
        "generators": [
            generator_registry.get_adapter_info(name)
            for name in generator_registry.list_available()
        ],
        "active_generator": studio.adapter.name,
        "history_limit": studio.history.limit,
    }


@app.post("/api/prompt/compile")
async def compile_prompt(req: SettingsRequest) -> dict:
    """Preview the compiled prompt without generating an image.

    Missing images do not block compilation: the prompt compiles for any
    settings value.

    Returns:
        Dictionary with ``compiled_prompt`` and ``ready``, which tells whether
        the settings carry the images their mode needs to be generated.
    """
    settings = await _decode_settings(req)
    studio: HeroStudio = app.state.studio
    return {"compiled_prompt": studio.compile(settings), "ready": can_generate(settings)}


@app.post("/api/generate")
async def generate_image(req: SettingsRequest) -> dict:
    """Generate a hero background and add it to the session history.

    Returns:
        Dictionary with ``success`` and ``result`` (the history entry).

    Raises:
        HTTPException: 400 missing required image or unknown preset, 409
            generation already running, 422 undecodable image, 502 generation
            failure, 503 no API key configured.
    """
    settings = await _decode_settings(req)
    return await _run_generation(settings)


@app.post("/api/generate/vertical/{result_id}")
async def generate_vertical(result_id: str) -> dict:
    """Generate a vertical (9:16) remix of a result from the history.

    Raises:
        HTTPException: 404 if the result is not in the history, plus the
            same errors as ``POST /api/generate``.
    """
    studio: HeroStudio = app.state.studio
    result = _get_result(studio, result_id)
    return await _run_generation(vertical_settings(result))


@app.get("/api/history")
async def get_history() -> dict:
    """Return the session history, most recent first."""
    studio: HeroStudio = app.state.studio
    items = studio.history.entries()
    return {"total": len(items), "results": [_result_entry(r) for r in items]}


@app.get("/api/history/{result_id}")
async def get_history_entry(result_id: str) -> dict:
    """Return a single history entry.

    Raises:
        HTTPException: 404 if the result is not found.
    """
    studio: HeroStudio = app.state.studio
    return _result_entry(_get_result(studio, result_id))


@app.delete("/api/history")
async def clear_history() -> dict:
    """Remove every result from the session history."""
    studio: HeroStudio = app.state.studio
    cleared = len(studio.history)
    studio.history.clear()
    return {"success": True, "cleared": cleared}


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host, port and log level from :data:`~herobg.core.config.config`
    (``HEROBG_SERVER_HOST``, ``HEROBG_SERVER_PORT``, ``HEROBG_LOG_LEVEL``).

    This function is registered as the ``herobg`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "herobg.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()

"""Session orchestration for hero-background generation.

:class:`HeroStudio` ties the pieces together for one user session::

    settings -> validate -> build_prompt -> adapter.generate -> result -> history

It holds no queue and no in-flight state: each call runs to completion or
raises, and the caller decides whether a new submission is allowed while
one is pending.

Vertical Remix
--------------
:meth:`HeroStudio.generate_vertical` reuses a previous result as the
``base_image`` of a new 9:16 request.  The compiled prompt then switches to
the bottom-anchored layout with the top 80% of the frame kept free.
"""

from __future__ import annotations

import logging

from .config import HeroBGConfig
from .generator_adapters import GeneratorAdapterBase, generator_registry
from .history import GenerationHistory
from .prompt_builder import build_prompt
from .settings import (
    AspectRatio,
    GenerationResult,
    GenerationSettings,
    Placement,
)
from .validation import validate_settings

logger = logging.getLogger(__name__)


def vertical_settings(result: GenerationResult) -> GenerationSettings:
    """Derive the settings for a vertical remix of a previous result.

    Every field is copied from the result's settings except the format
    (9:16 at its default resolution), both placements (centered) and the
    base image (the result's own image).
    """
    return result.settings.with_aspect_ratio(AspectRatio.PORTRAIT).model_copy(
        update={
            "safe_area": Placement.CENTER,
            "person_position": Placement.CENTER,
            "base_image": result.image_url,
        }
    )


class HeroStudio:
    """One generation session: an adapter plus its bounded history.

    Args:
        config: Application configuration.
        adapter: Generator adapter to use.  Defaults to the adapter named by
            ``config.default_generator``.
        history: History to record results in.  Defaults to a new history
            capped at ``config.history_limit``.
    """

    def __init__(
        self,
        config: HeroBGConfig,
        adapter: GeneratorAdapterBase | None = None,
        history: GenerationHistory | None = None,
    ) -> None:
        self.config = config
        if adapter is None:
            adapter = generator_registry.instantiate(config.default_generator, config)
        if history is None:
            history = GenerationHistory(config.history_limit)
        self.adapter = adapter
        self.history = history

    def compile(self, settings: GenerationSettings) -> str:
        """Return the prompt that :meth:`generate` would send."""
        return build_prompt(settings)

    def generate(self, settings: GenerationSettings) -> GenerationResult:
        """Validate, compile and generate; record and return the result.

        Raises:
            ValidationError: If the settings lack the required inputs.  The
                adapter is not called.
            HeroBGError: Any configuration, encoding or generation failure
                from the adapter, unchanged.
        """
        validate_settings(settings)
        prompt = build_prompt(settings)

        mode = "transformation" if settings.is_transformation else "generation"
        logger.info(f"Starting {settings.mode.value} {mode} with {self.adapter.name} adapter")

        output = self.adapter.generate(settings, prompt)
        result = GenerationResult.create(output, settings, generator=self.adapter.name)
        self.history.add(result)

        logger.info(f"Generation {result.id} complete ({len(self.history)} in history)")
        return result

    def generate_vertical(self, result: GenerationResult) -> GenerationResult:
        """Generate a vertical (9:16) remix of a previous result."""
        return self.generate(vertical_settings(result))

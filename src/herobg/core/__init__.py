"""Core functionality for hero-background generation.

- **prompt_builder**: compiles settings into the model instruction
- **generator_adapters**: adapter base class and registry
- **adapters**: Gemini and offline preview implementations
- **studio**: session orchestration (validate, compile, generate, record)
- **config**: HeroBGConfig, loaded from HEROBG_* environment variables

Usage Example
-------------
    from herobg.core import HeroStudio, config
    from herobg.core.settings import GenerationSettings, ImageBlob

    studio = HeroStudio(config)
    result = studio.generate(
        GenerationSettings(person_images=[ImageBlob(data=photo_bytes)])
    )
    vertical = studio.generate_vertical(result)
"""

# Import adapters to ensure they're registered
from herobg.core.adapters import GeminiImageAdapter, OfflinePreviewAdapter  # noqa: F401
from herobg.core.config import HeroBGConfig, config
from herobg.core.generator_adapters import GeneratorAdapterBase, generator_registry
from herobg.core.prompt_builder import build_prompt
from herobg.core.studio import HeroStudio

__all__ = [
    "GeneratorAdapterBase",
    "generator_registry",
    "HeroBGConfig",
    "HeroStudio",
    "build_prompt",
    "config",
]

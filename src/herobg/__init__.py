"""Hero BG Studio - hero-section background generation."""

__version__ = "0.1.0"

from herobg.core.config import HeroBGConfig, config
from herobg.core.generator_adapters import GeneratorAdapterBase, generator_registry

# Import adapters to ensure they're registered
from herobg.core.adapters import GeminiImageAdapter, OfflinePreviewAdapter  # noqa: F401

__all__ = [
    "GeneratorAdapterBase",
    "generator_registry",
    "HeroBGConfig",
    "config",
    "GeminiImageAdapter",
    "OfflinePreviewAdapter",
]

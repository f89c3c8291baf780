"""Base classes and registry for generator adapters.

A generator adapter takes a settings value plus its compiled prompt and
returns a displayable image.  Hero BG Studio ships two implementations of
the same contract:

- **gemini**: sends one request to the Google GenAI image model
- **offline**: renders a procedural preview locally with Pillow, with no
  credentials and no network

Which one a studio uses is a configuration choice
(``HEROBG_DEFAULT_GENERATOR``), resolved through :data:`generator_registry`.

Usage Example
-------------
    >>> from herobg.core.config import config
    >>> from herobg.core.generator_adapters import generator_registry
    >>>
    >>> print(generator_registry.list_available())
    ['gemini', 'offline']
    >>>
    >>> adapter = generator_registry.instantiate("offline", config)
    >>> output = adapter.generate(settings, build_prompt(settings))
    >>> output.image_url[:23]
    'data:image/jpeg;base64,'

See Also
--------
- herobg.core.adapters.gemini: Google GenAI implementation
- herobg.core.adapters.offline: Local preview implementation
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from .config import HeroBGConfig
from .settings import GeneratedImage, GenerationSettings

logger = logging.getLogger(__name__)


class GeneratorAdapterBase(ABC):
    """Abstract base class for all generator adapters.

    Implementations must be stateless between calls: each ``generate`` call
    is an independent input to output transformation.  There is no queue,
    no retry and no cancellation; the caller waits for the call to return
    or raise before issuing another.

    Attributes
    ----------
    name : str
        Registry key (e.g. "gemini")
    description : str
        Brief description shown by the API config endpoint
    requires_credentials : bool
        Whether the adapter needs an API key to run
    config : HeroBGConfig
        Configuration object supplied at construction
    """

    name: str = "base"
    description: str = "Base class for generator adapters"
    requires_credentials: bool = False
    version: str = "0.1.0"

    def __init__(self, config: HeroBGConfig) -> None:
        self.config = config
        logger.info(f"Initialized {self.name} generator adapter")

    @abstractmethod
    def generate(self, settings: GenerationSettings, prompt: str) -> GeneratedImage:
        """Produce an image for the given settings and compiled prompt.

        Args:
            settings: The generation settings (supplies the input images,
                aspect ratio and quality).
            prompt: Prompt text from :func:`herobg.core.prompt_builder.build_prompt`.

        Returns
        -------
        GeneratedImage
            The image reference and the prompt, unchanged.

        Raises
        ------
        ConfigurationError
            If a required credential is missing (before any request)
        EncodingError
            If an input image cannot be encoded (before any request)
        GenerationError
            If the generation itself fails or yields no image
        """


class GeneratorRegistry:
    """Registry for managing available generator adapters.

    Usage
    -----
    Registering a new adapter:

        >>> generator_registry.register(MyAdapter)

    Instantiating an adapter:

        >>> adapter = generator_registry.instantiate("gemini", config)
    """

    def __init__(self) -> None:
        self._adapters: dict[str, type[GeneratorAdapterBase]] = {}

    def register(self, adapter_class: type[GeneratorAdapterBase]) -> type[GeneratorAdapterBase]:
        """Register a generator adapter class.

        Returns the class so the method can be used as a decorator.
        """
        adapter_name = adapter_class.name

        if adapter_name in self._adapters:
            logger.warning(f"Generator adapter '{adapter_name}' is already registered, overwriting")

        self._adapters[adapter_name] = adapter_class
        logger.debug(f"Registered generator adapter: {adapter_name}")
        return adapter_class

    def instantiate(
        self, adapter_name: str, config: HeroBGConfig, **kwargs: Any
    ) -> GeneratorAdapterBase:
        """Create an instance of a registered adapter.

        Args:
            adapter_name: Name of the adapter to instantiate
            config: Configuration object
            **kwargs: Extra constructor arguments for the adapter

        Raises
        ------
        KeyError
            If adapter_name is not registered
        """
        adapter_class = self.get_adapter_class(adapter_name)
        if adapter_class is None:
            available = ", ".join(self.list_available())
            raise KeyError(
                f"Generator adapter '{adapter_name}' not found. Available adapters: {available}"
            )

        instance = adapter_class(config, **kwargs)
        logger.info(f"Instantiated generator adapter: {adapter_name}")
        return instance

    def get_adapter_class(self, adapter_name: str) -> type[GeneratorAdapterBase] | None:
        return self._adapters.get(adapter_name)

    def list_available(self) -> list[str]:
        return list(self._adapters.keys())

    def get_adapter_info(self, adapter_name: str) -> dict[str, Any] | None:
        """Get metadata about a registered adapter, or None if unknown."""
        adapter_class = self.get_adapter_class(adapter_name)
        if adapter_class is None:
            return None
        return {
            "name": adapter_class.name,
            "description": adapter_class.description,
            "requires_credentials": adapter_class.requires_credentials,
            "version": adapter_class.version,
        }


# Global generator registry instance
generator_registry = GeneratorRegistry()

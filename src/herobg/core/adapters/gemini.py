"""Google GenAI generator adapter.

This adapter sends a single ``generate_content`` request to a Gemini image
model and returns the first inline image in the response as a data URI.

Request Layout
--------------
Parts are sent in a fixed order:

1. the prior result, when ``base_image`` is set (transformation mode)
2. the compiled prompt text
3. the mockup screenshot (mockup mode) or every person image, in order
   (person mode)
4. every element reference image, in order

The request config carries ``aspect_ratio`` and ``image_size`` (the
quality tier: 1K, 2K or 4K).

Failure Handling
----------------
- No credential resolvable: :class:`ConfigurationError`, raised before the
  client is created.
- Unreadable input image: :class:`EncodingError`, raised before the request.
- SDK or network failure: wrapped in :class:`TransportError`.
- Response without inline image data: :class:`EmptyResultError`.

Nothing is retried and nothing is written to disk.

Usage Example
-------------
    >>> from herobg.core.adapters.gemini import GeminiImageAdapter
    >>> from herobg.core.config import config
    >>>
    >>> adapter = GeminiImageAdapter(config)
    >>> output = adapter.generate(settings, build_prompt(settings))
"""

from __future__ import annotations

import base64
import logging
from collections.abc import Callable, Mapping
from typing import Any

from google import genai
from google.genai import types

from herobg.core.config import HeroBGConfig
from herobg.core.encoding import encode_data_uri, encode_images, to_data_uri
from herobg.core.errors import ConfigurationError, EmptyResultError, TransportError
from herobg.core.generator_adapters import GeneratorAdapterBase, generator_registry
from herobg.core.settings import GeneratedImage, GenerationMode, GenerationSettings

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], Any]


def _default_client_factory(api_key: str) -> genai.Client:
    return genai.Client(api_key=api_key)


def build_request_parts(settings: GenerationSettings, prompt: str) -> list[types.Part]:
    """Assemble the ordered request parts for a generation.

    Raises:
        EncodingError: If the base image or any input image cannot be
            encoded.  No request has been made at that point.
    """
    parts: list[types.Part] = []

    if settings.base_image:
        base = encode_data_uri(settings.base_image)
        parts.append(types.Part.from_bytes(data=base.raw, mime_type=base.mime_type))

    parts.append(types.Part.from_text(text=prompt))

    if settings.mode == GenerationMode.MOCKUP:
        subject_images = [settings.mockup_image] if settings.mockup_image else []
    else:
        subject_images = list(settings.person_images)

    # Subject and element images share one encoding pass; order is preserved.
    encoded = encode_images(subject_images + list(settings.element_images))
    for image in encoded:
        parts.append(types.Part.from_bytes(data=image.raw, mime_type=image.mime_type))

    return parts


def extract_image(response: Any) -> str:
    """Return the first inline image of a response as a data URI.

    Raises:
        EmptyResultError: If no part carries inline image data.
    """
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            inline = getattr(part, "inline_data", None)
            if inline is None or not inline.data:
                continue
            data = inline.data
            if isinstance(data, bytes):
                payload = base64.b64encode(data).decode("ascii")
            else:
                payload = data
            return to_data_uri(inline.mime_type or "image/png", payload)

    raise EmptyResultError("The model returned no image. Try adjusting the prompt or inputs.")


@generator_registry.register
class GeminiImageAdapter(GeneratorAdapterBase):
    """Generator adapter for Google GenAI image models.

    The client is created per call from the resolved credential, so a key
    added to the environment after start-up is picked up on the next
    generation.  Tests inject ``client_factory`` and ``environ`` to stub
    the transport and the credential sources.

    Attributes
    ----------
    model_id : str
        Model identifier sent with each request
    """

    name = "gemini"
    description = "Google GenAI image generation (requires an API key)"
    requires_credentials = True
    version = "1.0.0"

    def __init__(
        self,
        config: HeroBGConfig,
        client_factory: ClientFactory | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(config)
        self.model_id = config.gemini_model_id
        self._client_factory = client_factory or _default_client_factory
        self._environ = environ
        logger.info(f"Configured Gemini adapter with model: {self.model_id}")

    def _resolve_api_key(self) -> str:
        api_key = self.config.resolve_api_key(self._environ)
        if not api_key:
            sources = ", ".join(["HEROBG_API_KEY", *self.config.api_key_sources])
            raise ConfigurationError(f"No API key configured. Set one of: {sources}")
        return api_key

    def generate(self, settings: GenerationSettings, prompt: str) -> GeneratedImage:
        api_key = self._resolve_api_key()
        parts = build_request_parts(settings, prompt)

        request_config = types.GenerateContentConfig(
            response_modalities=["IMAGE"],
            image_config=types.ImageConfig(
                aspect_ratio=settings.aspect_ratio.value,
                image_size=settings.quality.value,
            ),
        )

        logger.info(
            f"Requesting {settings.mode.value} image from {self.model_id} "
            f"({settings.aspect_ratio.value}, {settings.quality.value}, {len(parts)} parts)"
        )
        logger.debug(f"Compiled prompt:\n{prompt}")

        try:
            client = self._client_factory(api_key)
            response = client.models.generate_content(
                model=self.model_id,
                contents=[types.Content(role="user", parts=parts)],
                config=request_config,
            )
        except Exception as e:
            logger.error(f"Gemini request failed: {e}")
            raise TransportError(f"Image generation failed: {e}") from e

        image_url = extract_image(response)
        logger.info("Gemini returned an image")
        return GeneratedImage(image_url=image_url, prompt=prompt)

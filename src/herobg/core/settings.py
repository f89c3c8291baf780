"""Generation settings and result models.

These models describe everything the prompt compiler and the generator
adapters consume and produce.  They are immutable: a settings value is
built once per request and copied (``model_copy(update=...)``) when a
derived request is needed, such as the vertical remix.

Models
------
ImageBlob
    Raw bytes of an uploaded image plus an optional declared media type.
GenerationSettings
    The full set of user-controlled parameters for one generation.
GeneratedImage
    What an adapter returns: the displayable image reference and the
    prompt that produced it.
GenerationResult
    A recorded, successful generation kept in the session history.

Resolution Table
----------------
Each aspect ratio has a fixed list of target resolutions.  The first entry
is the default; an unknown ratio falls back to the 16:9 default::

    16:9 -> 1920x1080, 2560x1440
    9:16 -> 1080x1920, 1440x2560
    1:1  -> 1080x1080, 2048x2048
    4:5  -> 1080x1350
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

MAX_PEOPLE = 5
MAX_ELEMENT_IMAGES = 6


class GenerationMode(str, Enum):
    """Which subject the hero background is built around."""

    PERSON = "person"
    MOCKUP = "mockup"


class Placement(str, Enum):
    """Horizontal placement used for both subject position and safe area."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class AspectRatio(str, Enum):
    LANDSCAPE = "16:9"
    PORTRAIT = "9:16"
    SQUARE = "1:1"
    SOCIAL = "4:5"


class ImageQuality(str, Enum):
    STANDARD = "1K"
    HIGH = "2K"
    ULTRA = "4K"


class LightingStyle(str, Enum):
    SOFT_STUDIO = "Soft studio"
    NEON_GLOW = "Neon glow"
    RIM_LIGHT = "Rim light"
    CINEMATIC = "Cinematic"


RESOLUTIONS: dict[str, list[str]] = {
    AspectRatio.LANDSCAPE.value: ["1920x1080", "2560x1440"],
    AspectRatio.PORTRAIT.value: ["1080x1920", "1440x2560"],
    AspectRatio.SQUARE.value: ["1080x1080", "2048x2048"],
    AspectRatio.SOCIAL.value: ["1080x1350"],
}

DEFAULT_ASPECT_RATIO = AspectRatio.LANDSCAPE


def resolutions_for(aspect_ratio: str | AspectRatio) -> list[str]:
    """Return the resolution choices for an aspect ratio.

    Unknown ratios fall back to the 16:9 list.
    """
    key = aspect_ratio.value if isinstance(aspect_ratio, AspectRatio) else str(aspect_ratio)
    return list(RESOLUTIONS.get(key, RESOLUTIONS[DEFAULT_ASPECT_RATIO.value]))


def default_resolution(aspect_ratio: str | AspectRatio) -> str:
    """Return the first (default) resolution for an aspect ratio."""
    return resolutions_for(aspect_ratio)[0]


class ImageBlob(BaseModel):
    """An input image as raw bytes.

    Attributes:
        data: Encoded image file contents (PNG, JPEG, WebP...).
        mime_type: Declared media type.  ``None`` means "detect from data".
        filename: Original file name, used only in log and error messages.
    """

    model_config = ConfigDict(frozen=True, ser_json_bytes="base64", val_json_bytes="base64")

    data: bytes
    mime_type: str | None = None
    filename: str | None = None

    def label(self) -> str:
        return self.filename or f"<{len(self.data)} bytes>"


class GenerationSettings(BaseModel):
    """User-controlled parameters for a single generation.

    ``base_image`` switches the request into transformation mode: the prior
    result is sent as the first request part and the compiled prompt uses
    the bottom-anchored, vertical safe-area wording regardless of the
    placement fields.

    When ``resolution`` is omitted it defaults to the first entry of the
    resolution table for ``aspect_ratio``.
    """

    model_config = ConfigDict(frozen=True)

    mode: GenerationMode = GenerationMode.PERSON
    person_images: tuple[ImageBlob, ...] = Field(default=(), max_length=MAX_PEOPLE)
    mockup_image: ImageBlob | None = None
    element_images: tuple[ImageBlob, ...] = Field(default=(), max_length=MAX_ELEMENT_IMAGES)
    elements_text: str = ""
    visual_identity: str = ""
    negative_prompt: str = ""
    person_position: Placement = Placement.RIGHT
    safe_area: Placement = Placement.LEFT
    aspect_ratio: AspectRatio = DEFAULT_ASPECT_RATIO
    resolution: str = ""
    quality: ImageQuality = ImageQuality.STANDARD
    style_strength: int = Field(default=75, ge=0, le=100)
    depth_of_field: int = Field(default=60, ge=0, le=100)
    lighting: LightingStyle = LightingStyle.CINEMATIC
    grain: bool = True
    base_image: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _fill_resolution(cls, data: Any) -> Any:
        # Pair an unset resolution with the aspect ratio's default entry.
        if isinstance(data, dict) and not data.get("resolution"):
            ratio = data.get("aspect_ratio", DEFAULT_ASPECT_RATIO)
            data = {**data, "resolution": default_resolution(ratio)}
        return data

    @property
    def is_transformation(self) -> bool:
        return bool(self.base_image)

    @property
    def is_mockup(self) -> bool:
        return self.mode == GenerationMode.MOCKUP

    def with_position(self, position: Placement) -> GenerationSettings:
        """Return a copy with a new subject position.

        Moving the subject to one side moves the text safe area to the
        opposite side.  Centering the subject leaves the safe area alone.
        """
        safe_area = self.safe_area
        if position == Placement.LEFT:
            safe_area = Placement.RIGHT
        elif position == Placement.RIGHT:
            safe_area = Placement.LEFT
        return self.model_copy(update={"person_position": position, "safe_area": safe_area})

    def with_aspect_ratio(self, aspect_ratio: AspectRatio) -> GenerationSettings:
        """Return a copy with a new aspect ratio and its default resolution."""
        return self.model_copy(
            update={"aspect_ratio": aspect_ratio, "resolution": default_resolution(aspect_ratio)}
        )


@dataclass(frozen=True)
class GeneratedImage:
    """Adapter output: a displayable image reference and the prompt used."""

    image_url: str
    prompt: str


class GenerationResult(BaseModel):
    """A successful generation recorded in the session history."""

    model_config = ConfigDict(frozen=True)

    id: str
    image_url: str
    prompt: str
    settings: GenerationSettings
    timestamp: float
    generator: str = ""

    @classmethod
    def create(
        cls, output: GeneratedImage, settings: GenerationSettings, generator: str = ""
    ) -> GenerationResult:
        """Build a result with a fresh id and the current timestamp."""
        return cls(
            id=uuid.uuid4().hex,
            image_url=output.image_url,
            prompt=output.prompt,
            settings=settings,
            timestamp=time.time(),
            generator=generator,
        )

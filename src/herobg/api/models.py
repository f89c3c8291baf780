"""Pydantic request models for the Hero BG Studio API.

Images travel inside the JSON body as base64 ``data:`` URIs, the same form
the API returns generated images in.

Models
------
SettingsRequest
    Payload for ``POST /api/generate`` and ``POST /api/prompt/compile``.
    Converted to a :class:`~herobg.core.settings.GenerationSettings` with
    :meth:`SettingsRequest.to_settings`.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from herobg.core.encoding import decode_data_uri
from herobg.core.errors import ValidationError
from herobg.core.presets import get_preset
from herobg.core.settings import (
    MAX_ELEMENT_IMAGES,
    MAX_PEOPLE,
    AspectRatio,
    GenerationMode,
    GenerationSettings,
    ImageBlob,
    ImageQuality,
    LightingStyle,
    Placement,
)


def _blob_from_data_uri(uri: str, filename: str) -> ImageBlob:
    raw, mime_type = decode_data_uri(uri)
    return ImageBlob(data=raw, mime_type=mime_type, filename=filename)


class SettingsRequest(BaseModel):
    """Request body carrying a full set of generation settings.

    Attributes:
        mode: ``"person"`` or ``"mockup"``.
        person_images: Subject photos as data URIs (0-5).
        mockup_image: UI screenshot as a data URI (mockup mode).
        element_images: Element reference images as data URIs (0-6).
        elements_text: Free-text description of extra elements.
        visual_identity: Free-text style description, injected verbatim.
        preset: Name of a visual-identity preset, used when
            ``visual_identity`` is empty.
        negative_prompt: Free-text exclusions, injected verbatim.
        person_position: Subject or mockup placement.
        safe_area: Text safe-area placement.  When omitted it follows
            ``person_position`` to the opposite side.
        aspect_ratio: ``"16:9"``, ``"9:16"``, ``"1:1"`` or ``"4:5"``.
        resolution: Target resolution; empty means the ratio's default.
        quality: ``"1K"``, ``"2K"`` or ``"4K"``.
        style_strength: 0-100.
        depth_of_field: 0-100.
        lighting: Lighting style name.
        grain: Whether to add film grain.
        base_image: Prior result (data URI) for a transformation request.
    """

    mode: GenerationMode = Field(
        default=GenerationMode.PERSON,
        description="Generation mode: 'person' or 'mockup'.",
    )
    person_images: list[str] = Field(
        default_factory=list,
        max_length=MAX_PEOPLE,
        description="Subject photos as base64 data URIs.",
    )
    mockup_image: str | None = Field(
        default=None,
        description="UI screenshot as a base64 data URI (mockup mode).",
    )
    element_images: list[str] = Field(
        default_factory=list,
        max_length=MAX_ELEMENT_IMAGES,
        description="Element reference images as base64 data URIs.",
    )
    elements_text: str = Field(default="", description="Extra elements to include.")
    visual_identity: str = Field(default="", description="Visual identity description.")
    preset: str | None = Field(
        default=None,
        description="Preset name; fills the visual identity when it is empty.",
    )
    negative_prompt: str = Field(default="", description="Things to avoid.")
    person_position: Placement = Field(default=Placement.RIGHT)
    safe_area: Placement | None = Field(
        default=None,
        description="Text safe area; omitted means opposite the subject position.",
    )
    aspect_ratio: AspectRatio = Field(default=AspectRatio.LANDSCAPE)
    resolution: str = Field(
        default="",
        description="Target resolution; empty selects the aspect ratio's default.",
    )
    quality: ImageQuality = Field(default=ImageQuality.STANDARD)
    style_strength: int = Field(default=75, ge=0, le=100)
    depth_of_field: int = Field(default=60, ge=0, le=100)
    lighting: LightingStyle = Field(default=LightingStyle.CINEMATIC)
    grain: bool = Field(default=True)
    base_image: str | None = Field(
        default=None,
        description="Prior result as a data URI; switches to transformation mode.",
    )

    def to_settings(self) -> GenerationSettings:
        """Decode the image payloads and build the settings value.

        Raises:
            EncodingError: If any image is not a valid base64 data URI.
            ValidationError: If ``preset`` names no known preset.
        """
        visual_identity = self.visual_identity
        if self.preset:
            preset = get_preset(self.preset)
            if preset is None:
                raise ValidationError(f"Unknown preset: {self.preset}")
            if not visual_identity.strip():
                visual_identity = preset.visual_identity

        person_images = [
            _blob_from_data_uri(uri, f"person-{i + 1}") for i, uri in enumerate(self.person_images)
        ]
        element_images = [
            _blob_from_data_uri(uri, f"element-{i + 1}")
            for i, uri in enumerate(self.element_images)
        ]
        mockup_image = (
            _blob_from_data_uri(self.mockup_image, "mockup") if self.mockup_image else None
        )

        settings = GenerationSettings(
            mode=self.mode,
            person_images=person_images,
            mockup_image=mockup_image,
            element_images=element_images,
            elements_text=self.elements_text,
            visual_identity=visual_identity,
            negative_prompt=self.negative_prompt,
            person_position=self.person_position,
            safe_area=self.safe_area or Placement.LEFT,
            aspect_ratio=self.aspect_ratio,
            resolution=self.resolution,
            quality=self.quality,
            style_strength=self.style_strength,
            depth_of_field=self.depth_of_field,
            lighting=self.lighting,
            grain=self.grain,
            base_image=self.base_image or None,
        )
        if self.safe_area is None:
            settings = settings.with_position(self.person_position)
        return settings

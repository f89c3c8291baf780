"""Offline preview generator adapter.

Renders a procedural placeholder locally with Pillow so the whole flow
(compile, generate, history, vertical remix) can be exercised without an
API key or network access.  The returned prompt is the real compiled
prompt; only the image is simulated.

The preview follows the requested layout closely enough to judge
composition:

- canvas size follows the aspect ratio
- background gradient and glow colour follow keywords in the visual
  identity (neon/lime, cobalt/blue, amber/luxury)
- a faint grid stands in for tech overlays
- a dark disc marks where the subject would sit
- an "OFFLINE PREVIEW MODE" label is drawn in the centre
"""

from __future__ import annotations

import io
import logging
import random
import time
from dataclasses import dataclass

from PIL import Image, ImageChops, ImageDraw, ImageFont

from herobg.core.config import HeroBGConfig
from herobg.core.encoding import to_data_uri
from herobg.core.generator_adapters import GeneratorAdapterBase, generator_registry
from herobg.core.settings import AspectRatio, GeneratedImage, GenerationSettings, Placement

logger = logging.getLogger(__name__)

CANVAS_SIZES: dict[AspectRatio, tuple[int, int]] = {
    AspectRatio.LANDSCAPE: (1280, 720),
    AspectRatio.PORTRAIT: (720, 1280),
    AspectRatio.SQUARE: (1080, 1080),
    AspectRatio.SOCIAL: (1080, 1350),
}

_SUBJECT_X: dict[Placement, float] = {
    Placement.LEFT: 0.2,
    Placement.CENTER: 0.5,
    Placement.RIGHT: 0.8,
}


@dataclass(frozen=True)
class _Palette:
    start: tuple[int, int, int]
    end: tuple[int, int, int]
    glow: tuple[int, int, int]
    glow_alpha: float


_DEFAULT_PALETTE = _Palette((0x18, 0x18, 0x1B), (0, 0, 0), (255, 255, 255), 0.1)

# Checked in order; the first keyword hit wins.
_PALETTES: list[tuple[tuple[str, ...], _Palette]] = [
    (("neon", "lime"), _Palette((0x0F, 0x17, 0x2A), (0x1E, 0x1B, 0x4B), (163, 230, 53), 0.4)),
    (("cobalt", "blue"), _Palette((0x02, 0x06, 0x17), (0x17, 0x25, 0x54), (96, 165, 250), 0.4)),
    (("amber", "luxury"), _Palette((0x1C, 0x19, 0x17), (0x45, 0x1A, 0x03), (251, 191, 36), 0.3)),
]


def pick_palette(visual_identity: str) -> _Palette:
    identity = visual_identity.lower()
    for keywords, palette in _PALETTES:
        if any(keyword in identity for keyword in keywords):
            return palette
    return _DEFAULT_PALETTE


def _gradient(size: tuple[int, int], palette: _Palette) -> Image.Image:
    width, height = size
    vertical = Image.linear_gradient("L").resize(size)
    horizontal = (
        Image.linear_gradient("L")
        .rotate(90)
        .transpose(Image.Transpose.FLIP_LEFT_RIGHT)
        .resize(size)
    )
    mask = ImageChops.add(vertical, horizontal, scale=2.0)
    start = Image.new("RGB", (width, height), palette.start)
    end = Image.new("RGB", (width, height), palette.end)
    return Image.composite(end, start, mask)


def _add_glows(canvas: Image.Image, palette: _Palette, rng: random.Random) -> Image.Image:
    width, height = canvas.size
    layer = Image.new("RGB", canvas.size, (0, 0, 0))
    for _ in range(3):
        radius = max(int(rng.random() * width / 3), 1)
        x = int(rng.random() * width)
        y = int(rng.random() * height)
        # radial_gradient is black at the centre; invert for a bright core.
        falloff = ImageChops.invert(Image.radial_gradient("L")).resize((radius * 2, radius * 2))
        falloff = falloff.point(lambda v: int(v * palette.glow_alpha))
        glow = Image.new("RGB", falloff.size, palette.glow)
        layer.paste(glow, (x - radius, y - radius), falloff)
    return ImageChops.screen(canvas, layer)


def _draw_overlays(canvas: Image.Image, settings: GenerationSettings) -> Image.Image:
    width, height = canvas.size
    overlay = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)

    grid = width / 10
    x = 0.0
    while x <= width:
        draw.line([(x, 0), (x, height)], fill=(255, 255, 255, 13), width=2)
        x += grid
    y = 0.0
    while y <= height:
        draw.line([(0, y), (width, y)], fill=(255, 255, 255, 13), width=2)
        y += grid

    cx = width * _SUBJECT_X[settings.person_position]
    cy = height * 0.6
    r = height * 0.25
    draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=(0, 0, 0, 77))

    title_font = ImageFont.load_default(size=max(width // 30, 10))
    note_font = ImageFont.load_default(size=max(width // 60, 8))
    draw.text(
        (width / 2, height / 2),
        "OFFLINE PREVIEW MODE",
        font=title_font,
        fill=(255, 255, 255, 128),
        anchor="mm",
    )
    draw.text(
        (width / 2, height / 2 + width / 25),
        "(AI Generation Simulated)",
        font=note_font,
        fill=(255, 255, 255, 128),
        anchor="mm",
    )

    return Image.alpha_composite(canvas.convert("RGBA"), overlay).convert("RGB")


def render_preview(settings: GenerationSettings, rng: random.Random | None = None) -> Image.Image:
    """Render the procedural preview image for a settings value."""
    rng = rng or random.Random()
    size = CANVAS_SIZES.get(settings.aspect_ratio, CANVAS_SIZES[AspectRatio.LANDSCAPE])
    palette = pick_palette(settings.visual_identity)

    canvas = _gradient(size, palette)
    canvas = _add_glows(canvas, palette, rng)
    return _draw_overlays(canvas, settings)


@generator_registry.register
class OfflinePreviewAdapter(GeneratorAdapterBase):
    """Generator adapter that renders a local placeholder image.

    Needs no credentials and makes no network calls.  Input images are not
    read.  Pass ``rng`` for reproducible glow placement in tests.
    """

    name = "offline"
    description = "Local procedural preview (no API key, no network)"
    requires_credentials = False
    version = "1.0.0"

    def __init__(self, config: HeroBGConfig, rng: random.Random | None = None) -> None:
        super().__init__(config)
        self._rng = rng or random.Random()

    def generate(self, settings: GenerationSettings, prompt: str) -> GeneratedImage:
        logger.info("Offline mode: simulating generation")
        logger.debug(f"Compiled prompt:\n{prompt}")

        if self.config.offline_latency_seconds > 0:
            time.sleep(self.config.offline_latency_seconds)

        image = render_preview(settings, self._rng)
        buffer = io.BytesIO()
        image.save(buffer, format="JPEG", quality=90)

        image_url = to_data_uri("image/jpeg", buffer.getvalue())
        return GeneratedImage(image_url=image_url, prompt=prompt)

"""Prompt compilation for hero-background generation.

The compiler turns a :class:`~herobg.core.settings.GenerationSettings` value
into the single natural-language instruction sent to the image model.  It
is a pure function: no I/O, no randomness, no failure conditions.  The
same settings always compile to the same string.

Branch Selection
----------------
The opening instruction block depends on two facts only, the generation
mode and whether a prior image is being transformed:

==========  ==============  ==============================================
Mode        Transformation  Instruction
==========  ==============  ==============================================
mockup      yes             Vertical smartphone mockup, bottom-anchored
mockup      no              3D device mockup showing the screenshot
person      yes             Vertical 9:16 recreation, subjects at bottom
person      no              Studio hero with waist-up subject framing
==========  ==============  ==============================================

Prompt Structure::

    [Instruction block]

    [COMPOSITION]
    - aspect ratio, quality, position, safe area, optional clauses...

    [VISUAL IDENTITY]
    <identity text>

    [CONTROLS]
    - style strength, depth of field, lighting, grain

    [LIGHTING & ATMOSPHERE]
    [QUALITY RULES]
    [NEGATIVE PROMPT]

Each block is separated by a blank line and the whole prompt is stripped.

Usage
-----
::

    prompt = build_prompt(settings)
"""

from __future__ import annotations

from collections.abc import Callable

from herobg.core.settings import (
    AspectRatio,
    GenerationMode,
    GenerationSettings,
    Placement,
    resolutions_for,
)

# ---------------------------------------------------------------------------
# Placement vocabulary.
# ---------------------------------------------------------------------------

_PLACEMENT_LABELS: dict[Placement, str] = {
    Placement.LEFT: "Left",
    Placement.CENTER: "Center",
    Placement.RIGHT: "Right",
}

_ANCHORED_POSITION = "BOTTOM (ANCHORED)"
_RESERVED_SAFE_AREA = "TOP (80% of the height kept free)"

# ---------------------------------------------------------------------------
# Fixed boilerplate sections shared by every prompt.
# ---------------------------------------------------------------------------

_COMPOSITION_RULES = (
    "- Use the rule of thirds and a clear light hierarchy.\n"
    "- Background style: dark gradients with controlled glows and soft diffused light."
)

_LIGHTING_BOILERPLATE = (
    "[LIGHTING & ATMOSPHERE]\n"
    "- Cinematic key light with a soft fill and a defined rim separating the foreground "
    "from the background.\n"
    "- Controlled volumetric haze and subtle bokeh; highlights never clip.\n"
    "- Color-match every supplied input ({inputs}) to the generated background: shared "
    "white balance, matching shadows and reflections."
)

_QUALITY_BOILERPLATE = (
    "[QUALITY RULES]\n"
    "- Photorealistic, high dynamic range, crisp micro-detail.\n"
    "- Clean edges with natural contact shadows; no sticker or cut-out effect.\n"
    "- No watermark, no logo, no added text or lettering."
)

_BASE_EXCLUSIONS = (
    "watermark",
    "logo",
    "text artifacts",
    "low resolution",
    "blurry",
    "jpeg artifacts",
    "distorted face",
    "deformed hands",
    "extra fingers",
    "sticker edges",
    "halo around subject",
)

# Only excluded while waist-up framing is in effect.
_WAIST_UP_EXCLUSIONS = (
    "visible feet",
    "visible legs",
    "full-body framing",
)


# ---------------------------------------------------------------------------
# Instruction blocks, one per (mode, transformation) pair.
# ---------------------------------------------------------------------------


def _subject_term(settings: GenerationSettings) -> str:
    return "subjects" if len(settings.person_images) > 1 else "subject"


def _mockup_device(aspect_ratio: AspectRatio) -> str:
    if aspect_ratio == AspectRatio.PORTRAIT:
        return "a high-end 3D SMARTPHONE (iPhone style)"
    return "a 3D LAPTOP, TABLET or floating GLASS INTERFACE"


def _mockup_transformation(settings: GenerationSettings) -> str:
    return (
        "[INSTRUCTION: VERTICAL MOBILE MOCKUP ADAPTATION]\n"
        "The first image is the style reference. The supplied screenshot is the screen content.\n"
        "TASK: Generate a VERTICAL 3D MOCKUP of a premium SMARTPHONE displaying the supplied "
        "screen.\n"
        "POSITION: The device is ANCHORED TO THE BOTTOM EDGE or floats in the lower third.\n"
        "SAFE AREA: The top 80% of the frame stays free."
    )


def _mockup_generation(settings: GenerationSettings) -> str:
    device = _mockup_device(settings.aspect_ratio)
    return (
        "[INSTRUCTION: 3D MOCKUP GENERATION]\n"
        "The supplied image is a SCREENSHOT of a user interface.\n"
        f"TASK: Create a hero-section background featuring a REALISTIC 3D MOCKUP of {device} "
        "that displays this screen.\n"
        "MOCKUP STYLE: Clay render, matte black, frosted glass or brushed aluminium. It must "
        "read as a premium product floating in the scene.\n"
        "POSITION: The device is the focal point, placed as requested (left, center or right) "
        "and integrated into the scene lighting."
    )


def _person_transformation(settings: GenerationSettings) -> str:
    subjects = _subject_term(settings).upper()
    return (
        "[INSTRUCTION: VERTICAL 9:16 ADAPTATION - EXTREME SAFE AREA]\n"
        "The first image is the style and subject reference (desktop version).\n"
        "TASK: Recreate it in VERTICAL 9:16 format with a mobile-first layout.\n"
        "CRITICAL LAYOUT RULES (HIGHEST PRIORITY):\n"
        "1. GIANT SAFE AREA (TOP 80%): The upper 80% of the image MUST be clean negative "
        "space.\n"
        f"2. {subjects} POSITION (BOTTOM ANCHOR): The {subjects.lower()} must be ANCHORED TO "
        "THE BOTTOM EDGE of the frame.\n"
        "3. BODY: Extend the body naturally where the new framing requires it."
    )


def _person_generation(settings: GenerationSettings) -> str:
    subjects = _subject_term(settings)
    return (
        "[INSTRUCTION: HERO WITH PEOPLE]\n"
        "Create a studio-quality background image for a hero section. Integrate the "
        f"{subjects} from the reference images as the main {subjects}, with clean edges "
        "and realistic composition.\n"
        "FRAMING: Waist-up, filling roughly 50-70% of the frame height.\n"
        "LIGHT: Rim lighting separates the people from the background; skin tones and "
        "clothing are color-matched to the environment."
    )


_INSTRUCTION_BUILDERS: dict[tuple[GenerationMode, bool], Callable[[GenerationSettings], str]] = {
    (GenerationMode.MOCKUP, True): _mockup_transformation,
    (GenerationMode.MOCKUP, False): _mockup_generation,
    (GenerationMode.PERSON, True): _person_transformation,
    (GenerationMode.PERSON, False): _person_generation,
}


# ---------------------------------------------------------------------------
# Composition, controls and negative blocks.
# ---------------------------------------------------------------------------


def position_label(settings: GenerationSettings) -> str:
    """Placement wording for the subject or mockup."""
    if settings.is_transformation:
        return _ANCHORED_POSITION
    return _PLACEMENT_LABELS[settings.person_position]


def safe_area_label(settings: GenerationSettings) -> str:
    """Placement wording for the text safe area."""
    if settings.is_transformation:
        return _RESERVED_SAFE_AREA
    return _PLACEMENT_LABELS[settings.safe_area]


def uses_waist_up_framing(settings: GenerationSettings) -> bool:
    """Whether the first-pass person framing (waist-up) is in effect."""
    return not settings.is_mockup and not settings.is_transformation


def _resolution(settings: GenerationSettings) -> str:
    # An empty resolution falls back to the ratio's default entry.
    choices = resolutions_for(settings.aspect_ratio)
    return settings.resolution if settings.resolution else choices[0]


def _composition_block(settings: GenerationSettings) -> str:
    if settings.is_mockup:
        subject = "3D mockup"
    else:
        subject = _subject_term(settings)

    lines = [
        "[COMPOSITION]",
        f"- Aspect ratio and resolution: {settings.aspect_ratio.value} ({_resolution(settings)})",
        f"- Render quality: {settings.quality.value} (ultra detail)",
        f"- Position of the {subject}: {position_label(settings)}",
        f"- Text safe area: {safe_area_label(settings)}",
    ]

    if not settings.is_mockup and len(settings.person_images) > 2:
        lines.append(
            f"- Group composition: arrange all {len(settings.person_images)} people as one "
            "cohesive team with staggered depth, slight overlaps and every face clearly "
            "visible at a consistent scale."
        )

    if settings.is_mockup:
        lines.append(
            "- 3D perspective: three-quarter view with a slight tilt, real depth and "
            "reflections on the screen glass."
        )
        lines.append(
            "- Surfaces around the device: glass and acrylic panels catching the glows."
        )

    lines.append(_COMPOSITION_RULES)
    lines.append(f"- Additional elements: {settings.elements_text.strip() or 'none'}")

    if settings.element_images:
        lines.append(
            f"- Element references: {len(settings.element_images)} image(s) supplied after "
            "the main input(s); use them as style and prop references only."
        )

    return "\n".join(lines)


def _controls_block(settings: GenerationSettings) -> str:
    return "\n".join(
        [
            "[CONTROLS]",
            f"- Style strength: {settings.style_strength}%",
            f"- Depth of field: {settings.depth_of_field}%",
            f"- Lighting: {settings.lighting.value}",
            f"- Film grain: {'on' if settings.grain else 'off'}",
        ]
    )


def _lighting_block(settings: GenerationSettings) -> str:
    inputs = "screenshot" if settings.is_mockup else "people"
    if settings.element_images:
        inputs += ", reference elements"
    return _LIGHTING_BOILERPLATE.format(inputs=inputs)


def _negative_block(settings: GenerationSettings) -> str:
    exclusions = list(_BASE_EXCLUSIONS)
    if uses_waist_up_framing(settings):
        exclusions = list(_WAIST_UP_EXCLUSIONS) + exclusions

    fixed = ", ".join(exclusions)
    user_negative = settings.negative_prompt.strip()
    body = f"{user_negative}, {fixed}" if user_negative else fixed
    return f"[NEGATIVE PROMPT]\n{body}"


def build_prompt(settings: GenerationSettings) -> str:
    """Compile the generation prompt for a settings value.

    Args:
        settings: The generation settings.  Empty optional text fields are
            allowed; they compile to neutral defaults.

    Returns:
        The compiled prompt, blocks separated by blank lines, with leading
        and trailing whitespace removed.
    """
    parts: list[str] = []

    # --- Instruction block (mode x transformation) --------------------------
    instruction = _INSTRUCTION_BUILDERS[(settings.mode, settings.is_transformation)]
    parts.append(instruction(settings))

    # --- Composition ---------------------------------------------------------
    parts.append(_composition_block(settings))

    # --- Visual identity (verbatim) ------------------------------------------
    parts.append(f"[VISUAL IDENTITY]\n{settings.visual_identity}")

    # --- Controls ------------------------------------------------------------
    parts.append(_controls_block(settings))

    # --- Fixed lighting and quality guidance ---------------------------------
    parts.append(_lighting_block(settings))
    parts.append(_QUALITY_BOILERPLATE)

    # --- Negative prompt -----------------------------------------------------
    parts.append(_negative_block(settings))

    # An empty free-text field must not leave a dangling newline in its block.
    return "\n\n".join(part.rstrip() for part in parts).strip()

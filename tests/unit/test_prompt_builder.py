"""Unit tests for the hero-background prompt compiler.

Covers the four instruction branches (mode x transformation), the
composition clauses that depend on the number of people and on mockup
mode, verbatim injection of the free-text fields, and the negative-prompt
assembly.
"""

from __future__ import annotations

import pytest

from herobg.core.prompt_builder import (
    build_prompt,
    position_label,
    safe_area_label,
    uses_waist_up_framing,
)
from herobg.core.settings import (
    AspectRatio,
    GenerationMode,
    GenerationSettings,
    ImageBlob,
    ImageQuality,
    LightingStyle,
    Placement,
)

BASE_IMAGE = "data:image/png;base64,iVBORw0KGgo="


def _people(count: int) -> list[ImageBlob]:
    return [ImageBlob(data=b"x", filename=f"p{i}.png") for i in range(count)]


def _section(prompt: str, header: str) -> str:
    """Return one blank-line-separated block of the prompt by its header."""
    for block in prompt.split("\n\n"):
        if block.startswith(header):
            return block
    raise AssertionError(f"Section {header!r} not found")


class TestInstructionBranches:
    """Each (mode, transformation) pair opens with its own instruction."""

    def test_person_generation(self):
        prompt = build_prompt(GenerationSettings(person_images=_people(1)))
        assert prompt.startswith("[INSTRUCTION: HERO WITH PEOPLE]")
        assert "Waist-up" in prompt
        assert "50-70%" in prompt

    def test_person_transformation(self):
        settings = GenerationSettings(person_images=_people(1), base_image=BASE_IMAGE)
        prompt = build_prompt(settings)
        assert prompt.startswith("[INSTRUCTION: VERTICAL 9:16 ADAPTATION - EXTREME SAFE AREA]")
        assert "ANCHORED TO THE BOTTOM EDGE" in prompt
        assert "80%" in prompt

    def test_mockup_generation_landscape_uses_laptop(self):
        settings = GenerationSettings(mode=GenerationMode.MOCKUP)
        prompt = build_prompt(settings)
        assert prompt.startswith("[INSTRUCTION: 3D MOCKUP GENERATION]")
        assert "3D LAPTOP, TABLET or floating GLASS INTERFACE" in prompt
        assert "SMARTPHONE" not in prompt

    def test_mockup_generation_portrait_uses_smartphone(self):
        settings = GenerationSettings(mode=GenerationMode.MOCKUP, aspect_ratio=AspectRatio.PORTRAIT)
        prompt = build_prompt(settings)
        assert "3D SMARTPHONE (iPhone style)" in prompt
        assert "LAPTOP" not in prompt

    @pytest.mark.parametrize("ratio", [AspectRatio.SQUARE, AspectRatio.SOCIAL])
    def test_mockup_generation_non_portrait_ratios_use_laptop(self, ratio):
        settings = GenerationSettings(mode=GenerationMode.MOCKUP, aspect_ratio=ratio)
        assert "3D LAPTOP" in build_prompt(settings)

    def test_mockup_transformation(self):
        settings = GenerationSettings(mode=GenerationMode.MOCKUP, base_image=BASE_IMAGE)
        prompt = build_prompt(settings)
        assert prompt.startswith("[INSTRUCTION: VERTICAL MOBILE MOCKUP ADAPTATION]")
        assert "SMARTPHONE" in prompt
        assert "top 80%" in prompt

    def test_person_prompt_never_mentions_devices(self):
        prompt = build_prompt(GenerationSettings(person_images=_people(3))).lower()
        for word in (
            "mockup",
            "smartphone",
            "laptop",
            "tablet",
            "device",
            "glass",
            "screenshot",
        ):
            assert word not in prompt


class TestComposition:
    """Test the [COMPOSITION] block."""

    def test_position_and_safe_area_labels(self):
        settings = GenerationSettings(
            person_images=_people(1),
            person_position=Placement.LEFT,
            safe_area=Placement.RIGHT,
        )
        block = _section(build_prompt(settings), "[COMPOSITION]")
        assert "- Position of the subject: Left" in block
        assert "- Text safe area: Right" in block

    def test_transformation_overrides_placements(self):
        settings = GenerationSettings(
            person_images=_people(1),
            person_position=Placement.LEFT,
            safe_area=Placement.RIGHT,
            base_image=BASE_IMAGE,
        )
        block = _section(build_prompt(settings), "[COMPOSITION]")
        assert "BOTTOM (ANCHORED)" in block
        assert "TOP (80% of the height kept free)" in block
        assert ": Left" not in block
        assert ": Right" not in block

    def test_aspect_ratio_resolution_and_quality(self):
        settings = GenerationSettings(
            person_images=_people(1),
            aspect_ratio=AspectRatio.SQUARE,
            quality=ImageQuality.ULTRA,
        )
        block = _section(build_prompt(settings), "[COMPOSITION]")
        assert "1:1 (1080x1080)" in block
        assert "Render quality: 4K" in block

    def test_explicit_resolution_is_used(self):
        settings = GenerationSettings(person_images=_people(1), resolution="2560x1440")
        assert "16:9 (2560x1440)" in build_prompt(settings)

    @pytest.mark.parametrize("count", [0, 1, 2])
    def test_no_group_clause_for_two_or_fewer(self, count):
        prompt = build_prompt(GenerationSettings(person_images=_people(count)))
        assert "Group composition" not in prompt

    @pytest.mark.parametrize("count", [3, 4, 5])
    def test_group_clause_for_more_than_two(self, count):
        prompt = build_prompt(GenerationSettings(person_images=_people(count)))
        assert f"arrange all {count} people" in prompt
        assert "Position of the subjects" in prompt

    def test_no_group_clause_in_mockup_mode(self):
        settings = GenerationSettings(mode=GenerationMode.MOCKUP, person_images=_people(4))
        prompt = build_prompt(settings)
        assert "Group composition" not in prompt
        assert "Position of the 3D mockup" in prompt

    def test_perspective_clause_only_in_mockup_mode(self):
        mockup = build_prompt(GenerationSettings(mode=GenerationMode.MOCKUP))
        person = build_prompt(GenerationSettings(person_images=_people(1)))
        assert "3D perspective" in mockup
        assert "3D perspective" not in person

    def test_additional_elements_default_to_none(self):
        prompt = build_prompt(GenerationSettings(person_images=_people(1)))
        assert "- Additional elements: none" in prompt

    def test_additional_elements_text(self):
        settings = GenerationSettings(person_images=_people(1), elements_text="floating cubes")
        assert "- Additional elements: floating cubes" in build_prompt(settings)

    def test_element_references_line(self):
        settings = GenerationSettings(
            person_images=_people(1),
            element_images=[ImageBlob(data=b"e")] * 3,
        )
        assert "3 image(s) supplied" in build_prompt(settings)


class TestTextFields:
    """Free-text fields are injected verbatim."""

    def test_visual_identity_verbatim(self):
        identity = "Deep cobalt (#1e3a8a) gradient; glass chevrons & soft bokeh"
        settings = GenerationSettings(person_images=_people(1), visual_identity=identity)
        assert _section(build_prompt(settings), "[VISUAL IDENTITY]") == (
            f"[VISUAL IDENTITY]\n{identity}"
        )

    def test_controls_block(self):
        settings = GenerationSettings(
            person_images=_people(1),
            style_strength=40,
            depth_of_field=90,
            lighting=LightingStyle.NEON_GLOW,
            grain=False,
        )
        block = _section(build_prompt(settings), "[CONTROLS]")
        assert "- Style strength: 40%" in block
        assert "- Depth of field: 90%" in block
        assert "- Lighting: Neon glow" in block
        assert "- Film grain: off" in block

    def test_user_negative_comes_first(self):
        settings = GenerationSettings(person_images=_people(1), negative_prompt="red tones")
        block = _section(build_prompt(settings), "[NEGATIVE PROMPT]")
        assert block.startswith("[NEGATIVE PROMPT]\nred tones, ")
        assert "watermark" in block

    def test_waist_up_exclusions_only_for_person_generation(self):
        person = build_prompt(GenerationSettings(person_images=_people(1)))
        transformed = build_prompt(
            GenerationSettings(person_images=_people(1), base_image=BASE_IMAGE)
        )
        mockup = build_prompt(GenerationSettings(mode=GenerationMode.MOCKUP))
        assert "visible feet" in person
        assert "visible feet" not in transformed
        assert "visible feet" not in mockup


class TestDeterminism:
    def test_same_settings_same_prompt(self):
        settings = GenerationSettings(person_images=_people(2), visual_identity="amber")
        assert build_prompt(settings) == build_prompt(settings)

    def test_prompt_is_stripped(self):
        prompt = build_prompt(GenerationSettings())
        assert prompt == prompt.strip()

    @pytest.mark.parametrize("people", [0, 1])
    def test_empty_visual_identity_keeps_single_blank_lines(self, people):
        prompt = build_prompt(GenerationSettings(person_images=_people(people)))
        assert "\n\n\n" not in prompt
        assert "[VISUAL IDENTITY]\n\n[CONTROLS]" in prompt

    def test_empty_settings_compile(self):
        prompt = build_prompt(GenerationSettings())
        assert "[VISUAL IDENTITY]" in prompt
        assert "[NEGATIVE PROMPT]" in prompt


class TestHelpers:
    def test_labels_without_transformation(self):
        settings = GenerationSettings(person_position=Placement.CENTER, safe_area=Placement.LEFT)
        assert position_label(settings) == "Center"
        assert safe_area_label(settings) == "Left"

    def test_waist_up_framing(self):
        assert uses_waist_up_framing(GenerationSettings())
        assert not uses_waist_up_framing(GenerationSettings(mode=GenerationMode.MOCKUP))
        assert not uses_waist_up_framing(GenerationSettings(base_image=BASE_IMAGE))


class TestLighting:
    """The colour-matching line names only the inputs that were supplied."""

    def test_person_inputs(self):
        block = _section(build_prompt(GenerationSettings(person_images=_people(1))), "[LIGHTING")
        assert "(people)" in block

    def test_person_inputs_with_elements(self):
        settings = GenerationSettings(person_images=_people(1), element_images=_people(2))
        block = _section(build_prompt(settings), "[LIGHTING")
        assert "(people, reference elements)" in block

    def test_mockup_inputs(self):
        settings = GenerationSettings(mode=GenerationMode.MOCKUP)
        block = _section(build_prompt(settings), "[LIGHTING")
        assert "(screenshot)" in block
        assert "people" not in block

"""Visual-identity presets offered alongside the free-text identity field."""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class Preset:
    name: str
    description: str
    visual_identity: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


PRESETS: tuple[Preset, ...] = (
    Preset(
        name="Neon Lime Tech",
        description="Dark + Glow",
        visual_identity=(
            "Dark minimalist background, matte black surfaces, vivid neon lime green "
            "(#a3e635) accents. Geometric 3D primitives (cubes, spheres) floating with motion "
            "blur. Cyberpunk tech UI overlays, grid lines, coding fragments in glass cards."
        ),
    ),
    Preset(
        name="Cobalt Corporate",
        description="Trust + Depth",
        visual_identity=(
            "Deep cobalt blue (#1e3a8a) to midnight blue gradient. Abstract upward-pointing "
            "arrows or chevrons built from frosted glass. Clean, reliable B2B aesthetic. Soft "
            "studio lighting, very smooth bokeh."
        ),
    ),
    Preset(
        name="Amber Luxe",
        description="Premium Editorial",
        visual_identity=(
            "Luxury editorial style. Deep warm charcoal background with liquid amber/gold "
            "(#d97706) light leaks. High contrast, rim lighting on the subject. Silk-like "
            "textures, floating gold dust particles. Elegant and sophisticated."
        ),
    ),
)


def get_preset(name: str) -> Preset | None:
    """Look up a preset by name (case-insensitive)."""
    wanted = name.strip().lower()
    return next((p for p in PRESETS if p.name.lower() == wanted), None)

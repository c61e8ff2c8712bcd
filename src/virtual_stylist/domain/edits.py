"""Domain models for refining a generated outfit."""

from dataclasses import dataclass

from virtual_stylist.domain.outfits import Style


@dataclass
class EditSession:
    """Working copy of one outfit while the user refines it."""

    style: Style
    image: bytes
    mime_type: str = "image/png"
    instruction: str = ""
    processing: bool = False
    error: str | None = None


@dataclass(frozen=True)
class ColorPreset:
    """Quick-select instruction that recolors an outfit."""

    name: str
    instruction: str


COLOR_PRESETS: tuple[ColorPreset, ...] = (
    ColorPreset(
        name="Warm",
        instruction=(
            "Shift the outfit to a warm palette of rust, mustard and camel tones."
        ),
    ),
    ColorPreset(
        name="Cool",
        instruction=(
            "Shift the outfit to a cool palette of navy, slate blue and icy grey."
        ),
    ),
    ColorPreset(
        name="Monochrome",
        instruction=(
            "Recolor the whole outfit in a single tone, from light to dark shades."
        ),
    ),
    ColorPreset(
        name="Earthy",
        instruction=(
            "Recolor the outfit in earthy olive, terracotta, sand and brown tones."
        ),
    ),
    ColorPreset(
        name="Pastel",
        instruction=(
            "Recolor the outfit in soft pastels like blush, mint, lilac and butter."
        ),
    ),
    ColorPreset(
        name="Vibrant",
        instruction=(
            "Make the outfit vibrant with saturated, bold and contrasting colors."
        ),
    ),
)


def find_preset(name: str) -> ColorPreset | None:
    """Return the preset with a case-insensitive name match."""
    wanted = name.strip().lower()
    for preset in COLOR_PRESETS:
        if preset.name.lower() == wanted:
            return preset
    return None

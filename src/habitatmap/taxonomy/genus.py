from typing import Optional

from habitatmap.constants import (
    DARKER_SHADES,
    DEFAULT_COLOR,
    DEFAULT_DARKER_SHADE,
    GENUS_COLOR_ENTRIES,
    GENUS_DISPLAY_NAMES,
    GENUS_INFO,
    UNKNOWN,
)
from habitatmap.types import GenusInfo


def _match_genus(species):
    if not species or not isinstance(species, str) or species == UNKNOWN:
        return None
    for genus, color in GENUS_COLOR_ENTRIES:
        if genus in species:
            return genus, color
    return None


def genus_of(species):
    """
    First genus (in color table order) contained in the species label.

    Returns None for empty, "Unknown" or unmatched labels.
    """
    match = _match_genus(species)
    return match[0] if match else None


def color_of(species):
    """Fill color for a species label, gray when the genus is not recognised."""
    match = _match_genus(species)
    return match[1] if match else DEFAULT_COLOR


def darker_shade_of(color):
    """Border shade for a fill color, dark gray for colors outside the table."""
    if not isinstance(color, str):
        return DEFAULT_DARKER_SHADE
    return DARKER_SHADES.get(color, DEFAULT_DARKER_SHADE)


def display_name_of(genus):
    return GENUS_DISPLAY_NAMES.get(genus, genus)


def info_for(genus) -> Optional[GenusInfo]:
    # Copy so callers cannot edit the shared table
    info = GENUS_INFO.get(genus) if genus else None
    return dict(info) if info else None

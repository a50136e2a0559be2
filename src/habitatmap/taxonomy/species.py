import re

from habitatmap.constants import NOT_DETERMINED, SPECIES_MAP, SPECIES_MAP_ENTRIES, UNKNOWN

# Compound community descriptions: "Fraxinus excelsior - Hedera helix", "Quercus/Betula"
_COMPOUND_SEPARATOR = re.compile(r"\s*[-/]\s*")

# Keys this short are abbreviations and too ambiguous for substring matching
_MIN_SUBSTRING_KEY_LENGTH = 3


def _clean_one(trimmed):
    if trimmed in SPECIES_MAP:
        return SPECIES_MAP[trimmed]

    for part in _COMPOUND_SEPARATOR.split(trimmed):
        part = part.strip()
        if part and part in SPECIES_MAP:
            return SPECIES_MAP[part]

    for key, value in SPECIES_MAP_ENTRIES:
        if len(key) < _MIN_SUBSTRING_KEY_LENGTH:
            continue
        if key in trimmed:
            return value

    return trimmed


def clean_tree_species(raw):
    """
    Map raw species/description strings onto canonical "Genus species" labels.

    Per entry, in order: drop blanks and "Not Determined"; exact lookup;
    lookup of each part of a compound description; first map key (in table
    order) contained in the string; otherwise the trimmed string itself.

    Args:
        raw (list of str): Raw values, possibly containing empty or garbage entries.

    Returns:
        list of str: One cleaned label per retained entry.
    """
    if not isinstance(raw, (list, tuple)):
        return []

    cleaned = []
    for value in raw:
        if not value or not isinstance(value, str) or NOT_DETERMINED in value:
            continue
        trimmed = value.strip()
        if not trimmed:
            continue
        cleaned.append(_clean_one(trimmed))
    return cleaned


def clean_species(raw):
    """Cleaned label for a single raw value, or "Unknown"."""
    cleaned = clean_tree_species([raw])
    return cleaned[0] if cleaned else UNKNOWN

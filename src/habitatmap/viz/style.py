from habitatmap.constants import DEFAULT_COLOR, PULSE_CLASS, UNKNOWN
from habitatmap.taxonomy.genus import color_of, darker_shade_of
from habitatmap.types import StyleOptions


def style_for(feature=None, pulse=False) -> StyleOptions:
    """
    Path style for a habitat polygon.

    Fill is the genus color, border its darker shade. ``pulse`` is driven by
    the caller's animation timer and only toggles the emphasis class.

    Args:
        feature (dict, optional): Enriched habitat feature.
        pulse (bool): Whether the polygon is currently pulsing.

    Returns:
        StyleOptions: fill_color, border_color, weight, opacity, fill_opacity, emphasis_class.
    """
    if not feature:
        return {
            "fill_color": DEFAULT_COLOR,
            "border_color": darker_shade_of(DEFAULT_COLOR),
            "weight": 1,
            "opacity": 0.5,
            "fill_opacity": 0.5,
            "emphasis_class": PULSE_CLASS if pulse else "",
        }

    species = (feature.get("properties") or {}).get("cleanedSpecies") or UNKNOWN
    color = color_of(species)

    return {
        "fill_color": color,
        "border_color": darker_shade_of(color),
        "weight": 1.5,
        "opacity": 0.9,
        "fill_opacity": 0.5,
        "emphasis_class": PULSE_CLASS if pulse else "",
    }

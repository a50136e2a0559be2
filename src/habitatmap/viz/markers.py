from typing import Optional

from habitatmap.config import MARKER_ZOOM_THRESHOLD
from habitatmap.constants import AREA_FIELD, COUNTY_FIELD, SITE_NAME_FIELD, UNKNOWN
from habitatmap.taxonomy.genus import color_of, info_for
from habitatmap.types import Marker


def marker_for(feature) -> Optional[Marker]:
    """
    Centroid marker for one enriched feature, or None if it has no centroid.

    Location is (lat, lon), the order map widgets expect.
    """
    properties = feature.get("properties") or {}
    centroid = properties.get("_centroid")
    if not centroid:
        return None

    species = properties.get("cleanedSpecies") or UNKNOWN
    return {
        "location": (centroid[1], centroid[0]),
        "color": color_of(species),
        "species": species,
        "site_name": properties.get(SITE_NAME_FIELD),
    }


def centroid_markers(collection, zoom):
    """
    Markers shown instead of polygons when zoomed out.

    Returns an empty list at or above MARKER_ZOOM_THRESHOLD.
    """
    if not collection or zoom >= MARKER_ZOOM_THRESHOLD:
        return []
    markers = (marker_for(f) for f in collection.get("features", []))
    return [m for m in markers if m is not None]


def popup_details(feature):
    """Text shown in a habitat's popup card."""
    properties = feature.get("properties") or {}
    species = properties.get("cleanedSpecies") or UNKNOWN

    county = properties.get(COUNTY_FIELD)
    if isinstance(county, (list, tuple)):
        county = ", ".join(county)

    area = properties.get(AREA_FIELD)
    try:
        area_ha = round(float(area) / 10000, 2)
    except (TypeError, ValueError):
        area_ha = None

    return {
        "title": properties.get(SITE_NAME_FIELD) or "NSNW Site",
        "county": county or UNKNOWN,
        "species": species,
        "color": color_of(species),
        "area_ha": area_ha,
        "info": info_for(properties.get("_genus")),
    }

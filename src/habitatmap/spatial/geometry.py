import numpy as np
from shapely.geometry import shape
from shapely.errors import GeometryTypeError


def exterior_ring(geometry):
    """
    Return the positions used for marker placement.

    Polygon: first ring. MultiPolygon: first ring of the first polygon.
    Point: the point itself. Anything else, or malformed nesting: an empty list.
    """
    if not isinstance(geometry, dict):
        return []

    coords = geometry.get("coordinates")
    if not coords or not isinstance(coords, (list, tuple)):
        return []

    geom_type = geometry.get("type")
    if geom_type == "Point":
        return [coords]

    ring = None
    if geom_type == "Polygon":
        ring = coords[0]
    elif geom_type == "MultiPolygon" and isinstance(coords[0], (list, tuple)) and coords[0]:
        ring = coords[0][0]
    return ring if isinstance(ring, (list, tuple)) else []


def get_centroid(geometry):
    """
    Arithmetic mean of longitude and latitude over the exterior ring.

    Args:
        geometry (dict): GeoJSON geometry, already in EPSG:4326.

    Returns:
        list or None: [lon, lat], or None when there is no ring to average.
    """
    ring = exterior_ring(geometry)
    if len(ring) == 0:
        return None

    try:
        xy = np.array([[c[0], c[1]] for c in ring], dtype=float)
    except (TypeError, ValueError, IndexError):
        return None

    lon, lat = xy.mean(axis=0)
    return [float(lon), float(lat)]


def habitat_bounds(collection):
    """
    Bounding box of all geometries in a collection.

    Args:
        collection (dict): GeoJSON FeatureCollection in EPSG:4326.

    Returns:
        tuple or None: (west, south, east, north), or None if nothing has a geometry.
    """
    west = south = np.inf
    east = north = -np.inf

    for feature in collection.get("features", []):
        geometry = feature.get("geometry")
        if not geometry:
            continue
        try:
            geom = shape(geometry)
        except (GeometryTypeError, ValueError, TypeError, IndexError):
            continue
        if geom.is_empty:
            continue
        minx, miny, maxx, maxy = geom.bounds
        west, south = min(west, minx), min(south, miny)
        east, north = max(east, maxx), max(north, maxy)

    if not np.isfinite([west, south, east, north]).all():
        return None
    return (float(west), float(south), float(east), float(north))

import logging
from functools import lru_cache

from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError, ProjError

from habitatmap.config import DEFAULT_CRS, HABITAT_CRS, PROJ_DEFINITIONS

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def get_transformer(from_crs=HABITAT_CRS, to_crs=DEFAULT_CRS):
    """
    Build (once) a transformer from a projected CRS to geographic lon/lat.

    Codes listed in ``PROJ_DEFINITIONS`` use the dataset-specific PROJ string
    instead of the EPSG database entry.

    Args:
        from_crs (str): Source CRS, e.g. 'EPSG:29903'.
        to_crs (str): Target CRS. Defaults to EPSG:4326.

    Returns:
        pyproj.Transformer: Transformer with (x, y) -> (lon, lat) axis order.
    """
    source = CRS.from_user_input(PROJ_DEFINITIONS.get(from_crs, from_crs))
    target = CRS.from_user_input(PROJ_DEFINITIONS.get(to_crs, to_crs))
    return Transformer.from_crs(source, target, always_xy=True)


def convert_coord(coord, from_crs=HABITAT_CRS):
    """
    Convert a single position to [lon, lat].

    Failures are logged and the original position is returned unchanged,
    so one bad vertex never aborts a feature.

    Args:
        coord (sequence): [x, y] or [x, y, z] in ``from_crs``.
        from_crs (str): Source CRS.

    Returns:
        list or original: [lon, lat, *extra] on success, otherwise ``coord``.
    """
    try:
        x, y = float(coord[0]), float(coord[1])
        transformer = get_transformer(from_crs)
        lon, lat = transformer.transform(x, y, errcheck=True)
    except (TypeError, ValueError, IndexError, KeyError, CRSError, ProjError) as e:
        logger.error("Conversion failed: %r (%s)", coord, e)
        return coord
    return [lon, lat, *coord[2:]]


def reproject_geometry(geometry, from_crs=HABITAT_CRS):
    """
    Reproject a GeoJSON geometry dict to EPSG:4326 in place.

    Point, Polygon and MultiPolygon are converted; other types pass through.
    The nesting of the coordinate arrays is preserved.
    """
    if not isinstance(geometry, dict):
        return geometry

    geom_type = geometry.get("type")
    coords = geometry.get("coordinates")
    if coords is None:
        return geometry

    try:
        if geom_type == "Point":
            geometry["coordinates"] = convert_coord(coords, from_crs)
        elif geom_type == "Polygon":
            geometry["coordinates"] = [
                [convert_coord(c, from_crs) for c in ring] for ring in coords
            ]
        elif geom_type == "MultiPolygon":
            geometry["coordinates"] = [
                [[convert_coord(c, from_crs) for c in ring] for ring in polygon]
                for polygon in coords
            ]
        else:
            logger.debug("Leaving %s geometry unprojected", geom_type)
    except (TypeError, IndexError) as e:
        # Coordinates are only replaced once fully rebuilt, so the geometry is untouched
        logger.error("Malformed %s coordinates left unprojected: %s", geom_type, e)

    return geometry


def reproject_feature(feature, from_crs=HABITAT_CRS):
    """
    Reproject a GeoJSON feature's geometry in place and return the feature.

    Features without a geometry are returned untouched.
    """
    geometry = feature.get("geometry")
    if geometry:
        reproject_geometry(geometry, from_crs)
    return feature

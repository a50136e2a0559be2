import logging
import warnings
from collections import Counter

from habitatmap.config import HABITAT_CRS
from habitatmap.constants import DESCRIPTION_FIELD, SPECIES_FIELD
from habitatmap.spatial.geometry import get_centroid
from habitatmap.spatial.reproject import reproject_feature
from habitatmap.taxonomy.genus import genus_of
from habitatmap.taxonomy.species import clean_species

logger = logging.getLogger(__name__)


def raw_species(properties):
    """
    Raw species text of a feature: NS_SPECIES, then NSNW_DESC, then "".

    Only a missing (None) value falls through to the next field.
    """
    if not properties:
        return ""
    value = properties.get(SPECIES_FIELD)
    if value is None:
        value = properties.get(DESCRIPTION_FIELD)
    return value if value is not None else ""


def enrich_feature(feature, from_crs=HABITAT_CRS):
    """
    Reproject one feature and attach cleanedSpecies, _centroid and _genus.

    The feature is modified in place and returned. A feature without a
    geometry keeps its (absent) geometry and gets no _centroid.
    """
    reproject_feature(feature, from_crs)

    properties = feature.get("properties")
    if properties is None:
        properties = feature["properties"] = {}

    cleaned = clean_species(raw_species(properties))
    properties["cleanedSpecies"] = cleaned

    centroid = get_centroid(feature.get("geometry"))
    if centroid is not None:
        properties["_centroid"] = centroid

    properties["_genus"] = genus_of(cleaned)
    return feature


def geometry_type(feature):
    geometry = feature.get("geometry")
    if not isinstance(geometry, dict):
        return "None"
    return str(geometry.get("type"))


def species_distribution(collection):
    """Count of features per cleaned species label, in first-seen order."""
    counts = Counter(
        (f.get("properties") or {}).get("cleanedSpecies")
        for f in collection.get("features", [])
    )
    return dict(counts)


def enrich_habitats(collection, from_crs=HABITAT_CRS):
    """
    Run the enrichment pipeline over a raw habitat FeatureCollection.

    Every feature is reprojected from ``from_crs`` to EPSG:4326 and gets
    ``cleanedSpecies``, ``_centroid`` and ``_genus`` properties. Feature
    order is preserved and no feature is dropped.

    Args:
        collection (dict): GeoJSON FeatureCollection in the survey CRS.
        from_crs (str): Source CRS. Defaults to the Irish Grid.

    Returns:
        dict: The same collection, enriched in place.
    """
    features = collection.get("features") or []
    logger.info("Loaded %d habitats for county", len(features))

    geometry_types = sorted({geometry_type(f) for f in features})
    logger.info("Geometry types found: %s", geometry_types)

    if features and all(not f.get("geometry") for f in features):
        warnings.warn("No habitat in this collection has a geometry; nothing to reproject.")

    logger.info("Converting %s -> WGS84...", from_crs)
    collection["features"] = [enrich_feature(f, from_crs) for f in features]

    logger.info("Species distribution: %s", species_distribution(collection))
    return collection

import json
import logging
import os
import re

from habitatmap.config import INDEX_PATH, RAW_HABITATS_PATH, SHARD_DIR, SHARD_URL_PREFIX
from habitatmap.constants import COUNTY_FIELD, UNKNOWN
from habitatmap.exceptions import DataSchemaError
from habitatmap.pipeline.enrich import raw_species
from habitatmap.taxonomy.genus import genus_of
from habitatmap.taxonomy.species import clean_species
from habitatmap.types import HabitatIndex

logger = logging.getLogger(__name__)


def normalize_county_name(name):
    """File-system safe form of a county name: "Dún Laoghaire" -> "Dún_Laoghaire"."""
    safe = re.sub(r"\s+", "_", name.strip())
    return re.sub(r"[^\w-]", "", safe)


def county_keys(properties):
    """
    Shard keys for one feature.

    A string COUNTY gives one key; a list gives one key per distinct entry,
    so cross-border sites land in every county they list. Missing or blank
    values fall into the "Unknown" bucket.
    """
    value = (properties or {}).get(COUNTY_FIELD)
    if isinstance(value, str):
        values = [value]
    elif isinstance(value, (list, tuple)):
        values = [v for v in value if isinstance(v, str)]
    else:
        values = []

    keys = []
    for v in values:
        v = v.strip()
        if v and v not in keys:
            keys.append(v)
    return keys or [UNKNOWN]


def sort_names(names):
    return sorted(names, key=lambda n: (n.casefold(), n))


def partition_by_county(collection):
    """
    Group features by county key.

    Returns:
        dict: county -> list of features, in input order within each county.
    """
    by_county = {}
    for feature in collection.get("features", []):
        for county in county_keys(feature.get("properties")):
            by_county.setdefault(county, []).append(feature)
    return by_county


def collect_genera(collection):
    """Distinct genera of a raw collection, sorted. The features are not modified."""
    genera = set()
    for feature in collection.get("features", []):
        genus = genus_of(clean_species(raw_species(feature.get("properties"))))
        if genus:
            genera.add(genus)
    return sort_names(genera)


def build_index(collection, url_prefix=SHARD_URL_PREFIX):
    """
    Partition a raw collection and describe the result.

    Args:
        collection (dict): Raw GeoJSON FeatureCollection (not reprojected).
        url_prefix (str): URL path the shard files will be served from.

    Returns:
        tuple: (HabitatIndex, dict of shard filename -> FeatureCollection)
    """
    by_county = partition_by_county(collection)
    counties = sort_names(by_county)

    files = {}
    shards = {}
    for county in counties:
        filename = f"{normalize_county_name(county)}.json"
        if filename in shards:
            logger.warning("County %r shares shard file %s with another county", county, filename)
            merged = shards[filename]["features"]
            # A multi-county feature listing both names is written once
            seen = {id(f) for f in merged}
            merged.extend(f for f in by_county[county] if id(f) not in seen)
        else:
            shards[filename] = {"type": "FeatureCollection", "features": list(by_county[county])}
        files[county] = f"{url_prefix.rstrip('/')}/{filename}"

    index = HabitatIndex(
        counties=[c for c in counties if c != UNKNOWN],
        genera=collect_genera(collection),
        files=files,
    )
    return index, shards


def validate_collection(data):
    if not isinstance(data, dict) or "type" not in data or "features" not in data:
        raise DataSchemaError("Expected a GeoJSON FeatureCollection with a features array.")
    if not isinstance(data["features"], list):
        raise DataSchemaError("'features' must be a list.")
    return data


def dump_shard(collection):
    return json.dumps(collection, ensure_ascii=False, separators=(",", ":"))


def dump_index(index):
    return json.dumps(index.to_dict(), ensure_ascii=False, indent=2)


def split_habitats_by_county(input_path=RAW_HABITATS_PATH, out_dir=SHARD_DIR,
                             index_path=INDEX_PATH, url_prefix=SHARD_URL_PREFIX):
    """
    Split the raw habitat dataset into per-county shards plus an index.

    The input is validated before anything is written. Re-running on the
    same input rewrites byte-identical files.

    Args:
        input_path (str): Raw FeatureCollection JSON.
        out_dir (str): Directory for the county shard files.
        index_path (str): Path of the index JSON.
        url_prefix (str): URL path recorded in the index for each shard.

    Returns:
        HabitatIndex: The index that was written.

    Raises:
        DataSchemaError: If the input is not JSON or not a FeatureCollection.
    """
    with open(input_path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DataSchemaError(f"Input is not valid UTF-8 JSON: {e}") from e

    collection = validate_collection(data)
    index, shards = build_index(collection, url_prefix=url_prefix)

    os.makedirs(out_dir, exist_ok=True)
    for filename, shard in shards.items():
        with open(os.path.join(out_dir, filename), "w", encoding="utf-8") as f:
            f.write(dump_shard(shard))

    index_dir = os.path.dirname(index_path)
    if index_dir:
        os.makedirs(index_dir, exist_ok=True)
    with open(index_path, "w", encoding="utf-8") as f:
        f.write(dump_index(index))

    logger.info("Wrote %d county files to %s", len(shards), out_dir)
    logger.info("Wrote index: %s", index_path)
    return index

import json
import logging
import re

import requests

from habitatmap.config import (
    BASE_URL,
    COUNTIES_CRS,
    COUNTIES_URL,
    HABITAT_CRS,
    HTTP_TIMEOUT,
    INDEX_URL,
)
from habitatmap.exceptions import LoadError
from habitatmap.pipeline.enrich import enrich_habitats
from habitatmap.spatial.reproject import reproject_feature
from habitatmap.types import HabitatIndex

logger = logging.getLogger(__name__)


def _is_http(location):
    return location.startswith(("http://", "https://"))


def with_base_url(path, base_url=BASE_URL):
    """
    Resolve an artifact path such as '/data/index.json' against the base.

    The base is either an http(s) URL or a local directory.
    """
    clean = path.lstrip("/")
    if not base_url:
        return clean
    return f"{base_url.rstrip('/')}/{clean}"


def fetch_json(location, timeout=HTTP_TIMEOUT):
    """
    Fetch and parse a JSON document from a URL or a local file.

    Raises:
        LoadError: On transport failure, non-2xx status or invalid JSON.
    """
    if _is_http(location):
        try:
            r = requests.get(location, timeout=timeout)
            r.raise_for_status()
            return r.json()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            raise LoadError(f"{location}: HTTP {status}") from e
        except ValueError as e:
            raise LoadError(f"Invalid JSON from {location}: {e}") from e
        except requests.RequestException as e:
            raise LoadError(f"Failed to fetch {location}: {e}") from e

    try:
        with open(location, encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise LoadError(f"Failed to read {location}: {e}") from e
    except ValueError as e:
        # JSONDecodeError, or UnicodeDecodeError for a non UTF-8 file
        raise LoadError(f"Invalid JSON in {location}: {e}") from e


def load_index(base_url=BASE_URL):
    """
    Load the habitat index written by the county split.

    Returns:
        HabitatIndex: Counties, genera and shard locations.

    Raises:
        LoadError: If the index cannot be fetched or parsed.
    """
    data = fetch_json(with_base_url(INDEX_URL, base_url))
    if not isinstance(data, dict):
        raise LoadError("Habitat index: expected a JSON object")

    files = data.get("files", {})
    if not isinstance(files, dict) or not all(isinstance(v, str) for v in files.values()):
        raise LoadError("Habitat index: 'files' must map county names to paths")
    for key in ("counties", "availableSpecies"):
        values = data.get(key, [])
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise LoadError(f"Habitat index: '{key}' must be a list of names")

    return HabitatIndex.from_dict(data)


def title_case_county(raw):
    """
    Normalise a county name (or the first of a list) to title case.

    "DUBLIN" -> "Dublin", ["cork", "kerry"] -> "Cork".
    """
    if isinstance(raw, (list, tuple)):
        raw = raw[0] if raw else ""
    if not isinstance(raw, str):
        return ""
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), raw.lower()).strip()


def shard_path(county, index):
    """Shard location for a county, matching the index keys case-insensitively."""
    if county in index.files:
        return index.files[county]
    folded = county.casefold()
    for name, path in index.files.items():
        if name.casefold() == folded:
            return path
    return None


def load_county(county, index, base_url=BASE_URL, from_crs=HABITAT_CRS):
    """
    Load one county shard and run it through the enrichment pipeline.

    Args:
        county (str): County name in any case.
        index (HabitatIndex): Loaded index.
        base_url (str): URL or directory the artifacts are served from.
        from_crs (str): CRS of the shard geometries.

    Returns:
        dict: Enriched FeatureCollection in EPSG:4326.

    Raises:
        LoadError: If no shard is mapped for the county, or fetching/parsing fails.
    """
    standardised = title_case_county(county)
    path = shard_path(standardised, index)
    if not path:
        raise LoadError(f"No habitat file for county: {standardised}")

    url = with_base_url(path, base_url)
    logger.info("Loading habitats for county: %s from URL: %s", standardised, url)

    data = fetch_json(url)
    if not isinstance(data, dict) or not isinstance(data.get("features"), list):
        raise LoadError(f"Invalid habitat data format for county: {standardised}")

    return enrich_habitats(data, from_crs=from_crs)


def load_counties(base_url=BASE_URL):
    """
    Load the county boundary layer and reproject it from ITM to WGS84.

    The boundaries are decoration only: failures are logged and an empty
    FeatureCollection is returned.
    """
    try:
        data = fetch_json(with_base_url(COUNTIES_URL, base_url))
    except LoadError as e:
        logger.warning("Failed to load counties data: %s", e)
        return {"type": "FeatureCollection", "features": []}

    if not isinstance(data, dict) or not isinstance(data.get("features"), list):
        logger.error("Counties data is not a FeatureCollection")
        return {"type": "FeatureCollection", "features": []}

    data["features"] = [reproject_feature(f, COUNTIES_CRS) for f in data["features"]]
    return data

# config.py
# Defaults for CRS, artifact locations and loading

import os

DEFAULT_CRS = "EPSG:4326"
HABITAT_CRS = "EPSG:29903"  # Irish Grid, NSNW woodland survey
COUNTIES_CRS = "EPSG:2157"  # Irish Transverse Mercator, county boundaries

# PROJ definitions matching the source datasets.
# EPSG:29903 carries the 7-parameter shift the survey data was captured with.
PROJ_DEFINITIONS = {
    "EPSG:29903": (
        "+proj=tmerc +lat_0=53.5 +lon_0=-8 +k=1.000035 +x_0=200000 +y_0=250000 "
        "+ellps=mod_airy +towgs84=482.5,-130.6,564.6,-1.042,-0.214,-0.631,8.15 "
        "+units=m +no_defs"
    ),
    "EPSG:2157": (
        "+proj=tmerc +lat_0=53.5 +lon_0=-8 +k=0.99982 +x_0=600000 +y_0=750000 "
        "+ellps=GRS80 +units=m +no_defs"
    ),
}

# Offline split inputs/outputs
RAW_HABITATS_PATH = "public/data/NSNW_Woodland_Habitats_2010.json"
SHARD_DIR = "public/data/habitats"
INDEX_PATH = "public/data/index.json"
SHARD_URL_PREFIX = "/data/habitats"

# Runtime artifacts, relative to the base URL
INDEX_URL = "/data/index.json"
COUNTIES_URL = "/data/counties.json"

BASE_URL = os.getenv("HABITATMAP_BASE_URL", "public")
HTTP_TIMEOUT = 30

# Centroid markers are drawn below this zoom, polygons at or above it
MARKER_ZOOM_THRESHOLD = 11

"""
Woodland habitat map data pipeline.

Irish Grid / ITM reprojection, species cleaning and genus colouring, and
the per-county split the map loads on demand.
"""

import os
import sys

# Reprojection relies on pyproj's bundled proj.db. On Windows a PostGIS install
# often exports PROJ_LIB pointing at an older proj.db, and building the Irish
# Grid transformer then fails with a database version mismatch.
if sys.platform == "win32" and "PROJ_LIB" in os.environ:
    proj_lib = os.environ["PROJ_LIB"]
    if "PostgreSQL" in proj_lib and "proj" in proj_lib.lower():
        del os.environ["PROJ_LIB"]

from .core import HabitatMap
from .__about__ import __version__

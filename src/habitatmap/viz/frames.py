import geopandas as gpd

from habitatmap.config import DEFAULT_CRS


def to_geodataframe(collection):
    """
    View an enriched habitat collection as a GeoDataFrame in EPSG:4326.

    Features without a geometry are kept with an empty geometry. The
    ``_centroid`` list column is dropped since the geometry carries it.

    Args:
        collection (dict): Enriched FeatureCollection.

    Returns:
        geopandas.GeoDataFrame
    """
    features = collection.get("features", []) if collection else []
    if not features:
        return gpd.GeoDataFrame(columns=["cleanedSpecies", "_genus", "geometry"], crs=DEFAULT_CRS)

    rows = [
        {"type": "Feature", "geometry": f.get("geometry"), "properties": f.get("properties") or {}}
        for f in features
    ]
    gdf = gpd.GeoDataFrame.from_features(rows, crs=DEFAULT_CRS)
    if "_centroid" in gdf.columns:
        gdf = gdf.drop(columns="_centroid")
    return gdf

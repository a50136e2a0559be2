from habitatmap.constants import ALL_COUNTIES, COUNTY_FIELD


def feature_in_county(feature, county):
    """
    Whether a feature belongs to ``county`` (case-insensitive).

    COUNTY may list several counties for sites straddling a border.
    """
    value = (feature.get("properties") or {}).get(COUNTY_FIELD)
    if isinstance(value, str):
        value = [value]
    elif not isinstance(value, (list, tuple)):
        return False
    wanted = county.strip().casefold()
    return any(isinstance(v, str) and v.strip().casefold() == wanted for v in value)


def filter_habitats(collection, county, selected_genera, available_genera):
    """
    Filter an enriched collection by county and genus.

    Args:
        collection (dict): Enriched FeatureCollection.
        county (str): Selected county. Empty/None selects nothing, "All" skips the county filter.
        selected_genera (list of str): Genera ticked in the species filter.
        available_genera (list of str): All genera listed in the index.

    Returns:
        dict: A new FeatureCollection; the input is left untouched.
    """
    if collection is None:
        return None

    result = dict(collection)
    if not county:
        result["features"] = []
        return result

    features = list(collection.get("features", []))

    if county != ALL_COUNTIES:
        features = [f for f in features if feature_in_county(f, county)]

    # Genus filter only when a strict, non-empty subset is selected
    if selected_genera and len(selected_genera) < len(available_genera):
        wanted = set(selected_genera)
        features = [
            f for f in features
            if (f.get("properties") or {}).get("_genus") in wanted
        ]

    result["features"] = features
    return result

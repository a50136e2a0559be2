class HabitatMapError(Exception):
    """Base exception for habitatmap"""
    pass

class LoadError(HabitatMapError):
    """Raised when the habitat index or a county shard cannot be fetched, decoded or parsed"""
    pass

class DataSchemaError(HabitatMapError):
    """Raised when the raw habitat file is not a readable GeoJSON FeatureCollection"""
    pass

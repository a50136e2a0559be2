import logging

from habitatmap.config import BASE_URL, HABITAT_CRS
from habitatmap.exceptions import LoadError
from habitatmap.io.loaders import load_county, load_index
from habitatmap.pipeline.filter import filter_habitats
from habitatmap.spatial.geometry import habitat_bounds
from habitatmap.viz.markers import centroid_markers

logger = logging.getLogger(__name__)


class HabitatMap:
    """
    Core class for a habitat map session.
    Holds the index, the selected county and its enriched habitats, and the genus filter.
    """

    def __init__(self, base_url=BASE_URL, crs=HABITAT_CRS):
        """
        Initialize the session.

        Args:
            base_url (str): URL or directory the index and shards are served from.
            crs (str): CRS of the habitat shards (default EPSG:29903, Irish Grid).
        """
        self.base_url = base_url
        self.source_crs = crs

        self.index = None
        self.selected_county = ""
        self.habitats = None
        self.selected_genera = []
        self._selection_seq = 0

    @property
    def counties(self):
        return list(self.index.counties) if self.index else []

    @property
    def available_genera(self):
        return list(self.index.genera) if self.index else []

    def load_index(self):
        """
        Load the habitat index and select every genus.

        Raises:
            LoadError: If the index cannot be loaded.
        """
        self.index = load_index(self.base_url)
        self.selected_genera = list(self.index.genera)
        return self.index

    def begin_selection(self, county):
        """
        Record a new county selection and return its sequence number.

        Loads started for earlier selections become stale.
        """
        self._selection_seq += 1
        self.selected_county = county or ""
        return self._selection_seq

    def apply_county_load(self, seq, habitats):
        """
        Store habitats loaded for selection ``seq``.

        Returns:
            bool: False (and nothing stored) if a newer selection was made meanwhile.
        """
        if seq != self._selection_seq:
            logger.info("Discarding stale habitats for selection %d (current %d)", seq, self._selection_seq)
            return False
        self.habitats = habitats
        return True

    def select_county(self, county):
        """
        Select a county and load its enriched habitats.

        An empty county clears the selection.

        Returns:
            dict or None: The enriched FeatureCollection.

        Raises:
            ValueError: If the index has not been loaded.
            LoadError: If the county shard cannot be loaded.
        """
        seq = self.begin_selection(county)
        if not county:
            self.apply_county_load(seq, None)
            return None

        if self.index is None:
            raise ValueError("Habitat index not loaded. Call load_index() first.")

        try:
            habitats = load_county(county, self.index, base_url=self.base_url, from_crs=self.source_crs)
        except LoadError as e:
            logger.error("Failed to load habitats for county %r: %s", county, e)
            self.apply_county_load(seq, None)
            raise

        self.apply_county_load(seq, habitats)
        return self.habitats

    def toggle_genus(self, genus):
        """Toggle one genus in the filter. The last selected genus cannot be removed."""
        if genus in self.selected_genera:
            if len(self.selected_genera) > 1:
                self.selected_genera = [g for g in self.selected_genera if g != genus]
        else:
            self.selected_genera = self.selected_genera + [genus]
        return self.selected_genera

    def toggle_all_genera(self):
        """Select every genus, or only the first one if all are already selected."""
        available = self.available_genera
        if len(self.selected_genera) == len(available):
            self.selected_genera = available[:1]
        else:
            self.selected_genera = list(available)
        return self.selected_genera

    def filtered_habitats(self):
        return filter_habitats(self.habitats, self.selected_county, self.selected_genera, self.available_genera)

    def bounds(self):
        """(west, south, east, north) of the filtered habitats, or None."""
        filtered = self.filtered_habitats()
        return habitat_bounds(filtered) if filtered else None

    def markers(self, zoom):
        return centroid_markers(self.filtered_habitats(), zoom)

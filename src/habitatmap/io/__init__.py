from .loaders import load_index, load_county, load_counties, title_case_county
from .partition import build_index, split_habitats_by_county, normalize_county_name

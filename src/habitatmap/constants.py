# constants.py
# Lookup tables for species cleaning, genus colors and display text.
# Tables are ordered (key, value) pairs: substring scans walk them in this order.

from types import MappingProxyType

SPECIES_FIELD = "NS_SPECIES"
DESCRIPTION_FIELD = "NSNW_DESC"
COUNTY_FIELD = "COUNTY"
SITE_NAME_FIELD = "SITE_NAME"
AREA_FIELD = "AREA"

UNKNOWN = "Unknown"
ALL_COUNTIES = "All"
NOT_DETERMINED = "Not Determined"

DEFAULT_COLOR = "#808080"
DEFAULT_DARKER_SHADE = "#333333"
PULSE_CLASS = "pulse-polygon"

# ms delay before pulsing polygons
POLYGON_PULSE_DELAY = 100
DEFAULT_MAP_COORDS = (53.35, -7.5)

SPECIES_MAP_ENTRIES = (
    # Abbreviated forms
    ("F. excelsior", "Fraxinus excelsior"),
    ("F excelsior", "Fraxinus excelsior"),
    ("Frax. excelsior", "Fraxinus excelsior"),
    ("Q. petraea", "Quercus petraea"),
    ("Q petraea", "Quercus petraea"),
    ("Q. robur", "Quercus robur"),
    ("Q robur", "Quercus robur"),
    ("B. pubescens", "Betula pubescens"),
    ("B pubescens", "Betula pubescens"),
    ("A. glutinosa", "Alnus glutinosa"),
    ("A glutinosa", "Alnus glutinosa"),
    ("C. avellana", "Corylus avellana"),
    ("C avellana", "Corylus avellana"),
    ("S. cinerea", "Salix cinerea"),
    ("S cinerea", "Salix cinerea"),
    ("P. sylvestris", "Pinus sylvestris"),
    ("P sylvestris", "Pinus sylvestris"),
    ("I. aquifolium", "Ilex aquifolium"),
    ("I aquifolium", "Ilex aquifolium"),

    # Full genus names
    ("Quercus", "Quercus petraea"),
    ("Fraxinus", "Fraxinus excelsior"),
    ("Betula", "Betula pubescens"),
    ("Alnus", "Alnus glutinosa"),
    ("Corylus", "Corylus avellana"),
    ("Salix", "Salix cinerea"),
    ("Pinus", "Pinus sylvestris"),
    ("Ilex", "Ilex aquifolium"),

    # Compound community descriptions
    ("Fraxinus excelsior - Hedera helix", "Fraxinus excelsior"),
    ("Quercus petraea - Luzula", "Quercus petraea"),
    ("Quercus robur - Corylus", "Quercus robur"),
    ("Betula pubescens - Molinia", "Betula pubescens"),
    ("Alnus glutinosa - Filipendula", "Alnus glutinosa"),
    ("Salix cinerea - Galium", "Salix cinerea"),
)

GENUS_COLOR_ENTRIES = (
    ("Quercus", "#8B4513"),
    ("Fraxinus", "#4682B4"),
    ("Betula", "#DAA520"),
    ("Alnus", "#228B22"),
    ("Ilex", "#2E7D32"),
    ("Corylus", "#D2691E"),
    ("Salix", "#9CCC65"),
    ("Pinus", "#1B5E20"),
)

DARKER_SHADE_ENTRIES = (
    ("#8B4513", "#5C2D0A"),
    ("#4682B4", "#2E5A7A"),
    ("#DAA520", "#B8860B"),
    ("#228B22", "#1A6B1A"),
    ("#808080", "#4A4A4A"),
    ("#2E7D32", "#1B5E20"),
    ("#D2691E", "#8B4513"),
    ("#9CCC65", "#689F38"),
    ("#1B5E20", "#0D2F10"),
)

GENUS_DISPLAY_NAMES = MappingProxyType({
    "Alnus": "Alnus glutinosa (Alder)",
    "Betula": "Betula pubescens (Birch)",
    "Corylus": "Corylus avellana (Hazel)",
    "Fraxinus": "Fraxinus excelsior (Ash)",
    "Ilex": "Ilex aquifolium (Holly)",
    "Quercus": "Quercus spp. (Oak)",
    "Salix": "Salix spp. (Willow)",
    "Pinus": "Pinus sylvestris (Scots Pine)",
})

GENUS_INFO = MappingProxyType({
    "Alnus": {
        "image": "/species/alnus_glutinosa.jpg",
        "description": "Common alder thrives in wet conditions near rivers and streams. "
                       "Fast-growing native tree with distinctive cone-like fruits.",
    },
    "Betula": {
        "image": "/species/betula_pubescens.jpg",
        "description": "Downy birch is a pioneer species with distinctive white bark. "
                       "Tolerates poor soils and exposed conditions.",
    },
    "Corylus": {
        "image": "/species/corylus_avellana.jpg",
        "description": "Hazel produces edible nuts and is often found in woodland understory. "
                       "Important for wildlife and traditional crafts.",
    },
    "Fraxinus": {
        "image": "/species/fraxinus_excelsior.jpg",
        "description": "Ash tree with distinctive compound leaves. "
                       "Currently threatened by ash dieback disease across Europe.",
    },
    "Ilex": {
        "image": "/species/ilex_aquifolium.jpg",
        "description": "Holly is an evergreen with spiny leaves and red berries. "
                       "Important winter food source for birds.",
    },
    "Quercus": {
        "image": "/species/quercus_robur.jpg",
        "description": "Oak species including sessile and pedunculate oak. "
                       "Long-lived native trees supporting hundreds of insect species.",
    },
    "Salix": {
        "image": "/species/salix_cinerea.jpg",
        "description": "Willows are fast-growing trees that prefer wet habitats. "
                       "Important for stabilizing riverbanks and wetlands.",
    },
    "Pinus": {
        "image": "/species/pinus_sylvestris.jpg",
        "description": "Scots pine is Ireland's only native conifer. "
                       "Distinctive orange-red bark on mature trees.",
    },
})

# Exact-lookup views; iteration order follows the entry tuples above
SPECIES_MAP = MappingProxyType(dict(SPECIES_MAP_ENTRIES))
GENUS_COLORS = MappingProxyType(dict(GENUS_COLOR_ENTRIES))
DARKER_SHADES = MappingProxyType(dict(DARKER_SHADE_ENTRIES))

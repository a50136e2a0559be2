"""
Species name cleaning and genus classification.
"""

from .species import clean_tree_species, clean_species
from .genus import genus_of, color_of, darker_shade_of, display_name_of, info_for

__all__ = [
    'clean_tree_species',
    'clean_species',
    'genus_of',
    'color_of',
    'darker_shade_of',
    'display_name_of',
    'info_for',
]

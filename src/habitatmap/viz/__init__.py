"""
Display helpers for enriched habitat collections.
"""

from .style import style_for
from .markers import marker_for, centroid_markers, popup_details
from .frames import to_geodataframe

__all__ = [
    'style_for',
    'marker_for',
    'centroid_markers',
    'popup_details',
    'to_geodataframe',
]

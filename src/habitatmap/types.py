from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, TypedDict


@dataclass
class HabitatIndex:
    """
    Summary artifact written by the county split and read at startup.

    JSON form uses the keys ``counties``, ``availableSpecies`` and ``files``.
    """
    counties: List[str] = field(default_factory=list)
    genera: List[str] = field(default_factory=list)
    files: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data):
        return cls(
            counties=list(data.get("counties", [])),
            genera=list(data.get("availableSpecies", [])),
            files=dict(data.get("files", {})),
        )

    def to_dict(self):
        return {
            "counties": list(self.counties),
            "availableSpecies": list(self.genera),
            "files": dict(self.files),
        }


class StyleOptions(TypedDict):
    fill_color: str
    border_color: str
    weight: float
    opacity: float
    fill_opacity: float
    emphasis_class: str


class Marker(TypedDict):
    location: Tuple[float, float]  # (lat, lon)
    color: str
    species: str
    site_name: Optional[str]


class GenusInfo(TypedDict):
    image: str
    description: str

"""
Element Sources

The single objects and CelesTrak groups the tracker can display. Each
source is identified either by an international designator (one object) or
by a CelesTrak group name.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Source:
    label: str
    designator: Optional[str] = None
    group: Optional[str] = None

    def __post_init__(self):
        if (self.designator is None) == (self.group is None):
            raise ValueError(
                f"Source {self.label!r} needs exactly one of designator or group"
            )

    @property
    def key(self) -> str:
        """Cache key: the group name, or the designator for a single object."""
        return self.group if self.group is not None else self.designator

    def query_params(self) -> dict:
        if self.designator is not None:
            return {"INTDES": self.designator}
        return {"GROUP": self.group}

    def __str__(self):
        return self.label


SOURCES = (
    # Space stations
    Source("CSS", designator="2021-035A"),
    Source("ISS", designator="1998-067A"),

    # Weather satellites
    Source("Weather", group="weather"),
    Source("NOAA", group="noaa"),
    Source("GOES", group="goes"),

    # Earth resources satellites
    Source("Earth resources", group="resource"),
    Source("Search & rescue", group="sarsat"),
    Source("Disaster monitoring", group="dmc"),

    # Navigation satellites
    Source("GPS Operational", group="gps-ops"),
    Source("GLONASS Operational", group="glo-ops"),
    Source("Galileo", group="galileo"),
    Source("Beidou", group="beidou"),

    # Scientific satellites
    Source("Space & Earth Science", group="science"),
    Source("Geodetic", group="geodetic"),
    Source("Engineering", group="engineering"),
    Source("Education", group="education"),

    # Miscellaneous satellites
    Source("DFH-1", designator="1970-034A"),
    Source("Military", group="military"),
    Source("Radar calibration", group="radar"),
    Source("CubeSats", group="cubesat"),
)


def find_source(name: str) -> Source:
    """Look up a source by key or label, case-insensitively."""
    wanted = name.lower()
    for source in SOURCES:
        if source.key.lower() == wanted or source.label.lower() == wanted:
            return source
    raise KeyError(f"Unknown source: {name}")

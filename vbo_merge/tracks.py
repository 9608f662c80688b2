"""
Start/Finish Line Catalog

Reference start/finish segments of the known tracks. Coordinates are in
arc-minutes (degrees * 60), the unit VBO files use for latitude and longitude.
Adding a track is a data change: append a StartFinishLine to the catalog or
pass a custom sequence wherever a ``tracks`` argument is accepted.
"""

from dataclasses import dataclass
from typing import Tuple
from .constants import DEGREES_TO_MINUTES


@dataclass(frozen=True)
class Coordinate:
    """A 2-D track point: x is latitude-like, y is longitude-like."""

    x: float
    y: float


@dataclass(frozen=True)
class StartFinishLine:
    name: str
    a: Coordinate
    b: Coordinate


def _from_degrees(lat: float, lon: float) -> Coordinate:
    return Coordinate(lat * DEGREES_TO_MINUTES, lon * DEGREES_TO_MINUTES)


DEFAULT_START_FINISH_LINES: Tuple[StartFinishLine, ...] = (
    StartFinishLine(
        "Megara",
        _from_degrees(37.986926, -23.363105),
        _from_degrees(37.987165, -23.363024),
    ),
    StartFinishLine(
        "Serres",
        _from_degrees(41.073082, -23.517710),
        _from_degrees(41.073275, -23.517918),
    ),
)

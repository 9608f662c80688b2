"""
Lap Analysis for VBO/ECU Log Merging

This module detects lap boundaries geometrically: the session's GPS trace is
walked segment by segment and every segment crossing the start/finish line of
the nearest known track marks a lap boundary.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from .channels import ChannelTable
from .constants import VBO_LATITUDE_HEADER, VBO_LONGITUDE_HEADER
from .tracks import DEFAULT_START_FINISH_LINES, Coordinate, StartFinishLine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LapBounds:
    """Inclusive sample index range of one complete lap."""

    start: int
    end: int


def _cross(o: Coordinate, a: Coordinate, b: Coordinate) -> float:
    return (a.x - o.x) * (b.y - o.y) - (a.y - o.y) * (b.x - o.x)


def _within_box(p: Coordinate, q: Coordinate, r: Coordinate) -> bool:
    """Check whether r lies inside the bounding box of segment p-q."""
    return (min(p.x, q.x) <= r.x <= max(p.x, q.x)
            and min(p.y, q.y) <= r.y <= max(p.y, q.y))


def segments_intersect(p1: Coordinate, p2: Coordinate,
                       q1: Coordinate, q2: Coordinate) -> bool:
    """
    Test whether closed segments p1-p2 and q1-q2 intersect.

    Touching endpoints and collinear overlaps count as intersections.
    """
    d1 = np.sign(_cross(q1, q2, p1))
    d2 = np.sign(_cross(q1, q2, p2))
    d3 = np.sign(_cross(p1, p2, q1))
    d4 = np.sign(_cross(p1, p2, q2))

    if d1 * d2 < 0 and d3 * d4 < 0:
        return True

    # Collinear cases: an endpoint lying on the other segment
    return bool((d1 == 0 and _within_box(q1, q2, p1))
                or (d2 == 0 and _within_box(q1, q2, p2))
                or (d3 == 0 and _within_box(p1, p2, q1))
                or (d4 == 0 and _within_box(p1, p2, q2)))


def build_coordinates(table: ChannelTable,
                      latitude_channel: str = VBO_LATITUDE_HEADER,
                      longitude_channel: str = VBO_LONGITUDE_HEADER) -> List[Coordinate]:
    """
    Zip the latitude and longitude channels into track coordinates.

    Raises:
        MissingChannelError: If either channel is absent.
        ChannelValueError: If a position sample is not numeric.
    """
    table.require(latitude_channel, longitude_channel)
    latitudes = table.numeric(latitude_channel)
    longitudes = table.numeric(longitude_channel)
    return [Coordinate(float(x), float(y)) for x, y in zip(latitudes, longitudes)]


def find_nearest_start_finish(coordinates: Sequence[Coordinate],
                              tracks: Sequence[StartFinishLine] = DEFAULT_START_FINISH_LINES
                              ) -> Optional[StartFinishLine]:
    """
    Pick the start/finish line closest to the session's track.

    A track's distance is the minimum Euclidean distance from any session
    coordinate to the first point of its start/finish line. On exact ties the
    first track in the catalog wins.

    Returns:
        The nearest StartFinishLine, or None if there are no coordinates or no
        tracks.
    """
    if not coordinates:
        return None

    xs = np.array([c.x for c in coordinates], dtype=float)
    ys = np.array([c.y for c in coordinates], dtype=float)

    nearest_track = None
    nearest_distance = None
    for track in tracks:
        distance = float(np.min(np.hypot(xs - track.a.x, ys - track.a.y)))
        if nearest_distance is None or distance < nearest_distance:
            nearest_distance = distance
            nearest_track = track

    return nearest_track


def get_laps_index_bounds(coordinates: Sequence[Coordinate],
                          start_finish: StartFinishLine) -> List[LapBounds]:
    """
    Get the start and end indices of each lap in a coordinate sequence.

    A lap starts at the first point of a segment crossing the start/finish
    line and ends at the last point of the next crossing segment. The segment
    that closes a lap also opens the following one. A lap that never reaches a
    second crossing is discarded.

    Noise near the line can produce very short laps; they are reported as is.
    """
    def crosses(idx: int) -> bool:
        return segments_intersect(start_finish.a, start_finish.b,
                                  coordinates[idx], coordinates[idx + 1])

    laps = []
    last_segment = len(coordinates) - 1
    idx = 0

    while idx < last_segment:
        if not crosses(idx):
            idx += 1
            continue

        # Start of lap found, search for the end
        start_idx = idx
        end_segment = next(
            (j for j in range(start_idx + 1, last_segment) if crosses(j)),
            None,
        )
        if end_segment is None:
            logger.debug(f"Discarding incomplete lap starting at index {start_idx}")
            break

        # end_segment is the start of the crossing segment
        laps.append(LapBounds(start_idx, end_segment + 1))
        # The closing crossing is re-tested as the next lap's start
        idx = end_segment

    return laps


def get_lap_bound_indices(table: ChannelTable,
                          tracks: Sequence[StartFinishLine] = DEFAULT_START_FINISH_LINES,
                          latitude_channel: str = VBO_LATITUDE_HEADER,
                          longitude_channel: str = VBO_LONGITUDE_HEADER) -> List[LapBounds]:
    """
    Detect the laps of a session from its GPS position channels.

    Args:
        table: Channel table containing latitude and longitude channels, in
            arc-minutes.
        tracks: Catalog of known start/finish lines.
        latitude_channel: Name of the latitude channel.
        longitude_channel: Name of the longitude channel.

    Returns:
        Ordered list of LapBounds, empty if no track matches.

    Raises:
        MissingChannelError: If a position channel is absent.
    """
    coordinates = build_coordinates(table, latitude_channel, longitude_channel)
    start_finish = find_nearest_start_finish(coordinates, tracks)
    if start_finish is None:
        logger.warning("No reference track found for session; no laps detected")
        return []

    laps = get_laps_index_bounds(coordinates, start_finish)
    logger.info(f"Detected {len(laps)} laps at {start_finish.name}")
    return laps

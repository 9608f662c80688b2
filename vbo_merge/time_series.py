"""
Time Normalization for VBO/ECU Log Merging

Both loggers run on independent clocks. This module moves each log's time
origin to a shared physical event: the top-speed sample of the last
top-speed excursion in the recording, assumed to be the finish-line approach
of the final lap.
"""

import logging
from typing import Sequence

import numpy as np

from .channels import ChannelTable
from .constants import LAST_LAP_MAX_SPEED_PERCENTAGE, TIME_MILLIS_HEADER
from .errors import EmptyChannelError

logger = logging.getLogger(__name__)


def find_reference_index(speeds: Sequence[float],
                         top_speed_ratio: float = LAST_LAP_MAX_SPEED_PERCENTAGE) -> int:
    """
    Find the top-speed sample of the last top-speed region.

    Scans backwards from the last sample. The top-speed region is every speed
    above top_speed_ratio times the session maximum; the scan stops as soon as
    it leaves the first region it entered. If the recording ends inside that
    region and never leaves it, the scan runs to index 0.

    Args:
        speeds: Speed samples of the whole session.
        top_speed_ratio: Fraction of the maximum speed defining the region.

    Returns:
        Index of the highest speed inside the last top-speed region.

    Raises:
        EmptyChannelError: If there are no speed samples.
    """
    speeds = np.asarray(speeds, dtype=float)
    if speeds.size == 0:
        raise EmptyChannelError("Could not find max speed: speed channel is empty")

    threshold = top_speed_ratio * float(np.max(speeds))
    last_lap_max_speed = 0.0
    max_speed_idx = 0
    top_speed_region_reached = False

    for idx in range(speeds.size - 1, -1, -1):
        speed = speeds[idx]
        if speed > threshold:
            top_speed_region_reached = True
        elif top_speed_region_reached:
            # Past the last lap's top speed region
            break

        if speed > threshold and speed > last_lap_max_speed:
            last_lap_max_speed = speed
            max_speed_idx = idx

    return max_speed_idx


def normalize_time(table: ChannelTable, speed_channel: str,
                   time_channel: str = TIME_MILLIS_HEADER,
                   top_speed_ratio: float = LAST_LAP_MAX_SPEED_PERCENTAGE) -> int:
    """
    Anchor a table's time channel on its last-lap top-speed sample.

    The time of the reference sample is subtracted from every time value,
    in place.

    Args:
        table: Channel table to modify.
        speed_channel: Name of the speed channel used to find the reference.
        time_channel: Name of the integer millisecond time channel.
        top_speed_ratio: Fraction of the maximum speed defining the region.

    Returns:
        The subtracted offset in milliseconds.

    Raises:
        MissingChannelError: If the speed or time channel is absent.
        EmptyChannelError: If the speed channel has no samples.
        ChannelValueError: If a speed sample is not numeric.
    """
    table.require(speed_channel, time_channel)
    reference_idx = find_reference_index(table.numeric(speed_channel), top_speed_ratio)

    times = table.raw(time_channel)
    offset = times[reference_idx]
    table[time_channel] = [t - offset for t in times]

    logger.debug(
        f"Normalized {time_channel!r} on {speed_channel!r}: "
        f"reference index {reference_idx}, offset {offset} ms"
    )
    return offset

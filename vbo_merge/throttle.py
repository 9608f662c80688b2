"""
Throttle Analytics for VBO/ECU Log Merging

This module derives the throttle application percentage from the ECU throttle
position voltage, and a per-lap running average of that percentage.
"""

import logging
from typing import List, Sequence

import numpy as np

from .channels import ChannelTable
from .constants import (
    LAP_ACCUMULATED_THROTTLE_PERCENTAGE_HEADER,
    THROTTLE_PERCENTAGE_HEADER,
    THROTTLE_VOLT_HEADER,
    THROTTLE_VOLT_MAX,
    THROTTLE_VOLT_MIN,
)
from .lap_analysis import LapBounds, get_lap_bound_indices
from .tracks import DEFAULT_START_FINISH_LINES, StartFinishLine

logger = logging.getLogger(__name__)


def throttle_percentage(volts: Sequence[float],
                        min_volt: float = THROTTLE_VOLT_MIN,
                        max_volt: float = THROTTLE_VOLT_MAX) -> np.ndarray:
    """
    Map throttle position voltage to a 0-100 percentage.

    Voltages are clamped to [min_volt, max_volt] before the linear mapping.
    """
    clamped = np.clip(np.asarray(volts, dtype=float), min_volt, max_volt)
    return 100 * (clamped - min_volt) / (max_volt - min_volt)


def lap_accumulated_average(percentages: Sequence[float],
                            laps: Sequence[LapBounds]) -> np.ndarray:
    """
    Compute the running mean of throttle percentage within each lap.

    At every index of a lap the value is the mean from the lap's start up to
    and including that index. Samples outside all laps are zero. Where two
    laps share an index the later lap wins.
    """
    percentages = np.asarray(percentages, dtype=float)
    accumulated = np.zeros_like(percentages)
    for lap in laps:
        values = percentages[lap.start:lap.end + 1]
        accumulated[lap.start:lap.end + 1] = np.cumsum(values) / np.arange(1, values.size + 1)
    return accumulated


def create_throttle_percentage_data(table: ChannelTable,
                                    throttle_channel: str = THROTTLE_VOLT_HEADER,
                                    tracks: Sequence[StartFinishLine] = DEFAULT_START_FINISH_LINES,
                                    min_volt: float = THROTTLE_VOLT_MIN,
                                    max_volt: float = THROTTLE_VOLT_MAX) -> List[LapBounds]:
    """
    Add throttle percentage and lap-accumulated percentage channels.

    Args:
        table: Merged channel table with the throttle voltage and GPS position
            channels (modified in place).
        throttle_channel: Name of the throttle voltage channel.
        tracks: Catalog of known start/finish lines for lap detection.
        min_volt: Voltage at closed throttle.
        max_volt: Voltage at full throttle.

    Returns:
        The detected laps.

    Raises:
        MissingChannelError: If the throttle or a position channel is absent.
    """
    percentages = throttle_percentage(table.numeric(throttle_channel), min_volt, max_volt)
    laps = get_lap_bound_indices(table, tracks)

    table[THROTTLE_PERCENTAGE_HEADER] = percentages.tolist()
    table[LAP_ACCUMULATED_THROTTLE_PERCENTAGE_HEADER] = (
        lap_accumulated_average(percentages, laps).tolist()
    )

    logger.debug(f"Computed throttle analytics over {len(laps)} laps")
    return laps

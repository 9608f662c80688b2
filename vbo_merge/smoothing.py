"""
Rolling-average smoothing for noisy ECU channels.
"""

import logging
from typing import List, Sequence

import numpy as np

from .channels import ChannelTable
from .constants import NUMBER_OF_SMOOTHING_CYCLES

logger = logging.getLogger(__name__)


def smooth_values(values: Sequence) -> List[float]:
    """
    Smooth values by a rolling average of 3 samples.

    Interior samples become the mean of themselves and both neighbours. The
    first sample is kept and the last sample repeats the second-to-last
    smoothed value, so the length is preserved.
    """
    raw = np.asarray([float(v) for v in values], dtype=float)
    if raw.size < 2:
        return raw.tolist()

    smoothed = np.empty_like(raw)
    smoothed[0] = raw[0]
    smoothed[1:-1] = (raw[:-2] + raw[1:-1] + raw[2:]) / 3
    smoothed[-1] = smoothed[-2]
    return smoothed.tolist()


def smooth_channel(table: ChannelTable, name: str,
                   passes: int = NUMBER_OF_SMOOTHING_CYCLES) -> None:
    """Apply ``passes`` rounds of smooth_values to a channel, in place."""
    values = table.numeric(name)
    for _ in range(passes):
        values = smooth_values(values)
    table[name] = list(values)
    logger.debug(f"Smoothed {name!r} with {passes} passes")

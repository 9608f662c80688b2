"""
Log Alignment for VBO/ECU Log Merging

This module fuses a reference log (the VBO file) with a secondary log (the ECU
file) by nearest-timestamp matching. Both logs must already be time-normalized
so that their time channels share an origin.
"""

import logging
from typing import Sequence

import numpy as np

from .channels import ChannelTable
from .constants import MERGED_ECU_HEADER_PREFIX, TIME_MILLIS_HEADER
from .errors import EmptyChannelError

logger = logging.getLogger(__name__)


def find_best_matches(reference_times: Sequence[float],
                      secondary_times: Sequence[float]) -> np.ndarray:
    """
    Find, for every reference time, the closest secondary sample.

    Each reference time is compared against the entire secondary time channel.
    Ties resolve to the smallest secondary index.

    Args:
        reference_times: Time values of the reference log.
        secondary_times: Time values of the secondary log.

    Returns:
        Integer array with one secondary index per reference sample.

    Raises:
        EmptyChannelError: If there are reference samples but no secondary
            samples to match them against.
    """
    reference_times = np.asarray(reference_times, dtype=np.int64)
    secondary_times = np.asarray(secondary_times, dtype=np.int64)

    if reference_times.size == 0:
        return np.empty(0, dtype=int)
    if secondary_times.size == 0:
        raise EmptyChannelError("Secondary log has no time samples to match against")

    # argmin returns the first occurrence of the minimum
    return np.array(
        [int(np.argmin(np.abs(secondary_times - ref_time))) for ref_time in reference_times],
        dtype=int,
    )


def merge_logs(reference: ChannelTable, secondary: ChannelTable,
               prefix: str = MERGED_ECU_HEADER_PREFIX,
               time_channel: str = TIME_MILLIS_HEADER) -> ChannelTable:
    """
    Merge a secondary log into a reference log.

    The merged table keeps every reference channel as is and adds every
    secondary channel under ``prefix + name``, resampled to the reference rows
    by nearest time. Both time channels are dropped. Neither input is modified.

    Args:
        reference: Time-normalized reference table (VBO log).
        secondary: Time-normalized secondary table (ECU log).
        prefix: Prefix for the secondary channel names.
        time_channel: Name of the time channel in both tables.

    Returns:
        Merged channel table with one row per reference sample.

    Raises:
        MissingChannelError: If either table lacks the time channel.
    """
    reference.require(time_channel)
    secondary.require(time_channel)

    best_matches = find_best_matches(reference.raw(time_channel), secondary.raw(time_channel))

    merged = reference.copy()
    for name, values in secondary.items():
        merged[prefix + name] = [values[j] for j in best_matches]

    # Not needed in the final data
    del merged[time_channel]
    del merged[prefix + time_channel]

    if best_matches.size:
        errors = np.abs(
            np.asarray(secondary.raw(time_channel), dtype=np.int64)[best_matches]
            - np.asarray(reference.raw(time_channel), dtype=np.int64)
        )
        logger.info(
            f"Merged {len(secondary) - 1} secondary channels into {best_matches.size} rows "
            f"(max alignment error {int(errors.max())} ms)"
        )
    return merged

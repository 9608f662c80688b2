"""
Session Builder for VBO/ECU Log Merging

This module orchestrates the complete merge pipeline, from the two raw log
files to the merged VBO file with throttle analytics.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence, Union

from .channels import ChannelTable
from .constants import MERGED_FILE_SUFFIX, NUMBER_OF_SMOOTHING_CYCLES
from .tracks import DEFAULT_START_FINISH_LINES, StartFinishLine
from . import alignment
from . import data_loading
from . import export
from . import throttle

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def default_output_path(vbo_path: PathLike) -> Path:
    """Derive the merged file path, e.g. "session.vbo" -> "session-ecu.vbo"."""
    vbo_path = Path(vbo_path)
    if vbo_path.suffix == ".vbo":
        return vbo_path.with_name(vbo_path.stem + MERGED_FILE_SUFFIX)
    return vbo_path.with_name(vbo_path.name + MERGED_FILE_SUFFIX)


def build_merged_log(ecu_path: PathLike, vbo_path: PathLike,
                     tracks: Sequence[StartFinishLine] = DEFAULT_START_FINISH_LINES,
                     smoothing_passes: int = NUMBER_OF_SMOOTHING_CYCLES) -> ChannelTable:
    """
    Build the merged channel table of a session.

    Main entry point that runs the entire pipeline:
    1. Reads the ECU log (time-normalized, oil pressure smoothed)
    2. Reads the VBO file (time-normalized)
    3. Merges the ECU channels into the VBO rows by nearest time
    4. Adds throttle percentage and lap-accumulated throttle channels

    Args:
        ecu_path: Path to the ECU CSV log.
        vbo_path: Path to the VBO file.
        tracks: Catalog of known start/finish lines for lap detection.
        smoothing_passes: Number of rolling-average passes on oil pressure.

    Returns:
        The merged channel table.

    Raises:
        TelemetryError: On any malformed input; no partial result is returned.
    """
    ecu_log = data_loading.read_ecu_log(ecu_path, smoothing_passes=smoothing_passes)
    vbo_log = data_loading.read_vbo(vbo_path)
    merged = alignment.merge_logs(vbo_log, ecu_log)
    throttle.create_throttle_percentage_data(merged, tracks=tracks)
    return merged


def merge_files(ecu_path: PathLike, vbo_path: PathLike,
                output_path: Optional[PathLike] = None,
                tracks: Sequence[StartFinishLine] = DEFAULT_START_FINISH_LINES,
                smoothing_passes: int = NUMBER_OF_SMOOTHING_CYCLES) -> Path:
    """
    Merge an ECU log into a VBO file and write the result.

    The output is only written once the whole pipeline has succeeded.

    Returns:
        Path of the written file.
    """
    output_path = Path(output_path) if output_path else default_output_path(vbo_path)
    merged = build_merged_log(ecu_path, vbo_path, tracks=tracks,
                              smoothing_passes=smoothing_passes)
    export.write_vbo(merged, output_path)
    logger.info(f"Wrote {merged.sample_count} rows to {output_path}")
    return output_path

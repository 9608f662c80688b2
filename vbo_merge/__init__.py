"""
VBO/ECU Log Merging

This package merges engine control unit logs into VBO GPS logger files,
syncing both recordings on the last-lap top speed, and derives throttle
analytics per lap from the GPS track position.

Functions are organized in one module per pipeline stage and re-exported here.
"""

# Import constants
from .constants import VERSION as __version__

# Import errors
from .errors import (
    TelemetryError,
    MissingChannelError,
    EmptyChannelError,
    ChannelValueError,
    ChannelLengthError,
    TimeFormatError,
    VboFormatError,
    EcuFormatError,
)

# Import data model
from .channels import ChannelTable
from .tracks import (
    Coordinate,
    StartFinishLine,
    DEFAULT_START_FINISH_LINES,
)

# Import utility functions
from .utils import (
    parse_float,
    vbo_time_to_millis,
    seconds_to_millis,
)

# Import time normalization functions
from .time_series import (
    find_reference_index,
    normalize_time,
)

# Import smoothing functions
from .smoothing import (
    smooth_values,
    smooth_channel,
)

# Import alignment functions
from .alignment import (
    find_best_matches,
    merge_logs,
)

# Import lap analysis functions
from .lap_analysis import (
    LapBounds,
    segments_intersect,
    build_coordinates,
    find_nearest_start_finish,
    get_laps_index_bounds,
    get_lap_bound_indices,
)

# Import throttle analytics functions
from .throttle import (
    throttle_percentage,
    lap_accumulated_average,
    create_throttle_percentage_data,
)

# Import data loading functions
from .data_loading import (
    parse_vbo_lines,
    read_vbo,
    read_ecu_log,
)

# Import export functions
from .export import (
    column_name,
    format_vbo,
    write_vbo,
)

# Import session builder functions
from .session import (
    default_output_path,
    build_merged_log,
    merge_files,
)

__all__ = [
    "__version__",
    # Errors
    "TelemetryError",
    "MissingChannelError",
    "EmptyChannelError",
    "ChannelValueError",
    "ChannelLengthError",
    "TimeFormatError",
    "VboFormatError",
    "EcuFormatError",
    # Data model
    "ChannelTable",
    "Coordinate",
    "StartFinishLine",
    "DEFAULT_START_FINISH_LINES",
    # Utilities
    "parse_float",
    "vbo_time_to_millis",
    "seconds_to_millis",
    # Time normalization
    "find_reference_index",
    "normalize_time",
    # Smoothing
    "smooth_values",
    "smooth_channel",
    # Alignment
    "find_best_matches",
    "merge_logs",
    # Lap analysis
    "LapBounds",
    "segments_intersect",
    "build_coordinates",
    "find_nearest_start_finish",
    "get_laps_index_bounds",
    "get_lap_bound_indices",
    # Throttle analytics
    "throttle_percentage",
    "lap_accumulated_average",
    "create_throttle_percentage_data",
    # Data loading
    "parse_vbo_lines",
    "read_vbo",
    "read_ecu_log",
    # Export
    "column_name",
    "format_vbo",
    "write_vbo",
    # Session builder
    "default_output_path",
    "build_merged_log",
    "merge_files",
]

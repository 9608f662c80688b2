"""
Data Loading and Parsing for VBO/ECU Log Merging

This module reads the two supported log formats into channel tables, derives
their millisecond time channel and normalizes it, so the tables are ready to
be merged.
"""

import logging
from pathlib import Path
from typing import Dict, List, Union

import pandas as pd

from .channels import ChannelTable
from .constants import (
    ECU_OIL_PRESS_HEADER,
    ECU_SPEED_HEADER,
    ECU_TIME_HEADER,
    NUMBER_OF_SMOOTHING_CYCLES,
    TIME_MILLIS_HEADER,
    VBO_DATA_SECTION,
    VBO_HEADER_SECTION,
    VBO_SPEED_HEADER,
    VBO_TIME_HEADER,
)
from .errors import EcuFormatError, VboFormatError
from .smoothing import smooth_channel
from .time_series import normalize_time
from . import utils

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def parse_vbo_lines(lines: List[str]) -> ChannelTable:
    """
    Parse the lines of a VBO file into a channel table of raw strings.

    Channel names are the lines following "[header]" up to the first blank
    line. Every line after "[data]" is one sample with space-separated values
    in header order. Other sections are ignored.

    Raises:
        VboFormatError: If a section is missing or a data row does not match
            the header count.
    """
    headers: List[str] = []
    data: Dict[str, List[str]] = {}
    on_header_lines = False
    on_data_lines = False
    found_header = False

    for line_number, line in enumerate(lines, start=1):
        line = line.rstrip("\r\n")
        if line == VBO_HEADER_SECTION:
            on_header_lines = True
            found_header = True
        elif on_header_lines:
            if not line.strip():
                on_header_lines = False
            else:
                headers.append(line.strip())
                data[line.strip()] = []
        elif line == VBO_DATA_SECTION:
            on_data_lines = True
        elif on_data_lines and line.strip():
            values = line.split()
            if len(values) != len(headers):
                raise VboFormatError(
                    f"Line {line_number}: expected {len(headers)} values, got {len(values)}"
                )
            for header, value in zip(headers, values):
                data[header].append(value)

    if not found_header:
        raise VboFormatError(f"No {VBO_HEADER_SECTION} section found")
    if not on_data_lines:
        raise VboFormatError(f"No {VBO_DATA_SECTION} section found")

    return ChannelTable(data)


def read_vbo(file_path: PathLike, speed_channel: str = VBO_SPEED_HEADER) -> ChannelTable:
    """
    Load a VBO file and normalize its time base.

    Args:
        file_path: Path to the .vbo file.
        speed_channel: Channel used to find the time reference point.

    Returns:
        Channel table with raw string channels plus an integer
        "TimeMillis" channel anchored on the last-lap top speed.

    Raises:
        VboFormatError: If the file is not UTF-8 or its structure is malformed.
        TimeFormatError: If a time value is malformed.
        MissingChannelError: If the time or speed channel is absent.
    """
    try:
        with Path(file_path).open("r", encoding="utf-8") as file:
            lines = file.readlines()
    except UnicodeDecodeError as exc:
        raise VboFormatError(f"Could not decode VBO file {file_path}: {exc}") from exc

    table = parse_vbo_lines(lines)
    table[TIME_MILLIS_HEADER] = [utils.vbo_time_to_millis(t) for t in table.raw(VBO_TIME_HEADER)]
    normalize_time(table, speed_channel)

    logger.info(f"Read {table.sample_count} samples, {len(table)} channels from {file_path}")
    return table


def read_ecu_log(file_path: PathLike,
                 smoothing_passes: int = NUMBER_OF_SMOOTHING_CYCLES) -> ChannelTable:
    """
    Load an ECU CSV log, normalize its time base and smooth oil pressure.

    The first row holds the channel names; values are kept as raw strings.
    Trailing commas on the header or data rows do not create extra channels.

    Args:
        file_path: Path to the ECU log.
        smoothing_passes: Number of rolling-average passes on oil pressure.

    Returns:
        Channel table with raw string channels plus an integer
        "TimeMillis" channel anchored on the last-lap top speed.

    Raises:
        EcuFormatError: If the file is not a readable UTF-8 CSV table.
        TimeFormatError: If a time value is not numeric.
        MissingChannelError: If the time or speed channel is absent.
    """
    try:
        df = pd.read_csv(file_path, dtype=str, keep_default_na=False,
                         index_col=False, encoding="utf-8")
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise EcuFormatError(f"Could not parse ECU log {file_path}: {exc}") from exc

    # A trailing comma on the header line yields an empty "Unnamed: N" column
    unnamed = [column for column in df.columns
               if str(column).startswith("Unnamed: ") and (df[column] == "").all()]
    df = df.drop(columns=unnamed)

    table = ChannelTable({column: df[column].tolist() for column in df.columns})

    table[TIME_MILLIS_HEADER] = [utils.seconds_to_millis(t) for t in table.raw(ECU_TIME_HEADER)]
    normalize_time(table, ECU_SPEED_HEADER)

    if ECU_OIL_PRESS_HEADER in table:
        smooth_channel(table, ECU_OIL_PRESS_HEADER, smoothing_passes)
    else:
        logger.warning(f"No {ECU_OIL_PRESS_HEADER!r} channel in {file_path}; skipping smoothing")

    logger.info(f"Read {table.sample_count} samples, {len(table)} channels from {file_path}")
    return table

"""
Utility Functions for VBO/ECU Log Merging

This module provides helper functions for numeric conversion and for turning
the time formats of both log types into milliseconds.
"""

from .errors import ChannelValueError, TimeFormatError


def parse_float(value, channel: str = "") -> float:
    """
    Convert a value to float, failing loudly on malformed input.

    Args:
        value: Value to convert (string, number, etc.).
        channel: Channel name used in the error message.

    Returns:
        Float value.

    Raises:
        ChannelValueError: If the value is not numeric.
    """
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ChannelValueError(
            f"Non-numeric value {value!r} in channel {channel!r}"
        ) from exc


def vbo_time_to_millis(time: str) -> int:
    """
    Convert a VBO time of day to milliseconds since midnight.

    VBO files store UTC time as HHMMSS.SS (9 characters, hundredths) or
    HHMMSS.SSS (10 characters, thousandths).

    Args:
        time: Time string as found in the VBO "time" channel.

    Returns:
        Milliseconds since midnight.

    Raises:
        TimeFormatError: If the string has an unsupported length or non-digit
            fields.
    """
    time = str(time)
    length = len(time)
    if length not in (9, 10):
        raise TimeFormatError(f"Unexpected VBO time value {time}")

    fields = (time[0:2], time[2:4], time[4:6], time[7:length])
    if not all(field.isdigit() for field in fields):
        raise TimeFormatError(f"Unexpected VBO time value {time}")

    hh, mm, ss, fraction = (int(field) for field in fields)
    millis = fraction * 10 if length == 9 else fraction
    return millis + ss * 1000 + mm * 60 * 1000 + hh * 60 * 60 * 1000


def seconds_to_millis(seconds) -> int:
    """
    Convert an ECU time value in seconds to whole milliseconds.

    Fractions of a millisecond are truncated toward zero.

    Raises:
        TimeFormatError: If the value is not numeric.
    """
    try:
        return int(float(seconds) * 1000)
    except (TypeError, ValueError) as exc:
        raise TimeFormatError(f"Unexpected ECU time value {seconds!r}") from exc

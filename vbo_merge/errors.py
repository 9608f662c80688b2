"""
Exceptions raised by the merge pipeline.

Every fatal condition derives from TelemetryError so callers can abort a run
with a single except clause. Each subclass also derives from the builtin
exception that matches its meaning (KeyError for lookups, ValueError for bad
data).
"""


class TelemetryError(Exception):
    """Base class for all merge pipeline failures."""


class MissingChannelError(TelemetryError, KeyError):
    """A required channel is not present in a channel table."""

    def __init__(self, channel: str):
        super().__init__(channel)
        self.channel = channel

    def __str__(self) -> str:
        return f"Missing channel: {self.channel!r}"


class EmptyChannelError(TelemetryError, ValueError):
    """A required channel contains no samples."""


class ChannelValueError(TelemetryError, ValueError):
    """A channel value could not be converted to a number."""


class ChannelLengthError(TelemetryError, ValueError):
    """Channels of one table do not share the same sample count."""


class TimeFormatError(TelemetryError, ValueError):
    """A time value does not match any supported format."""


class VboFormatError(TelemetryError, ValueError):
    """A VBO file is structurally malformed."""


class EcuFormatError(TelemetryError, ValueError):
    """An ECU log is not a readable CSV table."""

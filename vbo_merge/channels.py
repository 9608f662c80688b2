"""
Channel Table

A channel table maps channel names to equally long sample lists, where index i
of every channel refers to the same instant. Readers store raw strings; numeric
access converts on demand. Derived channels hold plain ints and floats.
"""

from collections.abc import MutableMapping
from typing import Dict, Iterable, Iterator, List, Mapping, Optional

import numpy as np
import pandas as pd

from .errors import ChannelLengthError, MissingChannelError
from . import utils


class ChannelTable(MutableMapping):
    """
    Mapping of channel name to an ordered list of samples.

    All channels share the same sample count; assigning a list of a different
    length raises ChannelLengthError. Looking up an unknown channel raises
    MissingChannelError (a KeyError).
    """

    def __init__(self, channels: Optional[Mapping[str, Iterable]] = None):
        self._channels: Dict[str, List] = {}
        if channels:
            for name, values in channels.items():
                self[name] = values

    def __getitem__(self, name: str) -> List:
        try:
            return self._channels[name]
        except KeyError:
            raise MissingChannelError(name) from None

    def __setitem__(self, name: str, values: Iterable) -> None:
        values = list(values)
        others = [other for other in self._channels if other != name]
        if others and len(values) != len(self._channels[others[0]]):
            raise ChannelLengthError(
                f"Channel {name!r} has {len(values)} samples, "
                f"expected {len(self._channels[others[0]])}"
            )
        self._channels[name] = values

    def __delitem__(self, name: str) -> None:
        try:
            del self._channels[name]
        except KeyError:
            raise MissingChannelError(name) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._channels)

    def __len__(self) -> int:
        return len(self._channels)

    def __repr__(self) -> str:
        return f"ChannelTable(channels={list(self._channels)}, samples={self.sample_count})"

    @property
    def sample_count(self) -> int:
        """Number of samples per channel (0 for a table without channels)."""
        for values in self._channels.values():
            return len(values)
        return 0

    def raw(self, name: str) -> List:
        """Return the stored sample list of a channel."""
        return self[name]

    def numeric(self, name: str) -> np.ndarray:
        """
        Return a channel converted to a float64 array.

        Raises:
            MissingChannelError: If the channel does not exist.
            ChannelValueError: If any sample is not numeric.
        """
        return np.array(
            [utils.parse_float(value, name) for value in self[name]],
            dtype=float,
        )

    def require(self, *names: str) -> None:
        """Raise MissingChannelError for the first absent channel."""
        for name in names:
            if name not in self._channels:
                raise MissingChannelError(name)

    def copy(self) -> "ChannelTable":
        """Copy the table; sample lists are copied, samples are shared."""
        return ChannelTable({name: list(values) for name, values in self._channels.items()})

    def to_frame(self, columns: Optional[List[str]] = None) -> pd.DataFrame:
        """Build a DataFrame with one column per channel, in the given order."""
        columns = list(self._channels) if columns is None else columns
        return pd.DataFrame({name: self[name] for name in columns}, columns=columns)

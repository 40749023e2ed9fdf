"""
Containers for loaded recordings and the epochs cut from them.
"""
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd


def _read_only(array: np.ndarray) -> np.ndarray:
    array = np.array(array, dtype=float, copy=True)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class Recording:
    """
    One labeled multi-channel recording.

    Attributes:
        data: Samples x channels signal matrix
        times: Time of each sample in seconds, strictly increasing
        sampling_frequency: Sampling rate in Hz
        recording_id: Identifier used as the prefix of epoch ids
        label: Class label shared by every epoch of the recording
        channel_names: One name per column of ``data``
    """
    data: np.ndarray
    times: np.ndarray
    sampling_frequency: float
    recording_id: str
    label: str
    channel_names: List[str] = field(default_factory=list)

    def __post_init__(self):
        data = _read_only(self.data)
        times = _read_only(self.times)

        if data.ndim == 1:
            data = _read_only(data[:, np.newaxis])
        if data.ndim != 2:
            raise ValueError(f"Recording data must be 2-D (samples x channels), got shape {data.shape}")
        if times.ndim != 1 or len(times) != data.shape[0]:
            raise ValueError(
                f"Time axis length {times.shape} does not match {data.shape[0]} samples"
            )
        if len(times) > 1 and np.any(np.diff(times) <= 0):
            raise ValueError(f"Time axis of recording '{self.recording_id}' is not strictly increasing")
        if self.sampling_frequency <= 0:
            raise ValueError(f"Sampling frequency must be positive, got {self.sampling_frequency}")

        channel_names = list(self.channel_names) or [f"ch{i}" for i in range(data.shape[1])]
        if len(channel_names) != data.shape[1]:
            raise ValueError(
                f"Got {len(channel_names)} channel names for {data.shape[1]} channels"
            )

        object.__setattr__(self, 'data', data)
        object.__setattr__(self, 'times', times)
        object.__setattr__(self, 'channel_names', channel_names)

    @property
    def n_channels(self) -> int:
        return self.data.shape[1]

    @property
    def n_samples(self) -> int:
        return self.data.shape[0]

    def with_data(self, data: np.ndarray) -> 'Recording':
        """Return a copy of this recording carrying a new signal matrix."""
        return replace(self, data=data)

    @classmethod
    def from_matrix(cls, matrix: np.ndarray, sampling_frequency: float,
                    recording_id: str, label: str,
                    channel_names: Optional[Sequence[str]] = None) -> 'Recording':
        """
        Build a recording from a loader sample matrix.

        Args:
            matrix: Samples x (1 + channels) matrix, first column is time
            sampling_frequency: Sampling rate in Hz
            recording_id: Recording identifier
            label: Class label
            channel_names: Names of the channel columns

        Returns:
            Recording
        """
        matrix = np.asarray(matrix, dtype=float)
        if matrix.ndim != 2 or matrix.shape[1] < 2:
            raise ValueError(
                f"Sample matrix needs a time column and at least one channel, got shape {matrix.shape}"
            )
        return cls(
            data=matrix[:, 1:],
            times=matrix[:, 0],
            sampling_frequency=sampling_frequency,
            recording_id=recording_id,
            label=label,
            channel_names=list(channel_names) if channel_names is not None else []
        )

    @classmethod
    def from_frame(cls, frame: pd.DataFrame, sampling_frequency: float,
                   recording_id: str, label: str,
                   time_column: Optional[str] = None) -> 'Recording':
        """
        Build a recording from a DataFrame with a time column and channel columns.

        The time column defaults to the first column; the remaining columns
        become channels, named after their headers.
        """
        time_column = time_column or frame.columns[0]
        channel_columns = [col for col in frame.columns if col != time_column]
        return cls(
            data=frame[channel_columns].to_numpy(dtype=float),
            times=frame[time_column].to_numpy(dtype=float),
            sampling_frequency=sampling_frequency,
            recording_id=recording_id,
            label=label,
            channel_names=[str(col) for col in channel_columns]
        )


@dataclass(frozen=True, eq=False)
class Epoch:
    """An inclusive slice ``[start_index, end_index]`` of one recording."""
    epoch_id: str
    label: str
    data: np.ndarray
    recording_id: str
    segment_index: int
    start_index: int
    end_index: int

    @property
    def length_n(self) -> int:
        """Segment length in samples (end - start)."""
        return self.end_index - self.start_index

    @property
    def n_channels(self) -> int:
        return self.data.shape[1]

"""
Segmentation of continuous recordings into fixed-length epochs.
"""
import logging
from typing import Iterable, List, Optional, Tuple

import numpy as np

from ..config import TIME_MATCH_TOLERANCE
from ..exceptions import InconsistentSegmentLength, NoMatchFound
from .recording import Epoch, Recording

logger = logging.getLogger(__name__)


def find_time_index(times: np.ndarray, target: float,
                    tolerance: float = TIME_MATCH_TOLERANCE) -> int:
    """
    Find the first sample whose time lies within tolerance of a target time.

    Args:
        times: Time axis of a recording
        target: Time to look up, in seconds
        tolerance: Maximum absolute difference accepted

    Returns:
        Index of the first matching sample

    Raises:
        NoMatchFound: If no sample lies within tolerance
    """
    matches = np.flatnonzero(np.abs(np.asarray(times) - target) < tolerance)
    if matches.size == 0:
        raise NoMatchFound(
            f"No sample within {tolerance} of t={target}; "
            f"recording is malformed or not uniformly sampled"
        )
    return int(matches[0])


def truncate_to_sample(value: float, sampling_frequency: float) -> float:
    """Truncate a time down to the nearest sample boundary."""
    # Rounding first keeps float noise (7999.9999999) from dropping a whole sample
    return np.floor(np.round(value * sampling_frequency, 6)) / sampling_frequency


class Segmenter:
    """Divide recordings into a fixed number of equal-duration epochs."""

    def __init__(self, segment_count: int, total_duration: float, sampling_frequency: float,
                 tolerance: float = TIME_MATCH_TOLERANCE):
        """
        Initialize the segmenter.

        Args:
            segment_count: Number of epochs per recording, 1 disables segmentation
            total_duration: Nominal signal duration in seconds
            sampling_frequency: Sampling rate in Hz
            tolerance: Time-to-sample matching tolerance
        """
        if segment_count < 1:
            raise ValueError(f"Segment count must be >= 1, got {segment_count}")
        if total_duration <= 0:
            raise ValueError(f"Total duration must be positive, got {total_duration}")
        if sampling_frequency <= 0:
            raise ValueError(f"Sampling frequency must be positive, got {sampling_frequency}")

        self.segment_count = int(segment_count)
        self.total_duration = float(total_duration)
        self.sampling_frequency = float(sampling_frequency)
        self.tolerance = tolerance
        self.segment_length_s = truncate_to_sample(
            self.total_duration / self.segment_count, self.sampling_frequency
        )
        if self.segment_length_s <= 0:
            raise ValueError(
                f"{segment_count} segments of a {total_duration}s signal are shorter than one sample"
            )
        self.segment_length_n: Optional[int] = None

    def boundaries(self) -> List[Tuple[float, float]]:
        """Start and end time of every segment, on the sample grid."""
        fs = self.sampling_frequency
        return [
            (truncate_to_sample(j * self.segment_length_s, fs),
             truncate_to_sample((j + 1) * self.segment_length_s, fs))
            for j in range(self.segment_count)
        ]

    def segment(self, recording: Recording) -> List[Epoch]:
        """
        Cut one recording into epochs.

        Raises:
            NoMatchFound: If a boundary time has no matching sample
            InconsistentSegmentLength: If an epoch length differs from earlier epochs
        """
        epochs = []
        for j, (start_time, end_time) in enumerate(self.boundaries()):
            start = find_time_index(recording.times, start_time, self.tolerance)
            end = find_time_index(recording.times, end_time, self.tolerance)
            self._check_length(recording.recording_id, j, end - start)

            data = recording.data[start:end + 1, :]
            epochs.append(Epoch(
                epoch_id=f"{recording.recording_id}{j}",
                label=recording.label,
                data=data,
                recording_id=recording.recording_id,
                segment_index=j,
                start_index=start,
                end_index=end
            ))

        logger.debug(f"Recording '{recording.recording_id}': {len(epochs)} epochs "
                     f"of {self.segment_length_n} samples")
        return epochs

    def segment_all(self, recordings: Iterable[Recording]) -> List[Epoch]:
        """Segment recordings in order; epochs are recording-major, segment-minor."""
        self.segment_length_n = None
        epochs = []
        for recording in recordings:
            epochs.extend(self.segment(recording))

        logger.info(f"Segmented {len(epochs)} epochs of {self.segment_length_s:.4f}s "
                    f"({self.segment_length_n} samples)")
        return epochs

    def _check_length(self, recording_id: str, segment_index: int, length_n: int):
        if self.segment_length_n is None:
            self.segment_length_n = length_n
        elif length_n != self.segment_length_n:
            raise InconsistentSegmentLength(
                f"Segment {segment_index} of '{recording_id}' spans {length_n} samples, "
                f"expected {self.segment_length_n}"
            )

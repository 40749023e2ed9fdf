"""
Aggregation of band magnitudes into a classifier-ready feature table.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from ..data.recording import Epoch
from .bands import BandPartitioner, BandSelection
from .spectral import SpectralTransform

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class FeatureRow:
    """Feature vector of one epoch, ordered channel-major then band-minor."""
    epoch_id: str
    label: str
    features: np.ndarray


@dataclass(frozen=True, eq=False)
class FeatureTable:
    """
    Ordered feature rows sharing one column layout.

    Attributes:
        rows: One row per epoch, recording-major then segment-minor
        features_per_channel: Feature columns contributed by each channel
        features_per_sample: Total feature columns per row
        frequency_axis: Frequency axis used for the features
        channel_names: Channel names in column-block order
        feature_names: Per-channel feature names in column order
    """
    rows: Tuple[FeatureRow, ...]
    features_per_channel: int
    features_per_sample: int
    frequency_axis: np.ndarray
    channel_names: List[str] = field(default_factory=list)
    feature_names: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def ids(self) -> List[str]:
        return [row.epoch_id for row in self.rows]

    @property
    def labels(self) -> List[str]:
        return [row.label for row in self.rows]

    @property
    def columns(self) -> List[str]:
        return [f"{channel}_{name}" for channel in self.channel_names
                for name in self.feature_names]

    def feature_matrix(self) -> np.ndarray:
        """Rows x features matrix."""
        if not self.rows:
            return np.empty((0, self.features_per_sample))
        return np.vstack([row.features for row in self.rows])

    def channel_features(self, channel: int) -> np.ndarray:
        """Column block of a single channel."""
        start = channel * self.features_per_channel
        return self.feature_matrix()[:, start:start + self.features_per_channel]

    def to_frame(self) -> pd.DataFrame:
        """Export as a DataFrame with id, label and one named column per feature."""
        frame = pd.DataFrame(self.feature_matrix(), columns=self.columns)
        frame.insert(0, 'label', self.labels)
        frame.insert(0, 'id', self.ids)
        return frame


class FeatureAggregator:
    """Average spectral magnitude within each selected band, per channel."""

    def __init__(self, selection: BandSelection, transform: SpectralTransform,
                 partitioner: Optional[BandPartitioner] = None):
        self.selection = selection
        self.transform = transform
        self.partitioner = partitioner or BandPartitioner(transform.edge_tolerances)

    @property
    def features_per_channel(self) -> int:
        return self.selection.features_per_channel

    def channel_features(self, signal: np.ndarray,
                         sampling_frequency: float) -> Tuple[np.ndarray, np.ndarray]:
        """
        Features of one channel of one epoch.

        Returns:
            Tuple of (features, frequency axis of the transform)
        """
        spectrum = self.transform.compute(signal, sampling_frequency)
        ranges = self.selection.feature_ranges(self.partitioner, spectrum.frequencies)
        features = np.array([spectrum.magnitude[bins].mean() for bins in ranges])
        return features, spectrum.frequencies

    def epoch_features(self, epoch: Epoch,
                       sampling_frequency: float) -> Tuple[FeatureRow, np.ndarray]:
        """
        Feature row of one epoch; channels are processed independently.

        Returns:
            Tuple of (feature row, frequency axis of the last channel)
        """
        per_channel = []
        frequencies = np.empty(0)
        for channel in range(epoch.n_channels):
            features, frequencies = self.channel_features(epoch.data[:, channel], sampling_frequency)
            per_channel.append(features)

        row = FeatureRow(
            epoch_id=epoch.epoch_id,
            label=epoch.label,
            features=np.concatenate(per_channel)
        )
        return row, frequencies

    def frequency_axis_used(self, frequencies: np.ndarray) -> np.ndarray:
        """Full axis, or the selected band's slice of it in single-band mode."""
        if self.selection.mode == '1fBand' and frequencies.size:
            bins = self.partitioner.band_range(frequencies, self.selection.bands[0])
            return frequencies[bins]
        return frequencies

    def build_table(self, rows: Sequence[FeatureRow], frequencies: np.ndarray,
                    channel_names: Sequence[str]) -> FeatureTable:
        """Assemble rows, in the given order, into a feature table."""
        features_per_sample = len(channel_names) * self.features_per_channel
        for row in rows:
            if row.features.size != features_per_sample:
                raise ValueError(
                    f"Row '{row.epoch_id}' has {row.features.size} features, "
                    f"expected {features_per_sample}"
                )

        table = FeatureTable(
            rows=tuple(rows),
            features_per_channel=self.features_per_channel,
            features_per_sample=features_per_sample,
            frequency_axis=self.frequency_axis_used(frequencies),
            channel_names=list(channel_names),
            feature_names=self.selection.feature_names
        )
        logger.info(f"Built feature table: {len(table)} rows x {features_per_sample} features "
                    f"({self.selection.mode}, {self.transform.name})")
        return table

"""
End-to-end band feature extraction from loaded recordings.
"""
import logging
from dataclasses import replace
from typing import List, Optional, Sequence

import numpy as np
from joblib import Parallel, delayed

from ..config import HIGHPASS_CUTOFF_HZ, N_JOBS
from ..data.filtering import BandpassStage
from ..data.recording import Epoch, Recording
from ..data.segmentation import Segmenter
from .bands import BandSelection
from .build_features import FeatureAggregator, FeatureTable
from .spectral import make_transform

logger = logging.getLogger(__name__)


class BandFeatureExtractor:
    """Filter, segment and transform recordings into a band feature table."""

    def __init__(self, channel_count: int, segment_count: int,
                 sampling_frequency: float, total_duration: float,
                 segment_mode: str = 'general', band1: Optional[str] = None,
                 band2: Optional[str] = None, transform: str = 'directFFT',
                 highpass: bool = False, filter_per_epoch: bool = False,
                 n_jobs: int = N_JOBS):
        """
        Initialize the extractor. All options are validated here, before
        any signal is touched.

        Args:
            channel_count: Number of channels every recording must have
            segment_count: Epochs per recording, 1 disables segmentation
            sampling_frequency: Sampling rate in Hz
            total_duration: Nominal recording duration in seconds
            segment_mode: 'general', '1fBand', '2fBand' or '1fBand5features'
            band1: First band for the single/two-band modes
            band2: Second band for '2fBand'
            transform: 'directFFT', 'continuousDirect' or 'continuousViaFourier'
            highpass: Also remove content below 2 Hz
            filter_per_epoch: Filter each epoch instead of the whole recording
            n_jobs: joblib workers for per-epoch feature computation
        """
        if channel_count < 1:
            raise ValueError(f"Channel count must be >= 1, got {channel_count}")

        self.selection = BandSelection.from_options(segment_mode, band1, band2, transform)
        self.channel_count = channel_count
        self.sampling_frequency = float(sampling_frequency)
        self.segmenter = Segmenter(segment_count, total_duration, sampling_frequency)
        self.bandpass = BandpassStage(highpass_hz=HIGHPASS_CUTOFF_HZ if highpass else None)
        self.aggregator = FeatureAggregator(self.selection, make_transform(transform))
        self.filter_per_epoch = filter_per_epoch
        self.n_jobs = n_jobs

    @property
    def features_per_channel(self) -> int:
        return self.selection.features_per_channel

    @property
    def features_per_sample(self) -> int:
        return self.channel_count * self.features_per_channel

    def extract(self, recordings: Sequence[Recording]) -> FeatureTable:
        """
        Extract one feature row per epoch of every recording.

        Args:
            recordings: Loaded recordings, all with the configured channel
                count and sampling frequency

        Returns:
            FeatureTable with rows ordered recording-major, segment-minor
        """
        recordings = list(recordings)
        if not recordings:
            raise ValueError("No recordings to extract features from")
        for recording in recordings:
            self._check_recording(recording)

        logger.info(f"Extracting {self.selection.mode} features from {len(recordings)} recordings "
                    f"({self.segmenter.segment_count} segments, {self.aggregator.transform.name})")

        epochs = self.prepare_epochs(recordings)

        results = Parallel(n_jobs=self.n_jobs)(
            delayed(self.aggregator.epoch_features)(epoch, self.sampling_frequency)
            for epoch in epochs
        )
        rows = [row for row, _ in results]
        frequencies = results[-1][1] if results else np.empty(0)

        return self.aggregator.build_table(rows, frequencies, recordings[0].channel_names)

    def prepare_epochs(self, recordings: Sequence[Recording]) -> List[Epoch]:
        """Filter and segment recordings into epochs."""
        if self.filter_per_epoch:
            epochs = self.segmenter.segment_all(recordings)
            return [
                replace(epoch, data=self.bandpass.filter_signal(epoch.data, self.sampling_frequency))
                for epoch in epochs
            ]

        filtered = [self.bandpass.apply(recording) for recording in recordings]
        return self.segmenter.segment_all(filtered)

    def _check_recording(self, recording: Recording):
        if recording.n_channels != self.channel_count:
            raise ValueError(
                f"Recording '{recording.recording_id}' has {recording.n_channels} channels, "
                f"expected {self.channel_count}"
            )
        if not np.isclose(recording.sampling_frequency, self.sampling_frequency):
            raise ValueError(
                f"Recording '{recording.recording_id}' is sampled at "
                f"{recording.sampling_frequency} Hz, expected {self.sampling_frequency} Hz"
            )


def extract_band_features(recordings: Sequence[Recording], channel_count: int,
                          segment_count: int, sampling_frequency: float,
                          total_duration: float, **options) -> FeatureTable:
    """
    Extract band features from recordings in one call.

    Args:
        recordings: Loaded recordings
        channel_count: Channels per recording
        segment_count: Epochs per recording
        sampling_frequency: Sampling rate in Hz
        total_duration: Nominal recording duration in seconds
        **options: Further ``BandFeatureExtractor`` options

    Returns:
        FeatureTable
    """
    extractor = BandFeatureExtractor(
        channel_count, segment_count, sampling_frequency, total_duration, **options
    )
    return extractor.extract(recordings)

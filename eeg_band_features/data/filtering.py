"""
Out-of-band signal removal applied before feature extraction.
"""
import logging
from typing import Optional

import mne
import numpy as np
from scipy.signal import butter, sosfilt

from ..config import HIGHPASS_CUTOFF_HZ, LOWPASS_CUTOFF, LOWPASS_ORDER
from .recording import Recording

logger = logging.getLogger(__name__)


class BandpassStage:
    """Low-pass Butterworth filter with an optional high-pass stage."""

    def __init__(self, lowpass_order: int = LOWPASS_ORDER,
                 lowpass_cutoff: float = LOWPASS_CUTOFF,
                 highpass_hz: Optional[float] = None):
        """
        Initialize the filter stage.

        Args:
            lowpass_order: Butterworth filter order
            lowpass_cutoff: Cutoff normalized to the Nyquist frequency (0 < cutoff < 1)
            highpass_hz: High-pass cutoff in Hz, or None when the data is
                already free of low-frequency content
        """
        if not 0 < lowpass_cutoff < 1:
            raise ValueError(f"Normalized cutoff must be in (0, 1), got {lowpass_cutoff}")
        if highpass_hz is not None and highpass_hz <= 0:
            raise ValueError(f"High-pass cutoff must be positive, got {highpass_hz}")

        self.lowpass_order = lowpass_order
        self.lowpass_cutoff = lowpass_cutoff
        self.highpass_hz = highpass_hz
        # sos form, b/a coefficients are unstable at this order
        self._sos = butter(lowpass_order, lowpass_cutoff, btype='low', output='sos')

    @classmethod
    def with_highpass(cls, highpass_hz: float = HIGHPASS_CUTOFF_HZ, **kwargs) -> 'BandpassStage':
        return cls(highpass_hz=highpass_hz, **kwargs)

    def filter_signal(self, data: np.ndarray, sampling_frequency: float) -> np.ndarray:
        """
        Filter a samples x channels matrix along the time axis.

        Returns a new array; the input is left untouched.
        """
        filtered = sosfilt(self._sos, np.asarray(data, dtype=float), axis=0)

        if self.highpass_hz is not None:
            # mne expects channels x times
            filtered = mne.filter.filter_data(
                np.ascontiguousarray(filtered.T), sampling_frequency,
                l_freq=self.highpass_hz, h_freq=None, verbose=False
            ).T

        return filtered

    def apply(self, recording: Recording) -> Recording:
        """Filter every channel of a whole recording and return a new recording."""
        logger.debug(f"Filtering '{recording.recording_id}' "
                     f"(low-pass order {self.lowpass_order} at {self.lowpass_cutoff}, "
                     f"high-pass {self.highpass_hz or 'off'})")
        filtered = self.filter_signal(recording.data, recording.sampling_frequency)
        return recording.with_data(filtered)

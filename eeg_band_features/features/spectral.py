"""
Spectral transforms turning an epoch channel into a magnitude spectrum.

Every transform returns its own frequency axis together with the
magnitudes, ordered by ascending frequency along the first axis.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np
import pywt
from scipy import fft

from ..config import EDGE_TOLERANCES, TRANSFORMS, WAVELET_PARAMS
from ..exceptions import EmptySpectrum, InvalidModeCombination

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Spectrum:
    """Magnitude spectrum of one channel; ``magnitude`` rows follow ``frequencies``."""
    frequencies: np.ndarray
    magnitude: np.ndarray


class SpectralTransform(ABC):
    """Common interface of the spectral transforms."""

    name: str = ''

    @property
    def edge_tolerances(self) -> Dict[float, float]:
        """Band edge tolerances matching this transform's frequency resolution."""
        return EDGE_TOLERANCES[self.name]

    @abstractmethod
    def compute(self, signal: np.ndarray, sampling_frequency: float) -> Spectrum:
        """Compute the magnitude spectrum of a 1-D signal."""

    @staticmethod
    def _check_signal(signal: np.ndarray) -> np.ndarray:
        signal = np.asarray(signal, dtype=float)
        if signal.ndim != 1:
            raise ValueError(f"Expected a single channel, got shape {signal.shape}")
        if signal.size == 0:
            raise EmptySpectrum("Cannot transform an epoch with zero samples")
        return signal


class FourierTransform(SpectralTransform):
    """Direct discrete Fourier transform."""

    name = 'directFFT'

    def compute(self, signal: np.ndarray, sampling_frequency: float) -> Spectrum:
        signal = self._check_signal(signal)
        length_n = signal.size - 1
        if length_n == 0:
            raise EmptySpectrum("A single sample does not define a frequency axis")

        # k * fs / N for k = 0..N, one bin per sample of the inclusive epoch
        frequencies = sampling_frequency * np.arange(length_n + 1) / length_n
        magnitude = np.abs(fft.fft(signal))
        return Spectrum(frequencies=frequencies, magnitude=magnitude)


class WaveletTransform(SpectralTransform):
    """
    Continuous wavelet transform over a geometric frequency grid.

    ``method='conv'`` convolves in the time domain, ``method='fft'`` goes
    through the Fourier domain. Apart from the backend, the two variants
    differ only in grid density and edge tolerances.
    """

    def __init__(self, name: str = 'continuousDirect', wavelet: Optional[str] = None,
                 method: Optional[str] = None, min_freq: Optional[float] = None,
                 octaves: Optional[int] = None, voices_per_octave: Optional[int] = None):
        if name not in WAVELET_PARAMS:
            raise InvalidModeCombination(f"Unknown continuous transform: {name}")

        params = WAVELET_PARAMS[name]
        self.name = name
        self.wavelet = wavelet or params['wavelet']
        self.method = method or params['method']
        self.min_freq = min_freq or params['min_freq']
        self.octaves = octaves or params['octaves']
        self.voices_per_octave = voices_per_octave or params['voices_per_octave']

    def frequency_grid(self, sampling_frequency: float) -> np.ndarray:
        """Target frequencies in descending order, capped at Nyquist."""
        steps = np.arange(self.octaves * self.voices_per_octave + 1)
        frequencies = self.min_freq * 2.0 ** (steps / self.voices_per_octave)
        frequencies = frequencies[frequencies < sampling_frequency / 2]
        return frequencies[::-1]

    def compute(self, signal: np.ndarray, sampling_frequency: float) -> Spectrum:
        signal = self._check_signal(signal)

        target = self.frequency_grid(sampling_frequency)
        scales = pywt.central_frequency(self.wavelet) * sampling_frequency / target
        coefficients, frequencies = pywt.cwt(
            signal, scales, self.wavelet,
            sampling_period=1.0 / sampling_frequency, method=self.method
        )

        # pywt orders rows by increasing scale, i.e. from high to low frequency
        magnitude = np.abs(coefficients)[::-1]
        frequencies = np.asarray(frequencies)[::-1]
        return Spectrum(frequencies=frequencies, magnitude=magnitude)


def make_transform(name: str) -> SpectralTransform:
    """Build the spectral transform registered under ``name``."""
    if name == 'directFFT':
        return FourierTransform()
    if name in WAVELET_PARAMS:
        return WaveletTransform(name)
    raise InvalidModeCombination(f"Unknown transform '{name}', expected one of {TRANSFORMS}")

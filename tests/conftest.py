"""Shared fixtures: synthetic sinusoidal recordings."""
import numpy as np
import pytest

from eeg_band_features.data import Recording


def sine_recording(sampling_frequency=2000.0, duration=4.0, n_channels=3,
                   frequencies=None, amplitude=1.0, noise=1e-6,
                   recording_id='R1', label='AD', seed=0):
    """
    Build a recording sampled from t=0 to t=duration inclusive.

    ``frequencies`` maps channel index to the frequency (Hz) of a sine on
    that channel; other channels carry only low-level noise.
    """
    rng = np.random.default_rng(seed)
    n_samples = int(round(duration * sampling_frequency)) + 1
    times = np.arange(n_samples) / sampling_frequency
    data = noise * rng.standard_normal((n_samples, n_channels))
    for channel, freq in (frequencies or {}).items():
        data[:, channel] += amplitude * np.sin(2 * np.pi * freq * times)

    return Recording(
        data=data,
        times=times,
        sampling_frequency=sampling_frequency,
        recording_id=recording_id,
        label=label,
        channel_names=[f"C{i}" for i in range(n_channels)]
    )


@pytest.fixture
def make_recording():
    return sine_recording


@pytest.fixture
def alpha_recording():
    """10 Hz sine on channel 0, noise on channels 1 and 2."""
    return sine_recording(frequencies={0: 10.0})

import numpy as np
import pytest

from eeg_band_features.config import EDGE_TOLERANCES
from eeg_band_features.features import (
    BandPartitioner, BandSelection, WaveletTransform, split_range
)
from eeg_band_features.exceptions import (
    BandEdgeNotFound, DuplicateBand, EmptySpectrum, InvalidBandName,
    InvalidModeCombination
)

# 4 s epoch at 2000 Hz: 0.25 Hz bins
FFT_AXIS = 2000 * np.arange(8001) / 8000


@pytest.fixture
def fft_partitioner():
    return BandPartitioner(EDGE_TOLERANCES['directFFT'])


def test_delta_and_theta_ranges(fft_partitioner):
    # 1.75 Hz is already within 0.3 Hz of the 2 Hz edge
    assert fft_partitioner.band_range(FFT_AXIS, 'delta') == slice(7, 16)
    assert fft_partitioner.band_range(FFT_AXIS, 'theta') == slice(16, 32)


def test_general_partition_is_contiguous(fft_partitioner):
    ranges = fft_partitioner.partition(FFT_AXIS)

    assert list(ranges) == ['delta', 'theta', 'alpha', 'beta', 'gamma']
    bands = list(ranges.values())
    for previous, current in zip(bands, bands[1:]):
        assert current.start == previous.stop
    assert ranges['gamma'] == slice(120, 200)


def test_split_range():
    parts = split_range(slice(7, 16), 5)

    assert parts == [slice(7, 8), slice(8, 9), slice(9, 10), slice(10, 11), slice(11, 16)]


def test_split_range_too_narrow():
    with pytest.raises(EmptySpectrum):
        split_range(slice(10, 13), 5)


def test_first_match_wins():
    partitioner = BandPartitioner({4: 0.3})
    assert partitioner.edge_index(np.array([3.8, 3.9, 4.0, 4.1]), 4) == 0


def test_edge_not_found_on_coarse_axis(fft_partitioner):
    with pytest.raises(BandEdgeNotFound):
        fft_partitioner.band_range(np.arange(0, 100, 5.0), 'delta')


def test_edge_without_tolerance():
    with pytest.raises(BandEdgeNotFound):
        BandPartitioner({4: 0.3}).edge_index(FFT_AXIS, 8)


def test_empty_band():
    # 4 Hz and 8 Hz both match the 2 Hz bin
    axis = np.array([0.0, 2.0, 6.0, 60.0])
    partitioner = BandPartitioner({4: 2.5, 8: 6.5})
    with pytest.raises(EmptySpectrum):
        partitioner.band_range(axis, 'theta')


@pytest.mark.parametrize('name', ['continuousDirect', 'continuousViaFourier'])
def test_wavelet_delta_starts_at_axis_start(name):
    axis = WaveletTransform(name).frequency_grid(256)[::-1]
    ranges = BandPartitioner(EDGE_TOLERANCES[name]).partition(axis)

    assert ranges['delta'].start == 0
    assert axis[ranges['gamma'].stop - 1] == pytest.approx(50, abs=6)


def test_selection_feature_counts():
    assert BandSelection.from_options().features_per_channel == 5
    assert BandSelection.from_options('1fBand', 'alpha').features_per_channel == 1
    assert BandSelection.from_options('2fBand', 'alpha', 'beta').bands == ('alpha', 'beta')
    split = BandSelection.from_options('1fBand5features', 'delta')
    assert split.features_per_channel == 5
    assert split.feature_names == ['delta_1', 'delta_2', 'delta_3', 'delta_4', 'delta_5']


def test_selection_feature_ranges(fft_partitioner):
    selection = BandSelection.from_options('2fBand', 'theta', 'delta')
    assert selection.feature_ranges(fft_partitioner, FFT_AXIS) == [slice(16, 32), slice(7, 16)]


def test_invalid_band_names():
    with pytest.raises(InvalidBandName):
        BandSelection.from_options('1fBand', 'mu')
    with pytest.raises(InvalidBandName):
        BandSelection.from_options('1fBand')
    with pytest.raises(InvalidBandName):
        BandSelection.from_options('2fBand', 'alpha')


def test_duplicate_band():
    with pytest.raises(DuplicateBand):
        BandSelection.from_options('2fBand', 'beta', 'beta')


@pytest.mark.parametrize('mode, transform', [
    ('2fBand', 'continuousDirect'),
    ('1fBand5features', 'continuousViaFourier'),
    ('allBands', 'directFFT'),
    ('general', 'hilbert'),
])
def test_invalid_mode_combinations(mode, transform):
    with pytest.raises(InvalidModeCombination):
        BandSelection.from_options(mode, 'alpha', 'beta', transform)

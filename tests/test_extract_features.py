import numpy as np
import pytest

from eeg_band_features.features import BandFeatureExtractor, extract_band_features
from eeg_band_features.exceptions import (
    DuplicateBand, InvalidBandName, InvalidModeCombination
)


def test_feature_table_dimensions(make_recording):
    recording = make_recording(sampling_frequency=2000, duration=12.0, n_channels=23)
    extractor = BandFeatureExtractor(channel_count=23, segment_count=3,
                                     sampling_frequency=2000, total_duration=12.0)

    table = extractor.extract([recording])

    assert extractor.segmenter.segment_length_n == 8000
    assert len(table) == 3
    assert table.features_per_channel == 5
    assert table.features_per_sample == 115
    assert table.feature_matrix().shape == (3, 115)
    assert table.ids == ['R10', 'R11', 'R12']
    assert table.labels == ['AD', 'AD', 'AD']


def test_alpha_sine_dominates_alpha_feature(alpha_recording):
    table = extract_band_features([alpha_recording], channel_count=3, segment_count=1,
                                  sampling_frequency=2000, total_duration=4.0)
    bands = table.channel_features(0)[0]
    alpha = bands[2]

    assert table.feature_names == ['delta', 'theta', 'alpha', 'beta', 'gamma']
    assert np.all(alpha > 10 * np.delete(bands, 2))
    for channel in (1, 2):
        assert alpha > 100 * table.channel_features(channel)[0, 2]


def test_to_frame_columns(alpha_recording):
    table = extract_band_features([alpha_recording], 3, 1, 2000, 4.0,
                                  segment_mode='2fBand', band1='alpha', band2='theta')
    frame = table.to_frame()

    assert list(frame.columns) == [
        'id', 'label', 'C0_alpha', 'C0_theta', 'C1_alpha', 'C1_theta', 'C2_alpha', 'C2_theta'
    ]
    assert frame['id'].tolist() == ['R10']
    np.testing.assert_allclose(frame.iloc[:, 2:].to_numpy(), table.feature_matrix())


def test_single_band_frequency_axis(alpha_recording):
    single = extract_band_features([alpha_recording], 3, 1, 2000, 4.0,
                                   segment_mode='1fBand', band1='alpha')
    general = extract_band_features([alpha_recording], 3, 1, 2000, 4.0)

    expected = 2000 * np.arange(32, 48) / 8000
    np.testing.assert_allclose(single.frequency_axis, expected)
    assert general.frequency_axis.size == 8001
    assert single.feature_matrix().shape == (1, 3)
    np.testing.assert_allclose(single.feature_matrix()[0], general.feature_matrix()[0, 2::5])


def test_split_band_features(alpha_recording):
    table = extract_band_features([alpha_recording], 3, 1, 2000, 4.0,
                                  segment_mode='1fBand5features', band1='beta')

    assert table.feature_matrix().shape == (1, 15)
    assert table.columns[:5] == ['C0_beta_1', 'C0_beta_2', 'C0_beta_3', 'C0_beta_4', 'C0_beta_5']


def test_rows_are_recording_major(make_recording):
    recordings = [
        make_recording(sampling_frequency=256, duration=4.0, recording_id='A', label='AD'),
        make_recording(sampling_frequency=256, duration=4.0, recording_id='B', label='HC')
    ]
    table = extract_band_features(recordings, 3, 2, 256, 4.0)

    assert table.ids == ['A0', 'A1', 'B0', 'B1']
    assert table.labels == ['AD', 'AD', 'HC', 'HC']


def test_parallel_matches_serial(make_recording):
    recordings = [make_recording(sampling_frequency=256, duration=4.0, recording_id=rid,
                                 frequencies={0: 6.0, 1: 20.0}, seed=i)
                  for i, rid in enumerate(('A', 'B'))]

    serial = extract_band_features(recordings, 3, 2, 256, 4.0, n_jobs=1)
    parallel = extract_band_features(recordings, 3, 2, 256, 4.0, n_jobs=2)

    assert parallel.ids == serial.ids
    np.testing.assert_allclose(parallel.feature_matrix(), serial.feature_matrix())


def test_filter_per_epoch(alpha_recording):
    whole = extract_band_features([alpha_recording], 3, 1, 2000, 4.0)
    per_epoch = extract_band_features([alpha_recording], 3, 1, 2000, 4.0, filter_per_epoch=True)

    # a single epoch spans the whole recording
    np.testing.assert_allclose(per_epoch.feature_matrix(), whole.feature_matrix())


def test_highpass_option_is_wired():
    extractor = BandFeatureExtractor(3, 1, 2000, 4.0, highpass=True)
    assert extractor.bandpass.highpass_hz == 2.0
    assert BandFeatureExtractor(3, 1, 2000, 4.0).bandpass.highpass_hz is None


def test_wavelet_pipeline(make_recording):
    recording = make_recording(sampling_frequency=256, duration=4.0, n_channels=2,
                               frequencies={1: 5.0})
    table = extract_band_features([recording], 2, 2, 256, 4.0, transform='continuousDirect')

    assert table.feature_matrix().shape == (2, 10)
    assert np.all(np.diff(table.frequency_axis) > 0)
    # the 5 Hz sine on channel 1 lands in theta
    theta = table.channel_features(1)[:, 1]
    assert np.all(theta > 10 * table.channel_features(0)[:, 1])


def test_recording_is_not_modified(alpha_recording):
    before = alpha_recording.data.copy()
    extract_band_features([alpha_recording], 3, 2, 2000, 4.0)
    np.testing.assert_array_equal(alpha_recording.data, before)


def test_recording_mismatches(make_recording):
    extractor = BandFeatureExtractor(3, 1, 256, 4.0)

    with pytest.raises(ValueError):
        extractor.extract([make_recording(sampling_frequency=256, duration=4.0, n_channels=2)])
    with pytest.raises(ValueError):
        extractor.extract([make_recording(sampling_frequency=250, duration=4.0)])
    with pytest.raises(ValueError):
        extractor.extract([])


@pytest.mark.parametrize('options, error', [
    ({'segment_mode': '1fBand', 'band1': 'mu'}, InvalidBandName),
    ({'segment_mode': '2fBand', 'band1': 'beta', 'band2': 'beta'}, DuplicateBand),
    ({'segment_mode': '2fBand', 'band1': 'alpha', 'band2': 'beta',
      'transform': 'continuousViaFourier'}, InvalidModeCombination),
    ({'transform': 'wigner'}, InvalidModeCombination),
])
def test_configuration_errors_at_construction(options, error):
    with pytest.raises(error):
        BandFeatureExtractor(3, 1, 2000, 4.0, **options)

"""
Configuration settings for the band feature extraction pipeline.
"""
import os
from typing import Dict, List, Tuple

# Signal processing parameters
TIME_MATCH_TOLERANCE = 1e-5  # absolute tolerance when matching a time to a sample

# Low-pass stage (normalized to Nyquist, i.e. 0.05 -> 50 Hz at 2000 Hz)
LOWPASS_ORDER = 10
LOWPASS_CUTOFF = 0.05

# High-pass stage, disabled unless the raw data still contains 0-2 Hz content
HIGHPASS_CUTOFF_HZ = 2.0

# Frequency bands for spectral analysis
FREQUENCY_BANDS: Dict[str, Tuple[float, float]] = {
    'delta': (2, 4),
    'theta': (4, 8),
    'alpha': (8, 12),
    'beta': (12, 30),
    'gamma': (30, 50)
}
BAND_NAMES: List[str] = list(FREQUENCY_BANDS)

# Band selection modes and the number of features each produces per channel
SEGMENT_MODES = ('general', '1fBand', '2fBand', '1fBand5features')
SPLIT_FEATURE_COUNT = 5

# Spectral transforms
TRANSFORMS = ('directFFT', 'continuousDirect', 'continuousViaFourier')

SUPPORTED_MODES = {
    'directFFT': SEGMENT_MODES,
    'continuousDirect': ('general', '1fBand'),
    'continuousViaFourier': ('general', '1fBand'),
}

# Band edge (Hz) -> matching tolerance (Hz), per transform.
# Continuous transforms have no 2 Hz entry: delta starts at the axis start.
EDGE_TOLERANCES: Dict[str, Dict[float, float]] = {
    'directFFT': {2: 0.3, 4: 0.3, 8: 0.3, 12: 0.3, 30: 0.3, 50: 0.3},
    'continuousDirect': {4: 0.7, 8: 0.4, 12: 0.4, 30: 1.0, 50: 1.0},
    'continuousViaFourier': {4: 0.6, 8: 0.9, 12: 0.6, 30: 4.5, 50: 5.7},
}

# Continuous wavelet scale grids (geometric in frequency, anchored at min_freq)
WAVELET_PARAMS = {
    'continuousDirect': {
        'wavelet': 'cmor1.5-1.0',
        'method': 'conv',
        'min_freq': 1.0,
        'octaves': 6,
        'voices_per_octave': 20
    },
    'continuousViaFourier': {
        'wavelet': 'cmor1.5-1.0',
        'method': 'fft',
        'min_freq': 1.0,
        'octaves': 6,
        'voices_per_octave': 8
    }
}

# Parallel feature computation (joblib n_jobs, 1 = serial)
N_JOBS = int(os.getenv('EEG_BAND_FEATURES_N_JOBS', '1'))

# Logging configuration
LOGGING_CONFIG = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'standard': {
            'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        },
    },
    'handlers': {
        'default': {
            'level': 'INFO',
            'formatter': 'standard',
            'class': 'logging.StreamHandler',
        },
    },
    'loggers': {
        '': {
            'handlers': ['default'],
            'level': os.getenv('EEG_BAND_FEATURES_LOG_LEVEL', 'INFO'),
            'propagate': False
        }
    }
}

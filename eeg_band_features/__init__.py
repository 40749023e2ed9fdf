"""
EEG Band Feature Extraction Package

Segments multi-channel recordings into epochs and turns them into
per-channel frequency-band magnitude features for classification.
"""

__version__ = "0.1.0"

from .config import FREQUENCY_BANDS, BAND_NAMES, SEGMENT_MODES, TRANSFORMS
from .data import Recording, Epoch, Segmenter, BandpassStage, find_time_index
from .features import (
    BandFeatureExtractor,
    BandPartitioner,
    BandSelection,
    FeatureAggregator,
    FeatureTable,
    extract_band_features
)

# Define what gets imported with "from eeg_band_features import *"
__all__ = [
    'FREQUENCY_BANDS',
    'BAND_NAMES',
    'SEGMENT_MODES',
    'TRANSFORMS',
    'Recording',
    'Epoch',
    'Segmenter',
    'BandpassStage',
    'find_time_index',
    'BandFeatureExtractor',
    'BandPartitioner',
    'BandSelection',
    'FeatureAggregator',
    'FeatureTable',
    'extract_band_features'
]

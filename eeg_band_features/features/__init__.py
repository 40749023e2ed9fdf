"""
Spectral transforms, band partitioning and feature aggregation.
"""

from .spectral import Spectrum, SpectralTransform, FourierTransform, WaveletTransform, make_transform
from .bands import BandPartitioner, BandSelection, split_range
from .build_features import FeatureAggregator, FeatureRow, FeatureTable
from .extract_features import BandFeatureExtractor, extract_band_features

__all__ = [
    'Spectrum',
    'SpectralTransform',
    'FourierTransform',
    'WaveletTransform',
    'make_transform',
    'BandPartitioner',
    'BandSelection',
    'split_range',
    'FeatureAggregator',
    'FeatureRow',
    'FeatureTable',
    'BandFeatureExtractor',
    'extract_band_features'
]

"""
Partitioning of a frequency axis into named physiological bands.
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from ..config import (
    BAND_NAMES, FREQUENCY_BANDS, SEGMENT_MODES, SPLIT_FEATURE_COUNT,
    SUPPORTED_MODES, TRANSFORMS
)
from ..exceptions import (
    BandEdgeNotFound, DuplicateBand, EmptySpectrum, InvalidBandName,
    InvalidModeCombination
)

logger = logging.getLogger(__name__)


def _check_band_name(band: Optional[str], option: str) -> str:
    if band not in FREQUENCY_BANDS:
        raise InvalidBandName(f"Invalid {option} '{band}', expected one of {BAND_NAMES}")
    return band


@dataclass(frozen=True)
class BandSelection:
    """
    Which bands a run materializes, resolved once from the mode options.

    Attributes:
        mode: One of 'general', '1fBand', '2fBand', '1fBand5features'
        bands: Selected band names, in column order
        features_per_channel: Number of feature columns per channel
    """
    mode: str
    bands: Tuple[str, ...]
    features_per_channel: int

    @classmethod
    def from_options(cls, mode: str = 'general', band1: Optional[str] = None,
                     band2: Optional[str] = None,
                     transform: str = 'directFFT') -> 'BandSelection':
        """
        Validate the mode options and build the selection.

        Raises:
            InvalidModeCombination: Unknown mode or transform, or an unsupported pair
            InvalidBandName: A required band name is missing or unknown
            DuplicateBand: Two-band mode given the same band twice
        """
        if mode not in SEGMENT_MODES:
            raise InvalidModeCombination(f"Unknown mode '{mode}', expected one of {SEGMENT_MODES}")
        if transform not in TRANSFORMS:
            raise InvalidModeCombination(f"Unknown transform '{transform}', expected one of {TRANSFORMS}")
        if mode not in SUPPORTED_MODES[transform]:
            raise InvalidModeCombination(
                f"Mode '{mode}' is not supported with transform '{transform}', "
                f"use one of {SUPPORTED_MODES[transform]}"
            )

        if mode == 'general':
            return cls(mode, tuple(BAND_NAMES), len(BAND_NAMES))
        if mode == '1fBand':
            return cls(mode, (_check_band_name(band1, 'band1'),), 1)
        if mode == '1fBand5features':
            return cls(mode, (_check_band_name(band1, 'band1'),), SPLIT_FEATURE_COUNT)

        first = _check_band_name(band1, 'band1')
        second = _check_band_name(band2, 'band2')
        if first == second:
            raise DuplicateBand(f"Both bands are '{first}', use mode '1fBand' instead")
        return cls(mode, (first, second), 2)

    @property
    def feature_names(self) -> List[str]:
        """Column suffix of each feature within one channel."""
        if self.mode == '1fBand5features':
            return [f"{self.bands[0]}_{k + 1}" for k in range(self.features_per_channel)]
        return list(self.bands)

    def feature_ranges(self, partitioner: 'BandPartitioner',
                       frequencies: np.ndarray) -> List[slice]:
        """Bin range of every feature column, in column order."""
        if self.mode == '1fBand5features':
            parent = partitioner.band_range(frequencies, self.bands[0])
            return split_range(parent, self.features_per_channel)
        return [partitioner.band_range(frequencies, band) for band in self.bands]


def split_range(bins: slice, parts: int = SPLIT_FEATURE_COUNT) -> List[slice]:
    """
    Divide a bin range into contiguous sub-ranges of floor-divided size.

    The last sub-range absorbs the remainder.
    """
    size = (bins.stop - bins.start) // parts
    if size == 0:
        raise EmptySpectrum(
            f"Band range of {bins.stop - bins.start} bins cannot be split into {parts} features"
        )
    starts = [bins.start + k * size for k in range(parts)]
    stops = starts[1:] + [bins.stop]
    return [slice(start, stop) for start, stop in zip(starts, stops)]


class BandPartitioner:
    """Locate band edges on a frequency axis by tolerance-based first match."""

    def __init__(self, edge_tolerances: Dict[float, float]):
        """
        Args:
            edge_tolerances: Band edge in Hz -> accepted deviation in Hz. When
                the lowest band's lower edge is absent, that band starts at
                the beginning of the axis.
        """
        self.edge_tolerances = dict(edge_tolerances)

    def edge_index(self, frequencies: np.ndarray, edge: float) -> int:
        """
        Index of the first bin within tolerance of a band edge.

        Raises:
            BandEdgeNotFound: If no bin lies within tolerance
        """
        tolerance = self.edge_tolerances.get(edge)
        if tolerance is None:
            raise BandEdgeNotFound(f"No tolerance configured for the {edge} Hz edge")

        matches = np.flatnonzero(np.abs(np.asarray(frequencies) - edge) < tolerance)
        if matches.size == 0:
            raise BandEdgeNotFound(
                f"No frequency bin within {tolerance} Hz of the {edge} Hz edge; "
                f"tolerance is too tight for the transform's resolution"
            )
        return int(matches[0])

    def band_range(self, frequencies: np.ndarray, band: str) -> slice:
        """Bins belonging to a band, as a slice over the frequency axis."""
        low, high = FREQUENCY_BANDS[_check_band_name(band, 'band')]

        if band == BAND_NAMES[0]:
            start = self.edge_index(frequencies, low) if low in self.edge_tolerances else 0
        else:
            start = self.edge_index(frequencies, low) + 1
        stop = self.edge_index(frequencies, high) + 1

        if stop <= start:
            raise EmptySpectrum(f"Band '{band}' contains no frequency bins")
        return slice(start, stop)

    def partition(self, frequencies: np.ndarray) -> Dict[str, slice]:
        """Bin ranges of all five bands."""
        return {band: self.band_range(frequencies, band) for band in BAND_NAMES}

"""
Exceptions raised by the band feature extraction pipeline.

All of them derive from ``ValueError`` so callers that already guard
against bad input with ``except ValueError`` keep working.
"""


class BandFeatureError(ValueError):
    """Base class for pipeline errors."""


# Configuration errors, raised before any numeric work starts

class ConfigurationError(BandFeatureError):
    """Invalid extraction options."""


class InvalidBandName(ConfigurationError):
    """A band name is not one of delta, theta, alpha, beta, gamma."""


class DuplicateBand(ConfigurationError):
    """Two-band mode was given the same band twice."""


class InvalidModeCombination(ConfigurationError):
    """Unknown mode or transform, or a mode the transform does not support."""


# Data errors, raised while processing and never skipped

class NoMatchFound(BandFeatureError):
    """No sample lies within tolerance of a requested time."""


class InconsistentSegmentLength(BandFeatureError):
    """Epochs of one run disagree on their length in samples."""


class EmptySpectrum(BandFeatureError):
    """A transform or a band range received no samples."""


class BandEdgeNotFound(BandFeatureError):
    """No frequency bin lies within tolerance of a band edge."""

"""
Recording containers, segmentation and filtering.
"""

from .recording import Recording, Epoch
from .segmentation import Segmenter, find_time_index, truncate_to_sample
from .filtering import BandpassStage

__all__ = [
    # Containers
    'Recording',
    'Epoch',

    # Segmentation
    'Segmenter',
    'find_time_index',
    'truncate_to_sample',

    # Filtering
    'BandpassStage'
]

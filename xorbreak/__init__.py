"""
xorbreak - statistical recovery of single-byte and repeating-key XOR

English letter and space frequencies are the only oracle: every candidate
key is judged by how English-like its decoded text looks.
"""

from .__version__ import __version__
from .analysis import (
    frequency_score,
    chi_square_score,
    pick_best,
    hamming_distance,
    ScoringStrategy
)
from .breakers import (
    break_single_byte,
    break_repeating_key,
    SingleByteBreaker,
    RepeatingKeyBreaker
)
from .config import BreakerConfig
from .error_handling import (
    XorBreakError,
    InputError,
    LengthMismatchError,
    InsufficientDataError,
    ConfigurationError
)
from .models import SingleByteAnswer, KeysizeCandidate, KeyRecoveryAnswer

__all__ = [
    '__version__',
    'frequency_score',
    'chi_square_score',
    'pick_best',
    'hamming_distance',
    'ScoringStrategy',
    'break_single_byte',
    'break_repeating_key',
    'SingleByteBreaker',
    'RepeatingKeyBreaker',
    'BreakerConfig',
    'XorBreakError',
    'InputError',
    'LengthMismatchError',
    'InsufficientDataError',
    'ConfigurationError',
    'SingleByteAnswer',
    'KeysizeCandidate',
    'KeyRecoveryAnswer'
]

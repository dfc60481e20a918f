"""Statistical scoring and distance primitives"""

from .frequency import ENGLISH_FREQ, ALPHABET
from .hamming import hamming_distance
from .scorer import (
    ScoringStrategy,
    count_buckets,
    frequency_score,
    chi_square_score,
    score_text,
    select_best_index,
    pick_best
)

__all__ = [
    'ENGLISH_FREQ',
    'ALPHABET',
    'hamming_distance',
    'ScoringStrategy',
    'count_buckets',
    'frequency_score',
    'chi_square_score',
    'score_text',
    'select_best_index',
    'pick_best'
]

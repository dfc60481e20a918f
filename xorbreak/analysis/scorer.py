"""
English-likeness scoring.

Two scores share one character-counting primitive:

- ``frequency_score``: sum of bucket counts weighted by the expected
  English frequency of each bucket. Higher means more English-like.
- ``chi_square_score``: Pearson chi-squared deviation of the observed
  bucket counts from the counts expected for English of the same
  effective length. Lower means more English-like.

The two are not comparable with each other; callers pick one and keep it.
"""

from enum import Enum
from typing import List, Sequence, Tuple, Union

from .frequency import ENGLISH_FREQ, bucket_index
from ..error_handling import create_error

TextLike = Union[str, bytes, bytearray, memoryview]


class ScoringStrategy(Enum):
    """Which Englishness score to compute"""
    FREQUENCY = "frequency"      # higher is better
    CHI_SQUARED = "chi_squared"  # lower is better

    @property
    def higher_is_better(self) -> bool:
        return self is ScoringStrategy.FREQUENCY


def _as_text(text: TextLike) -> str:
    if isinstance(text, str):
        return text
    return bytes(text).decode('utf-8', errors='replace')


def count_buckets(text: TextLike) -> Tuple[List[int], int]:
    """
    Count letters (case-insensitive) and spaces of a text.

    Returns:
        Tuple of (27 bucket counts, number of characters outside the buckets)
    """
    counts = [0] * len(ENGLISH_FREQ)
    ignored = 0
    for char in _as_text(text):
        index = bucket_index(char)
        if index < 0:
            ignored += 1
        else:
            counts[index] += 1
    return counts, ignored


def frequency_score(text: TextLike) -> float:
    """
    Score text by its letter and space content.

    Each letter (either case) and each space adds the expected English
    frequency of its bucket; every other character adds nothing. Empty or
    fully non-alphabetic text scores 0.0.
    """
    counts, _ = count_buckets(text)
    return sum(count * expected for count, expected in zip(counts, ENGLISH_FREQ))


def chi_square_score(text: TextLike) -> float:
    """
    Chi-squared deviation of text from English letter and space frequencies.

    Whitespace other than space, punctuation, digits and non-ASCII
    characters are ignored and do not count towards the effective length.

    Raises:
        ZeroDivisionError: if no character of the text falls in a bucket.
            Callers must avoid empty or fully ignored input.
    """
    text = _as_text(text)
    counts, ignored = count_buckets(text)
    length = len(text) - ignored

    chi2 = 0.0
    for observed, frequency in zip(counts, ENGLISH_FREQ):
        expected = length * frequency
        difference = observed - expected
        chi2 += (difference * difference) / expected

    return chi2


def score_text(text: TextLike, strategy: ScoringStrategy = ScoringStrategy.FREQUENCY) -> float:
    """Compute the score selected by ``strategy``"""
    if strategy is ScoringStrategy.CHI_SQUARED:
        return chi_square_score(text)
    return frequency_score(text)


def select_best_index(scores: Sequence[float]) -> int:
    """
    Index of the strictly highest score.

    Scores are scanned in order and only a strictly greater score replaces
    the current best, so the first of several equal maxima wins.
    """
    if not scores:
        raise create_error("no_candidates")

    best_index = 0
    best_score = scores[0]
    for index in range(1, len(scores)):
        if scores[index] > best_score:
            best_index = index
            best_score = scores[index]
    return best_index


def pick_best(candidates: Sequence[str]) -> str:
    """Return the candidate with the highest frequency score, first on ties"""
    candidates = list(candidates)
    return candidates[select_best_index([frequency_score(c) for c in candidates])]

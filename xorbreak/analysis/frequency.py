"""
Reference English character frequencies.

Relative frequencies of the letters a-z followed by the space character.
The letter values are the usual per-letter corpus figures and the space
value is measured against the same letter count, so the raw table is
renormalized to sum to 1.0.
"""

from typing import Tuple

ALPHABET = "abcdefghijklmnopqrstuvwxyz "

SPACE_INDEX = 26

_RAW_FREQ = (
    0.08167, 0.01492, 0.02782, 0.04253, 0.12702, 0.02228, 0.02015,  # a-g
    0.06094, 0.06966, 0.00153, 0.00772, 0.04025, 0.02406, 0.06749,  # h-n
    0.07507, 0.01929, 0.00095, 0.05987, 0.06327, 0.09056, 0.02758,  # o-u
    0.00978, 0.02360, 0.00150, 0.01974, 0.00074, 0.19181,           # v-z, space
)

ENGLISH_FREQ: Tuple[float, ...] = tuple(f / sum(_RAW_FREQ) for f in _RAW_FREQ)


def bucket_index(char: str) -> int:
    """
    Map a character to its frequency bucket.

    ASCII letters (either case) map to 0-25, space maps to 26 and anything
    else returns -1.
    """
    code = ord(char)
    if 97 <= code <= 122:
        return code - 97
    if 65 <= code <= 90:
        return code - 65
    if code == 32:
        return SPACE_INDEX
    return -1

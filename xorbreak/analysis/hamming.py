"""Bitwise Hamming distance between byte sequences"""

from typing import Union

from ..error_handling import LengthMismatchError

BytesLike = Union[bytes, bytearray, memoryview]


def hamming_distance(left: BytesLike, right: BytesLike) -> int:
    """
    Count the differing bits between two equal-length byte sequences.

    Raises:
        LengthMismatchError: if the sequences differ in length
    """
    if len(left) != len(right):
        raise LengthMismatchError(len(left), len(right))

    return sum(bin(a ^ b).count('1') for a, b in zip(bytes(left), bytes(right)))

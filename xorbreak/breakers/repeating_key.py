"""
Repeating-key XOR breaker

Recovers a repeating XOR key in four sequential stages:

1. Estimate keysize: for every keysize with enough ciphertext, compare the
   first few blocks pairwise by Hamming distance, normalize per byte of
   block and keep the smallest few. Blocks encrypted under the same key
   bytes keep the plaintext's bit structure, so the right keysize (or a
   multiple of it) tends to have a low normalized distance.
2. Transpose: cut the ciphertext into full blocks of the keysize and
   regroup byte i of every block into column i.
3. Solve columns: each column was XORed with a single key byte, so the
   single-byte breaker recovers it.
4. Verify and rank: decode the whole ciphertext with each candidate key
   and keep the most English-like result.

Every stage is a map over independent tasks followed by a reduction with a
deterministic tie-break, so the answer does not depend on the executor or
the worker count.
"""

import logging
from functools import partial
from typing import List, Optional, Sequence, Union

from ..analysis.hamming import hamming_distance
from ..analysis.scorer import frequency_score, select_best_index
from ..config import BreakerConfig
from ..error_handling import InsufficientDataError, ErrorContext, create_error
from ..models import KeyRecoveryAnswer, KeysizeCandidate
from ..parallel import SERIAL_POOL
from ..utils.xor_tools import XORTools
from .single_byte import break_single_byte, decode_lossy

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]


def _estimate_keysize(ciphertext: bytes, sample_blocks: int, keysize: int) -> KeysizeCandidate:
    blocks = [ciphertext[i * keysize:(i + 1) * keysize] for i in range(sample_blocks)]
    total = sum(hamming_distance(blocks[i], blocks[i + 1]) for i in range(sample_blocks - 1))
    return KeysizeCandidate(
        keysize=keysize,
        normalized_distance=total / ((sample_blocks - 1) * keysize)
    )


def _solve_column(column: bytes) -> int:
    # Already running inside a pool task; keep the 256 trials inline.
    return break_single_byte(column, SERIAL_POOL).key


def _decode_with_key(ciphertext: bytes, key: bytes) -> KeyRecoveryAnswer:
    plaintext = decode_lossy(XORTools.repeating_key_xor(ciphertext, key))
    return KeyRecoveryAnswer(key=key, plaintext=plaintext, score=frequency_score(plaintext))


class RepeatingKeyBreaker:
    """
    Breaks repeating-key XOR by Hamming-distance keysize estimation and
    per-column single-byte analysis.

    After a run, ``candidates`` holds the retained keysize candidates and
    ``answers`` the verified answers in keysize order.
    """

    def __init__(self, config: Optional[BreakerConfig] = None):
        self.config = config or BreakerConfig()
        self.pool = self.config.create_pool()
        self.candidates: List[KeysizeCandidate] = []
        self.answers: List[KeyRecoveryAnswer] = []

    def candidate_keysizes(self, data_length: int) -> List[int]:
        """Keysizes in the configured range with enough full sample blocks"""
        blocks = self.config.sample_blocks
        return [k for k in range(self.config.min_keysize, self.config.max_keysize + 1)
                if blocks * k <= data_length]

    def estimate_keysizes(self, ciphertext: BytesLike) -> List[KeysizeCandidate]:
        """
        Rank keysizes by normalized Hamming distance of adjacent blocks.

        Returns:
            The ``keysize_candidates`` smallest-distance candidates, ascending
            by distance (smaller keysize first on equal distance)

        Raises:
            InsufficientDataError: if no keysize has enough full blocks
        """
        data = bytes(ciphertext)
        keysizes = self.candidate_keysizes(len(data))
        if not keysizes:
            raise InsufficientDataError(len(data), self.config.min_data_length)

        estimates = self.pool.map(
            partial(_estimate_keysize, data, self.config.sample_blocks), keysizes
        )
        ranked = sorted(estimates, key=lambda c: (c.normalized_distance, c.keysize))
        self.candidates = ranked[:self.config.keysize_candidates]

        logger.debug("Keysize candidates: " + ", ".join(str(c) for c in self.candidates))
        return self.candidates

    @staticmethod
    def transpose(ciphertext: BytesLike, keysize: int) -> List[bytes]:
        """
        Regroup the full blocks of the ciphertext into ``keysize`` columns.

        Trailing bytes that do not fill a whole block are dropped.
        """
        if keysize < 1:
            raise create_error("invalid_keysize", keysize=keysize)
        data = bytes(ciphertext)
        usable = (len(data) // keysize) * keysize
        return [data[i:usable:keysize] for i in range(keysize)]

    def solve_columns(self, columns: Sequence[bytes]) -> bytes:
        """Recover one key byte per column, concatenated in column order"""
        return bytes(self.pool.map(_solve_column, list(columns)))

    def verify_and_rank(self, ciphertext: BytesLike, keys: Sequence[bytes]) -> KeyRecoveryAnswer:
        """
        Decode the whole ciphertext with each key and pick the best.

        Answers are ranked in keysize order; the strictly highest frequency
        score wins, so the shortest key wins a tie.
        """
        data = bytes(ciphertext)
        ordered = sorted(keys, key=len)
        answers = self.pool.map(partial(_decode_with_key, data), ordered)
        self.answers = answers
        return answers[select_best_index([answer.score for answer in answers])]

    def solve_keysize(self, ciphertext: BytesLike, keysize: int) -> KeyRecoveryAnswer:
        """Run transposition, column solving and decoding for one keysize"""
        data = bytes(ciphertext)
        if len(data) < keysize:
            raise InsufficientDataError(
                len(data), keysize, context=ErrorContext(data_length=len(data), keysize=keysize)
            )
        key = self.solve_columns(self.transpose(data, keysize))
        return self.verify_and_rank(data, [key])

    def break_ciphertext(self, ciphertext: BytesLike) -> KeyRecoveryAnswer:
        """Run all four stages and return the best-scoring answer"""
        data = bytes(ciphertext)
        candidates = self.estimate_keysizes(data)

        keys = []
        for candidate in candidates:
            key = self.solve_columns(self.transpose(data, candidate.keysize))
            logger.debug(f"Keysize {candidate.keysize}: key {key.hex().upper()}")
            keys.append(key)

        best = self.verify_and_rank(data, keys)
        logger.info(f"Recovered {best.keysize}-byte key {best.key.hex().upper()} "
                    f"(score {best.score:.2f}) from {len(candidates)} keysize candidates")
        return best

    def format_report(self) -> str:
        """Format keysize candidates and verified answers as a report"""
        if not self.answers:
            return "No repeating-key XOR results available."

        lines = ["Keysize candidates:"]
        lines.append("-" * 80)
        for i, candidate in enumerate(self.candidates, 1):
            lines.append(f"{i}. {candidate}")
        lines.append("")
        lines.append("Verified keys (keysize order):")
        lines.append("-" * 80)
        for i, answer in enumerate(self.answers, 1):
            lines.append(f"{i}. {answer}")

        return "\n".join(lines)


def break_repeating_key(ciphertext: BytesLike, config: Optional[BreakerConfig] = None) -> KeyRecoveryAnswer:
    """Recover the most English-like repeating XOR key and plaintext"""
    return RepeatingKeyBreaker(config).break_ciphertext(ciphertext)

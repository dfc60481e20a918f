"""
Single-byte XOR breaker

Tries all 256 single-byte keys against a ciphertext, scores every lossily
decoded candidate with the English frequency score and keeps the best.

The 256 trials are independent and may run on a worker pool. Trials are
collected in key order and reduced with a strict greater-than scan, so the
winner is always the smallest key byte among the maximal scores, no matter
in which order the trials finished. Two keys that decode to the same text
(possible once invalid UTF-8 is replaced) therefore resolve to the smaller
key.
"""

import logging
from dataclasses import replace
from functools import partial
from typing import List, Optional, Union

from ..analysis.scorer import frequency_score, select_best_index
from ..models import SingleByteAnswer
from ..parallel import SERIAL_POOL, WorkerPool
from ..utils.xor_tools import XORTools

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]

KEY_SPACE = range(256)


def decode_lossy(data: bytes) -> str:
    """Decode bytes as UTF-8, replacing invalid sequences"""
    return data.decode('utf-8', errors='replace')


def _run_trial(ciphertext: bytes, key: int) -> SingleByteAnswer:
    plaintext = decode_lossy(XORTools.xor_with_byte(ciphertext, key))
    return SingleByteAnswer(key=key, plaintext=plaintext, score=frequency_score(plaintext))


def run_trials(ciphertext: BytesLike, pool: Optional[WorkerPool] = None) -> List[SingleByteAnswer]:
    """
    Decode and score the ciphertext under every key byte.

    Returns:
        256 SingleByteAnswer objects, indexed by key value
        (without the ciphertext, which only the winner carries)
    """
    data = bytes(ciphertext)
    pool = pool or SERIAL_POOL
    return pool.map(partial(_run_trial, data), KEY_SPACE)


def break_single_byte(ciphertext: BytesLike, pool: Optional[WorkerPool] = None) -> SingleByteAnswer:
    """
    Recover the most English-like single-byte XOR key.

    Never fails: noise or empty input still produces an answer (key 0 when
    every candidate scores the same).
    """
    data = bytes(ciphertext)
    trials = run_trials(data, pool)
    best = trials[select_best_index([trial.score for trial in trials])]
    return replace(best, ciphertext=data)


class SingleByteBreaker:
    """
    Single-byte XOR brute forcer that keeps the ranked trials for reporting.
    """

    def __init__(self, pool: Optional[WorkerPool] = None):
        self.pool = pool or SERIAL_POOL
        self.results: List[SingleByteAnswer] = []

    def break_ciphertext(self, ciphertext: BytesLike) -> SingleByteAnswer:
        data = bytes(ciphertext)
        trials = run_trials(data, self.pool)
        best_index = select_best_index([trial.score for trial in trials])
        best = trials[best_index] = replace(trials[best_index], ciphertext=data)

        # sorted() is stable, so equal scores stay in ascending key order
        self.results = sorted(trials, key=lambda r: r.score, reverse=True)

        logger.debug(f"Single-byte break over {len(data)} bytes: "
                     f"key 0x{best.key:02X}, score {best.score:.4f}")
        return best

    def get_top_results(self, n: int = 10) -> List[SingleByteAnswer]:
        """Top N trials by frequency score, best first"""
        return self.results[:n]

    def format_report(self, top_n: int = 10) -> str:
        """
        Format the ranked trials as a human-readable report.

        Args:
            top_n: Number of top results to include
        """
        if not self.results:
            return "No single-byte XOR results available."

        lines = [f"Single-byte XOR results (showing top {top_n} of {len(self.results)}):"]
        lines.append("=" * 80)
        lines.append("")

        for i, result in enumerate(self.results[:top_n], 1):
            lines.append(f"{i}. {result}")

        return "\n".join(lines)

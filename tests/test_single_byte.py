"""Tests for the single-byte XOR breaker"""
import pytest

from xorbreak.breakers import SingleByteBreaker, break_single_byte
from xorbreak.breakers.single_byte import run_trials
from xorbreak.parallel import WorkerPool
from xorbreak.utils.xor_tools import XORTools

COOKING_HEX = "1b37373331363f78151b7f2b783431333d78397828372d363c78373e783a393b3736"


def test_recovers_known_key():
    ciphertext = XORTools.xor_with_byte(b"Doggie doggie what now?", ord("t"))
    answer = break_single_byte(ciphertext)
    assert answer.key == ord("t")
    assert answer.plaintext == "Doggie doggie what now?"


def test_recovers_hex_challenge():
    answer = break_single_byte(bytes.fromhex(COOKING_HEX))
    assert answer.key == 0x58
    assert answer.key_char == "X"
    assert answer.plaintext == "Cooking MC's like a pound of bacon"


def test_empty_input_returns_key_zero():
    answer = break_single_byte(b"")
    assert answer.key == 0
    assert answer.plaintext == ""
    assert answer.score == 0.0


def test_trials_cover_every_key_in_order():
    trials = run_trials(b"\x01\x02")
    assert [trial.key for trial in trials] == list(range(256))


def test_only_the_winner_carries_the_ciphertext():
    ciphertext = bytes.fromhex(COOKING_HEX)
    assert all(trial.ciphertext == b"" for trial in run_trials(ciphertext))
    assert break_single_byte(bytearray(ciphertext)).ciphertext == ciphertext


def test_space_is_the_heaviest_guess():
    ciphertext = b"\x00" * 8
    answer = break_single_byte(ciphertext)
    assert answer.key == ord(" ")


@pytest.mark.parametrize("pool", [
    WorkerPool(executor="serial"),
    WorkerPool(max_workers=4, executor="thread"),
    WorkerPool(max_workers=2, executor="process"),
])
def test_result_independent_of_pool(pool):
    ciphertext = bytes.fromhex(COOKING_HEX)
    serial = break_single_byte(ciphertext)
    assert break_single_byte(ciphertext, pool) == serial


class TestSingleByteBreaker:
    def test_results_ranked_best_first(self):
        breaker = SingleByteBreaker()
        best = breaker.break_ciphertext(bytes.fromhex(COOKING_HEX))
        assert len(breaker.results) == 256
        assert breaker.results[0] == best
        assert best.ciphertext == bytes.fromhex(COOKING_HEX)
        assert all(r.ciphertext == b"" for r in breaker.results[1:])
        scores = [r.score for r in breaker.results]
        assert scores == sorted(scores, reverse=True)

    def test_equal_scores_keep_key_order(self):
        breaker = SingleByteBreaker()
        breaker.break_ciphertext(b"")
        assert [r.key for r in breaker.results] == list(range(256))

    def test_top_results(self):
        breaker = SingleByteBreaker()
        breaker.break_ciphertext(bytes.fromhex(COOKING_HEX))
        top = breaker.get_top_results(3)
        assert len(top) == 3
        assert top[0].key == 0x58

    def test_report(self):
        breaker = SingleByteBreaker()
        assert breaker.format_report() == "No single-byte XOR results available."
        breaker.break_ciphertext(bytes.fromhex(COOKING_HEX))
        report = breaker.format_report(top_n=2)
        assert "showing top 2 of 256" in report
        assert "Key: 0x58" in report

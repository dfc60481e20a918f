"""Tests for the hex/base64 codecs and XOR primitives"""
import pytest
from hypothesis import given, strategies as st

from xorbreak.error_handling import InputError, LengthMismatchError
from xorbreak.utils.codec import (
    base64_decode,
    base64_encode,
    decode_input,
    hex_decode,
    hex_encode,
)
from xorbreak.utils.xor_tools import XORTools

MUSHROOM_HEX = (
    "49276d206b696c6c696e6720796f757220627261696e206c696b65206120706f69736f6e6f7573206d757368726f6f6d"
)
MUSHROOM_B64 = "SSdtIGtpbGxpbmcgeW91ciBicmFpbiBsaWtlIGEgcG9pc29ub3VzIG11c2hyb29t"


class TestHex:
    @pytest.mark.parametrize("text,expected", [
        ("DEADBEEF", b"\xde\xad\xbe\xef"),
        ("deadbeef", b"\xde\xad\xbe\xef"),
        ("c0cac07a", b"\xc0\xca\xc0\x7a"),
        ("", b""),
    ])
    def test_decode(self, text, expected):
        assert hex_decode(text) == expected

    @pytest.mark.parametrize("text", ["Doogie Howser, MD", "BADA5", "0x12", "12 34"])
    def test_decode_rejects_malformed(self, text):
        with pytest.raises(InputError):
            hex_decode(text)

    def test_encode_is_uppercase(self):
        assert hex_encode(b"\xde\xad\xbe\xef") == "DEADBEEF"


class TestBase64:
    def test_decode(self):
        assert base64_decode(MUSHROOM_B64) == bytes.fromhex(MUSHROOM_HEX)

    def test_decode_ignores_line_breaks(self):
        wrapped = MUSHROOM_B64[:20] + "\n" + MUSHROOM_B64[20:] + "\n"
        assert base64_decode(wrapped) == bytes.fromhex(MUSHROOM_HEX)

    def test_decode_rejects_malformed(self):
        with pytest.raises(InputError):
            base64_decode("not*base64!")

    def test_encode(self):
        assert base64_encode(bytes.fromhex(MUSHROOM_HEX)) == MUSHROOM_B64


class TestDecodeInput:
    def test_hex_strips_whitespace(self):
        assert decode_input("  4142\n", "hex") == b"AB"

    def test_raw(self):
        assert decode_input("hi", "raw") == b"hi"

    def test_unknown_encoding(self):
        with pytest.raises(InputError, match="Unknown input encoding"):
            decode_input("4142", "rot13")


class TestXORTools:
    def test_xor_hex_strings(self):
        assert XORTools.xor_hex_strings(
            "1c0111001f010100061a024b53535009181c",
            "686974207468652062756c6c277320657965",
        ) == "746865206B696420646F6E277420706C6179"

    def test_xor_hex_strings_length_mismatch(self):
        with pytest.raises(LengthMismatchError):
            XORTools.xor_hex_strings("aabb", "aa")

    def test_repeating_key_xor(self, ice_plaintext, ice_ciphertext):
        assert XORTools.repeating_key_xor(ice_plaintext, b"ICE") == ice_ciphertext

    def test_repeating_key_xor_is_an_involution(self, ice_plaintext, ice_ciphertext):
        assert XORTools.repeating_key_xor(ice_ciphertext, b"ICE") == ice_plaintext

    def test_repeating_key_xor_empty_key(self):
        with pytest.raises(InputError, match="must not be empty"):
            XORTools.repeating_key_xor(b"data", b"")

    def test_xor_with_byte(self):
        assert XORTools.xor_with_byte(b"\x00\xff", 0x0f) == b"\x0f\xf0"

    def test_fixed_xor_length_mismatch(self):
        with pytest.raises(LengthMismatchError):
            XORTools.fixed_xor(b"ab", b"abc")


@given(st.binary(), st.integers(min_value=0, max_value=255))
def test_single_byte_xor_twice_is_identity(data, key):
    assert XORTools.xor_with_byte(XORTools.xor_with_byte(data, key), key) == data

"""
XOR primitives

Provides utilities for:
- Single-byte XOR
- Repeating-key XOR encryption/decryption
- Fixed (equal-length) XOR of buffers and hex strings
"""

from typing import Union

from .codec import hex_decode, hex_encode
from ..error_handling import LengthMismatchError, create_error

BytesLike = Union[bytes, bytearray, memoryview]


class XORTools:
    """XOR encryption and decryption utilities"""

    @staticmethod
    def xor_with_byte(data: BytesLike, key: int) -> bytes:
        """XOR every byte of data with a single-byte key"""
        return bytes(b ^ key for b in bytes(data))

    @staticmethod
    def repeating_key_xor(data: BytesLike, key: BytesLike) -> bytes:
        """XOR data with key, repeating the key cyclically"""
        data, key = bytes(data), bytes(key)
        if not key:
            raise create_error("empty_key")
        key_length = len(key)
        return bytes(data[i] ^ key[i % key_length] for i in range(len(data)))

    @staticmethod
    def fixed_xor(left: BytesLike, right: BytesLike) -> bytes:
        """XOR two equal-length buffers"""
        if len(left) != len(right):
            raise LengthMismatchError(len(left), len(right))
        return bytes(a ^ b for a, b in zip(bytes(left), bytes(right)))

    @staticmethod
    def xor_hex_strings(hex1: str, hex2: str) -> str:
        """XOR two equal-length hex strings, returning uppercase hex"""
        if len(hex1) != len(hex2):
            raise LengthMismatchError(len(hex1), len(hex2))
        return hex_encode(XORTools.fixed_xor(hex_decode(hex1), hex_decode(hex2)))

"""Codec and XOR helpers used around the breaking engine"""

from .codec import (
    hex_decode,
    hex_encode,
    base64_decode,
    base64_encode,
    decode_input,
    ENCODINGS
)
from .xor_tools import XORTools

__all__ = [
    'hex_decode',
    'hex_encode',
    'base64_decode',
    'base64_encode',
    'decode_input',
    'ENCODINGS',
    'XORTools'
]

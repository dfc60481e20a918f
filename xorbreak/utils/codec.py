"""
Hex and base64 codecs for ciphertext input and output.

Decoders are strict: malformed input raises InputError instead of being
skipped or truncated.
"""

import re
import base64
import binascii
from typing import Union

from ..error_handling import create_error

BytesLike = Union[bytes, bytearray, memoryview]

ENCODING_HEX = "hex"
ENCODING_BASE64 = "base64"
ENCODING_RAW = "raw"

ENCODINGS = (ENCODING_HEX, ENCODING_BASE64, ENCODING_RAW)

_HEX_DIGITS = re.compile(r'[0-9A-Fa-f]*')


def hex_decode(text: str) -> bytes:
    """Decode a hex string (either case) into bytes"""
    if len(text) % 2 != 0:
        raise create_error("invalid_hex", reason=f"odd length ({len(text)} digits)")
    if not _HEX_DIGITS.fullmatch(text):
        raise create_error("invalid_hex", reason="non-hex character")
    return bytes.fromhex(text)


def hex_encode(data: BytesLike) -> str:
    """Encode bytes as uppercase hex"""
    return bytes(data).hex().upper()


def base64_decode(text: str) -> bytes:
    """Decode standard base64, ignoring line breaks and other whitespace"""
    compact = "".join(text.split())
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as e:
        raise create_error("invalid_base64", reason=str(e)) from e


def base64_encode(data: BytesLike) -> str:
    """Encode bytes as padded standard base64"""
    return base64.b64encode(bytes(data)).decode('ascii')


def decode_input(text: str, encoding: str = ENCODING_HEX) -> bytes:
    """
    Turn externally supplied text into a ciphertext buffer.

    Args:
        text: Encoded ciphertext
        encoding: One of 'hex', 'base64' or 'raw' (UTF-8 bytes of the text)

    Returns:
        Decoded bytes
    """
    if encoding == ENCODING_HEX:
        return hex_decode(text.strip())
    if encoding == ENCODING_BASE64:
        return base64_decode(text)
    if encoding == ENCODING_RAW:
        return text.encode('utf-8')
    raise create_error("unknown_encoding", encoding=encoding)

"""Shared fixtures for xorbreak tests"""
import logging

import pytest

from xorbreak import error_handling
from xorbreak.utils.xor_tools import XORTools


ICE_PLAINTEXT = (
    b"Burning 'em, if you ain't quick and nimble\n"
    b"I go crazy when I hear a cymbal"
)

ICE_CIPHERTEXT_HEX = (
    "0b3637272a2b2e63622c2e69692a23693a2a3c6324202d623d63343c2a26226324272765272a"
    "282b2f20430a652e2c652a3124333a653e2b2027630c692b20283165286326302e27282f"
)

LONG_PLAINTEXT = (
    b"The old lighthouse keeper climbed the narrow stairs every evening just "
    b"before the sun went down. He carried a small lamp and a book of poems, "
    b"and when the great light was burning he would sit by the window and read "
    b"aloud to the empty sea. Ships passed far out on the water and never knew "
    b"that someone was reading to them. In the winter the storms came in from "
    b"the north and the waves broke against the rocks below the tower, but the "
    b"keeper did not mind the noise. He said that the sea was only answering "
    b"him, and that a conversation with the ocean was better than no "
    b"conversation at all. When he finally retired the new keeper found the "
    b"book of poems on the table with a note that asked him to keep reading."
)


@pytest.fixture
def ice_plaintext():
    return ICE_PLAINTEXT


@pytest.fixture
def ice_ciphertext():
    return bytes.fromhex(ICE_CIPHERTEXT_HEX)


@pytest.fixture
def long_plaintext():
    return LONG_PLAINTEXT


@pytest.fixture
def long_ice_ciphertext():
    return XORTools.repeating_key_xor(LONG_PLAINTEXT, b"ICE")


@pytest.fixture(autouse=True)
def reset_error_handler():
    """Drop the global error handler so its stderr handler never outlives a test"""
    yield
    error_handling._error_handler = None
    logger = logging.getLogger("xorbreak")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

"""
Base45 (RFC 9285) encoder/decoder over the QR alphanumeric alphabet.

Two bytes become three characters, a trailing single byte becomes two.
"""

__version__ = "0.1.0"

from .alphabet import BASE45_ALPHABET, b45_char, b45_value
from .codec import (
    decode,
    decode_text,
    decoded_length,
    encode,
    encode_text,
    encoded_length,
    is_base45,
)
from .errors import (
    Base45Error,
    Base45ErrorKind,
    DanglingError,
    GroupOverflowError,
    InvalidCharError,
)

__all__ = [
    "BASE45_ALPHABET",
    "b45_char",
    "b45_value",
    "encode",
    "decode",
    "encode_text",
    "decode_text",
    "encoded_length",
    "decoded_length",
    "is_base45",
    "Base45Error",
    "Base45ErrorKind",
    "InvalidCharError",
    "DanglingError",
    "GroupOverflowError",
]

from typing import List, Union

from .alphabet import BASE45_ALPHABET, b45_value
from .errors import Base45Error, DanglingError, GroupOverflowError, InvalidCharError

# Largest value a 3-char / 2-char group may carry.
MAX_PAIR_VALUE = 0xFFFF
MAX_BYTE_VALUE = 0xFF

TextLike = Union[str, bytes, bytearray, memoryview]


def encoded_length(n: int) -> int:
    """Number of Base45 characters produced for `n` input bytes."""
    return (3 * n + 1) // 2


def decoded_length(n: int) -> int:
    """Number of bytes produced by `n` well-formed Base45 characters."""
    return (n // 3) * 2 + (1 if n % 3 == 2 else 0)


def encode(data: bytes) -> str:
    """
    Encode bytes into Base45 text (RFC 9285).

    Two bytes become three characters and a trailing single byte becomes two,
    least-significant digit first.
    """
    data = bytes(data)
    res: List[str] = []
    i = 0
    while i + 1 < len(data):
        x = (data[i] << 8) + data[i + 1]
        x, c = divmod(x, 45)
        a, b = divmod(x, 45)
        res.append(BASE45_ALPHABET[c])
        res.append(BASE45_ALPHABET[b])
        res.append(BASE45_ALPHABET[a])
        i += 2
    if i < len(data):
        a, b = divmod(data[i], 45)
        res.append(BASE45_ALPHABET[b])
        res.append(BASE45_ALPHABET[a])
    return "".join(res)


def _lookup(text: str, pos: int) -> int:
    value = b45_value(text[pos])
    if value is None:
        raise InvalidCharError(text[pos], pos)
    return value


def decode(text: TextLike) -> bytes:
    """
    Decode Base45 text back into bytes.

    Bytes input is read one byte per character. Raises InvalidCharError,
    DanglingError or GroupOverflowError (all Base45Error / ValueError).
    Character validity is checked before overflow and before a dangling tail.
    """
    if isinstance(text, (bytes, bytearray, memoryview)):
        text = bytes(text).decode("latin-1")
    res = bytearray()
    i = 0
    while i + 2 < len(text):
        c0 = _lookup(text, i)
        c1 = _lookup(text, i + 1)
        c2 = _lookup(text, i + 2)
        x = c2 * 45 * 45 + c1 * 45 + c0
        if x > MAX_PAIR_VALUE:
            raise GroupOverflowError(x, MAX_PAIR_VALUE, i)
        res.append(x // 256)
        res.append(x % 256)
        i += 3
    remaining = len(text) - i
    if remaining == 1:
        _lookup(text, i)
        raise DanglingError(i)
    if remaining == 2:
        c0 = _lookup(text, i)
        c1 = _lookup(text, i + 1)
        x = c1 * 45 + c0
        if x > MAX_BYTE_VALUE:
            raise GroupOverflowError(x, MAX_BYTE_VALUE, i)
        res.append(x)
    return bytes(res)


def encode_text(data: str, encoding: str = "utf-8") -> str:
    """Encode text to Base45 using the provided character encoding."""
    return encode(data.encode(encoding))


def decode_text(encoded: str, encoding: str = "utf-8") -> str:
    """Decode Base45 text into a string using the provided character encoding."""
    return decode(encoded).decode(encoding)


def is_base45(text: TextLike) -> bool:
    """True when `text` decodes cleanly as Base45."""
    try:
        decode(text)
    except Base45Error:
        return False
    return True

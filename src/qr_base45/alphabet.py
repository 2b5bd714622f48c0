from typing import Dict, Optional

# RFC 9285 / QR alphanumeric mode ordering.
BASE45_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"
BASE45_BASE = len(BASE45_ALPHABET)

_DECODE_MAP: Dict[str, int] = {ch: idx for idx, ch in enumerate(BASE45_ALPHABET)}


def b45_value(ch: str) -> Optional[int]:
    """Return the 0-44 value of a Base45 character, or None if it is not one."""
    return _DECODE_MAP.get(ch)


def b45_char(value: int) -> str:
    if not 0 <= value < BASE45_BASE:
        raise ValueError(f"Base45 digit out of range: {value}")
    return BASE45_ALPHABET[value]

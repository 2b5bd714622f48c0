from typing import Optional


def render_decoded(data: bytes, encoding: Optional[str] = None) -> str:
    """Render decoded bytes as text: configured encoding, then utf-8, then latin-1."""
    for enc in (encoding, "utf-8"):
        if not enc:
            continue
        try:
            return data.decode(enc)
        except UnicodeDecodeError:
            continue
    return data.decode("latin-1")


def strip_line_ending(text: str) -> str:
    """Drop a trailing newline (LF or CRLF) left behind by editors and `echo`."""
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith("\n"):
        return text[:-1]
    return text


def parse_hex(text: str) -> bytes:
    """Parse hex input, tolerating whitespace and an optional 0x prefix."""
    cleaned = "".join(text.split())
    if cleaned[:2].lower() == "0x":
        cleaned = cleaned[2:]
    return bytes.fromhex(cleaned)

"""
Legacy single-byte Hebrew encoding (windows-1255) helpers.

Some older Israeli sites still serve pages and expect query parameters in
windows-1255 instead of UTF-8. Two operations live here:

- decode raw response bytes into text (never fails)
- encode a Unicode query value into the percent-escaped bytes the server expects

The Hebrew base alphabet is a fixed offset in both directions:
byte 0xE0..0xFA <-> U+05D0 (alef) .. U+05EA (tav).
"""

from __future__ import annotations

import string
from urllib.parse import quote, unquote_to_bytes

LEGACY_CODEC = "cp1255"

HEBREW_FIRST_BYTE = 0xE0
HEBREW_LAST_BYTE = 0xFA
HEBREW_ALEF = 0x05D0
HEBREW_TAV = HEBREW_ALEF + (HEBREW_LAST_BYTE - HEBREW_FIRST_BYTE)

_UNRESERVED = frozenset(string.ascii_letters + string.digits + "-_.~")


def _build_decoding_map() -> dict[int, str]:
    """
    Map every byte value 0..255 to a single character.

    Bytes the code page leaves undefined fall back to Latin-1 (same code point).
    """
    table: dict[int, str] = {}
    for value in range(256):
        if HEBREW_FIRST_BYTE <= value <= HEBREW_LAST_BYTE:
            table[value] = chr(HEBREW_ALEF + value - HEBREW_FIRST_BYTE)
            continue
        try:
            table[value] = bytes([value]).decode(LEGACY_CODEC)
        except UnicodeDecodeError:
            table[value] = chr(value)
    return table


_DECODING_MAP = _build_decoding_map()


def decode_legacy(data: bytes | bytearray | memoryview) -> str:
    """
    Decode legacy-encoded bytes into text.

    Latin-1 is a lossless 1:1 byte -> code point step, so translating its
    output through the byte table gives the legacy decoding without any
    error path.
    """
    if not data:
        return ""
    return bytes(data).decode("latin-1").translate(_DECODING_MAP)


def encode_legacy_param(value: str) -> str:
    """
    Percent-encode `value` for a server that expects windows-1255 query values.
    """
    parts: list[str] = []
    for ch in value or "":
        code_point = ord(ch)
        if HEBREW_ALEF <= code_point <= HEBREW_TAV:
            parts.append(f"%{code_point - HEBREW_ALEF + HEBREW_FIRST_BYTE:02X}")
        elif ch in _UNRESERVED:
            parts.append(ch)
        elif ch == " ":
            parts.append("%20")
        else:
            parts.append(quote(ch, safe="", errors="replace"))
    return "".join(parts)


def decode_legacy_param(value: str) -> str:
    """
    Inverse of `encode_legacy_param` for values read back out of hrefs.

    Values that already carry non-ASCII text were never percent-encoded and
    are returned unchanged.
    """
    value = value or ""
    if not value.isascii():
        return value
    raw = unquote_to_bytes(value.replace("+", " "))
    return decode_legacy(raw)

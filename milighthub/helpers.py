"""Integer, hex and list conversion helpers."""

import re
from typing import Callable, Iterable, List, Optional, TypeVar

T = TypeVar("T")
S = TypeVar("S")

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def str_to_hex(s: str) -> int:
    """Parse the trailing run of hex digits in ``s``.

    Digits are read from the end of the string backwards; reading stops at
    the first character that is not a hex digit.
    """
    value = 0
    shift = 0
    for char in reversed(s):
        if char not in _HEX_DIGITS:
            break
        value |= int(char, 16) << shift
        shift += 4
    return value


def parse_int(s: str) -> int:
    """Parse ``0x``-prefixed hex or a leading decimal integer (0 if none)."""
    if s.startswith("0x"):
        return str_to_hex(s[2:])
    match = _LEADING_INT.match(s)
    return int(match.group(1)) if match else 0


def hex_str_to_bytes(s: str, max_len: int) -> bytes:
    """Decode pairs of hex digits, optionally separated by spaces.

    At most ``max_len`` bytes are produced. A lone trailing digit decodes
    to zero.
    """
    out = bytearray()
    length = len(s)
    pos = 0
    while pos < length and len(out) < max_len:
        pair = s[pos:pos + 2]
        out.append(str_to_hex(pair) if len(pair) == 2 else 0)
        pos += 2
        while pos < length - 1 and s[pos] == " ":
            pos += 1
    return bytes(out)


def bytes_to_hex_str(data: bytes, max_len: int) -> str:
    """Format bytes as space separated upper-case hex pairs.

    Output stops once it reaches ``max_len - 3`` characters.
    """
    limit: Optional[int] = max_len - 3 if max_len >= 3 else None
    parts: List[str] = []
    written = 0
    last = len(data) - 1
    for index, byte in enumerate(data):
        if limit is not None and written >= limit:
            break
        parts.append(f"{byte:02X}")
        written += 2
        if index < last:
            parts.append(" ")
            written += 1
    return "".join(parts)


def convert_values(
    values: Iterable[S], converter: Callable[[S], T], unique: bool = True
) -> List[T]:
    """Convert each value, dropping duplicates of earlier results if ``unique``."""
    result: List[T] = []
    for value in values:
        converted = converter(value)
        if not unique or converted not in result:
            result.append(converted)
    return result
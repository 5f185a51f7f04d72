"""Colours parsed from RGB values or JSON."""

import colorsys
import logging
import math
import re
from dataclasses import dataclass
from typing import Any

from milighthub.helpers import hex_str_to_bytes

_log = logging.getLogger(__name__)
_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _json_uint16(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    number = int(value)
    return number if 0 <= number <= 0xFFFF else 0


@dataclass(frozen=True)
class ParsedColor:
    """An RGB colour with its hue (degrees) and saturation (percent)."""

    success: bool
    hue: int = 0
    r: int = 0
    g: int = 0
    b: int = 0
    saturation: int = 0

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> "ParsedColor":
        """Build a colour from RGB components in [0, 255]."""
        h, s, _ = colorsys.rgb_to_hsv(r / 255.0, g / 255.0, b / 255.0)
        return cls(
            success=True,
            hue=_round_half_away(h * 360),
            r=r,
            g=g,
            b=b,
            saturation=_round_half_away(s * 100) & 0xFF,
        )

    @classmethod
    def from_json(cls, value: Any) -> "ParsedColor":
        """Parse ``{"r","g","b"}``, ``"#RRGGBB"`` or ``"r,g,b"``.

        Any other value gives a colour whose ``success`` is false.
        """
        if isinstance(value, dict):
            r, g, b = (_json_uint16(value.get(key)) for key in ("r", "g", "b"))
        elif isinstance(value, str):
            if value.startswith("#") and len(value) == 7:
                r, g, b = hex_str_to_bytes(value[1:], 3)
            else:
                parts = [_atoi(token) & 0xFF for token in value.split(",")[:3]]
                parts += [0] * (3 - len(parts))
                r, g, b = parts
        else:
            _log.warning("unknown format for color: %r", value)
            return cls(success=False)
        return cls.from_rgb(r, g, b)
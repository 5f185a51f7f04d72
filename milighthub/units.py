"""Unit conversions for colour temperature values."""

import math

# Bulbs range from 2700K-6500K, or about 370-153 mireds.
COLOR_TEMP_MAX_MIREDS = 370
COLOR_TEMP_MIN_MIREDS = 153


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def rescale(value: float, new_max: float, old_max: float = 255.0) -> int:
    """Scale ``value`` from the range [0, old_max] to [0, new_max]."""
    return _round_half_away(value * (new_max / old_max))


def mireds_to_white_val(mireds: int, max_value: int = 255) -> int:
    """Convert a colour temperature in mireds to a white value in [0, max_value]."""
    clamped = min(max(mireds, COLOR_TEMP_MIN_MIREDS), COLOR_TEMP_MAX_MIREDS)
    return rescale(
        clamped - COLOR_TEMP_MIN_MIREDS,
        max_value,
        COLOR_TEMP_MAX_MIREDS - COLOR_TEMP_MIN_MIREDS,
    )


def white_val_to_mireds(value: int, max_value: int = 255) -> int:
    """Convert a white value in [0, max_value] to a colour temperature in mireds."""
    scaled = rescale(value, COLOR_TEMP_MAX_MIREDS - COLOR_TEMP_MIN_MIREDS, max_value)
    return COLOR_TEMP_MIN_MIREDS + scaled
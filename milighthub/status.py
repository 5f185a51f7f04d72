"""On/off status of a bulb."""

from enum import IntEnum
from typing import Any


class MiLightStatus(IntEnum):
    ON = 0
    OFF = 1


def parse_status(value: Any) -> MiLightStatus:
    """Interpret a JSON value as a status.

    Booleans map to on/off, integers to the status with that number, and
    strings are on when they read ``on`` or ``true`` in any case.
    Integers that name no status raise ``ValueError``.
    """
    if isinstance(value, bool):
        return MiLightStatus.ON if value else MiLightStatus.OFF
    if isinstance(value, int) and 0 <= value <= 0xFFFF:
        return MiLightStatus(value)
    if isinstance(value, str) and value.lower() in ("on", "true"):
        return MiLightStatus.ON
    return MiLightStatus.OFF
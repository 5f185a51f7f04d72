"""Radio channel and power level settings."""

import logging
from enum import IntEnum
from typing import List, Union

_log = logging.getLogger(__name__)


class RF24Channel(IntEnum):
    LOW = 0
    MID = 1
    HIGH = 2


class RF24PowerLevel(IntEnum):
    MIN = 0   # -18 dBm
    LOW = 1   # -12 dBm
    HIGH = 2  # -6 dBm
    MAX = 3   # 0 dBm


DEFAULT_CHANNEL = RF24Channel.HIGH
DEFAULT_POWER_LEVEL = RF24PowerLevel.MAX


def channel_name(channel: Union[RF24Channel, int]) -> str:
    """Name of a channel; unknown values give the default channel's name."""
    try:
        return RF24Channel(channel).name
    except ValueError:
        _log.error("unknown RF24 channel: %s", channel)
        return DEFAULT_CHANNEL.name


def channel_from_name(name: str) -> RF24Channel:
    """Channel with the exact name, or the default channel."""
    try:
        return RF24Channel[name]
    except KeyError:
        _log.warning("unknown RF24 channel %s, using default", name)
        return DEFAULT_CHANNEL


def all_channels() -> List[RF24Channel]:
    """Every channel, in order."""
    return list(RF24Channel)


def power_level_name(level: Union[RF24PowerLevel, int]) -> str:
    """Name of a power level; unknown values give the default level's name."""
    try:
        return RF24PowerLevel(level).name
    except ValueError:
        _log.error("unknown RF24 power level: %s", level)
        return DEFAULT_POWER_LEVEL.name


def power_level_from_name(name: str) -> RF24PowerLevel:
    """Power level with the exact name, or the default level."""
    try:
        return RF24PowerLevel[name]
    except KeyError:
        _log.warning("unknown RF24 power level %s, using default", name)
        return DEFAULT_POWER_LEVEL


def rf24_value(level: RF24PowerLevel) -> int:
    """Numeric value the radio uses for a power level."""
    return int(level)
"""Remote (device) types and their names."""

import logging
from enum import IntEnum

_log = logging.getLogger(__name__)


class RemoteType(IntEnum):
    """Kind of remote a bulb is paired with."""

    UNKNOWN = 255
    RGBW = 0
    CCT = 1
    RGB_CCT = 2
    RGB = 3
    FUT089 = 4
    FUT091 = 5
    FUT020 = 6


_NAMES = {
    RemoteType.RGBW: "rgbw",
    RemoteType.CCT: "cct",
    RemoteType.RGB_CCT: "rgb_cct",
    RemoteType.FUT089: "fut089",
    RemoteType.RGB: "rgb",
    RemoteType.FUT091: "fut091",
    RemoteType.FUT020: "fut020",
}

_ALIASES = {
    "rgbw": RemoteType.RGBW,
    "fut096": RemoteType.RGBW,
    "cct": RemoteType.CCT,
    "fut007": RemoteType.CCT,
    "rgb_cct": RemoteType.RGB_CCT,
    "fut092": RemoteType.RGB_CCT,
    "fut089": RemoteType.FUT089,
    "rgb": RemoteType.RGB,
    "fut098": RemoteType.RGB,
    "v2_cct": RemoteType.FUT091,
    "fut091": RemoteType.FUT091,
    "fut020": RemoteType.FUT020,
}


def remote_type_from_string(name: str) -> RemoteType:
    """Look up a remote type by name or alias, ignoring case."""
    found = _ALIASES.get(name.lower())
    if found is None:
        _log.error("unknown remote type: %s", name)
        return RemoteType.UNKNOWN
    return found


def remote_type_to_string(remote_type: RemoteType) -> str:
    """Canonical name of a remote type, or ``"unknown"``."""
    name = _NAMES.get(remote_type)
    if name is None:
        _log.error("no name for remote type: %s", remote_type)
        return "unknown"
    return name
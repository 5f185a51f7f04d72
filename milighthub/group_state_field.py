"""Names of group state fields and commands."""

from enum import Enum

TEMPERATURE = "temperature"  # alias for kelvin
COMMAND = "command"
COMMANDS = "commands"


class GroupStateField(Enum):
    """A field of a bulb group's state, valued by its JSON name."""

    UNKNOWN = "unknown"
    STATE = "state"
    STATUS = "status"
    BRIGHTNESS = "brightness"
    LEVEL = "level"
    HUE = "hue"
    SATURATION = "saturation"
    COLOR = "color"
    MODE = "mode"
    KELVIN = "kelvin"
    COLOR_TEMP = "color_temp"
    BULB_MODE = "bulb_mode"
    COMPUTED_COLOR = "computed_color"
    EFFECT = "effect"
    DEVICE_ID = "device_id"
    GROUP_ID = "group_id"
    DEVICE_TYPE = "device_type"
    OH_COLOR = "oh_color"
    HEX_COLOR = "hex_color"


class CommandName(str, Enum):
    """Names of commands accepted in requests."""

    UNPAIR = "unpair"
    PAIR = "pair"
    SET_WHITE = "set_white"
    NIGHT_MODE = "night_mode"
    LEVEL_UP = "level_up"
    LEVEL_DOWN = "level_down"
    TEMPERATURE_UP = "temperature_up"
    TEMPERATURE_DOWN = "temperature_down"
    NEXT_MODE = "next_mode"
    PREVIOUS_MODE = "previous_mode"
    MODE_SPEED_DOWN = "mode_speed_down"
    MODE_SPEED_UP = "mode_speed_up"
    TOGGLE = "toggle"
    TRANSITION = "transition"


def field_by_name(name: str) -> GroupStateField:
    """Field with the given name, or ``UNKNOWN``."""
    try:
        return GroupStateField(name)
    except ValueError:
        return GroupStateField.UNKNOWN


def field_name(field: GroupStateField) -> str:
    """JSON name of a field."""
    return field.value


def is_brightness_field(field: GroupStateField) -> bool:
    """Whether the field carries a brightness value."""
    return field in (GroupStateField.BRIGHTNESS, GroupStateField.LEVEL)
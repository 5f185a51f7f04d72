"""Handlers for the command packets of the version 6 gateway protocol."""

from abc import ABC, abstractmethod
from enum import IntEnum
from typing import List, Sequence

from milighthub.remote_type import RemoteType
from milighthub.status import MiLightStatus
from milighthub.udp_server import MiLightClient


class V6CommandType(IntEnum):
    PAIR = 0x3D
    UNPAIR = 0x3E
    PRESET = 0x3F
    COMMAND = 0x31


# RGB+CCT command ids and the arguments of its status command.
V2_COLOR = 0x01
V2_SATURATION = 0x02
V2_BRIGHTNESS = 0x03
V2_STATUS = 0x04
V2_KELVIN = 0x05
V2_MODE = 0x06

V2_RGB_CCT_ON = 0x01
V2_RGB_CCT_OFF = 0x02
V2_RGB_CCT_SPEED_UP = 0x03
V2_RGB_CCT_SPEED_DOWN = 0x04
V2_RGB_NIGHT_MODE = 0x05

# RGBW command ids.
V2_RGBW_COLOR_PREFIX = 0x01
V2_RGBW_BRIGHTNESS_PREFIX = 0x02
V2_RGBW_COMMAND_PREFIX = 0x03
V2_RGBW_MODE_PREFIX = 0x04

V2_RGBW_ON = 0x01
V2_RGBW_OFF = 0x02
V2_RGBW_SPEED_DOWN = 0x03
V2_RGBW_SPEED_UP = 0x04
V2_RGBW_WHITE_ON = 0x05
V2_RGBW_NIGHT_LIGHT = 0x06

# RGB command ids.
V2_RGB_COMMAND_PREFIX = 0x02
V2_RGB_COLOR_PREFIX = 0x01
V2_RGB_BRIGHTNESS_DOWN = 0x01
V2_RGB_BRIGHTNESS_UP = 0x02
V2_RGB_SPEED_DOWN = 0x03
V2_RGB_SPEED_UP = 0x04
V2_RGB_MODE_DOWN = 0x05
V2_RGB_MODE_UP = 0x06
V2_RGB_ON = 0x09
V2_RGB_OFF = 0x0A

# CCT command ids.
V2_CCT_COMMAND_PREFIX = 0x01
V2_CCT_BRIGHTNESS_UP = 0x01
V2_CCT_BRIGHTNESS_DOWN = 0x02
V2_CCT_TEMPERATURE_UP = 0x03
V2_CCT_TEMPERATURE_DOWN = 0x04
V2_CCT_NIGHT_LIGHT = 0x06
V2_CCT_ON = 0x07
V2_CCT_OFF = 0x08


def _u8(value: int) -> int:
    return value & 0xFF


def _split_command(client: MiLightClient, command: int, command_arg: int):
    """Command id and first argument byte; marks held buttons on the client."""
    client.set_held((command & 0x80) == 0x80)
    return command & 0x7F, (command_arg >> 24) & 0xFF


class V6CommandHandler(ABC):
    """Handles the commands for one kind of remote."""

    def __init__(self, command_id: int, remote_type: RemoteType) -> None:
        self.command_id = command_id
        self.remote_type = remote_type

    def handle(
        self,
        client: MiLightClient,
        device_id: int,
        group: int,
        command_type: int,
        command: int,
        command_arg: int,
    ) -> bool:
        """Select the group and run the command; false if it was not understood."""
        client.prepare(self.remote_type, device_id, group)

        if command_type == V6CommandType.PAIR:
            client.pair()
        elif command_type == V6CommandType.UNPAIR:
            client.unpair()
        elif command_type == V6CommandType.PRESET:
            return self.handle_preset(client, _u8(command), command_arg)
        elif command_type == V6CommandType.COMMAND:
            return self.handle_command(client, command, command_arg)
        else:
            return False
        return True

    @abstractmethod
    def handle_command(
        self, client: MiLightClient, command: int, command_arg: int
    ) -> bool:
        """Run a regular command; false if it was not understood."""

    @abstractmethod
    def handle_preset(
        self, client: MiLightClient, command_lsb: int, command_arg: int
    ) -> bool:
        """Apply a preset; false if it was not understood."""


class V6RgbCctCommandHandler(V6CommandHandler):
    def __init__(self) -> None:
        super().__init__(0x0800, RemoteType.RGB_CCT)

    def handle_preset(
        self, client: MiLightClient, command_lsb: int, command_arg: int
    ) -> bool:
        if command_lsb == 0:
            saturation = _u8(command_arg >> 24)
            color = _u8(command_arg >> 16)
            brightness = _u8(command_arg >> 8)
            client.update_brightness(brightness)
            client.update_color_raw(color)
            client.update_saturation(saturation)
        elif command_lsb == 1:
            brightness = _u8(command_arg >> 16)
            kelvin = _u8(command_arg >> 8)
            client.update_brightness(brightness)
            client.update_temperature(_u8(0x64 - kelvin))
        else:
            return False
        return True

    def handle_command(
        self, client: MiLightClient, command: int, command_arg: int
    ) -> bool:
        cmd, arg = _split_command(client, command, command_arg)

        if cmd == V2_STATUS:
            if arg in (V2_RGB_CCT_ON, V2_RGB_CCT_OFF):
                client.update_status(
                    MiLightStatus.ON if arg == V2_RGB_CCT_ON else MiLightStatus.OFF
                )
            elif arg == V2_RGB_NIGHT_MODE:
                client.enable_night_mode()
            elif arg == V2_RGB_CCT_SPEED_DOWN:
                client.mode_speed_down()
            elif arg == V2_RGB_CCT_SPEED_UP:
                client.mode_speed_up()
            else:
                return False
            return True

        if cmd == V2_COLOR:
            self.handle_update_color(client, command_arg)
        elif cmd == V2_KELVIN:
            client.update_temperature(_u8(100 - arg))
        elif cmd == V2_BRIGHTNESS:
            client.update_brightness(arg)
        elif cmd == V2_SATURATION:
            client.update_saturation(_u8(100 - arg))
        elif cmd == V2_MODE:
            client.update_mode(_u8(arg - 1))
        else:
            return False
        return True

    def handle_update_color(self, client: MiLightClient, color: int) -> None:
        """Send each of the four argument bytes as a colour, high byte first.

        The app packs several colours into one argument when sliding quickly.
        """
        for shift in (24, 16, 8, 0):
            client.update_color_raw(_u8(((color >> shift) & 0xFF) + 0xF6))


class V6RgbwCommandHandler(V6CommandHandler):
    def __init__(self) -> None:
        super().__init__(0x0700, RemoteType.RGBW)

    def handle_preset(
        self, client: MiLightClient, command_lsb: int, command_arg: int
    ) -> bool:
        if command_lsb == 0:
            client.update_color_raw(_u8(command_arg >> 24))
            client.update_brightness(_u8(command_arg >> 16))
        elif command_lsb == 1:
            client.update_color_white()
            client.update_brightness(_u8(command_arg >> 16))
        else:
            return False
        return True

    def handle_command(
        self, client: MiLightClient, command: int, command_arg: int
    ) -> bool:
        cmd, arg = _split_command(client, command, command_arg)

        if cmd == V2_RGBW_COMMAND_PREFIX:
            actions = {
                V2_RGBW_ON: lambda: client.update_status(MiLightStatus.ON),
                V2_RGBW_OFF: lambda: client.update_status(MiLightStatus.OFF),
                V2_RGBW_WHITE_ON: client.update_color_white,
                V2_RGBW_NIGHT_LIGHT: client.enable_night_mode,
                V2_RGBW_SPEED_DOWN: client.mode_speed_down,
                V2_RGBW_SPEED_UP: client.mode_speed_up,
            }
            action = actions.get(arg)
            if action is None:
                return False
            action()
            return True
        if cmd == V2_RGBW_COLOR_PREFIX:
            client.update_color_raw(arg)
            return True
        if cmd == V2_RGBW_BRIGHTNESS_PREFIX:
            client.update_brightness(arg)
            return True
        if cmd == V2_RGBW_MODE_PREFIX:
            client.update_mode(arg)
            return True
        return False


class V6RgbCommandHandler(V6CommandHandler):
    def __init__(self) -> None:
        super().__init__(0x0500, RemoteType.RGB)

    def handle_preset(
        self, client: MiLightClient, command_lsb: int, command_arg: int
    ) -> bool:
        return True

    def handle_command(
        self, client: MiLightClient, command: int, command_arg: int
    ) -> bool:
        cmd, arg = _split_command(client, command, command_arg)

        if cmd == V2_RGB_COMMAND_PREFIX:
            actions = {
                V2_RGB_ON: lambda: client.update_status(MiLightStatus.ON),
                V2_RGB_OFF: lambda: client.update_status(MiLightStatus.OFF),
                V2_RGB_BRIGHTNESS_DOWN: client.decrease_brightness,
                V2_RGB_BRIGHTNESS_UP: client.increase_brightness,
                V2_RGB_MODE_DOWN: client.previous_mode,
                V2_RGB_MODE_UP: client.next_mode,
                V2_RGB_SPEED_DOWN: client.mode_speed_down,
                V2_RGB_SPEED_UP: client.mode_speed_up,
            }
            action = actions.get(arg)
            if action is None:
                return False
            action()
            return True
        if cmd == V2_RGB_COLOR_PREFIX:
            client.update_color_raw(arg)
            return True
        return False


class V6CctCommandHandler(V6CommandHandler):
    def __init__(self) -> None:
        super().__init__(0x0100, RemoteType.CCT)

    def handle_preset(
        self, client: MiLightClient, command_lsb: int, command_arg: int
    ) -> bool:
        return False

    def handle_command(
        self, client: MiLightClient, command: int, command_arg: int
    ) -> bool:
        cmd, arg = _split_command(client, command, command_arg)

        if cmd != V2_CCT_COMMAND_PREFIX:
            return False
        actions = {
            V2_CCT_ON: lambda: client.update_status(MiLightStatus.ON),
            V2_CCT_OFF: lambda: client.update_status(MiLightStatus.OFF),
            V2_CCT_BRIGHTNESS_DOWN: client.decrease_brightness,
            V2_CCT_BRIGHTNESS_UP: client.increase_brightness,
            V2_CCT_TEMPERATURE_DOWN: client.decrease_temperature,
            V2_CCT_TEMPERATURE_UP: client.increase_temperature,
            V2_CCT_NIGHT_LIGHT: client.enable_night_mode,
        }
        action = actions.get(arg)
        if action is None:
            return False
        action()
        return True


def all_handlers() -> List[V6CommandHandler]:
    """One handler per remote kind, in the order they are tried."""
    return [
        V6RgbCctCommandHandler(),
        V6RgbwCommandHandler(),
        V6RgbCommandHandler(),
        V6CctCommandHandler(),
    ]


class V6CommandDemuxer(V6CommandHandler):
    """Offers a command to each handler whose id it carries until one takes it."""

    def __init__(self, handlers: Sequence[V6CommandHandler]) -> None:
        super().__init__(0, RemoteType.RGBW)
        self.handlers = list(handlers)

    def handle(
        self,
        client: MiLightClient,
        device_id: int,
        group: int,
        command_type: int,
        command: int,
        command_arg: int,
    ) -> bool:
        return any(
            (handler.command_id & command) == handler.command_id
            and handler.handle(
                client, device_id, group, command_type, command, command_arg
            )
            for handler in self.handlers
        )

    def handle_command(
        self, client: MiLightClient, command: int, command_arg: int
    ) -> bool:
        return False

    def handle_preset(
        self, client: MiLightClient, command_lsb: int, command_arg: int
    ) -> bool:
        return False
"""Server for the version 5 (two or three byte) gateway UDP protocol."""

import logging
import math
from enum import IntEnum
from typing import Dict, Tuple

from milighthub.remote_type import RemoteType
from milighthub.status import MiLightStatus
from milighthub.udp_server import Address, MiLightClient, MiLightUdpServer

_log = logging.getLogger(__name__)

NO_GROUP = 255


class UdpCommand(IntEnum):
    CCT_ALL_ON = 0x35
    CCT_ALL_OFF = 0x39
    CCT_GROUP_1_ON = 0x38
    CCT_GROUP_1_OFF = 0x3B
    CCT_GROUP_2_ON = 0x3D
    CCT_GROUP_2_OFF = 0x33
    CCT_GROUP_3_ON = 0x37
    CCT_GROUP_3_OFF = 0x3A
    CCT_GROUP_4_ON = 0x32
    CCT_GROUP_4_OFF = 0x36
    CCT_TEMPERATURE_DOWN = 0x3F
    CCT_TEMPERATURE_UP = 0x3E
    CCT_BRIGHTNESS_DOWN = 0x34
    CCT_BRIGHTNESS_UP = 0x3C
    CCT_NIGHT_MODE = 0xB9

    RGBW_ALL_OFF = 0x41
    RGBW_ALL_ON = 0x42
    RGBW_SPEED_UP = 0x43
    RGBW_SPEED_DOWN = 0x44
    RGBW_GROUP_1_ON = 0x45
    RGBW_GROUP_1_OFF = 0x46
    RGBW_GROUP_2_ON = 0x47
    RGBW_GROUP_2_OFF = 0x48
    RGBW_GROUP_3_ON = 0x49
    RGBW_GROUP_3_OFF = 0x4A
    RGBW_GROUP_4_ON = 0x4B
    RGBW_GROUP_4_OFF = 0x4C
    RGBW_DISCO_MODE = 0x4D
    RGBW_GROUP_ALL_WHITE = 0xC2
    RGBW_GROUP_1_WHITE = 0xC5
    RGBW_GROUP_2_WHITE = 0xC7
    RGBW_GROUP_3_WHITE = 0xC9
    RGBW_GROUP_4_WHITE = 0xCB
    RGBW_GROUP_ALL_NIGHT = 0xC1
    RGBW_GROUP_1_NIGHT = 0xC6
    RGBW_GROUP_2_NIGHT = 0xC8
    RGBW_GROUP_3_NIGHT = 0xCA
    RGBW_GROUP_4_NIGHT = 0xCC
    RGBW_BRIGHTNESS = 0x4E
    RGBW_COLOR = 0x40


_ON, _OFF = MiLightStatus.ON, MiLightStatus.OFF

_CCT_ON_OFF: Dict[int, Tuple[int, MiLightStatus]] = {
    UdpCommand.CCT_ALL_ON: (0, _ON),
    UdpCommand.CCT_ALL_OFF: (0, _OFF),
    UdpCommand.CCT_GROUP_1_ON: (1, _ON),
    UdpCommand.CCT_GROUP_1_OFF: (1, _OFF),
    UdpCommand.CCT_GROUP_2_ON: (2, _ON),
    UdpCommand.CCT_GROUP_2_OFF: (2, _OFF),
    UdpCommand.CCT_GROUP_3_ON: (3, _ON),
    UdpCommand.CCT_GROUP_3_OFF: (3, _OFF),
    UdpCommand.CCT_GROUP_4_ON: (4, _ON),
    UdpCommand.CCT_GROUP_4_OFF: (4, _OFF),
}

_RGBW_WHITE = frozenset(
    {
        UdpCommand.RGBW_GROUP_ALL_WHITE,
        UdpCommand.RGBW_GROUP_1_WHITE,
        UdpCommand.RGBW_GROUP_2_WHITE,
        UdpCommand.RGBW_GROUP_3_WHITE,
        UdpCommand.RGBW_GROUP_4_WHITE,
    }
)

_RGBW_NIGHT = frozenset(
    {
        UdpCommand.RGBW_GROUP_ALL_NIGHT,
        UdpCommand.RGBW_GROUP_1_NIGHT,
        UdpCommand.RGBW_GROUP_2_NIGHT,
        UdpCommand.RGBW_GROUP_3_NIGHT,
        UdpCommand.RGBW_GROUP_4_NIGHT,
    }
)


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def cct_command_group(command: int) -> int:
    """Group a CCT on/off command addresses (0 for all), or ``NO_GROUP``.

    Night mode commands are the off commands with the top bit set, so that
    bit is ignored.
    """
    entry = _CCT_ON_OFF.get(command & 0x7F)
    return NO_GROUP if entry is None else entry[0]


def cct_command_status(command: int) -> MiLightStatus:
    """Status a CCT on/off command sets; ``ValueError`` for other commands."""
    entry = _CCT_ON_OFF.get(command & 0x7F)
    if entry is None:
        raise ValueError(f"not a CCT on/off command: {command:#04x}")
    return entry[1]


class V5MiLightUdpServer(MiLightUdpServer):
    """Turns version 5 command packets into client calls."""

    def __init__(self, client: MiLightClient, port: int, device_id: int) -> None:
        super().__init__(client, port, device_id)

    def handle_packet(self, packet: bytes, addr: Address) -> None:
        if len(packet) in (2, 3):
            self.handle_command(packet[0], packet[1])
        else:
            _log.warning(
                "unexpected packet length, should be 2-3, was: %d", len(packet)
            )

    def handle_command(self, command: int, command_arg: int) -> None:
        """Act on one command byte and its argument."""
        client = self.client

        if UdpCommand.RGBW_GROUP_1_ON <= command <= UdpCommand.RGBW_GROUP_4_OFF:
            status = _ON if command % 2 == 1 else _OFF
            group = (command - UdpCommand.RGBW_GROUP_1_ON + 2) // 2
            client.prepare(RemoteType.RGBW, self.device_id, group)
            client.update_status(status)
            self.last_group = group
        elif command in _RGBW_WHITE:
            group = (command - UdpCommand.RGBW_GROUP_ALL_WHITE) // 2
            client.prepare(RemoteType.RGBW, self.device_id, group)
            client.update_color_white()
            self.last_group = group
        elif command in _RGBW_NIGHT:
            if command == UdpCommand.RGBW_GROUP_ALL_NIGHT:
                group = 0
            else:
                group = (command - UdpCommand.RGBW_GROUP_1_NIGHT + 2) // 2
            client.prepare(RemoteType.RGBW, self.device_id, group)
            client.enable_night_mode()
            self.last_group = group
        else:
            client.prepare(RemoteType.RGBW, self.device_id, self.last_group)
            if self._handle_rgbw(command, command_arg):
                return
            self._handle_cct(command)

    def _handle_rgbw(self, command: int, command_arg: int) -> bool:
        client = self.client
        if command == UdpCommand.RGBW_ALL_ON:
            client.update_status(_ON, 0)
        elif command == UdpCommand.RGBW_ALL_OFF:
            client.update_status(_OFF, 0)
        elif command == UdpCommand.RGBW_COLOR:
            # UDP colour is shifted from the radio colour and its spectrum
            # runs R->B->G instead of R->G->B.
            client.update_color_raw((0xFF - (command_arg + 0x35)) & 0xFF)
        elif command == UdpCommand.RGBW_DISCO_MODE:
            client.next_mode()
        elif command == UdpCommand.RGBW_SPEED_DOWN:
            client.mode_speed_down()
        elif command == UdpCommand.RGBW_SPEED_UP:
            client.mode_speed_up()
        elif command == UdpCommand.RGBW_BRIGHTNESS:
            # map [2, 27] --> [0, 100]
            client.update_brightness(
                _round_half_away(((command_arg - 2) / 25.0) * 100) & 0xFF
            )
        else:
            return False
        return True

    def _handle_cct(self, command: int) -> None:
        client = self.client
        group = cct_command_group(command)

        if group != NO_GROUP:
            client.prepare(RemoteType.CCT, self.device_id, group)
            if (command & 0x80) == 0x80:
                client.enable_night_mode()
            else:
                client.update_status(cct_command_status(command))
            return

        client.prepare(RemoteType.CCT, self.device_id, self.last_group)
        actions = {
            UdpCommand.CCT_BRIGHTNESS_DOWN: client.decrease_brightness,
            UdpCommand.CCT_BRIGHTNESS_UP: client.increase_brightness,
            UdpCommand.CCT_TEMPERATURE_DOWN: client.decrease_temperature,
            UdpCommand.CCT_TEMPERATURE_UP: client.increase_temperature,
            UdpCommand.CCT_NIGHT_MODE: client.enable_night_mode,
        }
        action = actions.get(command)
        if action is None:
            _log.warning("unhandled command: %d", command)
        else:
            action()
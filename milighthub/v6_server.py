"""Server for the version 6 (session based) gateway UDP protocol."""

import logging
from dataclasses import dataclass
from typing import List, Optional

from milighthub.udp_server import Address, MiLightClient, MiLightUdpServer
from milighthub.v6_handlers import V6CommandDemuxer, V6CommandHandler, all_handlers

_log = logging.getLogger(__name__)

V6_COMMAND_LEN = 8
V6_MAX_SESSIONS = 10
COMMAND_PACKET_LEN = 22

START_SESSION_COMMAND = bytes([
    0x20, 0x00, 0x00, 0x00, 0x16, 0x02, 0x62, 0x3A, 0xD5, 0xED, 0xA3, 0x01, 0xAE,
    0x08, 0x2D, 0x46, 0x61, 0x41, 0xA7, 0xF6, 0xDC, 0xAF,
])

START_SESSION_RESPONSE = bytes([
    0x28, 0x00, 0x00, 0x00, 0x11, 0x00, 0x02,
    0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0xFF,  # replaced with the hardware address
    0x69, 0xF0, 0x3C, 0x23, 0x00, 0x01,
    0xFF, 0xFF,  # replaced with the session id
    0x00,
])

COMMAND_HEADER = bytes([0x80, 0x00, 0x00, 0x00])

HEARTBEAT_HEADER = bytes([0xD0, 0x00, 0x00, 0x00, 0x02])

HEARTBEAT_HEADER2 = bytes([0x30, 0x00, 0x00, 0x00, 0x03])

HEARTBEAT_RESPONSE_HEADER = bytes([0xD8, 0x00, 0x00, 0x00, 0x07])

COMMAND_RESPONSE = bytes([0x88, 0x00, 0x00, 0x00, 0x03, 0x00, 0xFF, 0x00])

SEARCH_COMMAND = bytes([0x10, 0x00, 0x00, 0x00])

SEARCH_RESPONSE = bytes([
    0x18, 0x00, 0x00, 0x00, 0x40, 0x02,
    0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0xFF,  # hardware address
    0x00, 0x20, 0x39, 0x38, 0x35, 0x62,
    0x31, 0x35, 0x37, 0x62, 0x66, 0x36,
    0x66, 0x63, 0x34, 0x33, 0x33, 0x36,
    0x38, 0x61, 0x36, 0x33, 0x34, 0x36,
    0x37, 0x65, 0x61, 0x33, 0x62, 0x31,
    0x39, 0x64, 0x30, 0x64, 0x01, 0x00,
    0x01,
    # The port clients use for some commands; other values move them elsewhere.
    0x17, 0x63,
    0x00, 0x00, 0x05, 0x00, 0x09, 0x78,
    0x6C, 0x69, 0x6E, 0x6B, 0x5F, 0x64,
    0x65, 0x76, 0x07, 0x5B, 0xCD, 0x15,
])

OPEN_COMMAND_RESPONSE = bytes([
    0x80, 0x00, 0x00, 0x00, 0x15,
    0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0xFF,  # hardware address
    0x05, 0x02, 0x00, 0x34, 0x00, 0x00,
    0x00, 0x00, 0x00, 0x00, 0x00, 0x00,
    0x00, 0x00, 0x34,
])

COMMAND_DEMUXER = V6CommandDemuxer(all_handlers())


def read_int(data: bytes, size: int) -> int:
    """Big-endian unsigned integer from the first ``size`` bytes of ``data``."""
    if len(data) < size:
        raise ValueError(f"need {size} bytes, got {len(data)}")
    return int.from_bytes(data[:size], "big")


def write_int(value: int, size: int) -> bytes:
    """``value`` as ``size`` big-endian bytes, truncated to fit."""
    return (value & ((1 << (8 * size)) - 1)).to_bytes(size, "big")


def matches_packet(prefix: bytes, packet: bytes) -> bool:
    """Whether ``packet`` starts with ``prefix``."""
    return len(packet) >= len(prefix) and packet[: len(prefix)] == prefix


@dataclass(frozen=True)
class V6Session:
    """A client session: where to send responses and the id it was given."""

    addr: Address
    session_id: int


class V6MiLightUdpServer(MiLightUdpServer):
    """Handles search, session, heartbeat and command packets."""

    def __init__(
        self,
        client: MiLightClient,
        port: int,
        device_id: int,
        demuxer: Optional[V6CommandHandler] = None,
    ) -> None:
        super().__init__(client, port, device_id)
        self.demuxer = demuxer if demuxer is not None else COMMAND_DEMUXER
        self.sessions: List[V6Session] = []
        self._next_session_id = 0

    def _mac_addr(self) -> bytes:
        return bytes([0, 0, 0, 0, (self.device_id >> 8) & 0xFF, self.device_id & 0xFF])

    def _with_mac(self, template: bytes, offset: int) -> bytearray:
        buffer = bytearray(template)
        buffer[offset:offset + 6] = self._mac_addr()
        return buffer

    def begin_session(self, addr: Address) -> int:
        """Track a new session for ``addr``; the oldest beyond the limit is dropped."""
        session_id = self._next_session_id
        self._next_session_id = (self._next_session_id + 1) & 0xFFFF
        self.sessions.insert(0, V6Session(addr, session_id))
        del self.sessions[V6_MAX_SESSIONS:]
        return session_id

    def send_response(self, session_id: int, data: bytes) -> bool:
        """Send ``data`` to the session's address; false if the session is unknown."""
        session = next(
            (s for s in self.sessions if s.session_id == session_id), None
        )
        if session is None:
            _log.warning("received request with untracked session id: %d", session_id)
            return False
        self.send(bytes(data), session.addr)
        return True

    def handle_packet(self, packet: bytes, addr: Address) -> None:
        if matches_packet(START_SESSION_COMMAND, packet):
            self._handle_start_session(addr)
        elif matches_packet(HEARTBEAT_HEADER, packet) or matches_packet(
            HEARTBEAT_HEADER2, packet
        ):
            self._handle_heartbeat(read_int(packet[5:], 2))
        elif matches_packet(SEARCH_COMMAND, packet):
            self._handle_search(addr)
        elif len(packet) == COMMAND_PACKET_LEN and matches_packet(COMMAND_HEADER, packet):
            session_id = read_int(packet[5:], 2)
            sequence_num = packet[8]
            cmd = packet[10:10 + V6_COMMAND_LEN + 1]
            group = packet[19]
            self._handle_command(session_id, sequence_num, cmd, group)
        else:
            _log.warning("unhandled V6 packet")

    def _handle_search(self, addr: Address) -> None:
        self.send(bytes(self._with_mac(SEARCH_RESPONSE, 6)), addr)

    def _handle_start_session(self, addr: Address) -> None:
        session_id = self.begin_session(addr)
        response = self._with_mac(START_SESSION_RESPONSE, 7)
        response[19:21] = write_int(session_id, 2)
        self.send_response(session_id, response)

    def _handle_open_command(self, session_id: int) -> bool:
        return self.send_response(session_id, self._with_mac(OPEN_COMMAND_RESPONSE, 5))

    def _handle_heartbeat(self, session_id: int) -> None:
        response = HEARTBEAT_RESPONSE_HEADER + self._mac_addr() + b"\x00"
        self.send_response(session_id, response)

    def _handle_command(
        self, session_id: int, sequence_num: int, cmd: bytes, group: int
    ) -> None:
        cmd_type = cmd[0]
        cmd_header = read_int(cmd[1:], 4)
        cmd_arg = read_int(cmd[5:], 4)

        if cmd_header == 0:
            handled = self._handle_open_command(session_id)
        else:
            handled = self.demuxer.handle(
                self.client, self.device_id, group, cmd_type, cmd_header, cmd_arg
            )

        if handled:
            response = bytearray(COMMAND_RESPONSE)
            response[6] = sequence_num
            self.send_response(session_id, response)
        else:
            _log.debug("unhandled V6 command: %s", cmd.hex(" "))
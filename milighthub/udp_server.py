"""Base of the UDP servers that speak the gateway protocols."""

import socket
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

from milighthub.remote_type import RemoteType
from milighthub.status import MiLightStatus

MILIGHT_PACKET_BUFFER_SIZE = 30

Address = Tuple[str, int]


class MiLightClient(Protocol):
    """The operations the UDP servers perform on bulbs."""

    def prepare(self, remote_type: RemoteType, device_id: int, group_id: int) -> None:
        """Select the bulb group that later calls act on."""

    def update_status(
        self, status: MiLightStatus, group_id: Optional[int] = None
    ) -> None:
        """Switch the group (or the given group) on or off."""

    def update_brightness(self, brightness: int) -> None:
        """Set brightness in percent."""

    def increase_brightness(self) -> None:
        """Step brightness up."""

    def decrease_brightness(self) -> None:
        """Step brightness down."""

    def update_temperature(self, temperature: int) -> None:
        """Set white colour temperature."""

    def increase_temperature(self) -> None:
        """Step colour temperature up."""

    def decrease_temperature(self) -> None:
        """Step colour temperature down."""

    def update_color_raw(self, color: int) -> None:
        """Set the colour as the raw value the bulb uses."""

    def update_color_white(self) -> None:
        """Switch to white mode."""

    def update_saturation(self, saturation: int) -> None:
        """Set saturation in percent."""

    def update_mode(self, mode: int) -> None:
        """Select an effect mode."""

    def next_mode(self) -> None:
        """Select the next effect mode."""

    def previous_mode(self) -> None:
        """Select the previous effect mode."""

    def mode_speed_up(self) -> None:
        """Speed up the effect."""

    def mode_speed_down(self) -> None:
        """Slow down the effect."""

    def enable_night_mode(self) -> None:
        """Switch to night mode."""

    def pair(self) -> None:
        """Pair the selected group."""

    def unpair(self) -> None:
        """Unpair the selected group."""

    def set_held(self, held: bool) -> None:
        """Mark following commands as a held button."""

    def command(self, command: int, arg: int) -> None:
        """Send a raw command byte with its argument."""


@dataclass
class GatewayConfig:
    """One emulated gateway: its device id, UDP port and protocol version."""

    device_id: int
    port: int
    protocol_version: int = 5


class MiLightUdpServer(ABC):
    """A non-blocking UDP socket whose packets go to :meth:`handle_packet`."""

    def __init__(self, client: MiLightClient, port: int, device_id: int) -> None:
        self.client = client
        self.port = port
        self.device_id = device_id
        self.last_group = 0
        self._socket: Optional[socket.socket] = None

    def __enter__(self) -> "MiLightUdpServer":
        self.begin()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def begin(self) -> None:
        """Open the socket on the configured port (0 picks a free one)."""
        self.stop()
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        sock.setblocking(False)
        sock.bind(("", self.port))
        self.port = sock.getsockname()[1]
        self._socket = sock

    def stop(self) -> None:
        if self._socket is not None:
            self._socket.close()
            self._socket = None

    def _require_socket(self) -> socket.socket:
        if self._socket is None:
            raise RuntimeError("server is not started")
        return self._socket

    def handle_client(self) -> bool:
        """Handle one waiting packet, if any; true if one was handled."""
        sock = self._require_socket()
        try:
            packet, addr = sock.recvfrom(MILIGHT_PACKET_BUFFER_SIZE)
        except (BlockingIOError, InterruptedError, ConnectionResetError):
            return False
        self.handle_packet(packet, addr)
        return True

    def send(self, data: bytes, addr: Address) -> None:
        """Send a datagram to ``addr``."""
        self._require_socket().sendto(data, addr)

    @abstractmethod
    def handle_packet(self, packet: bytes, addr: Address) -> None:
        """Act on one received packet from ``addr``."""
"""Answers gateway discovery broadcasts from phone apps."""

import ipaddress
import socket
from typing import List, Optional, Sequence

from milighthub.udp_server import Address, GatewayConfig

V3_SEARCH_STRING = b"Link_Wi-Fi"
V6_SEARCH_STRING = b"HF-A11ASSISTHREAD"
_RECEIVE_SIZE = 1024


def _detect_local_ip() -> str:
    probe = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        probe.connect(("10.255.255.255", 1))
        return probe.getsockname()[0]
    except OSError:
        return "127.0.0.1"
    finally:
        probe.close()


class DiscoveryServer:
    """Replies to discovery requests for each configured gateway of the asked version."""

    def __init__(
        self,
        port: int,
        gateway_configs: Sequence[GatewayConfig],
        local_ip: Optional[str] = None,
    ) -> None:
        self.port = port
        self.gateway_configs = gateway_configs
        self.local_ip = local_ip
        self._socket: Optional[socket.socket] = None

    def __enter__(self) -> "DiscoveryServer":
        self.begin()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def begin(self) -> None:
        """Open the socket on the discovery port (0 picks a free one)."""
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

    def handle_client(self) -> bool:
        """Answer one waiting request, if any; true if a packet was read."""
        if self._socket is None:
            raise RuntimeError("server is not started")
        try:
            data, addr = self._socket.recvfrom(_RECEIVE_SIZE)
        except (BlockingIOError, InterruptedError, ConnectionResetError):
            return False
        for response in self.handle_packet(data):
            self._send(response, addr)
        return True

    def _send(self, data: bytes, addr: Address) -> None:
        assert self._socket is not None
        self._socket.sendto(data, addr)

    def handle_packet(self, data: bytes) -> List[bytes]:
        """Responses to a request packet; empty if it is not a search."""
        request = data.split(b"\0", 1)[0]
        if request == V3_SEARCH_STRING:
            return self.discovery_responses(5)
        if request == V6_SEARCH_STRING:
            return self.discovery_responses(6)
        return []

    def discovery_responses(self, version: int) -> List[bytes]:
        """One response for each gateway speaking exactly ``version``."""
        address = str(ipaddress.IPv4Address(self.local_ip or _detect_local_ip()))
        responses = []
        for config in self.gateway_configs:
            if config.protocol_version != version:
                continue
            high = (config.device_id >> 8) & 0xFF
            low = config.device_id & 0xFF
            text = f"{address},00000000{high:02X}{low:02X}"
            if config.protocol_version != 5:
                text += ",HF-LPB100"
            responses.append(text.encode("ascii"))
        return responses
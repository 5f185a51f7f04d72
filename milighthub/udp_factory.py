"""Creates the UDP server for a gateway protocol version."""

from milighthub.udp_server import MiLightClient, MiLightUdpServer
from milighthub.v5_server import V5MiLightUdpServer
from milighthub.v6_server import V6MiLightUdpServer


def server_from_version(
    version: int, client: MiLightClient, port: int, device_id: int
) -> MiLightUdpServer:
    """Server for protocol ``version`` (0 or 5, or 6); ``ValueError`` otherwise."""
    if version in (0, 5):
        return V5MiLightUdpServer(client, port, device_id)
    if version == 6:
        return V6MiLightUdpServer(client, port, device_id)
    raise ValueError(f"unsupported UDP protocol version: {version}")
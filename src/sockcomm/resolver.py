"""
Resolver helpers built on the socket factory.
"""

import socket
from typing import Optional, Tuple

from sockcomm.config import get_config
from sockcomm.errors import SockcommError
from sockcomm.factory import get_socket_factory
from sockcomm.telemetry import LoggingFacade

LOOPBACK = "127.0.0.1"

_logger = LoggingFacade("sockcomm.resolver")


def source_address(dest: Optional[str] = None) -> str:
    """Return the local address the OS would use to reach ``dest``.

    A UDP socket is connected toward ``dest`` (no datagram is sent) and its
    local address read back. When that fails the loopback address
    ``127.0.0.1`` is returned instead. Failures include unresolvable or
    malformed destination names and a non-numeric probe port setting.

    Args:
        dest: Destination to probe. Defaults to the ``source_probe_host``
            configuration value.
    """
    try:
        dest = dest or get_config("source_probe_host")
        port = int(get_config("source_probe_port"))
        with get_socket_factory().create_udp({"PeerHost": dest, "PeerPort": port}) as sock:
            return sock.getsockname()[1]
    except (OSError, ValueError, SockcommError) as e:
        _logger.debug(
            "source_address.fallback",
            dest=dest,
            error=str(e),
            error_type=type(e).__name__,
        )
        return LOOPBACK


def emulated_socket_pair() -> Tuple[socket.socket, socket.socket]:
    """Build a connected pair over loopback TCP.

    Another local process could connect to the listener between ``listen``
    and our own connect; the single ``accept`` then returns its connection.
    """
    factory = get_socket_factory()
    with factory.create_tcp_server({"LocalHost": LOOPBACK, "LocalPort": 0}) as server:
        port = server.getsockname()[2]
        client = factory.create_tcp({"PeerHost": LOOPBACK, "PeerPort": port})
        try:
            accepted = server.accept()
        except BaseException:
            client.close()
            raise
    return accepted, client


def socket_pair() -> Tuple[socket.socket, socket.socket]:
    """Return two connected local stream sockets.

    Uses a native ``AF_UNIX`` pair where the platform provides one and
    ``emulated_socket_pair`` when it is missing or cannot be created.
    """
    if hasattr(socket, "AF_UNIX"):
        try:
            return socket.socketpair(socket.AF_UNIX, socket.SOCK_STREAM)
        except OSError as e:
            _logger.debug("socket_pair.emulated", error=str(e), error_type=type(e).__name__)
    return emulated_socket_pair()

"""
Channel that opens sockets directly on the local network stack.
"""

import socket

from sockcomm.codec import AF_INET6
from sockcomm.errors import ConfigurationError
from sockcomm.sockets import TcpServerSocket, TcpSocket, UdpSocket

LISTEN_BACKLOG = 128


class LocalChannel:
    """Channel creating sockets with the host's own socket API.

    ``proto`` and ``server`` select the variant: a listening ``TcpServerSocket``,
    a connected ``TcpSocket`` or a ``UdpSocket``. A socket that fails while
    being set up is closed before the error propagates.
    """

    name = "local"

    def create(self, params):
        if params.is_tcp and not params.server and not params.peerhost:
            raise ConfigurationError("PeerHost is required for a TCP client socket")

        family = params.family
        if params.is_udp:
            sock = UdpSocket(family, socket.SOCK_DGRAM)
        elif params.server:
            sock = TcpServerSocket(family, socket.SOCK_STREAM)
        else:
            sock = TcpSocket(family, socket.SOCK_STREAM)

        try:
            sock.init_sock(params)
            if params.is_tcp and params.server:
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
                sock.bind((params.localhost or self._wildcard(family), params.localport))
                sock.listen(LISTEN_BACKLOG)
                return sock

            if params.localhost or params.localport:
                sock.bind((params.localhost or self._wildcard(family), params.localport))
            if params.peerhost:
                sock.connect((params.peerhost, params.peerport))
        except BaseException:
            sock.close()
            raise
        return sock

    @staticmethod
    def _wildcard(family: int) -> str:
        return "::" if family == AF_INET6 else "0.0.0.0"

    def __repr__(self) -> str:
        return "LocalChannel()"

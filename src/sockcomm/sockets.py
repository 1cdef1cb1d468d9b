"""
Socket variants opened directly on the local network stack.

Each variant is a ``socket.socket`` carrying the ``SocketHandle``
capabilities, so it can be used anywhere a plain socket is expected.
"""

import socket

from sockcomm.handle import SocketHandle


class TcpSocket(SocketHandle, socket.socket):
    """A connected TCP stream."""

    def sock_type(self) -> str:
        return "tcp"


class TcpServerSocket(SocketHandle, socket.socket):
    """A listening TCP socket."""

    def sock_type(self) -> str:
        return "tcp"

    def accept(self) -> TcpSocket:
        """Accept one connection.

        Returns:
            A ``TcpSocket`` whose peer fields describe the client and whose
            local fields and context are those of this server.
        """
        fd, address = self._accept()
        client = TcpSocket(self.family, self.type, self.proto, fileno=fd)
        if socket.getdefaulttimeout() is None and self.gettimeout():
            client.setblocking(True)
        client._peerhost = address[0]
        client._peerport = address[1]
        client._localhost = self.localhost
        client._localport = self.getsockname()[2]
        client._context = self.context
        return client


class UdpSocket(SocketHandle, socket.socket):
    """A datagram socket, optionally connected to a default peer."""

    def sock_type(self) -> str:
        return "udp"

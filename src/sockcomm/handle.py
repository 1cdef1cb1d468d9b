"""
Capabilities shared by every socket variant.

``SocketHandle`` is a mixin: concrete variants combine it with a real socket
class and call ``init_sock`` once while being constructed.
"""

from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from sockcomm.codec import from_sockaddr, to_sockaddr
from sockcomm.errors import NotSupportedError


class SocketHandle:
    """Read accessors and sockaddr decoding for a live socket.

    ``peerhost``, ``peerport``, ``localhost``, ``localport`` and ``context``
    are copied from the creation parameters and are read-only afterwards.
    """

    _peerhost: Optional[str] = None
    _peerport: int = 0
    _localhost: Optional[str] = None
    _localport: int = 0
    _context: Mapping[str, Any] = MappingProxyType({})

    def init_sock(self, params=None) -> None:
        """Initialize the general socket fields from ``params``."""
        if params is None:
            return
        self._peerhost = params.peerhost
        self._peerport = params.peerport
        self._localhost = params.localhost
        self._localport = params.localport
        self._context = params.context if params.context is not None else MappingProxyType({})

    @property
    def peerhost(self) -> Optional[str]:
        return self._peerhost

    @property
    def peerport(self) -> int:
        return self._peerport

    @property
    def localhost(self) -> Optional[str]:
        return self._localhost

    @property
    def localport(self) -> int:
        return self._localport

    @property
    def context(self) -> Mapping[str, Any]:
        """Instance-specific attributes supplied by the caller at creation."""
        return self._context

    @staticmethod
    def _decode(address) -> Tuple[int, str, int]:
        # Native addresses are (host, port[, flowinfo, scope_id]) tuples;
        # re-express them in the binary layout and decode that.
        return from_sockaddr(to_sockaddr(address[0], address[1]))

    def getsockname(self) -> Tuple[int, str, int]:
        """Return the local endpoint as ``(family, address, port)``."""
        return self._decode(super().getsockname())

    def getlocalname(self) -> Tuple[int, str, int]:
        return self.getsockname()

    def getpeername(self) -> Tuple[int, str, int]:
        """Return the remote endpoint as ``(family, address, port)``."""
        return self._decode(super().getpeername())

    def sock_type(self) -> str:
        """Return the transport name of the socket, such as ``"tcp"``."""
        raise NotSupportedError("Socket type is not supported.")

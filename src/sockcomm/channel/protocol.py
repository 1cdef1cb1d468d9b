"""
Protocol definition for socket channels.

A channel turns creation parameters into a live socket handle. The local
channel opens sockets on this host; relay channels may originate them
through an already-established transport. Any object with a matching
``create`` method is accepted.
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sockcomm.handle import SocketHandle
    from sockcomm.parameters import Parameters


@runtime_checkable
class Channel(Protocol):
    """Protocol defining the interface for socket channels."""

    def create(self, params: "Parameters") -> "SocketHandle":
        """Create a socket described by ``params``.

        Args:
            params: The normalized creation parameters.

        Returns:
            A live socket handle.

        Raises:
            OSError: Transport failures (refused, timed out, address in use,
                unreachable) propagate unchanged.
        """
        ...

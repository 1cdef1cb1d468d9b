"""
Socket factory.

The factory turns declarative socket options into a live socket by
normalizing them into ``Parameters`` and handing those to the channel they
name. It never opens a socket itself.
"""

from typing import Any, Dict, Mapping, Optional

from sockcomm.channel.protocol import Channel
from sockcomm.channel.registry import ChannelRegistry, get_channel_registry
from sockcomm.config import as_bool, get_config
from sockcomm.errors import RoutingError
from sockcomm.parameters import Parameters
from sockcomm.telemetry import get_telemetry

Options = Optional[Mapping[str, Any]]


def _force(options: Options, **forced: Any) -> Dict[str, Any]:
    """Copy ``options`` with ``forced`` keys overriding any spelling of them."""
    names = {key.lower() for key in forced}
    opts = {key: value for key, value in (options or {}).items() if str(key).lower() not in names}
    opts.update(forced)
    return opts


class SocketFactory:
    """Create sockets through channels.

    The factory keeps no per-call state and can be shared between threads.
    """

    def __init__(
        self,
        registry: Optional[ChannelRegistry] = None,
        enable_telemetry: Optional[bool] = None,
        config: Optional[Dict[str, Any]] = None,
    ):
        """Initialize the factory.

        Args:
            registry: Channel registry used to resolve default and named
                channels. Defaults to the process-wide registry.
            enable_telemetry: Whether to trace and log socket creation.
                Defaults to the ``enable_telemetry`` configuration value.
            config: Configuration options for the factory.
        """
        self._config = config or {}
        self._registry = registry
        if enable_telemetry is None:
            enable_telemetry = as_bool(get_config("enable_telemetry", self._config))
        self._tracer, self._logger = (
            get_telemetry("sockcomm.factory") if enable_telemetry else (None, None)
        )

    @property
    def registry(self) -> ChannelRegistry:
        return self._registry if self._registry is not None else get_channel_registry()

    def create(self, options: Options = None):
        """Create a socket from an option mapping."""
        return self.create_param(Parameters.from_options(options, self.registry))

    def create_param(self, params: Parameters):
        """Create a socket using already normalized parameters.

        Returns:
            The handle produced by ``params.channel``.

        Raises:
            RoutingError: If ``params`` carries no usable channel.
            OSError: Any transport failure from the channel, unchanged.
        """
        channel = params.channel
        if not isinstance(channel, Channel):
            raise RoutingError(f"No usable channel for {params.peerhost}:{params.peerport}")

        if self._tracer is None:
            return channel.create(params)

        attributes = {
            "socket.proto": params.proto,
            "socket.server": params.server,
            "socket.peerhost": params.peerhost or "",
            "socket.peerport": params.peerport,
            "socket.channel": repr(channel),
        }
        with self._tracer.start_as_current_span("sockcomm.create", attributes):
            try:
                sock = channel.create(params)
            except Exception as e:
                self._logger.error(
                    "socket.create_failed",
                    proto=params.proto,
                    server=params.server,
                    peerhost=params.peerhost,
                    peerport=params.peerport,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise
            self._logger.debug(
                "socket.created",
                proto=params.proto,
                server=params.server,
                peerhost=params.peerhost,
                peerport=params.peerport,
                localhost=params.localhost,
                localport=params.localport,
            )
            return sock

    def create_tcp(self, options: Options = None):
        """Create a TCP socket."""
        return self.create(_force(options, Proto="tcp"))

    def create_tcp_server(self, options: Options = None):
        """Create a listening TCP socket."""
        return self.create_tcp(_force(options, Server=True))

    def create_udp(self, options: Options = None):
        """Create a UDP socket."""
        return self.create(_force(options, Proto="udp"))


_factory: Optional[SocketFactory] = None


def get_socket_factory() -> SocketFactory:
    """Return the process-wide socket factory, creating it on first use."""
    global _factory
    if _factory is None:
        _factory = SocketFactory()
    return _factory


def create(options: Options = None):
    return get_socket_factory().create(options)


def create_param(params: Parameters):
    return get_socket_factory().create_param(params)


def create_tcp(options: Options = None):
    return get_socket_factory().create_tcp(options)


def create_tcp_server(options: Options = None):
    return get_socket_factory().create_tcp_server(options)


def create_udp(options: Options = None):
    return get_socket_factory().create_udp(options)

"""
Socket creation parameters.

``Parameters`` is the normalized, read-only form of the option mapping
callers pass to the socket factory.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from sockcomm.channel.registry import get_channel_registry
from sockcomm.codec import AF_INET, AF_INET6, is_ipv6
from sockcomm.config import as_bool
from sockcomm.errors import ConfigurationError, RoutingError

PROTOCOLS = ("tcp", "udp")

# Recognized option keys, matched case-insensitively.
OPTION_KEYS = {
    "peerhost": "PeerHost",
    "peerport": "PeerPort",
    "localhost": "LocalHost",
    "localport": "LocalPort",
    "proto": "Proto",
    "server": "Server",
    "channel": "Channel",
    "context": "Context",
}


def _port(value: Any, key: str) -> int:
    if value is None or value == "":
        return 0
    try:
        port = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid {OPTION_KEYS[key]}: {value!r}") from e
    if not 0 <= port <= 65535:
        raise ConfigurationError(f"{OPTION_KEYS[key]} out of range: {port}")
    return port


@dataclass(frozen=True)
class Parameters:
    """Normalized description of the socket a caller wants.

    ``proto`` and ``server`` together select the socket variant; ``channel``
    is the capability that will materialize it.
    """

    peerhost: Optional[str] = None
    peerport: int = 0
    localhost: Optional[str] = None
    localport: int = 0
    proto: str = "tcp"
    server: bool = False
    channel: Any = None
    context: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None, registry=None) -> "Parameters":
        """Normalize an option mapping into Parameters.

        Args:
            options: Mapping using the keys ``PeerHost``, ``PeerPort``,
                ``LocalHost``, ``LocalPort``, ``Proto``, ``Server``,
                ``Channel`` and ``Context`` (any case). Other keys are ignored.
            registry: Channel registry used for the default channel and for
                channels given by name. Defaults to the process-wide registry.

        Returns:
            The normalized parameters.

        Raises:
            ConfigurationError: If the protocol or a port is invalid.
            RoutingError: If a channel is named that is not registered.
        """
        opts: Dict[str, Any] = {}
        for key, value in (options or {}).items():
            name = str(key).lower()
            if name in OPTION_KEYS:
                opts[name] = value

        proto = str(opts.get("proto") or "tcp").lower()
        if proto not in PROTOCOLS:
            raise ConfigurationError(
                f"Invalid Proto: {opts['proto']!r}. Supported: {', '.join(PROTOCOLS)}"
            )

        if registry is None:
            registry = get_channel_registry()

        try:
            if "channel" not in opts:
                channel = registry.default()
            elif isinstance(opts["channel"], str):
                channel = registry.get(opts["channel"])
            else:
                channel = opts["channel"]
        except KeyError as e:
            raise RoutingError(f"Unknown channel: {e.args[0]!r}") from e

        return cls(
            peerhost=opts.get("peerhost") or None,
            peerport=_port(opts.get("peerport"), "peerport"),
            localhost=opts.get("localhost") or None,
            localport=_port(opts.get("localport"), "localport"),
            proto=proto,
            server=as_bool(opts.get("server", False)),
            channel=channel,
            context=MappingProxyType(dict(opts.get("context") or {})),
        )

    @property
    def is_tcp(self) -> bool:
        return self.proto == "tcp"

    @property
    def is_udp(self) -> bool:
        return self.proto == "udp"

    @property
    def is_ipv6(self) -> bool:
        """True if the peer or local host is an IPv6 address.

        Host names are resolved to decide.
        """
        return any(host and is_ipv6(host) for host in (self.peerhost, self.localhost))

    @property
    def family(self) -> int:
        return AF_INET6 if self.is_ipv6 else AF_INET

"""
sockcomm: socket creation through pluggable channels.

Callers describe the socket they want (TCP client, TCP server or UDP) with
an option mapping; the socket factory normalizes it and hands it to a
channel, which opens the socket on the local stack or through a relay. The
package also provides the address, sockaddr and CIDR conversions used by
higher protocol layers.
"""

from socket import SHUT_RD, SHUT_RDWR, SHUT_WR

from sockcomm.channel import (
    Channel,
    ChannelRegistry,
    ChannelRouter,
    LocalChannel,
    get_channel_registry,
)
from sockcomm.codec import (
    AF_INET,
    AF_INET6,
    addr_atoi,
    addr_itoa,
    bit2netmask,
    cidr_crack,
    classify,
    dotted_ip,
    from_sockaddr,
    getaddress,
    gethostbyname,
    is_ipv4,
    is_ipv6,
    net2bitmask,
    resolv_nbo,
    resolv_nbo_i,
    resolv_to_dotted,
    to_sockaddr,
)
from sockcomm.errors import (
    AddressError,
    ConfigurationError,
    InvalidAddressFormatError,
    NotSupportedError,
    RoutingError,
    SockcommError,
    UnsupportedFamilyError,
)
from sockcomm.factory import (
    SocketFactory,
    create,
    create_param,
    create_tcp,
    create_tcp_server,
    create_udp,
    get_socket_factory,
)
from sockcomm.handle import SocketHandle
from sockcomm.parameters import Parameters
from sockcomm.resolver import emulated_socket_pair, socket_pair, source_address
from sockcomm.sockets import TcpServerSocket, TcpSocket, UdpSocket

__version__ = "0.1.0"

__all__ = [
    # Factory
    "SocketFactory",
    "create",
    "create_param",
    "create_tcp",
    "create_tcp_server",
    "create_udp",
    "get_socket_factory",
    "Parameters",
    # Channels
    "Channel",
    "ChannelRegistry",
    "ChannelRouter",
    "LocalChannel",
    "get_channel_registry",
    # Sockets
    "SocketHandle",
    "TcpSocket",
    "TcpServerSocket",
    "UdpSocket",
    # Addressing
    "AF_INET",
    "AF_INET6",
    "addr_atoi",
    "addr_itoa",
    "bit2netmask",
    "cidr_crack",
    "classify",
    "dotted_ip",
    "from_sockaddr",
    "getaddress",
    "gethostbyname",
    "is_ipv4",
    "is_ipv6",
    "net2bitmask",
    "resolv_nbo",
    "resolv_nbo_i",
    "resolv_to_dotted",
    "to_sockaddr",
    # Resolver
    "emulated_socket_pair",
    "socket_pair",
    "source_address",
    # Errors
    "SockcommError",
    "AddressError",
    "ConfigurationError",
    "InvalidAddressFormatError",
    "NotSupportedError",
    "RoutingError",
    "UnsupportedFamilyError",
    # Shutdown modes
    "SHUT_RD",
    "SHUT_WR",
    "SHUT_RDWR",
]

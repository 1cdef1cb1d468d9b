"""
Address conversion utilities.

Conversions between textual addresses, raw network-order bytes, integers
and the binary sockaddr structures handed to native socket APIs, plus the
netmask and CIDR arithmetic used by routing code.

Binary sockaddr layouts produced and consumed here:

    IPv4 (16 bytes): family(2, native) + port(2, big-endian) + address(4) + zero(8)
    IPv6 (28 bytes): family(2, native) + port(2, big-endian) + flowinfo(4)
                     + address(16) + scope_id(4)

Literal dotted quads never reach the system resolver. On some platforms the
resolver falls into reverse lookups for literal addresses, which can stall
for several seconds.
"""

import re
import socket
import struct
from typing import List, Tuple

from sockcomm.errors import AddressError, InvalidAddressFormatError, UnsupportedFamilyError

AF_INET = socket.AF_INET
# Platforms built without IPv6 support still need a value to tag sockaddrs with.
AF_INET6 = getattr(socket, "AF_INET6", 10)

_OCTET = r"(?:25[0-5]|2[0-4][0-9]|[0-1]?[0-9]{1,2})"
_DOTTED_QUAD = re.compile(rf"{_OCTET}\.{_OCTET}\.{_OCTET}\.{_OCTET}")
_PREFIX_LEN = re.compile(r"[0-9]{1,2}")

_FAMILY = struct.Struct("=H")
_PORT = struct.Struct("!H")
_SOCKADDR_IN_TAIL = struct.Struct("!H4s8x")
_SOCKADDR_IN6_TAIL = struct.Struct("!HI16sI")


def dotted_ip(addr: str) -> bool:
    """Return True if ``addr`` is a dotted quad with every octet in 0..255."""
    return bool(addr) and _DOTTED_QUAD.fullmatch(addr) is not None


def _pack_quad(addr: str) -> bytes:
    return struct.pack("4B", *(int(octet) for octet in addr.split(".")))


def _resolve(host: str) -> Tuple[int, str, str]:
    """Forward-resolve ``host`` with the system resolver.

    Returns:
        ``(family, canonical name, textual address)`` of the first result.
    """
    family, _, _, canonname, sockaddr = socket.getaddrinfo(
        host, None, flags=socket.AI_CANONNAME
    )[0]
    # Link-local IPv6 results carry a "%scope" suffix that inet_pton rejects.
    return family, canonname, sockaddr[0].split("%", 1)[0]


def getaddress(addr: str) -> str:
    """Resolve ``addr`` to a textual address.

    Dotted quads are returned unchanged without consulting the resolver;
    anything else is forward-resolved and the first address returned.

    Raises:
        socket.gaierror: If the name cannot be resolved.
    """
    if dotted_ip(addr):
        return addr
    return _resolve(addr)[2]


resolv_to_dotted = getaddress


def classify(addr: str) -> int:
    """Return ``AF_INET6`` if the resolved form of ``addr`` is IPv6, else ``AF_INET``.

    Non-literal input triggers name resolution.
    """
    return AF_INET6 if ":" in getaddress(addr) else AF_INET


def is_ipv4(addr: str) -> bool:
    return classify(addr) == AF_INET


def is_ipv6(addr: str) -> bool:
    return classify(addr) == AF_INET6


def gethostbyname(host: str) -> Tuple[str, str, int, bytes]:
    """Look up ``host`` and return ``(name, alias, family, packed address)``.

    For a dotted quad the result is synthesized locally, so no reverse
    lookup can be triggered.
    """
    if dotted_ip(host):
        return host, host, AF_INET, _pack_quad(host)
    family, canonname, address = _resolve(host)
    return host, canonname or host, family, socket.inet_pton(family, address)


def resolv_nbo(host: str) -> bytes:
    """Resolve ``host`` to its raw address bytes in network byte order."""
    return gethostbyname(getaddress(host))[3]


def resolv_nbo_i(host: str) -> int:
    """Resolve ``host`` to its address as an unsigned integer.

    Four address bytes are read as one big-endian 32-bit word; sixteen bytes
    as four words, the first one most significant.

    Raises:
        InvalidAddressFormatError: If the address is neither 1 nor 4 words long.
    """
    raw = resolv_nbo(host)
    count = len(raw) // 4
    words = struct.unpack(f"!{count}I", raw[: count * 4])
    if count == 1:
        return words[0]
    if count == 4:
        return sum(word << (96 - index * 32) for index, word in enumerate(words))
    raise InvalidAddressFormatError(f"Invalid address format: {count} words")


def to_sockaddr(ip: str, port: int) -> bytes:
    """Build a binary sockaddr for ``ip`` and ``port``.

    An empty ``ip`` means the IPv4 wildcard address. The family is chosen
    from the resolved textual form of ``ip``.
    """
    ip = getaddress(ip or "0.0.0.0")
    if ":" in ip:
        return _FAMILY.pack(AF_INET6) + _SOCKADDR_IN6_TAIL.pack(
            int(port), 0, gethostbyname(ip)[3], 0
        )
    return _FAMILY.pack(AF_INET) + _SOCKADDR_IN_TAIL.pack(int(port), _pack_quad(ip))


def verbose_ipv6(packed: bytes) -> str:
    """Render 16 address bytes as eight colon-separated groups of four hex digits.

    This is deliberately not the canonical form: zero runs are not
    compressed and leading zeros are kept, e.g.
    ``0000:0000:0000:0000:0000:0000:0000:0001`` for the loopback address.
    """
    digits = packed.hex()
    return ":".join(digits[i:i + 4] for i in range(0, len(digits), 4))


def from_sockaddr(data: bytes) -> Tuple[int, str, int]:
    """Decode a binary sockaddr into ``(family, address, port)``.

    IPv6 addresses are rendered with ``verbose_ipv6``.

    Raises:
        UnsupportedFamilyError: If the family is neither IPv4 nor IPv6.
        InvalidAddressFormatError: If ``data`` is too short for its family.
    """
    if len(data) < _FAMILY.size + _PORT.size:
        raise InvalidAddressFormatError(f"Truncated sockaddr: {len(data)} bytes")
    (family,) = _FAMILY.unpack_from(data, 0)
    (port,) = _PORT.unpack_from(data, _FAMILY.size)

    if family == AF_INET6:
        address = data[8:24]
        if len(address) != 16:
            raise InvalidAddressFormatError(f"Truncated IPv6 sockaddr: {len(data)} bytes")
        return family, verbose_ipv6(address), port
    if family == AF_INET:
        address = data[4:8]
        if len(address) != 4:
            raise InvalidAddressFormatError(f"Truncated IPv4 sockaddr: {len(data)} bytes")
        return family, ".".join(str(octet) for octet in address), port
    raise UnsupportedFamilyError(family)


def addr_atoi(addr: str) -> int:
    """Convert a dotted quad into an unsigned 32-bit integer."""
    return struct.unpack("!I", _pack_quad(addr))[0]


def addr_itoa(addr: int) -> str:
    """Convert an unsigned 32-bit integer into a dotted quad."""
    return ".".join(str(octet) for octet in struct.pack("!I", addr))


def net2bitmask(netmask: str) -> int:
    """Convert a netmask such as ``255.255.255.240`` into a prefix length (28).

    The mask must be contiguous and left-aligned. Only the lowest set bit is
    inspected, so a mask like ``255.0.255.0`` gives a meaningless answer.
    """
    raw = struct.unpack("!I", resolv_nbo(netmask)[:4])[0]
    for bit in range(32):
        if raw & (1 << bit):
            return 32 - bit
    return 0


def bit2netmask(bits: int) -> str:
    """Convert a prefix length such as 28 into a netmask (``255.255.255.240``)."""
    return addr_itoa(~((2 ** (32 - bits)) - 1) & 0xFFFFFFFF)


def cidr_crack(cidr: str) -> List[str]:
    """Expand ``A.B.C.D/N`` into ``[first, last]`` addresses of the subnet.

    Raises:
        AddressError: If ``cidr`` is not of the form ``A.B.C.D/N`` with N in 0..32.
    """
    addr, sep, prefix = cidr.partition("/")
    if not sep or not dotted_ip(addr) or not _PREFIX_LEN.fullmatch(prefix) or int(prefix) > 32:
        raise AddressError(f"Invalid CIDR: {cidr!r}")

    size = 2 ** (32 - int(prefix))
    mask = 2 ** 32 - size
    base = addr_atoi(addr) & mask
    return [addr_itoa(base), addr_itoa(base + size - 1)]

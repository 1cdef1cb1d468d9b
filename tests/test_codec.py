"""
Tests for the address conversion utilities.
"""

import socket
import struct
from unittest.mock import patch

import pytest

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
    to_sockaddr,
    verbose_ipv6,
)
from sockcomm.errors import AddressError, InvalidAddressFormatError, UnsupportedFamilyError


def _addrinfo(family, address):
    sockaddr = (address, 0) if family == socket.AF_INET else (address, 0, 0, 0)
    return [(family, socket.SOCK_STREAM, 6, "canonical.example.test", sockaddr)]


@pytest.mark.parametrize(
    "addr,expected",
    [
        ("1.2.3.4", True),
        ("0.0.0.0", True),
        ("255.255.255.255", True),
        ("010.001.1.1", True),
        ("256.1.1.1", False),
        ("1.2.3", False),
        ("1.2.3.4.5", False),
        ("1.2.3.4\n", False),
        ("a.b.c.d", False),
        ("::1", False),
        ("", False),
    ],
)
def test_dotted_ip(addr, expected):
    """Test the strict dotted-quad grammar."""
    assert dotted_ip(addr) is expected


def test_getaddress_literal_skips_resolver():
    """Test that a dotted quad is returned without calling the resolver."""
    with patch("sockcomm.codec.socket.getaddrinfo") as mock_getaddrinfo:
        assert getaddress("10.0.0.1") == "10.0.0.1"
        mock_getaddrinfo.assert_not_called()


def test_getaddress_name_uses_resolver():
    """Test that a host name is forward-resolved."""
    with patch(
        "sockcomm.codec.socket.getaddrinfo",
        return_value=_addrinfo(socket.AF_INET, "192.0.2.7"),
    ) as mock_getaddrinfo:
        assert getaddress("example.test") == "192.0.2.7"
        mock_getaddrinfo.assert_called_once()
        assert mock_getaddrinfo.call_args[0][0] == "example.test"


def test_getaddress_resolver_error_propagates():
    """Test that resolver failures are not swallowed."""
    with patch(
        "sockcomm.codec.socket.getaddrinfo",
        side_effect=socket.gaierror(socket.EAI_NONAME, "Name or service not known"),
    ):
        with pytest.raises(socket.gaierror):
            getaddress("does-not-exist.test")


def test_classify():
    """Test IPv4/IPv6 classification."""
    assert classify("10.0.0.1") == AF_INET
    assert classify("::1") == AF_INET6
    assert is_ipv4("10.0.0.1") is True
    assert is_ipv6("10.0.0.1") is False
    assert is_ipv6("::1") is True
    assert is_ipv4("::1") is False


def test_classify_resolves_names():
    """Test that classification of a name uses its resolved form."""
    with patch(
        "sockcomm.codec.socket.getaddrinfo",
        return_value=_addrinfo(socket.AF_INET6, "2001:db8::1"),
    ):
        assert is_ipv6("v6only.example.test") is True


def test_gethostbyname_literal():
    """Test that a dotted quad is synthesized without a resolver call."""
    with patch("sockcomm.codec.socket.getaddrinfo") as mock_getaddrinfo:
        assert gethostbyname("192.168.1.10") == (
            "192.168.1.10",
            "192.168.1.10",
            AF_INET,
            b"\xc0\xa8\x01\x0a",
        )
        mock_getaddrinfo.assert_not_called()


def test_gethostbyname_name():
    """Test resolution of a host name."""
    with patch(
        "sockcomm.codec.socket.getaddrinfo",
        return_value=_addrinfo(socket.AF_INET, "192.0.2.7"),
    ):
        name, alias, family, packed = gethostbyname("example.test")
    assert name == "example.test"
    assert alias == "canonical.example.test"
    assert family == socket.AF_INET
    assert packed == b"\xc0\x00\x02\x07"


def test_to_sockaddr_ipv4_layout():
    """Test the 16-byte IPv4 sockaddr layout."""
    data = to_sockaddr("10.0.0.1", 4444)
    assert len(data) == 16
    assert data[:2] == struct.pack("=H", AF_INET)
    assert data[2:4] == b"\x11\x5c"
    assert data[4:8] == b"\x0a\x00\x00\x01"
    assert data[8:] == b"\x00" * 8


def test_to_sockaddr_defaults_to_wildcard():
    """Test that an empty address means 0.0.0.0."""
    assert to_sockaddr(None, 80) == to_sockaddr("0.0.0.0", 80)
    assert to_sockaddr("", 80)[4:8] == b"\x00\x00\x00\x00"


def test_to_sockaddr_ipv6_layout():
    """Test the 28-byte IPv6 sockaddr layout."""
    data = to_sockaddr("::1", 443)
    assert len(data) == 28
    assert data[:2] == struct.pack("=H", AF_INET6)
    assert data[2:4] == b"\x01\xbb"
    assert data[4:8] == b"\x00" * 4
    assert data[8:24] == b"\x00" * 15 + b"\x01"
    assert data[24:] == b"\x00" * 4


def test_from_sockaddr_ipv4():
    """Test decoding an IPv4 sockaddr, including trailing zero octets."""
    assert from_sockaddr(to_sockaddr("10.0.0.1", 4444)) == (AF_INET, "10.0.0.1", 4444)
    assert from_sockaddr(to_sockaddr("10.0.0.0", 0)) == (AF_INET, "10.0.0.0", 0)


def test_from_sockaddr_ipv6_is_verbose():
    """Test that IPv6 addresses are rendered without zero compression."""
    family, address, port = from_sockaddr(to_sockaddr("::1", 8080))
    assert family == AF_INET6
    assert address == "0000:0000:0000:0000:0000:0000:0000:0001"
    assert port == 8080


def test_verbose_ipv6():
    """Test the verbose IPv6 rendering."""
    packed = socket.inet_pton(socket.AF_INET6, "2001:db8::ff00:42:8329")
    assert verbose_ipv6(packed) == "2001:0db8:0000:0000:0000:ff00:0042:8329"


def test_from_sockaddr_unsupported_family():
    """Test that unknown families are rejected."""
    data = struct.pack("=H", 0xFFFE) + b"\x00" * 14
    with pytest.raises(UnsupportedFamilyError) as exc_info:
        from_sockaddr(data)
    assert exc_info.value.family == 0xFFFE


def test_from_sockaddr_truncated():
    """Test that a truncated sockaddr is rejected."""
    with pytest.raises(InvalidAddressFormatError):
        from_sockaddr(b"\x02")
    with pytest.raises(InvalidAddressFormatError):
        from_sockaddr(to_sockaddr("::1", 1)[:12])


def test_resolv_nbo():
    """Test raw network-order resolution."""
    assert resolv_nbo("1.2.3.4") == b"\x01\x02\x03\x04"
    assert resolv_nbo("::1") == b"\x00" * 15 + b"\x01"


def test_resolv_nbo_i():
    """Test integer resolution for IPv4 and IPv6."""
    assert resolv_nbo_i("1.2.3.4") == 0x01020304
    assert resolv_nbo_i("255.255.255.255") == 0xFFFFFFFF
    assert resolv_nbo_i("::1") == 1
    assert resolv_nbo_i("2001:db8::1") == 0x20010DB8000000000000000000000001


def test_resolv_nbo_i_invalid_word_count():
    """Test that unexpected address lengths are rejected."""
    with patch("sockcomm.codec.resolv_nbo", return_value=b"\x00" * 8):
        with pytest.raises(InvalidAddressFormatError):
            resolv_nbo_i("1.2.3.4")


@pytest.mark.parametrize(
    "netmask,bits",
    [
        ("255.255.255.240", 28),
        ("255.255.255.0", 24),
        ("255.0.0.0", 8),
        ("128.0.0.0", 1),
        ("255.255.255.255", 32),
        ("0.0.0.0", 0),
    ],
)
def test_net2bitmask(netmask, bits):
    """Test netmask to prefix length conversion for contiguous masks."""
    assert net2bitmask(netmask) == bits


def test_net2bitmask_only_inspects_lowest_set_bit():
    """Test the documented behavior for non-contiguous masks."""
    assert net2bitmask("255.0.255.0") == 24


@pytest.mark.parametrize(
    "bits,netmask",
    [
        (0, "0.0.0.0"),
        (1, "128.0.0.0"),
        (8, "255.0.0.0"),
        (24, "255.255.255.0"),
        (28, "255.255.255.240"),
        (32, "255.255.255.255"),
    ],
)
def test_bit2netmask(bits, netmask):
    """Test prefix length to netmask conversion."""
    assert bit2netmask(bits) == netmask


def test_addr_atoi_itoa():
    """Test conversions between dotted quads and integers."""
    assert addr_atoi("0.0.0.0") == 0
    assert addr_atoi("1.2.3.4") == 0x01020304
    assert addr_atoi("255.255.255.255") == 0xFFFFFFFF
    assert addr_itoa(0x0A000001) == "10.0.0.1"
    assert addr_itoa(0) == "0.0.0.0"


@pytest.mark.parametrize(
    "cidr,expected",
    [
        ("10.0.0.0/24", ["10.0.0.0", "10.0.0.255"]),
        ("192.168.1.128/30", ["192.168.1.128", "192.168.1.131"]),
        ("192.168.1.130/30", ["192.168.1.128", "192.168.1.131"]),
        ("10.1.2.3/32", ["10.1.2.3", "10.1.2.3"]),
        ("10.1.2.3/0", ["0.0.0.0", "255.255.255.255"]),
        ("172.16.5.4/12", ["172.16.0.0", "172.31.255.255"]),
    ],
)
def test_cidr_crack(cidr, expected):
    """Test CIDR expansion."""
    assert cidr_crack(cidr) == expected


@pytest.mark.parametrize(
    "cidr",
    [
        "10.0.0.0",
        "10.0.0.0/33",
        "10.0.0.0/x",
        "host/24",
        "10.0.0.0/\N{SUPERSCRIPT TWO}",
        "10.0.0.0/+8",
    ],
)
def test_cidr_crack_invalid(cidr):
    """Test that malformed CIDR strings are rejected."""
    with pytest.raises(AddressError):
        cidr_crack(cidr)

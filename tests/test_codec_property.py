"""
Property-based tests for the address conversion utilities.
"""

from hypothesis import given
from hypothesis import strategies as st

from sockcomm.codec import (
    AF_INET,
    addr_atoi,
    addr_itoa,
    bit2netmask,
    cidr_crack,
    dotted_ip,
    from_sockaddr,
    net2bitmask,
    to_sockaddr,
)

octets = st.lists(st.integers(min_value=0, max_value=255), min_size=4, max_size=4)
dotted_quads = octets.map(lambda parts: ".".join(str(part) for part in parts))


@given(value=st.integers(min_value=0, max_value=0xFFFFFFFF))
def test_addr_itoa_atoi_roundtrip(value):
    """Every 32-bit value survives conversion to a dotted quad and back."""
    assert addr_atoi(addr_itoa(value)) == value


@given(quad=dotted_quads)
def test_addr_atoi_itoa_roundtrip(quad):
    """Every canonical dotted quad survives conversion to an integer and back."""
    assert addr_itoa(addr_atoi(quad)) == quad


@given(bits=st.integers(min_value=0, max_value=32))
def test_bitmask_roundtrip(bits):
    """Prefix lengths survive conversion to a netmask and back."""
    assert net2bitmask(bit2netmask(bits)) == bits


@given(quad=dotted_quads)
def test_generated_quads_are_dotted(quad):
    assert dotted_ip(quad)


@given(quad=dotted_quads, port=st.integers(min_value=0, max_value=65535))
def test_ipv4_sockaddr_decodes_to_input(quad, port):
    """A built IPv4 sockaddr decodes to the address and port it was built from."""
    assert from_sockaddr(to_sockaddr(quad, port)) == (AF_INET, quad, port)


@given(quad=dotted_quads, bits=st.integers(min_value=0, max_value=32))
def test_cidr_range_contains_address(quad, bits):
    """The cracked range is aligned, has the right size and contains the address."""
    first, last = cidr_crack(f"{quad}/{bits}")
    assert addr_atoi(first) <= addr_atoi(quad) <= addr_atoi(last)
    assert addr_atoi(last) - addr_atoi(first) + 1 == 2 ** (32 - bits)
    assert addr_atoi(first) % 2 ** (32 - bits) == 0

"""
Tests for the error hierarchy.
"""

import pytest

from sockcomm.errors import (
    AddressError,
    ConfigurationError,
    InvalidAddressFormatError,
    NotSupportedError,
    RoutingError,
    SockcommError,
    UnsupportedFamilyError,
)


def test_error_hierarchy():
    """Test that the error hierarchy is correctly implemented."""
    assert issubclass(ConfigurationError, SockcommError)
    assert issubclass(RoutingError, SockcommError)
    assert issubclass(AddressError, SockcommError)
    assert issubclass(UnsupportedFamilyError, AddressError)
    assert issubclass(InvalidAddressFormatError, AddressError)
    assert issubclass(NotSupportedError, SockcommError)
    assert issubclass(NotSupportedError, NotImplementedError)

    error = RoutingError("no channel")
    assert str(error) == "no channel"


def test_unsupported_family_error():
    """Test that the offending family is kept on the error."""
    error = UnsupportedFamilyError(99)
    assert error.family == 99
    assert "99" in str(error)


def test_transport_errors_are_not_wrapped():
    """Test that sockcomm errors stay distinct from transport errors."""
    assert not issubclass(SockcommError, OSError)
    for error_type in (ConnectionRefusedError, TimeoutError):
        assert not issubclass(error_type, SockcommError)


def test_error_handling():
    """Test catching errors by their parent types."""
    try:
        raise UnsupportedFamilyError(7)
    except AddressError as e:
        assert e.family == 7
    except SockcommError:
        pytest.fail("UnsupportedFamilyError should be caught by AddressError")

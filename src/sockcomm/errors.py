"""
Error hierarchy for sockcomm.

Transport failures raised while a channel opens a socket are the built-in
``OSError`` family (``ConnectionRefusedError``, ``TimeoutError``, ``OSError``
with ``EADDRINUSE`` or ``EHOSTUNREACH``, ``socket.gaierror``) and are passed
through unchanged. The classes below cover the failures this package raises
itself.
"""


class SockcommError(Exception):
    """Base class for all sockcomm errors."""

    pass


class ConfigurationError(SockcommError):
    """Error raised when socket options or configuration are invalid."""

    pass


class RoutingError(SockcommError):
    """Error raised when no usable channel is available for a request."""

    pass


class AddressError(SockcommError):
    """Base class for address conversion errors."""

    pass


class UnsupportedFamilyError(AddressError):
    """Error raised when a sockaddr carries an unknown address family."""

    def __init__(self, family: int):
        self.family = family
        super().__init__(f"Unsupported address family: {family}")


class InvalidAddressFormatError(AddressError):
    """Error raised when raw address bytes have an unexpected word count."""

    pass


class NotSupportedError(SockcommError, NotImplementedError):
    """Error raised when a capability is not implemented by a socket variant."""

    pass

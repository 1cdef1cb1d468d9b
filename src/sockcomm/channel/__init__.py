"""
Socket channels for sockcomm.

A channel decides how a requested socket reaches the wire: directly through
the local network stack, or through an already-established relay.
"""

from sockcomm.channel.local import LocalChannel
from sockcomm.channel.protocol import Channel
from sockcomm.channel.registry import ChannelRegistry, get_channel_registry
from sockcomm.channel.routing import ChannelRouter, Route

__all__ = [
    "Channel",
    "ChannelRegistry",
    "ChannelRouter",
    "LocalChannel",
    "Route",
    "get_channel_registry",
]

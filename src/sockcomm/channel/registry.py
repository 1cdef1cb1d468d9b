"""
Registry for socket channels.

This module provides a registry mapping channel names to channel instances,
so callers can pick a channel by name in their socket options.
"""

from typing import Any, Dict, List, Optional

from sockcomm.channel.local import LocalChannel
from sockcomm.channel.protocol import Channel
from sockcomm.config import get_config


class ChannelRegistry:
    """Registry for socket channels."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize a new channel registry.

        Args:
            config: Optional configuration; ``default_channel`` names the
                channel used when a caller does not choose one.
        """
        self._channels: Dict[str, Channel] = {}
        self._config = config or {}

    def register(self, name: str, channel: Channel) -> None:
        """Register a channel.

        Args:
            name: The name to register the channel under.
            channel: The channel instance.
        """
        self._channels[name] = channel

    def unregister(self, name: str) -> None:
        """Remove a channel.

        Raises:
            KeyError: If no channel is registered with the given name.
        """
        del self._channels[name]

    def get(self, name: str) -> Channel:
        """Get a channel by name.

        Args:
            name: The name of the channel to get.

        Returns:
            The channel instance.

        Raises:
            KeyError: If no channel is registered with the given name.
        """
        return self._channels[name]

    def get_registered_names(self) -> List[str]:
        """Return the names of all registered channels."""
        return list(self._channels)

    def default(self) -> Channel:
        """Return the default channel.

        Raises:
            KeyError: If the configured default channel is not registered.
        """
        return self.get(get_config("default_channel", self._config))


_registry: Optional[ChannelRegistry] = None


def get_channel_registry() -> ChannelRegistry:
    """Return the process-wide channel registry.

    It is created on first use with a ``LocalChannel`` registered as ``local``.
    """
    global _registry
    if _registry is None:
        _registry = ChannelRegistry()
        _registry.register(LocalChannel.name, LocalChannel())
    return _registry

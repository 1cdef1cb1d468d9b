"""
Subnet routing table for channels.

Maps IPv4 subnets to the channel that should originate traffic toward them,
for example a relay channel reaching an otherwise unroutable network. The
router is consulted by callers before a socket is requested; the socket
factory only ever uses the channel already present in its parameters.
"""

import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from sockcomm.channel.protocol import Channel
from sockcomm.codec import addr_atoi, dotted_ip, getaddress, net2bitmask
from sockcomm.telemetry import LoggingFacade


@dataclass(frozen=True)
class Route:
    """A subnet reachable through ``channel``."""

    subnet: str
    netmask: str
    channel: Channel

    @property
    def bitmask(self) -> int:
        return net2bitmask(self.netmask)

    def contains(self, addr: str) -> bool:
        """Return True if the dotted quad ``addr`` lies inside this route's subnet."""
        mask = addr_atoi(self.netmask)
        return addr_atoi(addr) & mask == addr_atoi(self.subnet) & mask


class ChannelRouter:
    """Routing table selecting a channel by destination address.

    Lookups pick the most specific route (longest prefix) containing the
    destination. Mutations are serialized; lookups work on a snapshot.
    """

    def __init__(self):
        self._routes: List[Route] = []
        self._lock = threading.Lock()
        self._logger = LoggingFacade("sockcomm.routing")

    @property
    def routes(self) -> List[Route]:
        return list(self._routes)

    def route_exists(self, subnet: str, netmask: str, channel: Channel) -> bool:
        return Route(subnet, netmask, channel) in self._routes

    def add_route(self, subnet: str, netmask: str, channel: Channel) -> bool:
        """Add a route to ``subnet``/``netmask`` through ``channel``.

        Returns:
            False if the identical route already exists, True otherwise.

        Raises:
            ValueError: If ``subnet`` or ``netmask`` is not a dotted quad.
        """
        if not (dotted_ip(subnet) and dotted_ip(netmask)):
            raise ValueError(f"Invalid route: {subnet}/{netmask}")
        route = Route(subnet, netmask, channel)
        with self._lock:
            if route in self._routes:
                return False
            self._routes = self._routes + [route]
        self._logger.info("route.added", subnet=subnet, netmask=netmask, channel=repr(channel))
        return True

    def remove_route(self, subnet: str, netmask: str, channel: Channel) -> bool:
        """Remove a route.

        Returns:
            True if the route existed.
        """
        route = Route(subnet, netmask, channel)
        with self._lock:
            if route not in self._routes:
                return False
            self._routes = [r for r in self._routes if r != route]
        self._logger.info("route.removed", subnet=subnet, netmask=netmask, channel=repr(channel))
        return True

    def remove_channel_routes(self, channel: Channel) -> int:
        """Remove every route through ``channel`` and return how many were removed."""
        with self._lock:
            kept = [r for r in self._routes if r.channel is not channel]
            removed = len(self._routes) - len(kept)
            self._routes = kept
        return removed

    def flush_routes(self) -> None:
        with self._lock:
            self._routes = []

    def best_channel(self, addr: Optional[str]) -> Optional[Channel]:
        """Return the channel of the most specific route containing ``addr``.

        Host names are resolved first. Non-IPv4 destinations and
        destinations matched by no route give None.
        """
        if not addr:
            return None
        addr = getaddress(addr)
        if not dotted_ip(addr):
            return None

        best: Optional[Route] = None
        for route in self._routes:
            if route.contains(addr) and (best is None or route.bitmask > best.bitmask):
                best = route
        return best.channel if best else None

    def route_options(self, options: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Return a copy of ``options`` with ``Channel`` chosen by destination.

        Options that already name a channel, or whose peer matches no route,
        are returned unchanged.
        """
        opts = dict(options or {})
        if any(str(key).lower() == "channel" for key in opts):
            return opts
        peerhost = next(
            (value for key, value in opts.items() if str(key).lower() == "peerhost"), None
        )
        channel = self.best_channel(peerhost)
        if channel is not None:
            opts["Channel"] = channel
        return opts

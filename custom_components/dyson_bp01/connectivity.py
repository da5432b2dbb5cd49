"""Debounced liveness tracking of the BroadLink RM."""
from __future__ import annotations

from collections.abc import Awaitable, Callable

from .const import (
    LOGGER,
    MSG_DEVICE_CONNECTION_LOST,
    MSG_DEVICE_RECONNECTED,
    MSG_DEVICE_RECONNECTING,
    SKIPS_DEVICE,
)

Probe = Callable[[], Awaitable[bool]]


class ConnectivityMonitor:
    """Report the bridge as connected only after its ping has stabilized.

    Every failed probe re-arms a countdown of ``device_skips`` ticks. The
    bridge is reported connected again only once the countdown reaches 0,
    so a single good ping while the link is flapping is not trusted.
    Transitions are logged once per edge.
    """

    def __init__(self, probe: Probe, name: str, device_skips: int = SKIPS_DEVICE) -> None:
        """Initialize with an async ping probe and a display name."""
        self._probe = probe
        self._name = name
        self._device_skips = device_skips
        self.skips = 0
        self.connected = False

    async def async_check(self) -> bool:
        """Probe the bridge and return whether it counts as connected."""
        alive = await self._probe()
        if not alive:
            if self.skips == 0:
                LOGGER.error(MSG_DEVICE_CONNECTION_LOST, self._name)
            self.skips = self._device_skips
            self.connected = False
        elif self.skips > 0:
            if self.skips == self._device_skips - 1:
                LOGGER.info(MSG_DEVICE_RECONNECTING, self._name)
            self.connected = False
        else:
            self.connected = True
        return self.connected

    def decrement_skips(self) -> None:
        """Count the stabilization period down by one tick."""
        if self.skips > 0:
            self.skips -= 1
            if self.skips == 0:
                LOGGER.info(MSG_DEVICE_RECONNECTED, self._name)

"""Binding of a discovered BroadLink RM to an accessory."""
from __future__ import annotations

from functools import partial

import broadlink
from homeassistant.core import HomeAssistant

from .const import (
    DISCOVERY_TIMEOUT,
    LOGGER,
    MSG_DEVICE_DISCOVERED,
    MSG_DEVICE_USING,
)
from .device import BridgeError, BroadLinkBridge


class BridgeDiscovery:
    """Bind the first discovered RM that passes the optional MAC filter.

    Once a bridge is bound it is kept for the lifetime of the accessory;
    later discoveries are ignored.
    """

    def __init__(self, hass: HomeAssistant, mac_address: str | None = None) -> None:
        """Initialize with an upper-case, colon-delimited MAC filter."""
        self._hass = hass
        self._mac_address = mac_address
        self._bridge: BroadLinkBridge | None = None

    @property
    def bridge(self) -> BroadLinkBridge | None:
        """Return the bound bridge, if any."""
        return self._bridge

    def accepts(self, bridge: BroadLinkBridge) -> bool:
        """Return True if ``bridge`` may be bound."""
        if self._bridge is not None:
            return False
        return self._mac_address is None or self._mac_address == bridge.mac

    async def async_bind(self, bridge: BroadLinkBridge) -> bool:
        """Authenticate and bind ``bridge`` if it is acceptable."""
        if not self.accepts(bridge):
            return False
        try:
            await bridge.async_authenticate()
        except BridgeError as err:
            LOGGER.warning("Failed to authenticate with %s: %s", bridge.model, err)
            return False
        self._bridge = bridge
        LOGGER.info(MSG_DEVICE_USING, bridge.model, bridge.mac)
        return True

    async def async_discover(self) -> BroadLinkBridge | None:
        """Broadcast a discovery request and bind the first match."""
        if self._bridge is not None:
            return self._bridge

        try:
            devices = await self._hass.async_add_executor_job(
                partial(broadlink.discover, timeout=DISCOVERY_TIMEOUT)
            )
        except OSError as err:
            LOGGER.debug("Discovery broadcast failed: %s", err)
            return None

        for device in devices:
            bridge = BroadLinkBridge(self._hass, device)
            LOGGER.info(MSG_DEVICE_DISCOVERED, bridge.model, bridge.mac)
            await self.async_bind(bridge)
        return self._bridge

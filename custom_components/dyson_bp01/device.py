"""BroadLink RM transport layer for the Dyson BP01 integration."""
from __future__ import annotations

from typing import Any

from broadlink.exceptions import BroadlinkException
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from icmplib import ICMPLibError, async_ping

from .const import LOGGER, PING_TIMEOUT
from .models import SensorReadings


class BridgeError(HomeAssistantError):
    """Raised when the BroadLink RM rejects or drops a request."""


def format_mac(mac: bytes) -> str:
    """Format raw MAC bytes as upper-case, colon-delimited hex."""
    return ":".join(f"{octet:02X}" for octet in mac)


class BroadLinkBridge:
    """A discovered BroadLink RM used to relay IR signals to the fan.

    The ``broadlink`` library is blocking, so every device call runs in the
    Home Assistant executor.
    """

    def __init__(self, hass: HomeAssistant, device: Any) -> None:
        """Wrap a device returned by ``broadlink.discover``."""
        self._hass = hass
        self._device = device
        self._mac = format_mac(device.mac)
        self._model = f"BroadLink {device.model}"

    @property
    def mac(self) -> str:
        """Return the MAC address."""
        return self._mac

    @property
    def model(self) -> str:
        """Return the display model, e.g. ``BroadLink RM4 mini``."""
        return self._model

    @property
    def host(self) -> str:
        """Return the IP address."""
        return self._device.host[0]

    @property
    def has_sensors(self) -> bool:
        """Return True if the RM reports temperature/humidity."""
        return hasattr(self._device, "check_sensors")

    async def _async_call(self, func: Any, *args: Any) -> Any:
        try:
            return await self._hass.async_add_executor_job(func, *args)
        except (BroadlinkException, OSError) as err:
            raise BridgeError(f"{self._model} at {self.host}: {err}") from err

    async def async_authenticate(self) -> None:
        """Authenticate with the RM; required before sending data."""
        await self._async_call(self._device.auth)

    async def async_send_data(self, signal: str) -> None:
        """Send a hex-encoded IR signal."""
        await self._async_call(self._device.send_data, bytes.fromhex(signal))
        LOGGER.debug("Sent %d-byte IR signal via %s", len(signal) // 2, self._model)

    async def async_ping(self) -> bool:
        """Return True if the RM answers an ICMP echo request."""
        try:
            host = await async_ping(
                self.host, count=1, timeout=PING_TIMEOUT, privileged=False
            )
        except ICMPLibError as err:
            LOGGER.debug("Ping to %s failed: %s", self.host, err)
            return False
        return host.is_alive

    async def async_read_sensors(self) -> SensorReadings | None:
        """Read temperature and humidity, or None if the RM has no sensors."""
        if not self.has_sensors:
            return None
        data = await self._async_call(self._device.check_sensors)
        return SensorReadings(
            current_temperature=float(data.get("temperature", 0)),
            current_relative_humidity=float(data.get("humidity", 0)),
        )

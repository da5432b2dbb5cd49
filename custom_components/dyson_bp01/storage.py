"""Persistence of the fan record across restarts."""
from __future__ import annotations

from typing import Any

from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.storage import Store
from homeassistant.util import slugify

from .const import DOMAIN, LOGGER, STORAGE_VERSION
from .models import FanCharacteristics, SensorReadings


def storage_key(name: str) -> str:
    """Return the storage key of the accessory called ``name``."""
    return f"{DOMAIN}.{slugify(name)}"


class CharacteristicStore:
    """One whole-record store per accessory name.

    A missing or unreadable file is not an error: the accessory starts from
    the default record and overwrites the file on its next save.
    """

    def __init__(self, hass: HomeAssistant, name: str, *, with_sensors: bool = False) -> None:
        """Initialize the store for the accessory called ``name``."""
        self._store: Store[dict[str, Any]] = Store(hass, STORAGE_VERSION, storage_key(name))
        self._with_sensors = with_sensors

    async def async_load(self) -> tuple[FanCharacteristics, SensorReadings]:
        """Load the record, falling back to defaults."""
        try:
            data = await self._store.async_load()
        except HomeAssistantError as err:
            LOGGER.warning("Ignoring unreadable stored state: %s", err)
            data = None
        return FanCharacteristics.from_storage(data), SensorReadings.from_storage(data)

    async def async_save(
        self, characteristics: FanCharacteristics, sensors: SensorReadings
    ) -> None:
        """Overwrite the stored record."""
        data: dict[str, Any] = characteristics.as_storage()
        if self._with_sensors:
            data.update(sensors.as_storage())
        await self._store.async_save(data)

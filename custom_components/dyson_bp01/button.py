"""Identify button for the Dyson BP01 integration."""
from __future__ import annotations

from homeassistant.components.button import ButtonDeviceClass, ButtonEntity
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .coordinator import DysonBP01ConfigEntry, DysonBP01Coordinator
from .entity import DysonBP01Entity


async def async_setup_entry(
    hass: HomeAssistant,
    entry: DysonBP01ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the identify button."""
    coordinator = entry.runtime_data
    async_add_entities([DysonBP01IdentifyButton(coordinator, entry.entry_id)])


class DysonBP01IdentifyButton(DysonBP01Entity, ButtonEntity):
    """Toggle the fan off and on (or on and off) so it can be found."""

    _attr_device_class = ButtonDeviceClass.IDENTIFY

    def __init__(
        self,
        coordinator: DysonBP01Coordinator,
        entry_id: str,
    ) -> None:
        """Initialize the button entity."""
        super().__init__(coordinator, entry_id)
        self._attr_unique_id = f"{entry_id}_identify"

    async def async_press(self) -> None:
        """Start an identify sequence."""
        await self.coordinator.async_identify()

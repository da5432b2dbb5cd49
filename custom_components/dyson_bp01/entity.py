"""Base entity for the Dyson BP01 integration."""
from __future__ import annotations

from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DOMAIN, MANUFACTURER, MODEL
from .coordinator import DysonBP01Coordinator


class DysonBP01Entity(CoordinatorEntity[DysonBP01Coordinator]):
    """Base class for all Dyson BP01 entities."""

    _attr_has_entity_name = True

    def __init__(
        self,
        coordinator: DysonBP01Coordinator,
        entry_id: str,
    ) -> None:
        """Initialize the entity."""
        super().__init__(coordinator)
        config = coordinator.config
        self._attr_device_info = DeviceInfo(
            identifiers={(DOMAIN, entry_id)},
            name=config.name,
            manufacturer=MANUFACTURER,
            model=MODEL,
            serial_number=config.serial_number,
        )

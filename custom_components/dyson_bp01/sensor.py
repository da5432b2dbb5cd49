"""Temperature and humidity sensors read from the BroadLink RM."""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorEntityDescription,
    SensorStateClass,
)
from homeassistant.const import PERCENTAGE, UnitOfTemperature
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .coordinator import DysonBP01ConfigEntry, DysonBP01Coordinator
from .entity import DysonBP01Entity
from .models import SensorReadings


@dataclass(frozen=True, kw_only=True)
class DysonBP01SensorEntityDescription(SensorEntityDescription):
    """Describes a sensor reading taken from the RM."""

    value_fn: Callable[[SensorReadings], float]


SENSORS: tuple[DysonBP01SensorEntityDescription, ...] = (
    DysonBP01SensorEntityDescription(
        key="current_temperature",
        translation_key="current_temperature",
        device_class=SensorDeviceClass.TEMPERATURE,
        state_class=SensorStateClass.MEASUREMENT,
        native_unit_of_measurement=UnitOfTemperature.CELSIUS,
        value_fn=lambda readings: readings.current_temperature,
    ),
    DysonBP01SensorEntityDescription(
        key="current_relative_humidity",
        translation_key="current_relative_humidity",
        device_class=SensorDeviceClass.HUMIDITY,
        state_class=SensorStateClass.MEASUREMENT,
        native_unit_of_measurement=PERCENTAGE,
        value_fn=lambda readings: readings.current_relative_humidity,
    ),
)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: DysonBP01ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the sensor entities if the user asked for them."""
    coordinator = entry.runtime_data
    if not coordinator.config.expose_sensors:
        return
    async_add_entities(
        DysonBP01Sensor(coordinator, entry.entry_id, description) for description in SENSORS
    )


class DysonBP01Sensor(DysonBP01Entity, SensorEntity):
    """A reading from the RM's built-in sensor."""

    entity_description: DysonBP01SensorEntityDescription

    def __init__(
        self,
        coordinator: DysonBP01Coordinator,
        entry_id: str,
        description: DysonBP01SensorEntityDescription,
    ) -> None:
        """Initialize the sensor entity."""
        super().__init__(coordinator, entry_id)
        self.entity_description = description
        self._attr_unique_id = f"{entry_id}_{description.key}"

    @property
    def native_value(self) -> float:
        """Return the last reading."""
        return self.entity_description.value_fn(self.coordinator.sensors)

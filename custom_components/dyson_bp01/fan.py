"""Fan entity for the Dyson BP01 integration."""
from __future__ import annotations

from typing import Any

from homeassistant.components.fan import FanEntity, FanEntityFeature
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import ROTATION_SPEED_MAX
from .coordinator import DysonBP01ConfigEntry, DysonBP01Coordinator
from .entity import DysonBP01Entity
from .models import Active, SwingMode


async def async_setup_entry(
    hass: HomeAssistant,
    entry: DysonBP01ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the fan entity."""
    coordinator = entry.runtime_data
    async_add_entities([DysonBP01Fan(coordinator, entry.entry_id)])


class DysonBP01Fan(DysonBP01Entity, FanEntity):
    """Dyson BP01 fan entity.

    State reflects the target values, not what the fan has been told so
    far: commands are accepted immediately and applied one IR signal per
    tick, even while the BroadLink RM is unreachable.
    """

    _attr_name = None
    _attr_supported_features = (
        FanEntityFeature.SET_SPEED
        | FanEntityFeature.OSCILLATE
        | FanEntityFeature.TURN_ON
        | FanEntityFeature.TURN_OFF
    )

    def __init__(
        self,
        coordinator: DysonBP01Coordinator,
        entry_id: str,
    ) -> None:
        """Initialize the fan entity."""
        super().__init__(coordinator, entry_id)
        self._attr_unique_id = f"{entry_id}_fan"
        self._attr_speed_count = ROTATION_SPEED_MAX // coordinator.config.tuning.step_size

    @property
    def is_on(self) -> bool:
        """Return True if the fan is meant to be on."""
        return self.coordinator.target_active == Active.ACTIVE

    @property
    def percentage(self) -> int:
        """Return the target speed percentage, or 0 while meant to be off."""
        if not self.is_on:
            return 0
        return self.coordinator.target_rotation_speed

    @property
    def oscillating(self) -> bool:
        """Return True if oscillation is meant to be on."""
        return self.coordinator.target_swing_mode == SwingMode.ENABLED

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return the stored speed and what the fan has actually been told so far."""
        state = self.coordinator.characteristics
        return {
            "connected": self.coordinator.connected,
            "bridge": self.coordinator.bridge.model if self.coordinator.bridge else None,
            "target_rotation_speed": self.coordinator.target_rotation_speed,
            "current_active": state.current_active == Active.ACTIVE,
            "current_rotation_speed": state.current_rotation_speed,
            "current_oscillating": state.current_swing_mode == SwingMode.ENABLED,
        }

    async def async_turn_on(
        self,
        percentage: int | None = None,
        preset_mode: str | None = None,
        **kwargs: Any,
    ) -> None:
        """Turn on the fan."""
        if percentage == 0:
            await self.async_turn_off()
            return
        await self.coordinator.async_set_target_active(Active.ACTIVE)
        if percentage is not None:
            await self.coordinator.async_set_target_rotation_speed(percentage)

    async def async_turn_off(self, **kwargs: Any) -> None:
        """Turn off the fan."""
        await self.coordinator.async_set_target_active(Active.INACTIVE)

    async def async_set_percentage(self, percentage: int) -> None:
        """Set fan speed by percentage."""
        if percentage == 0:
            await self.async_turn_off()
            return
        await self.coordinator.async_set_target_rotation_speed(percentage)

    async def async_oscillate(self, oscillating: bool) -> None:
        """Turn oscillation on or off."""
        await self.coordinator.async_set_target_swing_mode(
            SwingMode.ENABLED if oscillating else SwingMode.DISABLED
        )

"""State records for the Dyson BP01 integration."""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum
from typing import Any

from .const import STEP_SIZE


class Active(IntEnum):
    """Power state, using the HomeKit numeric values."""

    INACTIVE = 0
    ACTIVE = 1


class SwingMode(IntEnum):
    """Oscillation state, using the HomeKit numeric values."""

    DISABLED = 0
    ENABLED = 1


class Action(StrEnum):
    """IR action taken by the reconciliation engine on a tick."""

    ACTIVE = "Active"
    ROTATION_SPEED = "Rotation Speed"
    SWING_MODE = "Swing Mode"


def _enum_or_default(enum_cls: type[IntEnum], value: Any, default: IntEnum) -> Any:
    try:
        return enum_cls(value)
    except (TypeError, ValueError):
        return default


def _int_or_default(value: Any, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return value


def _float_or_default(value: Any, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return float(value)


@dataclass
class FanCharacteristics:
    """Target and current value of every controllable characteristic.

    Target is what the user asked for, current is what the fan is believed
    to be doing. Both halves are persisted together as one record.
    """

    target_active: Active = Active.INACTIVE
    current_active: Active = Active.INACTIVE
    target_rotation_speed: int = STEP_SIZE
    current_rotation_speed: int = STEP_SIZE
    target_swing_mode: SwingMode = SwingMode.DISABLED
    current_swing_mode: SwingMode = SwingMode.DISABLED

    @classmethod
    def from_storage(cls, data: dict[str, Any] | None) -> FanCharacteristics:
        """Build a record from stored data, defaulting absent or bad keys."""
        if not isinstance(data, dict):
            return cls()
        default = cls()
        return cls(
            target_active=_enum_or_default(
                Active, data.get("target_active"), default.target_active
            ),
            current_active=_enum_or_default(
                Active, data.get("current_active"), default.current_active
            ),
            target_rotation_speed=_int_or_default(
                data.get("target_rotation_speed"), default.target_rotation_speed
            ),
            current_rotation_speed=_int_or_default(
                data.get("current_rotation_speed"), default.current_rotation_speed
            ),
            target_swing_mode=_enum_or_default(
                SwingMode, data.get("target_swing_mode"), default.target_swing_mode
            ),
            current_swing_mode=_enum_or_default(
                SwingMode, data.get("current_swing_mode"), default.current_swing_mode
            ),
        )

    def as_storage(self) -> dict[str, int]:
        """Return the record in its persisted form."""
        return {
            "target_active": int(self.target_active),
            "current_active": int(self.current_active),
            "target_rotation_speed": self.target_rotation_speed,
            "current_rotation_speed": self.current_rotation_speed,
            "target_swing_mode": int(self.target_swing_mode),
            "current_swing_mode": int(self.current_swing_mode),
        }


@dataclass
class SensorReadings:
    """Temperature and humidity reported by the BroadLink RM."""

    current_temperature: float = 0.0
    current_relative_humidity: float = 0.0

    @classmethod
    def from_storage(cls, data: dict[str, Any] | None) -> SensorReadings:
        """Build readings from stored data, defaulting absent or bad keys."""
        if not isinstance(data, dict):
            return cls()
        return cls(
            current_temperature=_float_or_default(data.get("current_temperature"), 0.0),
            current_relative_humidity=_float_or_default(
                data.get("current_relative_humidity"), 0.0
            ),
        )

    def as_storage(self) -> dict[str, float]:
        """Return the readings in their persisted form."""
        return {
            "current_temperature": self.current_temperature,
            "current_relative_humidity": self.current_relative_humidity,
        }


@dataclass(frozen=True)
class DysonBP01Data:
    """Snapshot published to entities after every tick."""

    characteristics: FanCharacteristics
    sensors: SensorReadings
    connected: bool
    bridge: str | None = None

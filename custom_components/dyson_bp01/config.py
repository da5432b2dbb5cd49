"""Validated configuration for a Dyson BP01 accessory."""
from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .const import (
    CONF_ACTIVE_SKIPS,
    CONF_DEVICE_SKIPS,
    CONF_EXPOSE_SENSORS,
    CONF_INACTIVE_SKIPS,
    CONF_MAC,
    CONF_NAME,
    CONF_POLL_INTERVAL,
    CONF_SERIAL_NUMBER,
    CONF_SWING_MODE_SKIPS,
    DEFAULT_NAME,
    LOGGER,
    MAC_ADDRESS_PATTERN,
    MSG_EXPOSE_SENSORS_MALFORMED,
    MSG_MAC_ADDRESS_MALFORMED,
    MSG_OPTION_MALFORMED,
    MSG_SERIAL_NUMBER_MALFORMED,
    POLL_INTERVAL,
    POLL_INTERVAL_MAX,
    POLL_INTERVAL_MIN,
    SERIAL_NUMBER_PATTERN,
    SERIAL_NUMBER_PLACEHOLDER,
    SKIPS_ACTIVE,
    SKIPS_DEVICE,
    SKIPS_INACTIVE,
    SKIPS_MAX,
    SKIPS_SWING_MODE,
    STEP_SIZE,
)


def normalize_mac(mac: str) -> str:
    """Return a MAC address upper-cased and colon-delimited."""
    return mac.replace("-", ":").upper()


def _bounded_int(options: Mapping[str, Any], key: str, default: int, low: int, high: int) -> int:
    value = options.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
        LOGGER.warning(MSG_OPTION_MALFORMED, key, value, default)
        return default
    return value


@dataclass(frozen=True)
class EngineTuning:
    """Step size and cooldown lengths (in ticks) of the reconciliation loop."""

    step_size: int = STEP_SIZE
    active_skips: int = SKIPS_ACTIVE
    inactive_skips: int = SKIPS_INACTIVE
    swing_mode_skips: int = SKIPS_SWING_MODE
    device_skips: int = SKIPS_DEVICE

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> EngineTuning:
        """Build tuning from config entry options."""
        return cls(
            active_skips=_bounded_int(options, CONF_ACTIVE_SKIPS, SKIPS_ACTIVE, 0, SKIPS_MAX),
            inactive_skips=_bounded_int(options, CONF_INACTIVE_SKIPS, SKIPS_INACTIVE, 0, SKIPS_MAX),
            swing_mode_skips=_bounded_int(
                options, CONF_SWING_MODE_SKIPS, SKIPS_SWING_MODE, 0, SKIPS_MAX
            ),
            device_skips=_bounded_int(options, CONF_DEVICE_SKIPS, SKIPS_DEVICE, 1, SKIPS_MAX),
        )


@dataclass(frozen=True)
class AccessoryConfig:
    """Accessory settings after validation.

    Malformed values never fail setup: each one is reported as a warning
    and replaced with a safe default.
    """

    name: str = DEFAULT_NAME
    mac_address: str | None = None
    serial_number: str = SERIAL_NUMBER_PLACEHOLDER
    expose_sensors: bool = False
    poll_interval: int = POLL_INTERVAL
    tuning: EngineTuning = field(default_factory=EngineTuning)

    @classmethod
    def from_entry(
        cls, data: Mapping[str, Any], options: Mapping[str, Any] | None = None
    ) -> AccessoryConfig:
        """Validate config entry data and options."""
        options = options or {}

        mac_address = data.get(CONF_MAC) or None
        if mac_address is not None:
            if isinstance(mac_address, str) and re.match(MAC_ADDRESS_PATTERN, mac_address):
                mac_address = normalize_mac(mac_address)
            else:
                LOGGER.warning(MSG_MAC_ADDRESS_MALFORMED)
                mac_address = None

        serial_number = data.get(CONF_SERIAL_NUMBER) or None
        if serial_number is not None:
            if isinstance(serial_number, str) and re.match(SERIAL_NUMBER_PATTERN, serial_number):
                serial_number = serial_number.upper()
            else:
                LOGGER.warning(MSG_SERIAL_NUMBER_MALFORMED)
                serial_number = None

        expose_sensors = data.get(CONF_EXPOSE_SENSORS, False)
        if not isinstance(expose_sensors, bool):
            LOGGER.warning(MSG_EXPOSE_SENSORS_MALFORMED)
            expose_sensors = False

        return cls(
            name=data.get(CONF_NAME) or DEFAULT_NAME,
            mac_address=mac_address,
            serial_number=serial_number or SERIAL_NUMBER_PLACEHOLDER,
            expose_sensors=expose_sensors,
            poll_interval=_bounded_int(
                options, CONF_POLL_INTERVAL, POLL_INTERVAL, POLL_INTERVAL_MIN, POLL_INTERVAL_MAX
            ),
            tuning=EngineTuning.from_options(options),
        )

"""Config flow for the Dyson BP01 integration."""

from __future__ import annotations

import re
from typing import Any

import voluptuous as vol
from homeassistant.config_entries import (
    ConfigEntry,
    ConfigFlow,
    ConfigFlowResult,
    OptionsFlow,
)
from homeassistant.core import callback
from homeassistant.util import slugify

from .config import normalize_mac
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
    DOMAIN,
    LOGGER,
    MAC_ADDRESS_PATTERN,
    POLL_INTERVAL,
    POLL_INTERVAL_MAX,
    POLL_INTERVAL_MIN,
    SERIAL_NUMBER_PATTERN,
    SKIPS_ACTIVE,
    SKIPS_DEVICE,
    SKIPS_INACTIVE,
    SKIPS_MAX,
    SKIPS_SWING_MODE,
)


class DysonBP01ConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle a config flow for a Dyson BP01 behind a BroadLink RM."""

    VERSION = 1

    @staticmethod
    @callback
    def async_get_options_flow(config_entry: ConfigEntry) -> DysonBP01OptionsFlow:
        """Return the options flow."""
        return DysonBP01OptionsFlow()

    async def async_step_user(self, user_input: dict[str, Any] | None = None) -> ConfigFlowResult:
        """Handle manual setup.

        The RM itself is found by discovery once the entry is set up, so
        nothing is contacted here. A MAC address only narrows which RM
        gets bound.
        """
        errors: dict[str, str] = {}

        if user_input is not None:
            name = user_input[CONF_NAME]
            mac = user_input.get(CONF_MAC) or None
            serial_number = user_input.get(CONF_SERIAL_NUMBER) or None

            if mac is not None:
                mac = normalize_mac(mac)
            # One accessory per RM, or per name when any RM will do
            await self.async_set_unique_id(mac or slugify(name))
            self._abort_if_unique_id_configured()

            if serial_number is not None and not re.match(SERIAL_NUMBER_PATTERN, serial_number):
                errors[CONF_SERIAL_NUMBER] = "invalid_serial_number"
            else:
                data: dict[str, Any] = {
                    CONF_NAME: name,
                    CONF_EXPOSE_SENSORS: user_input[CONF_EXPOSE_SENSORS],
                }
                if mac is not None:
                    data[CONF_MAC] = mac
                if serial_number is not None:
                    data[CONF_SERIAL_NUMBER] = serial_number.upper()
                LOGGER.debug("Creating entry %s for RM %s", name, mac or "any")
                return self.async_create_entry(title=name, data=data)

        return self.async_show_form(
            step_id="user",
            data_schema=vol.Schema(
                {
                    vol.Required(CONF_NAME, default=DEFAULT_NAME): str,
                    vol.Optional(CONF_MAC): vol.All(str, vol.Match(MAC_ADDRESS_PATTERN)),
                    vol.Optional(CONF_SERIAL_NUMBER): str,
                    vol.Required(CONF_EXPOSE_SENSORS, default=False): bool,
                }
            ),
            errors=errors,
        )


class DysonBP01OptionsFlow(OptionsFlow):
    """Tune the loop interval and the cooldowns after setup."""

    async def async_step_init(self, user_input: dict[str, Any] | None = None) -> ConfigFlowResult:
        """Show and store the tuning options."""
        if user_input is not None:
            return self.async_create_entry(data=user_input)

        options = self.config_entry.options
        skips = vol.All(vol.Coerce(int), vol.Range(min=0, max=SKIPS_MAX))
        return self.async_show_form(
            step_id="init",
            data_schema=vol.Schema(
                {
                    vol.Required(
                        CONF_POLL_INTERVAL,
                        default=options.get(CONF_POLL_INTERVAL, POLL_INTERVAL),
                    ): vol.All(
                        vol.Coerce(int),
                        vol.Range(min=POLL_INTERVAL_MIN, max=POLL_INTERVAL_MAX),
                    ),
                    vol.Required(
                        CONF_ACTIVE_SKIPS,
                        default=options.get(CONF_ACTIVE_SKIPS, SKIPS_ACTIVE),
                    ): skips,
                    vol.Required(
                        CONF_INACTIVE_SKIPS,
                        default=options.get(CONF_INACTIVE_SKIPS, SKIPS_INACTIVE),
                    ): skips,
                    vol.Required(
                        CONF_SWING_MODE_SKIPS,
                        default=options.get(CONF_SWING_MODE_SKIPS, SKIPS_SWING_MODE),
                    ): skips,
                    vol.Required(
                        CONF_DEVICE_SKIPS,
                        default=options.get(CONF_DEVICE_SKIPS, SKIPS_DEVICE),
                    ): vol.All(vol.Coerce(int), vol.Range(min=1, max=SKIPS_MAX)),
                }
            ),
        )

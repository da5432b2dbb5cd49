"""Dyson BP01 fan controlled through a BroadLink RM, for Home Assistant."""
from __future__ import annotations

from homeassistant.core import HomeAssistant

from .const import LOGGER, PLATFORMS
from .coordinator import DysonBP01ConfigEntry, DysonBP01Coordinator


async def async_setup_entry(hass: HomeAssistant, entry: DysonBP01ConfigEntry) -> bool:
    """Set up a Dyson BP01 from a config entry."""
    coordinator = DysonBP01Coordinator(hass, entry)
    LOGGER.info("Setting up Dyson BP01: %s", coordinator.config.name)

    # Restores the stored record and runs the first tick. Discovery failures
    # are not fatal; later ticks keep searching for the RM.
    await coordinator.async_config_entry_first_refresh()

    entry.runtime_data = coordinator
    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    entry.async_on_unload(entry.add_update_listener(async_reload_entry))

    return True


async def async_unload_entry(hass: HomeAssistant, entry: DysonBP01ConfigEntry) -> bool:
    """Unload a config entry."""
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unload_ok:
        LOGGER.info("Unloaded Dyson BP01: %s", entry.title)
    return unload_ok


async def async_reload_entry(hass: HomeAssistant, entry: DysonBP01ConfigEntry) -> None:
    """Reload the entry after its options changed."""
    await hass.config_entries.async_reload(entry.entry_id)

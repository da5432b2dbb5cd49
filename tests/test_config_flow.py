"""Tests for the Dyson BP01 config and options flows.

These tests verify manual setup with and without a BroadLink MAC filter,
serial number validation, duplicate aborts and the tuning options.

**Requires the full HA test harness.**
``pytest-homeassistant-custom-component`` provides the ``hass`` fixture
and patches HA internals.
"""

from __future__ import annotations

from collections.abc import Generator
from unittest.mock import AsyncMock, patch

import pytest
import voluptuous as vol
from homeassistant import config_entries
from homeassistant.core import HomeAssistant
from homeassistant.data_entry_flow import FlowResultType
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.dyson_bp01.const import (
    CONF_ACTIVE_SKIPS,
    CONF_DEVICE_SKIPS,
    CONF_EXPOSE_SENSORS,
    CONF_INACTIVE_SKIPS,
    CONF_MAC,
    CONF_NAME,
    CONF_POLL_INTERVAL,
    CONF_SERIAL_NUMBER,
    CONF_SWING_MODE_SKIPS,
    DOMAIN,
    POLL_INTERVAL,
    SKIPS_ACTIVE,
)

from .conftest import TEST_MAC, TEST_NAME


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations):
    """Let the HA test harness discover our custom component."""
    yield


@pytest.fixture(autouse=True)
def mock_setup_entry() -> Generator[AsyncMock]:
    """Skip setting up created entries; that would start discovery."""
    with patch(
        "custom_components.dyson_bp01.async_setup_entry", return_value=True
    ) as mock_setup:
        yield mock_setup


async def start_user_flow(hass: HomeAssistant) -> dict:
    """Open the user step."""
    return await hass.config_entries.flow.async_init(
        DOMAIN,
        context={"source": config_entries.SOURCE_USER},
    )


# ---------------------------------------------------------------------------
# Manual setup
# ---------------------------------------------------------------------------


class TestManualEntry:
    """Tests for the user step."""

    async def test_shows_form(self, hass: HomeAssistant) -> None:
        """User step should show the setup form."""
        result = await start_user_flow(hass)

        assert result["type"] is FlowResultType.FORM
        assert result["step_id"] == "user"
        assert result["errors"] == {}

    async def test_with_mac_creates_entry(self, hass: HomeAssistant) -> None:
        """A MAC with dashes should be stored upper-case with colons."""
        result = await start_user_flow(hass)
        result = await hass.config_entries.flow.async_configure(
            result["flow_id"],
            user_input={
                CONF_NAME: TEST_NAME,
                CONF_MAC: "34-ea-34-b5-6c-01",
                CONF_SERIAL_NUMBER: "ab1-eu-abc12345",
                CONF_EXPOSE_SENSORS: True,
            },
        )

        assert result["type"] is FlowResultType.CREATE_ENTRY
        assert result["title"] == TEST_NAME
        assert result["data"] == {
            CONF_NAME: TEST_NAME,
            CONF_MAC: TEST_MAC,
            CONF_SERIAL_NUMBER: "AB1-EU-ABC12345",
            CONF_EXPOSE_SENSORS: True,
        }
        assert result["result"].unique_id == TEST_MAC

    async def test_without_mac_creates_entry(self, hass: HomeAssistant) -> None:
        """Without a MAC the entry is keyed by name and binds any RM."""
        result = await start_user_flow(hass)
        result = await hass.config_entries.flow.async_configure(
            result["flow_id"],
            user_input={CONF_NAME: TEST_NAME, CONF_EXPOSE_SENSORS: False},
        )

        assert result["type"] is FlowResultType.CREATE_ENTRY
        assert CONF_MAC not in result["data"]
        assert result["result"].unique_id == "bedroom_fan"

    async def test_invalid_serial_number(self, hass: HomeAssistant) -> None:
        """A malformed serial number should show an error on that field."""
        result = await start_user_flow(hass)
        result = await hass.config_entries.flow.async_configure(
            result["flow_id"],
            user_input={
                CONF_NAME: TEST_NAME,
                CONF_SERIAL_NUMBER: "12345",
                CONF_EXPOSE_SENSORS: False,
            },
        )

        assert result["type"] is FlowResultType.FORM
        assert result["errors"] == {CONF_SERIAL_NUMBER: "invalid_serial_number"}

    async def test_invalid_mac_rejected(self, hass: HomeAssistant) -> None:
        """A malformed MAC should fail schema validation."""
        result = await start_user_flow(hass)

        with pytest.raises(vol.Invalid):
            await hass.config_entries.flow.async_configure(
                result["flow_id"],
                user_input={
                    CONF_NAME: TEST_NAME,
                    CONF_MAC: "34:EA:34",
                    CONF_EXPOSE_SENSORS: False,
                },
            )


# ---------------------------------------------------------------------------
# Duplicate prevention
# ---------------------------------------------------------------------------


class TestDuplicatePrevention:
    """Tests for preventing duplicate config entries."""

    async def test_duplicate_mac_aborts(self, hass: HomeAssistant) -> None:
        """Manual entry of an already-configured MAC should abort."""
        existing = MockConfigEntry(
            domain=DOMAIN,
            unique_id=TEST_MAC,
            data={CONF_MAC: TEST_MAC, CONF_NAME: "Living Room Fan"},
        )
        existing.add_to_hass(hass)

        result = await start_user_flow(hass)
        result = await hass.config_entries.flow.async_configure(
            result["flow_id"],
            user_input={
                CONF_NAME: TEST_NAME,
                CONF_MAC: TEST_MAC.lower(),
                CONF_EXPOSE_SENSORS: False,
            },
        )

        assert result["type"] is FlowResultType.ABORT
        assert result["reason"] == "already_configured"

    async def test_duplicate_name_aborts(self, hass: HomeAssistant) -> None:
        """Two MAC-less entries with the same name should not coexist."""
        existing = MockConfigEntry(
            domain=DOMAIN,
            unique_id="bedroom_fan",
            data={CONF_NAME: TEST_NAME},
        )
        existing.add_to_hass(hass)

        result = await start_user_flow(hass)
        result = await hass.config_entries.flow.async_configure(
            result["flow_id"],
            user_input={CONF_NAME: TEST_NAME, CONF_EXPOSE_SENSORS: False},
        )

        assert result["type"] is FlowResultType.ABORT
        assert result["reason"] == "already_configured"


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


class TestOptions:
    """Tests for the tuning options flow."""

    async def test_defaults_shown(self, hass: HomeAssistant) -> None:
        """The form should default to the stock tuning."""
        entry = MockConfigEntry(domain=DOMAIN, data={CONF_NAME: TEST_NAME})
        entry.add_to_hass(hass)

        result = await hass.config_entries.options.async_init(entry.entry_id)

        assert result["type"] is FlowResultType.FORM
        assert result["step_id"] == "init"
        defaults = {
            str(key): key.default() for key in result["data_schema"].schema
        }
        assert defaults[CONF_POLL_INTERVAL] == POLL_INTERVAL
        assert defaults[CONF_ACTIVE_SKIPS] == SKIPS_ACTIVE

    async def test_saves_options(self, hass: HomeAssistant) -> None:
        """Submitted tuning should be stored as entry options."""
        entry = MockConfigEntry(domain=DOMAIN, data={CONF_NAME: TEST_NAME})
        entry.add_to_hass(hass)
        user_input = {
            CONF_POLL_INTERVAL: 1000,
            CONF_ACTIVE_SKIPS: 3,
            CONF_INACTIVE_SKIPS: 10,
            CONF_SWING_MODE_SKIPS: 4,
            CONF_DEVICE_SKIPS: 2,
        }

        result = await hass.config_entries.options.async_init(entry.entry_id)
        result = await hass.config_entries.options.async_configure(
            result["flow_id"], user_input=user_input
        )

        assert result["type"] is FlowResultType.CREATE_ENTRY
        assert entry.options == user_input

    async def test_rejects_out_of_range(self, hass: HomeAssistant) -> None:
        """A device cooldown of 0 should fail validation."""
        entry = MockConfigEntry(domain=DOMAIN, data={CONF_NAME: TEST_NAME})
        entry.add_to_hass(hass)

        result = await hass.config_entries.options.async_init(entry.entry_id)
        with pytest.raises(vol.Invalid):
            await hass.config_entries.options.async_configure(
                result["flow_id"],
                user_input={
                    CONF_POLL_INTERVAL: POLL_INTERVAL,
                    CONF_ACTIVE_SKIPS: 2,
                    CONF_INACTIVE_SKIPS: 8,
                    CONF_SWING_MODE_SKIPS: 6,
                    CONF_DEVICE_SKIPS: 0,
                },
            )

"""Shared test fixtures for the Dyson BP01 integration.

Engine, connectivity, config and model tests are pure-logic unit tests.
Coordinator, storage, config-flow and entity tests use the ``hass`` fixture
from ``pytest-homeassistant-custom-component``. The BroadLink RM is always a
``MagicMock`` shaped like a ``broadlink`` device, and nothing touches the
network.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from custom_components.dyson_bp01.const import CONF_EXPOSE_SENSORS, CONF_MAC, CONF_NAME

TEST_MAC = "34:EA:34:B5:6C:01"
TEST_MAC_BYTES = bytes.fromhex("34EA34B56C01")
TEST_OTHER_MAC_BYTES = bytes.fromhex("34EA34B56C02")
TEST_HOST = "192.168.1.50"
TEST_NAME = "Bedroom Fan"


def make_broadlink_device(
    mac: bytes = TEST_MAC_BYTES,
    host: str = TEST_HOST,
    model: str = "RM4 mini",
    sensors: dict[str, float] | None = None,
) -> MagicMock:
    """Build a fake device as returned by ``broadlink.discover``.

    Devices without ``sensors`` lack ``check_sensors`` entirely, like an
    RM mini 3.
    """
    spec = ["mac", "host", "model", "auth", "send_data"]
    if sensors is not None:
        spec.append("check_sensors")
    device = MagicMock(spec=spec)
    device.mac = mac
    device.host = (host, 80)
    device.model = model
    device.auth.return_value = True
    if sensors is not None:
        device.check_sensors.return_value = sensors
    return device


def make_entry_data(**overrides: Any) -> dict[str, Any]:
    """Build config entry data for a test accessory."""
    data: dict[str, Any] = {
        CONF_NAME: TEST_NAME,
        CONF_MAC: TEST_MAC,
        CONF_EXPOSE_SENSORS: False,
    }
    data.update(overrides)
    return data


@pytest.fixture
def broadlink_device() -> MagicMock:
    """Return a fake RM4 mini without sensors."""
    return make_broadlink_device()


@pytest.fixture
def send() -> AsyncMock:
    """Return an IR send callback that always succeeds."""
    return AsyncMock()


@pytest.fixture
def save() -> AsyncMock:
    """Return a persistence callback that always succeeds."""
    return AsyncMock()

"""Constants for the Dyson BP01 (BroadLink IR) integration."""
from __future__ import annotations

import logging

from homeassistant.const import Platform

DOMAIN = "dyson_bp01"
LOGGER = logging.getLogger(__package__)

PLATFORMS = [Platform.BUTTON, Platform.FAN, Platform.SENSOR]

# Config entry keys
CONF_MAC = "mac"
CONF_NAME = "name"
CONF_SERIAL_NUMBER = "serial_number"
CONF_EXPOSE_SENSORS = "expose_sensors"

# Option keys
CONF_POLL_INTERVAL = "poll_interval"
CONF_ACTIVE_SKIPS = "active_skips"
CONF_INACTIVE_SKIPS = "inactive_skips"
CONF_SWING_MODE_SKIPS = "swing_mode_skips"
CONF_DEVICE_SKIPS = "device_skips"

DEFAULT_NAME = "Dyson BP01"

# Device information
MANUFACTURER = "Dyson"
MODEL = "BP01"
SERIAL_NUMBER_PLACEHOLDER = "See bottom of machine"

SERIAL_NUMBER_PATTERN = r"^([A-Za-z0-9]{3})-([A-Za-z]{2})-([A-Za-z0-9]{8})$"
MAC_ADDRESS_PATTERN = r"^([0-9A-Fa-f]{2}[:-]){5}([0-9A-Fa-f]{2})$"

# Loop interval (milliseconds)
POLL_INTERVAL = 650
POLL_INTERVAL_MIN = 250
POLL_INTERVAL_MAX = 5000

# Cooldowns, in ticks. Tuned against the fan's IR debounce window.
SKIPS_ACTIVE = 2
SKIPS_INACTIVE = 8
SKIPS_SWING_MODE = 6
SKIPS_DEVICE = 4
SKIPS_SENSORS = 86
SKIPS_MAX = 100

# Rotation speed moves in whole fan-speed notches (10 notches = 100%).
# Clear the stored state after changing this.
STEP_SIZE = 10
ROTATION_SPEED_MAX = 100

# Bridge transport
DISCOVERY_TIMEOUT = 5
PING_TIMEOUT = 1

# IR signals captured from the BP01 remote. Opaque, do not regenerate.
SIGNAL_ACTIVE = (
    "26005800481718161916161916311817191619171816192d181918171817181719161817"
    "181718161a2e1816192d19171800066b45191631190006604817182d1a00066147151a2d"
    "190006614916192d190006604618172f18000d05"
)
SIGNAL_ROTATION_SPEED_UP = (
    "260058004718181619161917172f1817191618171817182c1919172e1618182f16191630"
    "1a2d192d1817182f161817181a00066d4618182d190006614618172f1900065f4817182e"
    "1900065f4816182e180006604818172d19000d05"
)
SIGNAL_ROTATION_SPEED_DOWN = (
    "2600580047161917171719151a2d171818171619161a182d1a15173019151a2d192d1a17"
    "18161730161819161718172f1a0006664617182f1900065f4817182e1800066044191730"
    "1a00065e4818172d1a00065f4618182e19000d05"
)
SIGNAL_SWING_MODE = (
    "260058004716191517191917192c1619171816191819182d151b1916182d192e19171817"
    "182c1730181815301a2d192d160006594718192d1700066243191731180006604816192d"
    "190006604717182d190006604817182d18000d05"
)

# Storage
STORAGE_VERSION = 1

# Identify toggles Active this many times
IDENTIFY_TOGGLE_COUNT = 2

# Log messages
MSG_SERIAL_NUMBER_MALFORMED = "Serial number malformed, defaulting to placeholder"
MSG_MAC_ADDRESS_MALFORMED = "MAC address malformed, ignoring value"
MSG_EXPOSE_SENSORS_MALFORMED = "Expose sensors neither true nor false, defaulting to false"
MSG_OPTION_MALFORMED = "Option %s=%r out of range, defaulting to %s"
MSG_DEVICE_SEARCHING = "Searching for BroadLink RMs..."
MSG_DEVICE_DISCOVERED = "Discovered %s at %s"
MSG_DEVICE_USING = "Using %s at %s"
MSG_DEVICE_CONNECTION_LOST = "Connection to %s lost"
MSG_DEVICE_RECONNECTING = "Stabilizing connection to %s..."
MSG_DEVICE_RECONNECTED = "Reconnected to %s"
MSG_DEVICE_NOT_CONNECTED = "%s is not connected"
MSG_IDENTIFYING = "Identifying Dyson BP01 and %s..."
MSG_IDENTIFIED = "Identified Dyson BP01 and %s"
MSG_INIT_CHARACTERISTIC = "Initialized %s %s to %s"
MSG_SET_TARGET = "Set target %s to %s"
MSG_UPDATED_CURRENT = "Updated current %s to %s"
MSG_CLAMPED_ROTATION_SPEED = "Rotation Speed %s%% below minimum, clamped to %s%%"
MSG_SET_CURRENT_TEMPERATURE = "Set Current Temperature to %s°C"
MSG_SET_CURRENT_RELATIVE_HUMIDITY = "Set Current Relative Humidity to %s%%"
MSG_SENSOR_READ_FAILED = "Reading sensors from %s failed: %s"

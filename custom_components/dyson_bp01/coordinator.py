"""DataUpdateCoordinator driving the Dyson BP01 reconciliation loop."""

from __future__ import annotations

from dataclasses import replace
from datetime import timedelta

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed
from homeassistant.util import slugify

from .config import AccessoryConfig
from .connectivity import ConnectivityMonitor
from .const import (
    DOMAIN,
    IDENTIFY_TOGGLE_COUNT,
    LOGGER,
    MSG_CLAMPED_ROTATION_SPEED,
    MSG_DEVICE_NOT_CONNECTED,
    MSG_DEVICE_SEARCHING,
    MSG_IDENTIFIED,
    MSG_IDENTIFYING,
    MSG_INIT_CHARACTERISTIC,
    MSG_SENSOR_READ_FAILED,
    MSG_SET_CURRENT_RELATIVE_HUMIDITY,
    MSG_SET_CURRENT_TEMPERATURE,
    MSG_SET_TARGET,
    ROTATION_SPEED_MAX,
    SKIPS_SENSORS,
)
from .device import BridgeError, BroadLinkBridge
from .discovery import BridgeDiscovery
from .engine import ReconciliationEngine
from .models import (
    Action,
    Active,
    DysonBP01Data,
    FanCharacteristics,
    SensorReadings,
    SwingMode,
)
from .storage import CharacteristicStore

DysonBP01ConfigEntry = ConfigEntry["DysonBP01Coordinator"]


class DysonBP01Coordinator(DataUpdateCoordinator[DysonBP01Data]):
    """Run one reconciliation tick per update interval.

    A tick binds a BroadLink RM if none is bound yet; otherwise it pings the
    bound RM and, while the connection is stable, lets the engine send at
    most one IR signal and refreshes the sensors. Cooldowns are counted down
    at the end of every tick.

    The ``target_*`` properties and ``async_set_target_*`` methods are the
    public face of the fan: they only record intent, which later ticks apply.
    """

    config_entry: DysonBP01ConfigEntry

    def __init__(
        self,
        hass: HomeAssistant,
        entry: DysonBP01ConfigEntry,
        config: AccessoryConfig | None = None,
    ) -> None:
        """Initialize the coordinator."""
        self.config = config or AccessoryConfig.from_entry(entry.data, entry.options)
        super().__init__(
            hass,
            LOGGER,
            name=f"{DOMAIN}_{slugify(self.config.name)}",
            update_interval=timedelta(milliseconds=self.config.poll_interval),
            config_entry=entry,
            always_update=False,
        )
        self.sensors = SensorReadings()
        self.sensor_skips = 0
        self.discovery = BridgeDiscovery(hass, self.config.mac_address)
        self.connectivity: ConnectivityMonitor | None = None
        self.engine = ReconciliationEngine(
            FanCharacteristics(),
            self._async_send_signal,
            self.async_save,
            self.config.tuning,
        )
        self._store = CharacteristicStore(
            hass, self.config.name, with_sensors=self.config.expose_sensors
        )
        self._identifying = False
        self._identify_toggles = 0

    @property
    def characteristics(self) -> FanCharacteristics:
        """Return the live target/current record."""
        return self.engine.characteristics

    @property
    def bridge(self) -> BroadLinkBridge | None:
        """Return the bound BroadLink RM, if any."""
        return self.discovery.bridge

    @property
    def connected(self) -> bool:
        """Return True if the bound RM currently counts as connected."""
        return self.connectivity is not None and self.connectivity.connected

    @property
    def identifying(self) -> bool:
        """Return True while an identify sequence is running."""
        return self._identifying

    async def _async_setup(self) -> None:
        """Restore the stored record before the first tick."""
        state, self.sensors = await self._store.async_load()
        self.engine.characteristics = state
        for action, target, current in (
            (Action.ACTIVE, state.target_active.name, state.current_active.name),
            (
                Action.ROTATION_SPEED,
                f"{state.target_rotation_speed}%",
                f"{state.current_rotation_speed}%",
            ),
            (Action.SWING_MODE, state.target_swing_mode.name, state.current_swing_mode.name),
        ):
            LOGGER.info(MSG_INIT_CHARACTERISTIC, "target", action, target)
            LOGGER.info(MSG_INIT_CHARACTERISTIC, "current", action, current)
        LOGGER.info(MSG_DEVICE_SEARCHING)

    async def _async_update_data(self) -> DysonBP01Data:
        """Run one tick."""
        try:
            bridge = self.bridge
            if bridge is None:
                await self._async_discover()
            elif await self.connectivity.async_check():
                await self.engine.async_reconcile()
                if self.config.expose_sensors:
                    await self._async_update_sensors(bridge)
                await self._async_continue_identify()
        except BridgeError as err:
            raise UpdateFailed(str(err)) from err
        finally:
            self._decrement_skips()
        return self._snapshot()

    async def _async_discover(self) -> None:
        bridge = await self.discovery.async_discover()
        if bridge is not None:
            self.connectivity = ConnectivityMonitor(
                bridge.async_ping, bridge.model, self.config.tuning.device_skips
            )

    def _decrement_skips(self) -> None:
        self.engine.decrement_skips()
        if self.connectivity is not None:
            self.connectivity.decrement_skips()
        if self.sensor_skips > 0:
            self.sensor_skips -= 1

    def _snapshot(self) -> DysonBP01Data:
        bridge = self.bridge
        return DysonBP01Data(
            characteristics=replace(self.characteristics),
            sensors=replace(self.sensors),
            connected=self.connected,
            bridge=bridge.model if bridge is not None else None,
        )

    def _async_publish(self) -> None:
        self.data = self._snapshot()
        self.async_update_listeners()

    async def _async_send_signal(self, signal: str) -> None:
        bridge = self.bridge
        if bridge is None:
            raise BridgeError("No BroadLink RM bound")
        await bridge.async_send_data(signal)

    async def async_save(self) -> None:
        """Persist the record."""
        await self._store.async_save(self.characteristics, self.sensors)

    # Characteristic facade

    @property
    def target_active(self) -> Active:
        """Return the target Active."""
        return self.characteristics.target_active

    @property
    def target_rotation_speed(self) -> int:
        """Return the target Rotation Speed (percent)."""
        return self.characteristics.target_rotation_speed

    @property
    def target_swing_mode(self) -> SwingMode:
        """Return the target Swing Mode."""
        return self.characteristics.target_swing_mode

    async def async_set_target_active(self, value: Active | int) -> None:
        """Record a new target Active."""
        value = Active(value)
        if value == self.characteristics.target_active:
            return
        self.characteristics.target_active = value
        await self.async_save()
        LOGGER.info(MSG_SET_TARGET, Action.ACTIVE, value.name)
        self._async_publish()

    async def async_set_target_rotation_speed(self, value: int) -> None:
        """Record a new target Rotation Speed, snapped to the step grid."""
        step = self.config.tuning.step_size
        if value < step:
            LOGGER.warning(MSG_CLAMPED_ROTATION_SPEED, value, step)
            speed = step
        else:
            speed = min((int(value) + step // 2) // step * step, ROTATION_SPEED_MAX)
        if speed == self.characteristics.target_rotation_speed:
            return
        self.characteristics.target_rotation_speed = speed
        await self.async_save()
        LOGGER.info(MSG_SET_TARGET, Action.ROTATION_SPEED, f"{speed}%")
        self._async_publish()

    async def async_set_target_swing_mode(self, value: SwingMode | int) -> None:
        """Record a new target Swing Mode."""
        value = SwingMode(value)
        if value == self.characteristics.target_swing_mode:
            return
        self.characteristics.target_swing_mode = value
        await self.async_save()
        LOGGER.info(MSG_SET_TARGET, Action.SWING_MODE, value.name)
        self._async_publish()

    # Identify

    async def async_identify(self) -> None:
        """Turn the fan off and on again (or on and off) to locate it."""
        bridge = self.bridge
        if bridge is None or not self.connected:
            name = bridge.model if bridge is not None else "BroadLink RM"
            LOGGER.error(MSG_DEVICE_NOT_CONNECTED, name)
            raise HomeAssistantError(MSG_DEVICE_NOT_CONNECTED % name)
        if self._identifying:
            return
        LOGGER.info(MSG_IDENTIFYING, bridge.model)
        self._identifying = True
        self._identify_toggles = IDENTIFY_TOGGLE_COUNT

    async def _async_continue_identify(self) -> None:
        """Queue the next identify toggle once the previous one was applied."""
        state = self.characteristics
        if not self._identifying or state.current_active != state.target_active:
            return
        if self._identify_toggles > 0:
            self._identify_toggles -= 1
            await self.async_set_target_active(
                Active.INACTIVE if state.target_active == Active.ACTIVE else Active.ACTIVE
            )
            return
        self._identifying = False
        LOGGER.info(MSG_IDENTIFIED, self.bridge.model)

    # Sensors

    async def _async_update_sensors(self, bridge: BroadLinkBridge) -> None:
        if self.sensor_skips > 0:
            return
        self.sensor_skips = SKIPS_SENSORS
        try:
            readings = await bridge.async_read_sensors()
        except BridgeError as err:
            # Sensor faults never fail the tick
            LOGGER.warning(MSG_SENSOR_READ_FAILED, bridge.model, err)
            return
        if readings is None:
            return
        changed = False
        if readings.current_temperature != self.sensors.current_temperature:
            self.sensors.current_temperature = readings.current_temperature
            LOGGER.info(MSG_SET_CURRENT_TEMPERATURE, readings.current_temperature)
            changed = True
        if readings.current_relative_humidity != self.sensors.current_relative_humidity:
            self.sensors.current_relative_humidity = readings.current_relative_humidity
            LOGGER.info(MSG_SET_CURRENT_RELATIVE_HUMIDITY, readings.current_relative_humidity)
            changed = True
        if changed:
            await self.async_save()

"""Reconciliation of target and current fan state over IR."""
from __future__ import annotations

from collections.abc import Awaitable, Callable

from .config import EngineTuning
from .const import (
    LOGGER,
    MSG_UPDATED_CURRENT,
    SIGNAL_ACTIVE,
    SIGNAL_ROTATION_SPEED_DOWN,
    SIGNAL_ROTATION_SPEED_UP,
    SIGNAL_SWING_MODE,
)
from .models import Action, Active, FanCharacteristics

SendSignal = Callable[[str], Awaitable[None]]
SaveState = Callable[[], Awaitable[None]]


class ReconciliationEngine:
    """Move the fan's current state toward its target, one IR signal per tick.

    The fan ignores IR signals that arrive too close together, so every call
    to :meth:`async_reconcile` sends at most one signal. Candidate actions
    are checked in a fixed order: Active, then Rotation Speed, then Swing
    Mode. After some actions a cooldown (in ticks) blocks further actions
    until :meth:`decrement_skips` has counted it down.

    Current state only changes after the signal was sent, so a failed send
    leaves the record untouched and the action is retried on a later tick.
    """

    def __init__(
        self,
        characteristics: FanCharacteristics,
        send: SendSignal,
        save: SaveState,
        tuning: EngineTuning | None = None,
    ) -> None:
        """Initialize the engine around a shared characteristics record."""
        self.characteristics = characteristics
        self._send = send
        self._save = save
        self._tuning = tuning or EngineTuning()
        self.active_skips = 0
        self.swing_mode_skips = 0
        self._rules: tuple[
            tuple[Action, Callable[[], bool], Callable[[], Awaitable[None]]], ...
        ] = (
            (Action.ACTIVE, self._can_update_active, self._async_update_active),
            (
                Action.ROTATION_SPEED,
                self._can_update_rotation_speed,
                self._async_update_rotation_speed,
            ),
            (Action.SWING_MODE, self._can_update_swing_mode, self._async_update_swing_mode),
        )

    @property
    def settled(self) -> bool:
        """Return True if current state matches target and no cooldown runs."""
        state = self.characteristics
        return (
            state.current_active == state.target_active
            and state.current_rotation_speed == state.target_rotation_speed
            and state.current_swing_mode == state.target_swing_mode
            and self.active_skips == 0
            and self.swing_mode_skips == 0
        )

    async def async_reconcile(self) -> Action | None:
        """Perform the first eligible action and return it."""
        for action, eligible, apply in self._rules:
            if eligible():
                await apply()
                await self._save()
                return action
        return None

    def decrement_skips(self) -> None:
        """Count every running cooldown down by one tick."""
        if self.active_skips > 0:
            self.active_skips -= 1
        if self.swing_mode_skips > 0:
            self.swing_mode_skips -= 1

    def _can_update_active(self) -> bool:
        state = self.characteristics
        return state.current_active != state.target_active and self.active_skips == 0

    async def _async_update_active(self) -> None:
        state = self.characteristics
        await self._send(SIGNAL_ACTIVE)
        state.current_active = state.target_active
        if state.current_active == Active.INACTIVE:
            self.active_skips = self._tuning.inactive_skips
        else:
            self.active_skips = self._tuning.active_skips
        # A power transition invalidates any oscillation cooldown.
        self.swing_mode_skips = 0
        LOGGER.info(MSG_UPDATED_CURRENT, Action.ACTIVE, state.current_active.name)

    def _can_update_rotation_speed(self) -> bool:
        state = self.characteristics
        return (
            state.current_rotation_speed != state.target_rotation_speed
            and state.current_active == Active.ACTIVE
            and self.active_skips == 0
            and self.swing_mode_skips == 0
        )

    async def _async_update_rotation_speed(self) -> None:
        state = self.characteristics
        step = self._tuning.step_size
        if state.current_rotation_speed < state.target_rotation_speed:
            await self._send(SIGNAL_ROTATION_SPEED_UP)
            state.current_rotation_speed = min(
                state.current_rotation_speed + step, state.target_rotation_speed
            )
        else:
            await self._send(SIGNAL_ROTATION_SPEED_DOWN)
            state.current_rotation_speed = max(
                state.current_rotation_speed - step, state.target_rotation_speed
            )
        LOGGER.info(
            MSG_UPDATED_CURRENT, Action.ROTATION_SPEED, f"{state.current_rotation_speed}%"
        )

    def _can_update_swing_mode(self) -> bool:
        state = self.characteristics
        return (
            state.current_swing_mode != state.target_swing_mode
            and state.current_active == Active.ACTIVE
            and self.active_skips == 0
        )

    async def _async_update_swing_mode(self) -> None:
        state = self.characteristics
        await self._send(SIGNAL_SWING_MODE)
        state.current_swing_mode = state.target_swing_mode
        self.swing_mode_skips = self._tuning.swing_mode_skips
        LOGGER.info(MSG_UPDATED_CURRENT, Action.SWING_MODE, state.current_swing_mode.name)

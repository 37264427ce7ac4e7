from __future__ import annotations

from typing import Callable

from .car import MotionStateMachine
from .clock import Clock
from .events import MODE, ModeChange
from .state import SystemState

EMERGENCY = "emergency"
MAINTENANCE = "maintenance"


class ModeController:
    """Emergency and maintenance overrides.

    The two flags are independent; turning either one on empties the queue
    and stops the car immediately.
    """

    def __init__(
        self,
        state: SystemState,
        motion: MotionStateMachine,
        clock: Clock,
        emit: Callable[[str, object], None],
        log: Callable[[str], None],
    ) -> None:
        self.state = state
        self.motion = motion
        self.clock = clock
        self._emit = emit
        self._log = log

    def toggle_emergency(self) -> bool:
        active = not self.state.modes.emergency
        self.state.modes.emergency = active
        if active:
            self._suspend()
            self._log("EMERGENCY MODE ACTIVATED")
        else:
            self._log("Emergency mode deactivated")
        self._emit(MODE, ModeChange(mode=EMERGENCY, active=active, time=self.clock.now()))
        return active

    def toggle_maintenance(self) -> bool:
        active = not self.state.modes.maintenance
        self.state.modes.maintenance = active
        if active:
            self._suspend()
            self._log("Maintenance mode activated")
        else:
            self._log("Maintenance mode deactivated")
        self._emit(MODE, ModeChange(mode=MAINTENANCE, active=active, time=self.clock.now()))
        return active

    def suppressing_mode(self) -> str:
        if self.state.modes.emergency:
            return "Emergency"
        if self.state.modes.maintenance:
            return "Maintenance"
        return ""

    def _suspend(self) -> None:
        self.state.queue.clear()
        self.motion.halt()

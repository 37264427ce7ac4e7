from __future__ import annotations

import logging
from dataclasses import asdict, replace
from typing import Callable, Dict, List, Optional

from scheduler import Direction, get_scheduler

from .car import MotionStateMachine
from .clock import Clock, ManualClock
from .config import (
    GROUND_FLOOR,
    MAX_FLOORS,
    MIN_FLOORS,
    SPEED_INTERVAL_MS,
    STATS_INTERVAL_MS,
    SimulationConfig,
    is_valid_floor_count,
    is_valid_speed,
)
from .dispatcher import Dispatcher
from .events import LOG, METRICS, RESET, LogBuffer, LogEntry
from .metrics import MetricsCollector
from .modes import ModeController
from .state import CarState, Modes, Stats, SystemState

logger = logging.getLogger(__name__)


class ElevatorController:
    """Single entry point for every command against the simulated car.

    Rejected commands (bad floors, duplicates, calls during emergency or
    maintenance, out-of-range configuration) never raise; they are logged
    and leave state untouched.
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.clock: Clock = clock or ManualClock()
        self.state = SystemState(config=replace(config) if config else SimulationConfig())
        self.state.stats.started_at = self.clock.now()
        self.event_hooks: Dict[str, List[Callable[[object], None]]] = {}
        self.log_buffer = LogBuffer()
        self._epoch = self.clock.now()

        self.motion = MotionStateMachine(self.state, self.clock, self._emit, self.log)
        self.dispatcher = Dispatcher(self.state, self.motion)
        self.motion.on_ready = self.dispatcher.dispatch
        self.modes = ModeController(self.state, self.motion, self.clock, self._emit, self.log)
        self.metrics = MetricsCollector(self.state, self.clock)

        self.clock.schedule_periodic(SPEED_INTERVAL_MS, self.metrics.refresh_speed)
        self.clock.schedule_periodic(STATS_INTERVAL_MS, self._emit_metrics)
        self.log("System initialized")

    @property
    def config(self) -> SimulationConfig:
        return self.state.config

    # Commands

    def submit_request(self, floor: int) -> bool:
        state = self.state
        suppressing = self.modes.suppressing_mode()
        if suppressing:
            self.log(f"{suppressing} mode: Floor {floor} request ignored")
            return False
        if not state.is_valid_floor(floor):
            self.log(f"Floor {floor} is outside 1-{state.config.floor_count}; request ignored")
            return False

        self.log(f"Floor {floor} requested")
        return self._enqueue(floor)

    def _enqueue(self, floor: int) -> bool:
        state = self.state
        if floor == state.car.current_floor:
            logger.debug("Car already at floor %d; request dropped", floor)
            return False
        if not state.queue.add(floor, self.clock.now()):
            logger.debug("Floor %d already queued; request dropped", floor)
            return False

        state.stats.request_count += 1
        self.dispatcher.dispatch()
        return True

    def call_elevator(self, floor: int, direction: str) -> bool:
        """Hall call from a landing's up or down button."""
        suppressing = self.modes.suppressing_mode()
        if suppressing:
            self.log(f"{suppressing} mode: Call from floor {floor} ignored")
            return False
        try:
            heading = Direction(str(direction).lower())
        except ValueError:
            heading = Direction.IDLE
        if heading is Direction.IDLE:
            self.log(f"Call from floor {floor} ignored: unknown direction {direction!r}")
            return False
        if not self.state.is_valid_floor(floor):
            self.log(f"Call from floor {floor} ignored: no such floor")
            return False
        if (heading is Direction.UP and floor == self.config.floor_count) or (
            heading is Direction.DOWN and floor == GROUND_FLOOR
        ):
            self.log(f"Call from floor {floor} ignored: no {heading.value} button there")
            return False

        self.log(f"Call from floor {floor} ({heading.value})")
        return self._enqueue(floor)

    def toggle_emergency(self) -> bool:
        return self.modes.toggle_emergency()

    def toggle_maintenance(self) -> bool:
        return self.modes.toggle_maintenance()

    def set_speed(self, ms_per_floor: int) -> bool:
        if not is_valid_speed(ms_per_floor):
            self.log(f"Speed {ms_per_floor!r} ms/floor rejected; keeping {self.config.ms_per_floor}")
            return False
        self.state.config = replace(self.state.config, ms_per_floor=ms_per_floor)
        self.log(f"Speed updated to {ms_per_floor} ms/floor")
        return True

    def set_ordering(self, name: str) -> bool:
        try:
            scheduler = get_scheduler(name)
        except ValueError as exc:
            self.log(f"Ordering rejected: {exc}")
            return False
        self.state.queue.scheduler = scheduler
        self.state.config = replace(self.state.config, ordering=scheduler.name)
        self.log(f"Ordering set to {scheduler.name}")
        return True

    def reset(self, floor_count: Optional[int] = None, ms_per_floor: Optional[int] = None) -> bool:
        """Start a fresh run, optionally with a new building size and speed."""
        if not self._check_config(floor_count, ms_per_floor):
            return False

        config = self.state.config
        if floor_count is not None:
            config = replace(config, floor_count=floor_count)
        if ms_per_floor is not None:
            config = replace(config, ms_per_floor=ms_per_floor)

        state = self.state
        state.config = config
        state.car = CarState()
        state.queue.clear()
        state.modes = Modes()
        state.stats = Stats(started_at=self.clock.now())
        state.speed_fpm = 0

        self.log("System reset completed")
        self._emit(RESET, {"floor_count": config.floor_count, "ms_per_floor": config.ms_per_floor})
        return True

    def apply_config(self, floor_count: Optional[int] = None, ms_per_floor: Optional[int] = None) -> bool:
        """Apply speed live; a different floor count also resets the run."""
        if not self._check_config(floor_count, ms_per_floor):
            return False
        if ms_per_floor is not None:
            self.set_speed(ms_per_floor)
        if floor_count is not None and floor_count != self.config.floor_count:
            self.reset(floor_count=floor_count)
            self.log(f"Building updated to {floor_count} floors")
        return True

    # Queries

    def snapshot(self) -> dict:
        state = self.state
        car = state.car
        now = self.clock.now()
        ordered = state.queue.peek_ordered(car.direction, car.current_floor)
        return {
            "time": now,
            "current_floor": car.current_floor,
            "target_floor": car.target_floor,
            "direction": car.direction.value,
            "moving": car.moving,
            "motion": car.motion.value,
            "status": self.status,
            "position": self.motion.position(),
            "queue_floors": [request.floor for request in ordered],
            "queue": [
                {"floor": request.floor, "waiting_s": int((now - request.requested_at) // 1000)}
                for request in ordered
            ],
            "modes": asdict(state.modes),
            "stats": asdict(state.stats),
            "metrics": asdict(self.metrics.snapshot()),
            "estimated_wait_seconds": self.metrics.estimate_wait(),
            "speed_floors_per_minute": self.metrics.speed_floors_per_minute(),
            "floor_count": state.config.floor_count,
            "ms_per_floor": state.config.ms_per_floor,
            "ordering": state.config.ordering,
        }

    @property
    def status(self) -> str:
        modes = self.state.modes
        if modes.emergency:
            return "EMERGENCY"
        if modes.maintenance:
            return "MAINTENANCE"
        return "Moving" if self.state.car.moving else "Idle"

    @property
    def logs(self) -> List[str]:
        return [entry.format(self._epoch) for entry in self.log_buffer.entries()]

    # Events and logging

    def on_event(self, event: str, callback: Callable[[object], None]) -> None:
        self.event_hooks.setdefault(event, []).append(callback)

    def log(self, message: str) -> None:
        entry = LogEntry(message=message, timestamp=self.clock.now())
        logger.info(message)
        self.log_buffer.append(entry)
        self._emit(LOG, entry)

    def _check_config(self, floor_count: Optional[int], ms_per_floor: Optional[int]) -> bool:
        if floor_count is not None and not is_valid_floor_count(floor_count):
            self.log(
                f"Floor count {floor_count!r} rejected; must be {MIN_FLOORS}-{MAX_FLOORS}, "
                f"keeping {self.config.floor_count}"
            )
            return False
        if ms_per_floor is not None and not is_valid_speed(ms_per_floor):
            self.log(f"Speed {ms_per_floor!r} ms/floor rejected; keeping {self.config.ms_per_floor}")
            return False
        return True

    def _emit_metrics(self) -> None:
        self._emit(METRICS, self.metrics.snapshot())

    def _emit(self, event: str, payload: object) -> None:
        for callback in self.event_hooks.get(event, []):
            callback(payload)

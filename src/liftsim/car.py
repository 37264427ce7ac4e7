from __future__ import annotations

import logging
from typing import Callable, Optional

from scheduler import Direction

from .clock import Clock
from .config import ENERGY_PER_FLOOR
from .events import ARRIVED, POSITION, Arrival, PositionUpdate
from .state import MotionState, SystemState

logger = logging.getLogger(__name__)

Emit = Callable[[str, object], None]
Log = Callable[[str], None]


class MotionStateMachine:
    """Drives the car through idle -> moving -> dwelling -> idle.

    Timers are never cancelled. Each callback carries the id of the trip that
    scheduled it and checks the mode flags, the motion state and that id
    before touching state, so a fire that outlived its trip does nothing.
    """

    def __init__(self, state: SystemState, clock: Clock, emit: Emit, log: Log) -> None:
        self.state = state
        self.clock = clock
        self._emit = emit
        self._log = log
        self._trip_seq = 0
        self.on_ready: Optional[Callable[[], None]] = None
        clock.schedule_periodic(state.config.position_interval_ms, self._position_tick)

    def start_trip(self, target: int) -> bool:
        car = self.state.car
        if car.motion is MotionState.MOVING or target == car.current_floor:
            return False

        self._trip_seq += 1
        trip_id = self._trip_seq
        distance = abs(target - car.current_floor)
        duration = distance * self.state.config.ms_per_floor

        car.trip_id = trip_id
        car.trip_origin = car.current_floor
        car.trip_started_at = self.clock.now()
        car.trip_duration_ms = duration
        car.target_floor = target
        car.direction = Direction.UP if target > car.current_floor else Direction.DOWN
        car.moving = True
        car.motion = MotionState.MOVING
        self.state.stats.energy_usage += distance * ENERGY_PER_FLOOR

        self._log(f"Moving {car.direction.value} to floor {target}")
        self._emit_position(0.0)
        self.clock.schedule(duration, lambda: self._on_arrival(trip_id))
        return True

    def halt(self) -> None:
        """Freeze the car where it last stopped."""
        car = self.state.car
        car.moving = False
        car.motion = MotionState.IDLE
        car.direction = Direction.IDLE
        car.target_floor = None
        self.state.speed_fpm = 0

    def progress(self) -> float:
        car = self.state.car
        if car.motion is not MotionState.MOVING:
            return 0.0
        if car.trip_duration_ms <= 0:
            return 1.0
        elapsed = self.clock.now() - car.trip_started_at
        return min(max(elapsed / car.trip_duration_ms, 0.0), 1.0)

    def position(self) -> float:
        car = self.state.car
        if car.motion is not MotionState.MOVING or car.target_floor is None:
            return float(car.current_floor)
        return car.trip_origin + (car.target_floor - car.trip_origin) * self.progress()

    def _is_live(self, trip_id: int, expected: MotionState) -> bool:
        car = self.state.car
        return (
            not self.state.modes.active
            and car.motion is expected
            and car.trip_id == trip_id
        )

    def _on_arrival(self, trip_id: int) -> None:
        if not self._is_live(trip_id, MotionState.MOVING):
            logger.debug("Ignoring stale arrival timer for trip %d", trip_id)
            return

        car = self.state.car
        stats = self.state.stats
        target = car.target_floor
        now = self.clock.now()
        self._emit_position(1.0)

        car.current_floor = target
        request = self.state.queue.remove(target)
        wait_ms = 0.0
        if request is not None:
            wait_ms = now - request.requested_at
            stats.total_wait_time += wait_ms
        stats.total_trips += 1

        car.moving = False
        car.motion = MotionState.DWELLING
        car.target_floor = None
        self.state.speed_fpm = 0

        self._log(f"Arrived at floor {target}")
        self._emit(ARRIVED, Arrival(floor=target, wait_ms=wait_ms, time=now))
        self.clock.schedule(self.state.config.dwell_ms, lambda: self._on_dwell_complete(trip_id))

    def _on_dwell_complete(self, trip_id: int) -> None:
        if not self._is_live(trip_id, MotionState.DWELLING):
            logger.debug("Ignoring stale dwell timer for trip %d", trip_id)
            return

        car = self.state.car
        car.motion = MotionState.IDLE
        if len(self.state.queue) and self.on_ready is not None:
            self.on_ready()
        else:
            car.direction = Direction.IDLE

    def _position_tick(self) -> None:
        if self.state.car.motion is MotionState.MOVING and not self.state.modes.active:
            self._emit_position(self.progress())

    def _emit_position(self, progress: float) -> None:
        car = self.state.car
        target = car.target_floor if car.target_floor is not None else car.current_floor
        position = car.trip_origin + (target - car.trip_origin) * progress
        self._emit(
            POSITION,
            PositionUpdate(progress=progress, position=position, origin=car.trip_origin, target=target),
        )

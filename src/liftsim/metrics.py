from __future__ import annotations

from dataclasses import dataclass

from scheduler.utils import estimate_service_time, estimate_travel_time

from .clock import Clock
from .config import STOP_OVERHEAD_SECONDS
from .state import SystemState


@dataclass
class MetricsSnapshot:
    time: float
    total_trips: int
    request_count: int
    average_wait: int
    estimated_wait: int
    energy_usage: float
    speed_floors_per_minute: int
    uptime_minutes: int


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


class MetricsCollector:
    """Derived, read-only views over the run's stats."""

    def __init__(self, state: SystemState, clock: Clock) -> None:
        self.state = state
        self.clock = clock

    def estimate_wait(self) -> int:
        """Projected seconds to work through the queue in dispatch order."""
        state = self.state
        if not len(state.queue) or state.modes.active:
            return 0

        car = state.car
        seconds_per_floor = state.config.seconds_per_floor
        total = 0.0
        cursor = car.current_floor
        if car.moving and car.target_floor is not None:
            total += estimate_travel_time(car.target_floor - car.current_floor, seconds_per_floor)
            cursor = car.target_floor

        ordered = [request.floor for request in state.queue.peek_ordered(car.direction, cursor)]
        total += estimate_service_time(ordered, cursor, seconds_per_floor, STOP_OVERHEAD_SECONDS)
        return _round_half_up(total)

    def average_wait(self) -> int:
        stats = self.state.stats
        if stats.request_count == 0:
            return 0
        return int(stats.total_wait_time / stats.request_count // 1000)

    def energy_usage(self) -> float:
        return round(self.state.stats.energy_usage, 1)

    def speed_floors_per_minute(self) -> int:
        return self.state.speed_fpm

    def refresh_speed(self) -> None:
        if self.state.car.moving:
            self.state.speed_fpm = _round_half_up(60000 / self.state.config.ms_per_floor)
        else:
            self.state.speed_fpm = 0

    def uptime_minutes(self) -> int:
        return int((self.clock.now() - self.state.stats.started_at) // 60000)

    def snapshot(self) -> MetricsSnapshot:
        stats = self.state.stats
        return MetricsSnapshot(
            time=self.clock.now(),
            total_trips=stats.total_trips,
            request_count=stats.request_count,
            average_wait=self.average_wait(),
            estimated_wait=self.estimate_wait(),
            energy_usage=self.energy_usage(),
            speed_floors_per_minute=self.speed_floors_per_minute(),
            uptime_minutes=self.uptime_minutes(),
        )

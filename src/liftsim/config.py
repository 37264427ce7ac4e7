from __future__ import annotations

from dataclasses import dataclass

MIN_FLOORS = 5
MAX_FLOORS = 20
GROUND_FLOOR = 1

DEFAULT_FLOOR_COUNT = 6
DEFAULT_MS_PER_FLOOR = 1000
DWELL_MS = 1000
ENERGY_PER_FLOOR = 0.5
STOP_OVERHEAD_SECONDS = 1

POSITION_INTERVAL_MS = 100
SPEED_INTERVAL_MS = 500
STATS_INTERVAL_MS = 1000
LOG_CAPACITY = 50


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_valid_floor_count(value: object) -> bool:
    return _is_int(value) and MIN_FLOORS <= value <= MAX_FLOORS


def is_valid_speed(value: object) -> bool:
    return _is_int(value) and value > 0


@dataclass
class SimulationConfig:
    """Building and car parameters for a simulation run."""

    floor_count: int = DEFAULT_FLOOR_COUNT
    ms_per_floor: int = DEFAULT_MS_PER_FLOOR
    dwell_ms: int = DWELL_MS
    position_interval_ms: int = POSITION_INTERVAL_MS
    ordering: str = "scan"

    def __post_init__(self) -> None:
        if not is_valid_floor_count(self.floor_count):
            raise ValueError(
                f"floor_count must be an integer in [{MIN_FLOORS}, {MAX_FLOORS}], got {self.floor_count!r}"
            )
        if not is_valid_speed(self.ms_per_floor):
            raise ValueError(f"ms_per_floor must be a positive integer, got {self.ms_per_floor!r}")
        if self.dwell_ms < 0:
            raise ValueError("dwell_ms cannot be negative")
        if self.position_interval_ms <= 0:
            raise ValueError("position_interval_ms must be positive")

    @property
    def seconds_per_floor(self) -> float:
        return self.ms_per_floor / 1000

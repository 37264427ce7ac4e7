from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from scheduler import Direction, RequestQueue, get_scheduler

from .config import GROUND_FLOOR, SimulationConfig


class MotionState(str, Enum):
    IDLE = "idle"
    MOVING = "moving"
    DWELLING = "dwelling"


@dataclass
class CarState:
    """Position and trip bookkeeping for the single car."""

    current_floor: int = GROUND_FLOOR
    target_floor: Optional[int] = None
    direction: Direction = Direction.IDLE
    moving: bool = False
    motion: MotionState = MotionState.IDLE
    trip_id: int = 0
    trip_origin: int = GROUND_FLOOR
    trip_started_at: float = 0.0
    trip_duration_ms: float = 0.0


@dataclass
class Modes:
    emergency: bool = False
    maintenance: bool = False

    @property
    def active(self) -> bool:
        return self.emergency or self.maintenance


@dataclass
class Stats:
    total_trips: int = 0
    total_wait_time: float = 0.0
    request_count: int = 0
    energy_usage: float = 0.0
    started_at: float = 0.0


@dataclass
class SystemState:
    """The one mutable aggregate shared by every simulation component."""

    config: SimulationConfig
    car: CarState = field(default_factory=CarState)
    queue: RequestQueue = field(init=False)
    modes: Modes = field(default_factory=Modes)
    stats: Stats = field(default_factory=Stats)
    speed_fpm: int = 0

    def __post_init__(self) -> None:
        self.queue = RequestQueue(get_scheduler(self.config.ordering))

    def is_valid_floor(self, floor: object) -> bool:
        return (
            isinstance(floor, int)
            and not isinstance(floor, bool)
            and GROUND_FLOOR <= floor <= self.config.floor_count
        )

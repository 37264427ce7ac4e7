from __future__ import annotations

from typing import Iterable, List

from .interface import Direction, Request


def estimate_travel_time(distance: int, seconds_per_floor: float) -> float:
    """Seconds needed to cover ``distance`` floors at a constant speed."""

    return abs(distance) * seconds_per_floor


def estimate_service_time(
    floors: Iterable[int],
    origin: int,
    seconds_per_floor: float,
    stop_overhead: float,
) -> float:
    """Walk ``floors`` in order from ``origin`` and total travel plus stops.

    Each serviced floor costs its travel time from the previous cursor and a
    fixed stop overhead; the cursor then advances to that floor.
    """

    total = 0.0
    cursor = origin
    for floor in floors:
        total += estimate_travel_time(floor - cursor, seconds_per_floor)
        total += stop_overhead
        cursor = floor
    return total


def sort_requests_in_direction(requests: Iterable[Request], direction: Direction) -> List[Request]:
    """Sort requests to mirror SCAN behavior for a given direction."""

    descending = direction is Direction.DOWN
    return sorted(requests, key=lambda req: req.floor, reverse=descending)

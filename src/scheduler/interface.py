from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Protocol


class Direction(str, Enum):
    """Travel direction of the car."""

    UP = "up"
    DOWN = "down"
    IDLE = "idle"


@dataclass(frozen=True)
class Request:
    """A pending floor-service request."""

    floor: int
    requested_at: float


class Scheduler(Protocol):
    """Strategy interface for ordering pending requests."""

    name: str

    def order(
        self,
        requests: Iterable[Request],
        direction: Direction,
        origin: int,
    ) -> List[Request]:
        """
        Return the requests in the order the car should service them.

        ``origin`` is the floor the car will be at when it starts working
        through the list. Implementations must not mutate their input.
        """
        ...

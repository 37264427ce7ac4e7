from __future__ import annotations

from typing import Iterable, List

from .interface import Direction, Request
from .utils import sort_requests_in_direction


class LookScheduler:
    """Serves floors ahead of the car first, then reverses for the rest."""

    name = "look"

    def order(
        self,
        requests: Iterable[Request],
        direction: Direction,
        origin: int,
    ) -> List[Request]:
        heading = Direction.DOWN if direction is Direction.DOWN else Direction.UP
        reverse = Direction.UP if heading is Direction.DOWN else Direction.DOWN
        ahead: List[Request] = []
        behind: List[Request] = []
        for request in requests:
            if self._is_ahead(request.floor, origin, heading):
                ahead.append(request)
            else:
                behind.append(request)
        return sort_requests_in_direction(ahead, heading) + sort_requests_in_direction(
            behind, reverse
        )

    def _is_ahead(self, floor: int, origin: int, heading: Direction) -> bool:
        if heading is Direction.UP:
            return floor >= origin
        return floor <= origin

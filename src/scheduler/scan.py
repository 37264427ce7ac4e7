from __future__ import annotations

from typing import Iterable, List

from .interface import Direction, Request
from .utils import sort_requests_in_direction


class ScanScheduler:
    """Orders the whole queue by the current travel direction.

    Up and idle sort ascending, down sorts descending. Floors behind the car
    are not deferred until the reversal; the global reorder is the dispatch
    policy.
    """

    name = "scan"

    def order(
        self,
        requests: Iterable[Request],
        direction: Direction,
        origin: int,
    ) -> List[Request]:
        return sort_requests_in_direction(requests, direction)

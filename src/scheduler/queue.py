from __future__ import annotations

from typing import Dict, List, Optional

from .interface import Direction, Request, Scheduler
from .scan import ScanScheduler


class RequestQueue:
    """Pending requests keyed by floor, at most one per floor."""

    def __init__(self, scheduler: Optional[Scheduler] = None) -> None:
        self.scheduler: Scheduler = scheduler or ScanScheduler()
        self._requests: Dict[int, Request] = {}

    def add(self, floor: int, requested_at: float) -> bool:
        if floor in self._requests:
            return False
        self._requests[floor] = Request(floor=floor, requested_at=requested_at)
        return True

    def remove(self, floor: int) -> Optional[Request]:
        return self._requests.pop(floor, None)

    def get(self, floor: int) -> Optional[Request]:
        return self._requests.get(floor)

    def clear(self) -> None:
        self._requests.clear()

    def peek_ordered(self, direction: Direction, origin: int) -> List[Request]:
        """Return the requests in service order without touching the queue."""
        return self.scheduler.order(list(self._requests.values()), direction, origin)

    @property
    def floors(self) -> List[int]:
        return sorted(self._requests)

    def __contains__(self, floor: object) -> bool:
        return floor in self._requests

    def __len__(self) -> int:
        return len(self._requests)

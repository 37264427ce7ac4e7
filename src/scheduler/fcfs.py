from __future__ import annotations

from typing import Iterable, List

from .interface import Direction, Request


class FirstComeFirstServedScheduler:
    """Services the oldest outstanding request first."""

    name = "fcfs"

    def order(
        self,
        requests: Iterable[Request],
        direction: Direction,
        origin: int,
    ) -> List[Request]:
        return sorted(requests, key=lambda req: (req.requested_at, req.floor))

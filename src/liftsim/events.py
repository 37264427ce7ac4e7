from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, List

from .config import LOG_CAPACITY

POSITION = "position"
ARRIVED = "arrived"
LOG = "log"
MODE = "mode"
METRICS = "metrics"
RESET = "reset"


@dataclass(frozen=True)
class PositionUpdate:
    progress: float
    position: float
    origin: int
    target: int


@dataclass(frozen=True)
class Arrival:
    floor: int
    wait_ms: float
    time: float


@dataclass(frozen=True)
class ModeChange:
    mode: str
    active: bool
    time: float


@dataclass(frozen=True)
class LogEntry:
    message: str
    timestamp: float

    def format(self, epoch: float = 0.0) -> str:
        elapsed = max(0, int((self.timestamp - epoch) // 1000))
        hours, rest = divmod(elapsed, 3600)
        minutes, seconds = divmod(rest, 60)
        return f"[{hours:02d}:{minutes:02d}:{seconds:02d}] {self.message}"


class LogBuffer:
    """Bounded log stream, newest entry first."""

    def __init__(self, capacity: int = LOG_CAPACITY) -> None:
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)

    def append(self, entry: LogEntry) -> None:
        self._entries.appendleft(entry)

    def entries(self) -> List[LogEntry]:
        return list(self._entries)

from __future__ import annotations

from typing import Dict, Type

from .fcfs import FirstComeFirstServedScheduler
from .interface import Direction, Request, Scheduler
from .look import LookScheduler
from .queue import RequestQueue
from .scan import ScanScheduler

__all__ = [
    "Direction",
    "FirstComeFirstServedScheduler",
    "LookScheduler",
    "Request",
    "RequestQueue",
    "ScanScheduler",
    "Scheduler",
    "get_scheduler",
]


SCHEDULER_REGISTRY: Dict[str, Type[Scheduler]] = {
    "scan": ScanScheduler,
    "look": LookScheduler,
    "fcfs": FirstComeFirstServedScheduler,
}


def get_scheduler(name: str, **kwargs) -> Scheduler:
    cls = SCHEDULER_REGISTRY.get(name.lower())
    if cls is None:
        raise ValueError(f"Unknown scheduler '{name}'. Available: {', '.join(SCHEDULER_REGISTRY)}")
    return cls(**kwargs)

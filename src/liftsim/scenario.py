"""Offline LiftSim scenarios defined in JSON configs."""
from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Callable, Dict, Iterable, List

from scheduler import SCHEDULER_REGISTRY

from .clock import ManualClock
from .config import (
    DEFAULT_FLOOR_COUNT,
    DEFAULT_MS_PER_FLOOR,
    SimulationConfig,
    is_valid_floor_count,
    is_valid_speed,
)
from .controller import ElevatorController

logger = logging.getLogger(__name__)


def _checked(config: Dict, key: str, default: object, is_valid: Callable[[object], bool]) -> object:
    value = config.get(key, default)
    if is_valid(value):
        return value
    logger.warning("Scenario %s %r rejected; using %r", key, value, default)
    return default


def build_controller(config: Dict) -> ElevatorController:
    sim_config = SimulationConfig(
        floor_count=_checked(config, "floor_count", DEFAULT_FLOOR_COUNT, is_valid_floor_count),
        ms_per_floor=_checked(config, "ms_per_floor", DEFAULT_MS_PER_FLOOR, is_valid_speed),
        ordering=_checked(
            config,
            "ordering",
            "scan",
            lambda name: isinstance(name, str) and name.lower() in SCHEDULER_REGISTRY,
        ),
    )
    return ElevatorController(sim_config, ManualClock())


def apply_event(controller: ElevatorController, event: Dict) -> None:
    kind = event.get("type")
    if kind == "request":
        controller.submit_request(event.get("floor"))
    elif kind == "call":
        controller.call_elevator(event.get("floor"), event.get("direction", "up"))
    elif kind == "emergency":
        controller.toggle_emergency()
    elif kind == "maintenance":
        controller.toggle_maintenance()
    elif kind == "speed":
        controller.set_speed(event.get("ms_per_floor"))
    elif kind == "reset":
        controller.reset(event.get("floor_count"), event.get("ms_per_floor"))
    else:
        logger.warning("Skipping unknown scenario event type %r", kind)


def _schedule_events(controller: ElevatorController, events: Iterable[Dict]) -> None:
    for event in events:
        controller.clock.schedule(event.get("at", 0), lambda event=event: apply_event(controller, event))


def run_scenario(controller: ElevatorController, config: Dict) -> List[Dict]:
    """Play the scenario to completion and return periodic metric snapshots."""
    clock = controller.clock
    if not isinstance(clock, ManualClock):
        raise TypeError("scenarios run on a ManualClock")

    duration = config.get("duration_ms", 60000)
    interval = max(1, config.get("metrics_interval_ms", 1000))
    snapshots: List[Dict] = []

    _schedule_events(controller, config.get("events", []))
    clock.schedule_periodic(interval, lambda: snapshots.append(asdict(controller.metrics.snapshot())))
    clock.advance(duration)
    return snapshots


def summarize(controller: ElevatorController, config: Dict, snapshots: List[Dict]) -> Dict:
    return {
        "scenario": config.get("name", "scenario"),
        "description": config.get("description"),
        "duration_ms": config.get("duration_ms", 60000),
        "ordering": controller.config.ordering,
        "final_state": controller.snapshot(),
        "metrics_over_time": snapshots,
        "logs": controller.logs,
    }

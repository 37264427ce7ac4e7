"""Single-car elevator dispatch simulation for LiftSim."""

from .clock import AsyncioClock, Clock, ManualClock
from .config import SimulationConfig
from .controller import ElevatorController
from .events import Arrival, LogEntry, ModeChange, PositionUpdate
from .metrics import MetricsSnapshot
from .state import CarState, MotionState, Modes, Stats, SystemState

__all__ = [
    "Arrival",
    "AsyncioClock",
    "CarState",
    "Clock",
    "ElevatorController",
    "LogEntry",
    "ManualClock",
    "MetricsSnapshot",
    "ModeChange",
    "Modes",
    "MotionState",
    "PositionUpdate",
    "SimulationConfig",
    "Stats",
    "SystemState",
]

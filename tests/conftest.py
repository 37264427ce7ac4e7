from __future__ import annotations

import pytest

from liftsim import ElevatorController, ManualClock, SimulationConfig


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def controller(clock: ManualClock) -> ElevatorController:
    return ElevatorController(SimulationConfig(floor_count=6, ms_per_floor=1000), clock)

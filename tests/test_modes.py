from __future__ import annotations

import pytest

from liftsim import MotionState
from liftsim.events import MODE


@pytest.mark.parametrize("toggle", ["toggle_emergency", "toggle_maintenance"])
def test_mode_clears_queue_and_stops_car(controller, toggle):
    for floor in (5, 3, 2):
        controller.submit_request(floor)
    assert len(controller.state.queue) == 3

    assert getattr(controller, toggle)()
    car = controller.state.car
    assert len(controller.state.queue) == 0
    assert not car.moving
    assert car.direction.value == "idle"
    assert car.motion is MotionState.IDLE


def test_emergency_mid_trip_keeps_car_at_origin(controller, clock):
    controller.submit_request(5)
    clock.advance(1000)
    controller.toggle_emergency()

    clock.advance(5000)
    assert controller.state.car.current_floor == 1
    assert len(controller.state.queue) == 0
    assert controller.state.stats.total_trips == 0
    assert controller.state.stats.total_wait_time == 0


def test_stale_arrival_ignored_after_mode_cleared(controller, clock):
    controller.submit_request(5)
    clock.advance(1000)
    controller.toggle_emergency()
    clock.advance(500)
    controller.toggle_emergency()

    assert controller.submit_request(2)
    clock.advance(2500)
    # the abandoned trip to 5 would have arrived at t=4000
    car = controller.state.car
    assert car.current_floor == 2
    assert car.motion is MotionState.IDLE
    assert controller.state.stats.total_trips == 1


def test_stale_dwell_timer_is_ignored(controller, clock):
    controller.submit_request(3)
    clock.advance(2000)
    assert controller.state.car.motion is MotionState.DWELLING

    controller.toggle_maintenance()
    controller.toggle_maintenance()
    clock.advance(1000)
    car = controller.state.car
    assert car.motion is MotionState.IDLE
    assert car.direction.value == "idle"
    assert not car.moving


def test_requests_refused_while_mode_active(controller):
    controller.toggle_emergency()
    assert not controller.submit_request(4)
    assert not controller.call_elevator(4, "up")
    assert controller.state.stats.request_count == 0
    assert controller.logs[0].endswith("Emergency mode: Call from floor 4 ignored")
    assert controller.logs[1].endswith("Emergency mode: Floor 4 request ignored")


def test_flags_are_independent(controller):
    controller.toggle_emergency()
    controller.toggle_maintenance()
    assert controller.state.modes.emergency and controller.state.modes.maintenance
    assert controller.status == "EMERGENCY"

    controller.toggle_emergency()
    assert controller.status == "MAINTENANCE"
    assert not controller.submit_request(4)
    assert controller.logs[0].endswith("Maintenance mode: Floor 4 request ignored")

    controller.toggle_maintenance()
    assert controller.submit_request(4)
    assert controller.status == "Moving"


def test_mode_changes_are_announced(controller):
    changes = []
    controller.on_event(MODE, changes.append)
    controller.toggle_maintenance()
    controller.toggle_maintenance()
    assert [(c.mode, c.active) for c in changes] == [("maintenance", True), ("maintenance", False)]
    assert controller.logs[1].endswith("Maintenance mode activated")
    assert controller.logs[0].endswith("Maintenance mode deactivated")


@pytest.mark.parametrize("toggle", ["toggle_emergency", "toggle_maintenance"])
def test_mode_during_dwell_clears_queue(controller, clock, toggle):
    controller.submit_request(3)
    controller.submit_request(5)
    clock.advance(2000)
    assert controller.state.car.motion is MotionState.DWELLING
    assert controller.state.queue.floors == [5]

    getattr(controller, toggle)()
    car = controller.state.car
    assert len(controller.state.queue) == 0
    assert not car.moving
    assert car.current_floor == 3
    assert controller.state.stats.total_trips == 1

    clock.advance(5000)
    assert car.current_floor == 3
    assert car.motion is MotionState.IDLE

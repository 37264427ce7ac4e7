from __future__ import annotations

import json
import logging
from pathlib import Path

from liftsim.scenario import build_controller, run_scenario, summarize

SCENARIOS = Path(__file__).resolve().parents[1] / "scenarios"


def test_single_request_scenario():
    config = {
        "floor_count": 6,
        "ms_per_floor": 1000,
        "duration_ms": 5000,
        "metrics_interval_ms": 1000,
        "events": [{"at": 0, "type": "request", "floor": 4}],
    }
    controller = build_controller(config)
    snapshots = run_scenario(controller, config)

    assert controller.state.car.current_floor == 4
    assert len(snapshots) == 5
    assert snapshots[-1]["total_trips"] == 1


def test_unknown_events_are_skipped():
    config = {
        "duration_ms": 2000,
        "events": [
            {"at": 0, "type": "teleport", "floor": 3},
            {"at": 100, "type": "emergency"},
            {"at": 200, "type": "request", "floor": 3},
        ],
    }
    controller = build_controller(config)
    run_scenario(controller, config)
    assert controller.state.modes.emergency
    assert controller.state.stats.request_count == 0


def test_bundled_lobby_rush():
    config = json.loads((SCENARIOS / "lobby_rush.json").read_text())
    controller = build_controller(config)
    snapshots = run_scenario(controller, config)
    results = summarize(controller, config, snapshots)

    final = results["final_state"]
    assert results["scenario"] == "lobby_rush"
    assert final["current_floor"] == 3
    assert final["stats"]["total_trips"] == 5
    assert final["queue_floors"] == []
    assert final["ms_per_floor"] == 500
    assert final["metrics"]["energy_usage"] == 8.0
    assert len(results["metrics_over_time"]) == 20


def test_out_of_range_config_falls_back_to_defaults(caplog):
    config = {
        "floor_count": 25,
        "ms_per_floor": 0,
        "ordering": "nope",
        "duration_ms": 4000,
        "events": [{"at": 0, "type": "request", "floor": 3}],
    }
    with caplog.at_level(logging.WARNING, logger="liftsim.scenario"):
        controller = build_controller(config)

    assert controller.config.floor_count == 6
    assert controller.config.ms_per_floor == 1000
    assert controller.config.ordering == "scan"
    assert len([r for r in caplog.records if "rejected" in r.getMessage()]) == 3

    run_scenario(controller, config)
    assert controller.state.car.current_floor == 3


def test_valid_config_is_kept(caplog):
    with caplog.at_level(logging.WARNING, logger="liftsim.scenario"):
        controller = build_controller({"floor_count": 12, "ms_per_floor": 400, "ordering": "look"})
    assert controller.config.floor_count == 12
    assert controller.config.ms_per_floor == 400
    assert controller.config.ordering == "look"
    assert not caplog.records

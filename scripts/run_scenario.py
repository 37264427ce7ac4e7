"""CLI for running offline LiftSim scenarios defined in JSON configs."""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Dict, Optional

from liftsim.scenario import build_controller, run_scenario, summarize


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, help="Path to a JSON scenario configuration file")
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write metrics snapshots as JSON",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log stale timers and dropped requests")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = json.loads(args.config.read_text())
    controller = build_controller(config)
    snapshots = run_scenario(controller, config)
    results = summarize(controller, config, snapshots)
    results["scenario"] = config.get("name", args.config.stem)

    save_results(args.output, results)

    final_metrics = results["final_state"]["metrics"]
    print(f"Scenario: {results['scenario']}")
    if results["description"]:
        print(results["description"])
    print(f"Ordering: {results['ordering']}")
    print(f"Duration: {results['duration_ms']} ms")
    print("Final metrics:")
    for key, value in final_metrics.items():
        print(f"  {key}: {value}")
    if args.output:
        print(f"Saved metrics to {args.output}")


if __name__ == "__main__":
    main()

"""CLI script that solves the DIMACS maximum-flow example."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from maxflow_solver import SolverOptions, find_max_flow, load_network, save_result  # noqa: E402


def main() -> None:
    parser = argparse.ArgumentParser(description="Solve the DIMACS maximum-flow example")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG)",
    )
    args = parser.parse_args()

    # Configure logging based on verbosity
    if args.verbose >= 2:
        level = logging.DEBUG
    elif args.verbose >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)-8s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    base_dir = Path(__file__).resolve().parent
    network_path = base_dir / "sample_network.max"
    output_path = base_dir / "sample_network_solution.json"

    instance = load_network(network_path)
    result = find_max_flow(
        instance.network,
        instance.source,
        instance.sink,
        options=SolverOptions(detailed_trace=False),
    )
    save_result(output_path, result)
    print(f"Solved {network_path.name}: status={result.status}, max_flow={result.max_flow}")


if __name__ == "__main__":
    main()

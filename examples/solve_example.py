"""Example script demonstrating usage of the Edmonds-Karp solver."""

from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from maxflow_solver import find_max_flow, format_report, load_network, save_result  # noqa: E402


def main() -> None:
    base_dir = Path(__file__).resolve().parent
    network_path = base_dir / "sample_network.txt"
    output_path = base_dir / "sample_solution.json"

    instance = load_network(network_path)
    result = find_max_flow(instance.network, instance.source, instance.sink)
    save_result(output_path, result)

    print(f"Solved {network_path.name}: status={result.status}, max_flow={result.max_flow}")
    print()
    print(format_report(result, network=instance.network))


if __name__ == "__main__":
    main()

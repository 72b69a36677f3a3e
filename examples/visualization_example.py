"""
Draws the sample network and its maximum flow.

Requires the optional visualization dependencies:
    pip install 'maxflow-solver[visualization]'
"""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from maxflow_solver import (  # noqa: E402
    find_max_flow,
    load_network,
    visualize_flows,
    visualize_network,
)


def main():
    base_dir = Path(__file__).resolve().parent
    instance = load_network(base_dir / "sample_network.max")

    fig = visualize_network(instance.network, instance.source, instance.sink, layout="kamada_kawai")
    fig.savefig(base_dir / "network_structure.png", dpi=150, bbox_inches="tight")
    print("Saved network_structure.png")

    result = find_max_flow(instance.network, instance.source, instance.sink)
    fig = visualize_flows(instance.network, result, layout="kamada_kawai")
    fig.savefig(base_dir / "network_flows.png", dpi=150, bbox_inches="tight")
    print(f"Saved network_flows.png (maximum flow {result.max_flow})")


if __name__ == "__main__":
    main()

"""
Demonstrates utility functions for analyzing maximum-flow solutions.

This example shows how to:
- Validate a flow for capacity and conservation constraints
- Compute the minimum cut certifying the flow value
- Identify saturated edges limiting the flow
"""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from maxflow_solver import (  # noqa: E402
    compute_min_cut,
    compute_saturated_edges,
    find_max_flow,
    load_network,
    validate_flow,
)


def main():
    """Analyze the solved DIMACS sample network."""
    instance = load_network(Path(__file__).resolve().parent / "sample_network.max")
    network, source, sink = instance.network, instance.source, instance.sink

    print("=" * 80)
    print("MAXIMUM FLOW UTILITY FUNCTIONS DEMONSTRATION")
    print("=" * 80)

    result = find_max_flow(network, source, sink)
    print(f"\nMaximum flow from {source} to {sink}: {result.max_flow}")

    validation = validate_flow(network, source, sink)
    print(f"\nFlow valid: {validation.is_valid} (value {validation.flow_value})")
    for error in validation.errors:
        print(f"  - {error}")

    cut = compute_min_cut(network, source)
    print(f"\nMinimum cut capacity: {cut.capacity}")
    print(f"  Source side: {sorted(cut.source_side)}")
    print(f"  Sink side:   {sorted(cut.sink_side)}")
    for tail, head in cut.cut_edges:
        print(f"  {tail} -> {head}")

    print("\nSaturated edges:")
    for edge in compute_saturated_edges(network, source):
        marker = " (min cut)" if edge.in_min_cut else ""
        print(f"  {edge.tail} -> {edge.head}: {edge.flow}/{edge.capacity}{marker}")


if __name__ == "__main__":
    main()

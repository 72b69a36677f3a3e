"""Example demonstrating progress reporting for long-running solves."""

from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from maxflow_solver import (  # noqa: E402
    ProgressInfo,
    SolverOptions,
    build_network,
    find_max_flow,
    summarize_iteration_times,
)


def build_layered_network(layers: int, width: int):
    """Source -> ``layers`` fully connected layers of ``width`` nodes -> sink."""
    num_nodes = layers * width + 2
    sink = num_nodes - 1
    edges = []
    for i in range(width):
        edges.append((0, 1 + i, 50))
    for layer in range(layers - 1):
        base = 1 + layer * width
        for i in range(width):
            for j in range(width):
                edges.append((base + i, base + width + j, 1 + (i * 7 + j * 3) % 5))
    last = 1 + (layers - 1) * width
    for i in range(width):
        edges.append((last + i, sink, 50))
    return build_network(num_nodes, edges)


def main() -> None:
    print("=" * 70)
    print("PROGRESS REPORTING DEMONSTRATION")
    print("=" * 70)

    network = build_layered_network(layers=6, width=12)
    print(f"\nNetwork: {network.num_nodes} nodes, {network.num_edges} edges")

    def progress_callback(info: ProgressInfo) -> None:
        print(
            f"\rIter: {info.iteration:5d} | "
            f"Flow: {info.max_flow:6d} | "
            f"Time: {info.elapsed_time:6.2f}s",
            end="",
            flush=True,
        )

    print("\nSolving with progress reporting...")
    print("-" * 70)

    options = SolverOptions(detailed_trace=False, progress_interval=10)
    result = find_max_flow(network, options=options, progress_callback=progress_callback)

    print()  # New line after progress line
    print("-" * 70)

    timing = summarize_iteration_times(result).as_milliseconds()
    print("\nSolution found:")
    print(f"  Status: {result.status}")
    print(f"  Maximum flow: {result.max_flow}")
    print(f"  Augmenting paths: {result.iterations}")
    print(f"  Mean iteration time: {timing['mean_ms']:.3f} ms")
    print(f"  95th percentile: {timing['p95_ms']:.3f} ms")


if __name__ == "__main__":
    main()

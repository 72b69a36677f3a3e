"""Public solver entrypoints."""

from __future__ import annotations

from pathlib import Path

from .data import FlowNetwork, MaxFlowResult, ProgressCallback, SolverOptions
from .edmonds_karp import EdmondsKarp
from .io import NetworkInstance
from .io import load_network as load_network_file
from .io import save_result as save_result_file


def find_max_flow(
    network: FlowNetwork,
    source: int | None = None,
    sink: int | None = None,
    options: SolverOptions | None = None,
    progress_callback: ProgressCallback | None = None,
) -> MaxFlowResult:
    """Compute the maximum flow of a network with the Edmonds-Karp algorithm.

    This is the main entry point for solving maximum-flow problems. Each
    iteration finds a shortest augmenting path by breadth-first search over the
    residual graph and pushes its bottleneck capacity, until the sink can no
    longer be reached.

    Args:
        network: The network to solve. Edge flows are updated in place.
        source: Source node. Defaults to node 0.
        sink: Sink node. Defaults to the last node (num_nodes - 1).
        options: Solver configuration options. If None, uses defaults.
                 See SolverOptions for trace and iteration-limit settings.
        progress_callback: Optional callback function to receive progress updates.
                           Called every options.progress_interval iterations with ProgressInfo.

    Returns:
        MaxFlowResult containing:
        - max_flow: Value of the maximum flow
        - flows: Flow on every edge
        - iterations: Number of augmenting paths found
        - iteration_times: Seconds spent per iteration
        - execution_steps: Human-readable trace

    Raises:
        InvalidNodeIndexError: If source or sink is out of range.
        InvalidNetworkError: If source equals sink.

    Time Complexity:
        O(V * E^2): at most O(V * E) augmentations, each an O(V + E) search.

    Space Complexity:
        O(V + E) for the network plus O(V) search state per iteration.

    Examples:
        >>> from maxflow_solver import build_network, find_max_flow
        >>> network = build_network(4, [(0, 1, 3), (0, 2, 2), (1, 2, 1), (1, 3, 2), (2, 3, 3)])
        >>> result = find_max_flow(network)
        >>> print(f"Max flow: {result.max_flow} in {result.iterations} iterations")
        Max flow: 5 in 3 iterations
        >>> network.is_flow_conserved(0, 3)
        True

    See Also:
        - FlowNetwork: Network definition structure
        - SolverOptions: Configuration parameters
        - MaxFlowResult: Solution output format
    """
    if source is None:
        source = 0
    if sink is None:
        sink = network.num_nodes - 1
    # Fresh solver per call; no state carries over between runs.
    solver = EdmondsKarp(options=options)
    return solver.find_max_flow(network, source, sink, progress_callback=progress_callback)


def load_network(path: str | Path, fmt: str | None = None) -> NetworkInstance:
    """Load a network with its source and sink from a file.

    Args:
        path: Path to the input file.
        fmt: 'text', 'json' or 'dimacs'. Inferred from the suffix when None.

    Returns:
        NetworkInstance ready to solve.

    Raises:
        FileNotFoundError: If file does not exist.
        NetworkParseError: If the file is malformed.

    Examples:
        >>> from maxflow_solver import find_max_flow, load_network
        >>> instance = load_network("examples/sample_network.txt")
        >>> result = find_max_flow(instance.network, instance.source, instance.sink)
    """
    return load_network_file(path, fmt=fmt)


def save_result(path: str | Path, result: MaxFlowResult) -> None:
    """Save a max-flow result to a JSON file.

    Raises:
        OSError: If file cannot be written.
    """
    save_result_file(path, result)

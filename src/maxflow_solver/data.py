"""Core data structures for maximum-flow problems."""

from __future__ import annotations

import numbers
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .exceptions import (
    DuplicateEdgeError,
    InvalidCapacityError,
    InvalidFlowAdjustmentError,
    InvalidNetworkError,
    InvalidNodeIndexError,
    SolverConfigurationError,
)


class Edge:
    """A directed capacitated edge carrying mutable flow.

    Edges are created by FlowNetwork.add_edge() and owned by that network.
    All attributes are read-only; the flow changes only through add_flow(),
    which keeps ``0 <= flow <= capacity`` at all times.

    Attributes:
        id: Index of the edge in its network's edge arena.
        tail: Source node of the edge.
        head: Destination node of the edge.
        capacity: Maximum flow the edge can carry (non-negative integer).
        flow: Flow currently assigned to the edge.

    Examples:
        >>> edge = Edge(id=0, tail=0, head=1, capacity=5)
        >>> edge.add_flow(3)
        >>> edge.residual_capacity
        2
        >>> edge.add_flow(-1)
        >>> edge.flow
        2
    """

    __slots__ = ("_id", "_tail", "_head", "_capacity", "_flow")

    def __init__(self, id: int, tail: int, head: int, capacity: int):
        self._id = id
        self._tail = tail
        self._head = head
        self._capacity = capacity
        self._flow = 0

    @property
    def id(self) -> int:
        return self._id

    @property
    def tail(self) -> int:
        return self._tail

    @property
    def head(self) -> int:
        return self._head

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def flow(self) -> int:
        return self._flow

    @property
    def key(self) -> tuple[int, int]:
        return (self._tail, self._head)

    @property
    def residual_capacity(self) -> int:
        """Flow that can still be pushed along the edge's stored direction."""
        return self._capacity - self._flow

    def add_flow(self, delta: int) -> None:
        """Adjust the flow by ``delta`` (negative values cancel flow).

        Raises:
            InvalidFlowAdjustmentError: If the resulting flow would fall outside
                ``[0, capacity]``. The edge is left untouched in that case.
        """
        new_flow = self._flow + delta
        if new_flow < 0 or new_flow > self._capacity:
            raise InvalidFlowAdjustmentError(
                f"Resulting flow would be invalid on edge {self._tail} -> {self._head}: "
                f"{self._flow} {delta:+d} = {new_flow} (capacity {self._capacity})",
                edge=self.key,
                flow=self._flow,
                delta=delta,
                capacity=self._capacity,
            )
        self._flow = new_flow

    def __repr__(self) -> str:
        return f"Edge({self._tail}->{self._head}, flow={self._flow}/{self._capacity})"


class FlowNetwork:
    """A directed flow network over nodes ``0 .. num_nodes - 1``.

    Edges live in a single arena (``edges``). Forward and reverse adjacency
    store edge ids per node in insertion order, which fixes the tie-breaking
    order of the augmenting-path search. A lookup dictionary maps each
    ``(tail, head)`` pair to its unique edge.

    Examples:
        >>> network = FlowNetwork(4)
        >>> network.add_edge(0, 1, 3)
        Edge(0->1, flow=0/3)
        >>> network.add_edge(1, 3, 2)
        Edge(1->3, flow=0/2)
        >>> [edge.head for edge in network.outgoing_edges(0)]
        [1]

    See Also:
        - build_network(): Construct a network from edge tuples or dictionaries.
        - find_max_flow(): Solve the maximum-flow problem on a network.
    """

    def __init__(self, num_nodes: int):
        if isinstance(num_nodes, bool) or not isinstance(num_nodes, numbers.Integral):
            raise InvalidNetworkError(
                f"Number of nodes must be an integer, got {type(num_nodes).__name__}"
            )
        if num_nodes < 2:
            raise InvalidNetworkError(
                f"Network must have at least 2 nodes, got {num_nodes}. A flow problem "
                f"needs distinct source and sink nodes."
            )
        self._num_nodes = int(num_nodes)
        self._edges: list[Edge] = []
        self._forward: list[list[int]] = [[] for _ in range(self._num_nodes)]
        self._reverse: list[list[int]] = [[] for _ in range(self._num_nodes)]
        self._lookup: dict[tuple[int, int], int] = {}

    @property
    def num_nodes(self) -> int:
        return self._num_nodes

    @property
    def num_edges(self) -> int:
        return len(self._edges)

    @property
    def edges(self) -> tuple[Edge, ...]:
        """All edges in insertion order (edge id order)."""
        return tuple(self._edges)

    def __len__(self) -> int:
        return len(self._edges)

    def __iter__(self) -> Iterator[Edge]:
        return iter(self._edges)

    def __repr__(self) -> str:
        return f"FlowNetwork(num_nodes={self._num_nodes}, num_edges={len(self._edges)})"

    def validate_node(self, node: int) -> None:
        """Raise InvalidNodeIndexError unless ``node`` is in ``[0, num_nodes)``."""
        if (
            isinstance(node, bool)
            or not isinstance(node, numbers.Integral)
            or node < 0
            or node >= self._num_nodes
        ):
            raise InvalidNodeIndexError(
                f"Node index out of range: {node!r} (network has {self._num_nodes} nodes)",
                node=node if isinstance(node, int) else None,
                num_nodes=self._num_nodes,
            )

    def add_edge(self, tail: int, head: int, capacity: int) -> Edge:
        """Add a directed edge ``tail -> head`` with zero initial flow.

        Args:
            tail: Source node of the edge.
            head: Destination node of the edge.
            capacity: Non-negative integer capacity.

        Returns:
            The newly created Edge.

        Raises:
            InvalidNodeIndexError: If either endpoint is out of range.
            InvalidCapacityError: If capacity is negative or not an integer.
            DuplicateEdgeError: If an edge ``tail -> head`` already exists.
        """
        self.validate_node(tail)
        self.validate_node(head)
        if isinstance(capacity, bool) or not isinstance(capacity, numbers.Integral):
            raise InvalidCapacityError(
                f"Edge {tail} -> {head} has non-integer capacity {capacity!r}",
                capacity=capacity,
            )
        if capacity < 0:
            raise InvalidCapacityError(
                f"Edge {tail} -> {head} has negative capacity {capacity}. "
                f"Capacities must be >= 0.",
                capacity=capacity,
            )
        tail, head = int(tail), int(head)
        if (tail, head) in self._lookup:
            raise DuplicateEdgeError(
                f"Duplicate edge {tail} -> {head}. Parallel edges in the same direction "
                f"are not supported; combine their capacities into one edge.",
                tail=tail,
                head=head,
            )

        edge = Edge(id=len(self._edges), tail=tail, head=head, capacity=int(capacity))
        self._edges.append(edge)
        self._forward[tail].append(edge.id)
        self._reverse[head].append(edge.id)
        self._lookup[(tail, head)] = edge.id
        return edge

    def get_edge(self, tail: int, head: int) -> Edge | None:
        """Return the edge ``tail -> head`` or None if there is none."""
        self.validate_node(tail)
        self.validate_node(head)
        edge_id = self._lookup.get((tail, head))
        return None if edge_id is None else self._edges[edge_id]

    def outgoing_edges(self, node: int) -> tuple[Edge, ...]:
        """Edges leaving ``node``, in insertion order."""
        self.validate_node(node)
        return tuple(self._edges[idx] for idx in self._forward[node])

    def incoming_edges(self, node: int) -> tuple[Edge, ...]:
        """Edges entering ``node``, in insertion order."""
        self.validate_node(node)
        return tuple(self._edges[idx] for idx in self._reverse[node])

    def node_imbalance(self, node: int) -> int:
        """Return inflow minus outflow at ``node``."""
        self.validate_node(node)
        inflow = sum(self._edges[idx].flow for idx in self._reverse[node])
        outflow = sum(self._edges[idx].flow for idx in self._forward[node])
        return inflow - outflow

    def is_flow_conserved(self, source: int, sink: int) -> bool:
        """Check that inflow equals outflow at every node except source and sink.

        This is a diagnostic query. It holds after every correct solver run;
        a False result points at a defect in the solver or the data model.
        """
        self.validate_node(source)
        self.validate_node(sink)
        for node in range(self._num_nodes):
            if node == source or node == sink:
                continue
            if self.node_imbalance(node) != 0:
                return False
        return True

    def total_flow(self, source: int) -> int:
        """Sum of flow over all edges leaving ``source``."""
        self.validate_node(source)
        return sum(self._edges[idx].flow for idx in self._forward[source])

    def flows(self) -> dict[tuple[int, int], int]:
        """Map every edge ``(tail, head)`` to its current flow."""
        return {edge.key: edge.flow for edge in self._edges}


def build_network(
    num_nodes: int,
    edges: Iterable[Sequence[int] | Mapping[str, Any]],
) -> FlowNetwork:
    """Factory helper used by the IO layer to assemble a FlowNetwork.

    Each edge is either a ``(tail, head, capacity)`` sequence or a mapping with
    ``tail``, ``head`` and ``capacity`` keys.

    Raises:
        InvalidNetworkError: If an edge specification is malformed, or any of its
            subclasses for out-of-range nodes, bad capacities and duplicates.
    """
    network = FlowNetwork(num_nodes)
    for spec in edges:
        if isinstance(spec, Mapping):
            if "tail" not in spec or "head" not in spec or "capacity" not in spec:
                raise InvalidNetworkError(
                    f"Invalid edge specification: {dict(spec)}. Each edge must have "
                    f"'tail', 'head' and 'capacity' fields."
                )
            tail, head, capacity = spec["tail"], spec["head"], spec["capacity"]
        else:
            is_triple = (
                isinstance(spec, Sequence)
                and not isinstance(spec, (str, bytes))
                and len(spec) == 3
            )
            if not is_triple:
                raise InvalidNetworkError(
                    f"Invalid edge specification: {spec!r}. Expected (tail, head, capacity)."
                )
            tail, head, capacity = spec
        network.add_edge(tail, head, capacity)
    return network


@dataclass
class SolverOptions:
    """Configuration options for the Edmonds-Karp solver.

    Attributes:
        detailed_trace: Record per-iteration trace lines (default: True).
                        When False, only a completion summary is kept in the
                        trace and progress is logged every progress_interval
                        iterations instead.
        max_path_display: Longest path (in edges) shown node by node in the
                          trace (default: 10). Longer paths are summarized by
                          their endpoints and edge count.
        progress_interval: Augmenting iterations between progress reports
                           (default: 100).
        max_iterations: Optional bound on augmenting iterations. None means
                        run until no augmenting path remains. When the bound
                        is hit the result has status "iteration_limit".

    Examples:
        >>> # Default options
        >>> options = SolverOptions()

        >>> # Large network: keep the trace small and bound the run
        >>> options = SolverOptions(detailed_trace=False, max_iterations=10_000)
    """

    detailed_trace: bool = True
    max_path_display: int = 10
    progress_interval: int = 100
    max_iterations: int | None = None

    def __post_init__(self) -> None:
        if self.max_path_display < 1:
            raise SolverConfigurationError(
                f"max_path_display must be positive, got {self.max_path_display}."
            )
        if self.progress_interval < 1:
            raise SolverConfigurationError(
                f"progress_interval must be positive, got {self.progress_interval}."
            )
        if self.max_iterations is not None and self.max_iterations < 1:
            raise SolverConfigurationError(
                f"max_iterations must be positive, got {self.max_iterations}. "
                f"Use None for no limit."
            )


@dataclass(frozen=True)
class ProgressInfo:
    """Progress information provided during solver execution.

    Attributes:
        iteration: Augmenting iterations completed so far.
        max_flow: Flow value accumulated so far.
        elapsed_time: Elapsed time in seconds since the solve started.
    """

    iteration: int
    max_flow: int
    elapsed_time: float


# Type alias for progress callback function
ProgressCallback = Callable[[ProgressInfo], None]


@dataclass(frozen=True)
class IterationRecord:
    """Structured record of one augmenting iteration.

    Attributes:
        iteration: 1-based iteration number.
        path: Node sequence of the augmenting path, source first.
        bottleneck: Flow pushed along the path.
        max_flow: Running maximum-flow total after this iteration.
        elapsed: Time spent in the iteration, in seconds.
    """

    iteration: int
    path: tuple[int, ...]
    bottleneck: int
    max_flow: int
    elapsed: float

    @property
    def edge_count(self) -> int:
        return len(self.path) - 1


@dataclass
class MaxFlowResult:
    """Represents the output of a maximum-flow computation.

    Attributes:
        max_flow: Value of the flow found.
        source: Source node of the run.
        sink: Sink node of the run.
        status: 'optimal' when no augmenting path remains, 'iteration_limit'
                when SolverOptions.max_iterations stopped the run early.
        iterations: Number of augmenting paths found.
        searches: Number of breadth-first searches performed (the final,
                  unsuccessful search included).
        iteration_times: Seconds spent in each augmenting iteration.
        execution_steps: Human-readable trace lines.
        history: IterationRecord per augmenting iteration.
        flows: Flow on every edge after the run, keyed by (tail, head).
        total_time: Wall-clock seconds for the whole run.

    Examples:
        >>> network = build_network(2, [(0, 1, 5)])
        >>> result = find_max_flow(network)
        >>> result.max_flow, result.iterations
        (5, 1)
        >>> result.flows[(0, 1)]
        5
    """

    max_flow: int
    source: int
    sink: int
    status: str = "optimal"
    iterations: int = 0
    searches: int = 0
    iteration_times: list[float] = field(default_factory=list)
    execution_steps: list[str] = field(default_factory=list)
    history: list[IterationRecord] = field(default_factory=list)
    flows: dict[tuple[int, int], int] = field(default_factory=dict)
    total_time: float = 0.0

    @property
    def average_iteration_time(self) -> float:
        """Mean seconds per augmenting iteration (0.0 when there were none)."""
        if not self.iteration_times:
            return 0.0
        return sum(self.iteration_times) / len(self.iteration_times)

    @property
    def average_iteration_time_ms(self) -> float:
        return self.average_iteration_time * 1000.0
